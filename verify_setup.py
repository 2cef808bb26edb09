"""Verify the show advance renderer is installed and can produce a PDF."""
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent


def main():
    """Run verification checks."""
    print("=" * 70)
    print("Show Advance Setup Verification")
    print("=" * 70)
    print()

    all_checks_passed = True

    # Check 1: Python version
    print("1. Checking Python version...")
    if sys.version_info >= (3, 8):
        print(f"   [OK] Python {sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    else:
        print(f"   [FAIL] Python {sys.version_info.major}.{sys.version_info.minor} (requires 3.8+)")
        all_checks_passed = False
    print()

    # Check 2: Dependencies
    print("2. Checking dependencies...")
    try:
        from show_advance.check_dependencies import check_dependencies
        deps_ok, issues = check_dependencies()
        for issue in issues:
            tag = "[FAIL]" if "required" in issue else "[WARN]"
            print(f"   {tag} {issue}")
        if deps_ok:
            print("   [OK] Required dependencies available")
        else:
            all_checks_passed = False
            print("\n   [TIP] Install with: pip install -e .")
    except ImportError as e:
        print(f"   [FAIL] Could not import show_advance: {e}")
        all_checks_passed = False
    print()

    # Check 3: Render a sample sheet
    print("3. Rendering a sample advance sheet...")
    if all_checks_passed:
        try:
            from show_advance import build_pdf_download, render_preview

            sample = {"eventName": "Setup Check", "eventDate": "2024-01-01", "venueName": "Test Hall"}
            html = render_preview(sample)
            download = build_pdf_download(sample)
            if html and download.content.startswith(b"%PDF"):
                print(f"   [OK] HTML preview ({len(html)} chars) and {download.filename} "
                      f"({len(download.content)} bytes)")
            else:
                print("   [FAIL] Rendered output looks wrong")
                all_checks_passed = False
        except Exception as e:
            print(f"   [FAIL] Rendering failed: {e}")
            all_checks_passed = False
    else:
        print("   [SKIP] Fix the checks above first")
    print()

    print("=" * 70)
    if all_checks_passed:
        print("[OK] All checks passed")
        return 0
    print("[FAIL] Some checks failed")
    return 1


if __name__ == "__main__":
    sys.exit(main())
