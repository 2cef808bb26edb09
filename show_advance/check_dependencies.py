"""Check if all dependencies for show advance rendering are available."""
import sys
from typing import List, Tuple


def check_dependencies() -> Tuple[bool, List[str]]:
    """
    Check required and optional dependencies.

    Returns:
        Tuple of (all_required_available, list of missing/warnings)
    """
    missing = []
    warnings = []

    try:
        import reportlab  # noqa: F401
    except ImportError:
        missing.append("reportlab (required for PDF generation)")

    try:
        import flask  # noqa: F401
    except ImportError:
        missing.append("flask (required for the static server)")

    try:
        from dotenv import load_dotenv  # noqa: F401
    except ImportError:
        missing.append("python-dotenv (required for config)")

    try:
        from pypdf import PdfReader  # noqa: F401
    except ImportError:
        warnings.append("pypdf (optional, used by the tests to read PDFs back)")

    all_required = len(missing) == 0
    return all_required, missing + warnings


if __name__ == "__main__":
    print("Checking show advance dependencies...\n")
    all_ok, issues = check_dependencies()

    if all_ok and not issues:
        print("✅ All dependencies are available!")
    elif all_ok:
        print("✅ All required dependencies are available.")
        print("\n⚠️  Optional dependencies/warnings:")
        for issue in issues:
            print(f"   - {issue}")
    else:
        print("❌ Missing required dependencies:")
        for issue in issues:
            if "required" in issue.lower():
                print(f"   - {issue}")
        print("\n💡 Install missing dependencies with:")
        print("   pip install reportlab flask python-dotenv")
        sys.exit(1)
