"""Command-line interface for rendering show advance sheets."""
import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from .config import load_config, render_options_from_config, resolve_path
from .contacts import ContactList
from .document import build_document
from .export import DocumentSurface, ExportAction, PdfFilePrinter
from .filename import derive_file_name, path_component
from .html_render import render_page
from .render_pdf import PdfCapabilityError, write_advance_pdf
from .types import FormRecord, PlaceholderPolicy, RenderMode


def load_form_snapshot(path: Path):
    """Read a JSON form export: flat field mapping plus optional contacts/mode."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a JSON object")
    contacts = ContactList.from_iterable(
        c for c in (data.get("contacts") or []) if isinstance(c, dict)
    )
    return FormRecord.from_mapping(data), contacts, data.get("mode")


def _options(args, cfg, snapshot_mode):
    options = render_options_from_config(cfg)
    mode = args.mode or snapshot_mode
    if mode:
        options = replace(options, mode=RenderMode.parse(mode))
    if getattr(args, "placeholder", None):
        options = replace(options, placeholder_policy=PlaceholderPolicy.parse(args.placeholder))
    return options


def cmd_render(args, cfg) -> int:
    record, contacts, snapshot_mode = load_form_snapshot(args.input_path)
    options = _options(args, cfg, snapshot_mode)
    out_dir = Path(args.out_dir) if args.out_dir else resolve_path(cfg["output_dir"])
    out_dir.mkdir(parents=True, exist_ok=True)
    base = derive_file_name(record.get("eventName"), record.get("eventDate"))

    if args.format in ("html", "both"):
        document = build_document(record, contacts.collect(), options)
        html_path = out_dir / f"{path_component(base)}.html"
        html_path.write_text(render_page(document, title=base), encoding="utf-8")
        print(f"✅ Preview written: {html_path}")

    if args.format in ("pdf", "both"):
        pdf_path = out_dir / f"{path_component(base)}.pdf"
        write_advance_pdf(pdf_path, record, contacts.collect(), options)
        print(f"✅ PDF written: {pdf_path}")
    return 0


def cmd_export(args, cfg) -> int:
    record, contacts, snapshot_mode = load_form_snapshot(args.input_path)
    options = _options(args, cfg, snapshot_mode)
    out_dir = Path(args.out_dir) if args.out_dir else resolve_path(cfg["output_dir"])

    printer = PdfFilePrinter(out_dir, record, contacts.collect(), options)
    action = ExportAction(printer, DocumentSurface(), settle_delay=cfg["print_settle_delay"])
    file_name = action.run(record)
    print(f"✅ Exported {path_component(file_name)}.pdf to {out_dir}")
    return 0


def cmd_serve(args, cfg) -> int:
    from web_app import create_app

    root = Path(args.root) if args.root else resolve_path(cfg["static_root"])
    port = args.port or cfg["port"]
    app = create_app(root)
    print(f"[CLI] Show advance app available at http://localhost:{port}")
    app.run(host=args.host, port=port, debug=False, use_reloader=False)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="show-advance",
        description="Render show advance sheets to HTML and PDF",
    )
    parser.add_argument("--config", type=Path, help="Path to a JSON config file")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_render_args(p):
        p.add_argument("--in", "--input", dest="input_path", required=True, type=Path,
                       help="JSON form snapshot (fields, optional contacts and mode)")
        p.add_argument("--out-dir", dest="out_dir", type=Path, help="Output directory")
        p.add_argument("--mode", choices=[m.value for m in RenderMode],
                       help="Render mode (default: from snapshot or config)")

    render = sub.add_parser("render", help="Render preview HTML and/or PDF")
    add_render_args(render)
    render.add_argument("--format", choices=["html", "pdf", "both"], default="both")
    render.add_argument("--placeholder", choices=[p.value for p in PlaceholderPolicy],
                        help="Placeholder style for the HTML preview")

    export = sub.add_parser("export", help="Run the generate action and write the PDF")
    add_render_args(export)

    serve = sub.add_parser("serve", help="Serve a static directory")
    serve.add_argument("--root", type=Path, help="Directory to serve")
    serve.add_argument("--port", type=int, help="Port (default: PORT env or 4173)")
    serve.add_argument("--host", default="127.0.0.1")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = load_config(args.config)

    handlers = {"render": cmd_render, "export": cmd_export, "serve": cmd_serve}
    try:
        return handlers[args.command](args, cfg)
    except PdfCapabilityError as e:
        print(f"[ERROR] {e}")
        return 2
    except (OSError, ValueError) as e:
        print(f"[ERROR] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
