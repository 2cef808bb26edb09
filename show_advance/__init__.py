"""Show advance sheet rendering package."""
from .contacts import ContactList
from .document import build_document, compose_section
from .export import DocumentSurface, ExportAction, PdfFilePrinter
from .fields import build_checkbox_row, build_field, lodging_opted_out
from .filename import derive_file_name, pdf_file_name
from .formatting import escape_html, format_value
from .html_render import render_document, render_page, render_preview
from .render_pdf import (
    PdfCapabilityError,
    build_pdf_download,
    render_advance_pdf,
    write_advance_pdf,
)
from .types import (
    FIELD_KEYS,
    ContactRecord,
    FieldSpec,
    FormRecord,
    PlaceholderPolicy,
    RenderMode,
    RenderOptions,
)

__version__ = "0.1.0"

__all__ = [
    "FIELD_KEYS",
    "ContactList",
    "ContactRecord",
    "DocumentSurface",
    "ExportAction",
    "FieldSpec",
    "FormRecord",
    "PdfCapabilityError",
    "PdfFilePrinter",
    "PlaceholderPolicy",
    "RenderMode",
    "RenderOptions",
    "build_checkbox_row",
    "build_document",
    "build_field",
    "build_pdf_download",
    "compose_section",
    "derive_file_name",
    "escape_html",
    "format_value",
    "lodging_opted_out",
    "pdf_file_name",
    "render_advance_pdf",
    "render_document",
    "render_page",
    "render_preview",
    "write_advance_pdf",
]
