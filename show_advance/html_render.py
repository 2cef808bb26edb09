"""HTML preview rendering of an advance sheet document."""
from typing import Iterable, Optional, Sequence

from .document import build_document
from .formatting import escape_html, unit_to_html, value_or_placeholder
from .types import ContactRecord, Document, FormRecord, RenderOptions, Row, Section, SectionPair

CHECKED = "☑"
UNCHECKED = "☐"


def render_row(row: Row) -> str:
    if row.label is None:
        return f'<div class="{row.css_class}">{unit_to_html(row.unit)}</div>'

    label = escape_html(row.label)
    if row.checkbox is not None:
        yes, no = row.checkbox
        value_html = (
            '<span class="field-value checkbox-set">'
            f'<span class="box">{CHECKED if yes else UNCHECKED} Yes</span>'
            f'<span class="box">{CHECKED if no else UNCHECKED} No</span>'
            "</span>"
        )
    else:
        value_html = f'<span class="field-value">{unit_to_html(row.unit)}</span>'

    return (
        '<div class="field-row">'
        f'<span class="field-label">{label}:</span>'
        f"{value_html}"
        "</div>"
    )


def render_group(rows: Sequence[Row]) -> str:
    if not rows:
        return ""
    return f'<div class="field-group">{"".join(render_row(r) for r in rows)}</div>'


def render_section(section: Section) -> str:
    if section.is_empty and not section.omit_heading:
        return ""
    section_class = f"pdf-section {section.class_name}".strip()
    body_class = "section-body columns" if section.multi_column else "section-body"

    if section.omit_heading:
        # hero block: rows sit directly in the body
        body = "".join(render_row(r) for group in section.groups for r in group)
        heading = ""
    else:
        body = "".join(render_group(group) for group in section.groups)
        heading = f"<h3>{escape_html(section.title)}</h3>"

    return (
        f'<section class="{section_class}">'
        f"{heading}"
        f'<div class="{body_class}">{body}</div>'
        "</section>"
    )


def render_contacts_table(contacts: Iterable[ContactRecord],
                          options: Optional[RenderOptions] = None) -> str:
    options = options or RenderOptions()
    contacts = list(contacts)

    def cell(value):
        return value_or_placeholder(
            value,
            multiline=False,
            policy=options.placeholder_policy,
            placeholder=options.placeholder_text,
        )

    if not contacts:
        rows = f'<tr><td colspan="4">{cell("")}</td></tr>'
    else:
        rows = "".join(
            "<tr>"
            f"<td>{cell(c.name)}</td>"
            f"<td>{cell(c.email)}</td>"
            f"<td>{cell(c.phone)}</td>"
            f"<td>{cell(c.role)}</td>"
            "</tr>"
            for c in contacts
        )

    return (
        '<section class="pdf-section">'
        "<h3>Contacts</h3>"
        '<div class="section-body">'
        '<table class="contacts-table">'
        "<thead><tr><th>Name</th><th>Email</th><th>Phone</th><th>Role</th></tr></thead>"
        f"<tbody>{rows}</tbody>"
        "</table>"
        "</div>"
        "</section>"
    )


def render_document(document: Document) -> str:
    """Render the full preview body. Re-rendered from scratch on every call."""
    parts = []
    for block in document.blocks:
        if isinstance(block, SectionPair):
            parts.append(
                '<div class="top-grid">'
                f"{render_section(block.left)}{render_section(block.right)}"
                "</div>"
            )
        else:
            parts.append(render_section(block))

    parts.append(render_contacts_table(document.contacts, document.options))
    parts.append('<div class="page-number"></div>')
    parts.append(f'<div id="print-footer" class="print-footer">{escape_html(document.footer)}</div>')
    return "\n".join(parts)


def render_page(document: Document, title: Optional[str] = None,
                stylesheet: str = "styles.css") -> str:
    """Standalone HTML page wrapping the preview, for saving or printing."""
    page_title = escape_html(title or document.title or "Show Advance")
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8" />\n'
        f"<title>{page_title}</title>\n"
        f'<link rel="stylesheet" href="{escape_html(stylesheet)}" />\n'
        "</head>\n"
        "<body>\n"
        f'<div id="pdf-preview" class="pdf-preview">\n{render_document(document)}\n</div>\n'
        "</body>\n"
        "</html>\n"
    )


def render_preview(record, contacts=None, options: Optional[RenderOptions] = None) -> str:
    if not isinstance(record, FormRecord):
        record = FormRecord.from_mapping(record)
    return render_document(build_document(record, contacts, options))
