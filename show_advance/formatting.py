"""Value formatting: placeholder substitution and HTML escaping."""
import re

from .types import PlaceholderPolicy, PresentationUnit

NOT_APPLICABLE = "N/A"
NOT_APPLICABLE_TOKENS = {"n/a", "na", "not applicable"}

# Ampersand must go first so entities from later substitutions are not re-escaped.
_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)

_LINE_BREAK_RE = re.compile(r"\s*(?:\r\n|\r|\n)\s*")


def escape_html(value) -> str:
    """Escape the five HTML-significant characters."""
    text = "" if value is None else str(value)
    for char, entity in _HTML_ESCAPES:
        text = text.replace(char, entity)
    return text


def is_not_applicable(value) -> bool:
    return (value or "").strip().lower() in NOT_APPLICABLE_TOKENS


def format_value(raw, multiline: bool = True, large: bool = False,
                 policy: PlaceholderPolicy = PlaceholderPolicy.TEXT,
                 placeholder: str = "TBD") -> PresentationUnit:
    """
    Turn a raw field value into a presentation unit.

    Blank values become the placeholder (text or blank slot depending on
    policy), not-applicable tokens become the literal "N/A", everything else
    is kept as-is. Escaping happens at HTML render time so the PDF surface
    can reuse the plain text.
    """
    text = (raw or "").strip()

    if not text:
        if policy == PlaceholderPolicy.BLANK:
            return PresentationUnit("blank", "", multiline=False, large=large)
        return PresentationUnit("placeholder", placeholder, multiline=False, large=large)

    if text.lower() in NOT_APPLICABLE_TOKENS:
        return PresentationUnit("placeholder", NOT_APPLICABLE, multiline=False, large=large)

    if not multiline:
        text = _LINE_BREAK_RE.sub(" ", text)
    else:
        text = text.replace("\r\n", "\n").replace("\r", "\n")
    return PresentationUnit("value", text, multiline=multiline, large=large)


def unit_to_html(unit: PresentationUnit) -> str:
    classes = ["value-text"]
    if unit.kind == "blank":
        classes.append("blank-line")
    if unit.multiline and unit.kind == "value":
        classes.append("multiline")
    if unit.large:
        classes.append("large")

    body = escape_html(unit.text)
    if unit.multiline:
        body = body.replace("\n", "<br />")
    return f'<span class="{" ".join(classes)}">{body}</span>'


def value_or_placeholder(raw, multiline: bool = True, large: bool = False,
                         policy: PlaceholderPolicy = PlaceholderPolicy.TEXT,
                         placeholder: str = "TBD") -> str:
    """Format and render straight to markup."""
    return unit_to_html(format_value(raw, multiline=multiline, large=large,
                                     policy=policy, placeholder=placeholder))
