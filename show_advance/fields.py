"""Row building with render-mode visibility rules."""
from typing import Iterable, Optional

from .formatting import NOT_APPLICABLE, format_value
from .types import FieldSpec, FormRecord, RenderMode, RenderOptions, Row

YES_TOKENS = {"yes", "y", "true", "1"}
NO_TOKENS = {"no", "n", "false", "0"}

LODGING_KEYS = (
    "lodgingProvider",
    "roomsNights",
    "propertyName",
    "checkInCheckOut",
    "namesConfirmations",
)
LODGING_OPT_OUT_TOKENS = {"n/a", "na", "not applicable", "none", "no lodging"}


def _is_hidden(value, mode: RenderMode, internal_only: bool, hide_if_empty_in_production: bool) -> bool:
    if mode != RenderMode.PRODUCTION:
        return False
    if internal_only:
        return True
    return hide_if_empty_in_production and not (value or "").strip()


def parse_tristate(value) -> Optional[bool]:
    """Yes -> True, No -> False, anything else (including blank) -> None."""
    normalized = (value or "").strip().lower()
    if normalized in YES_TOKENS:
        return True
    if normalized in NO_TOKENS:
        return False
    return None


def build_field(label: str, value, mode: RenderMode = RenderMode.PRODUCTION,
                internal_only: bool = False, hide_if_empty_in_production: bool = False,
                multiline: bool = True, options: Optional[RenderOptions] = None) -> Optional[Row]:
    """Build a label/value row, or None when the row is hidden in this mode."""
    mode = RenderMode.parse(mode)
    options = options or RenderOptions(mode=mode)
    if _is_hidden(value, mode, internal_only, hide_if_empty_in_production):
        return None

    unit = format_value(
        value,
        multiline=multiline,
        policy=options.placeholder_policy,
        placeholder=options.placeholder_text,
    )
    return Row(label=label, unit=unit, raw=(value or "").strip())


def build_checkbox_row(label: str, value, mode: RenderMode = RenderMode.PRODUCTION,
                       internal_only: bool = False,
                       hide_if_empty_in_production: bool = False) -> Optional[Row]:
    """Build a Yes/No row; both boxes are always present, at most one checked."""
    mode = RenderMode.parse(mode)
    if _is_hidden(value, mode, internal_only, hide_if_empty_in_production):
        return None

    state = parse_tristate(value)
    return Row(
        label=label,
        checkbox=(state is True, state is False),
        raw=(value or "").strip(),
    )


def build_row(field_spec: FieldSpec, options: RenderOptions) -> Optional[Row]:
    if field_spec.checkbox:
        return build_checkbox_row(
            field_spec.label,
            field_spec.value,
            options.mode,
            internal_only=field_spec.internal_only,
            hide_if_empty_in_production=field_spec.hide_if_empty_in_production,
        )
    return build_field(
        field_spec.label,
        field_spec.value,
        options.mode,
        internal_only=field_spec.internal_only,
        hide_if_empty_in_production=field_spec.hide_if_empty_in_production,
        multiline=field_spec.multiline,
        options=options,
    )


def build_rows(specs: Iterable[FieldSpec], options: RenderOptions):
    return [build_row(field_spec, options) for field_spec in specs]


# ----------------------------
# Lodging opt-out
# ----------------------------

def lodging_opted_out(record: FormRecord) -> bool:
    """All lodging fields blank, or the provider explicitly says no lodging."""
    all_blank = all(not record.get(key).strip() for key in LODGING_KEYS)
    provider = record.get("lodgingProvider").strip().lower()
    return all_blank or provider in LODGING_OPT_OUT_TOKENS


def lodging_value(value, opted_out: bool) -> str:
    if opted_out and not (value or "").strip():
        return NOT_APPLICABLE
    return value or ""
