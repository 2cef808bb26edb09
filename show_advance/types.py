"""Type definitions for show advance rendering."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple, Union


FIELD_KEYS = (
    # Header / overview
    "eventName", "eventDate", "venueName", "venueStreet", "venueCityStateZip",
    "promoterName", "showType", "capacity",
    # Schedule
    "loadInTime", "soundcheckTime", "doorsTime", "showStartTime", "setLengths",
    "curfew", "loadOutTime",
    # Key contacts
    "keyPromoter", "keyVenueGm", "keyRunner", "keyProductionManager",
    "keySecurityLead", "keyBoxOfficeLead", "keyTourManager", "keyFohEngineer",
    # Event details / talent
    "announceDate", "onSaleDateTime", "eventDates", "doorsRos", "headliner", "support",
    # Ticketing
    "ticketPlatform", "boxOfficeOpen", "willCallProcess", "format", "artistComps",
    "venueComps", "doorPrice", "adaNeeds",
    # Load-in & parking
    "loadInAddress", "dockNotes", "parkingInstructions", "accessNotes",
    # House management
    "strobeLights", "audiencePolicy", "professionalPhotoVideo", "gaReservedSeats",
    # Hospitality
    "budget", "caterer", "mealsFor", "mealTimes", "dietaryRestrictions", "mealLocation",
    "transportationNotes",
    # Merchandise
    "merchAllowed", "merchLocation", "cashlessPolicy", "merchStaffing", "merchSplit",
    # Lodging
    "lodgingProvider", "roomsNights", "propertyName", "checkInCheckOut", "namesConfirmations",
    # Security
    "bagCheck", "theaterSecurity", "reEntryPolicy", "bagPolicyDetails",
    "barricadeSecurity", "artistEscortPolicy", "emergencyProcedures",
    # Production
    "staging", "stagePlatforms", "lightingHaze", "linesetRigging", "plot",
    "audioBackline", "productionOther", "productionNotes", "videoStreaming",
    "pianoTuning", "crewTheyBring", "crewWeProvide",
    # Settlement (internal)
    "settlementLocation", "settlementAttendees", "settlementPaperwork",
    "settlementPaymentMethod", "settlementCutoff",
    "nextTimeNotes",
)

_FIELD_KEY_SET = frozenset(FIELD_KEYS)


def _as_text(value) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


class RenderMode(str, Enum):
    """Field visibility mode for one render pass."""
    PRODUCTION = "production"
    INTERNAL = "internal"

    @classmethod
    def parse(cls, value) -> "RenderMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(_as_text(value).strip().lower())
        except ValueError:
            return cls.PRODUCTION


class PlaceholderPolicy(str, Enum):
    """How missing values are shown: explicit text or a blank slot."""
    TEXT = "text"
    BLANK = "blank"

    @classmethod
    def parse(cls, value) -> "PlaceholderPolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(_as_text(value).strip().lower())
        except ValueError:
            return cls.TEXT


@dataclass(frozen=True)
class RenderOptions:
    """Strategy bundle selecting visibility and placeholder behaviour."""
    mode: RenderMode = RenderMode.PRODUCTION
    placeholder_policy: PlaceholderPolicy = PlaceholderPolicy.TEXT
    placeholder_text: str = "TBD"


@dataclass(frozen=True)
class FormRecord:
    """Snapshot of the form fields at the moment of a render."""
    values: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping]) -> "FormRecord":
        data = data or {}
        values = {k: _as_text(v) for k, v in data.items() if k in _FIELD_KEY_SET}
        return cls(values=values)

    def get(self, key: str) -> str:
        return self.values.get(key, "")

    def __getitem__(self, key: str) -> str:
        return self.get(key)


@dataclass(frozen=True)
class ContactRecord:
    name: str = ""
    email: str = ""
    phone: str = ""
    role: str = ""

    @classmethod
    def from_mapping(cls, data: Optional[Mapping]) -> "ContactRecord":
        data = data or {}
        return cls(
            name=_as_text(data.get("name")).strip(),
            email=_as_text(data.get("email")).strip(),
            phone=_as_text(data.get("phone")).strip(),
            role=_as_text(data.get("role")).strip(),
        )

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "email": self.email, "phone": self.phone, "role": self.role}


@dataclass(frozen=True)
class FieldSpec:
    """Contract every row-building call site follows."""
    label: str
    value: str = ""
    internal_only: bool = False
    hide_if_empty_in_production: bool = False
    multiline: bool = True
    checkbox: bool = False


@dataclass(frozen=True)
class PresentationUnit:
    """A formatted value: real text, a placeholder, or a blank slot."""
    kind: str  # "value", "placeholder", "blank"
    text: str
    multiline: bool = True
    large: bool = False


@dataclass(frozen=True)
class Row:
    """One labeled row of the document, already formatted."""
    label: Optional[str]
    unit: Optional[PresentationUnit] = None
    checkbox: Optional[Tuple[bool, bool]] = None  # (yes_checked, no_checked)
    raw: str = ""
    css_class: str = ""


@dataclass(frozen=True)
class Section:
    title: str
    groups: Tuple[Tuple[Row, ...], ...] = ()
    multi_column: bool = False
    omit_heading: bool = False
    class_name: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.groups

    @property
    def rows(self) -> List[Row]:
        return [row for group in self.groups for row in group]


@dataclass(frozen=True)
class SectionPair:
    """Two sections laid out side by side (the top grid)."""
    left: Section
    right: Section


Block = Union[Section, SectionPair]


@dataclass(frozen=True)
class Document:
    """Output of one render pass, consumed by the HTML or PDF surface."""
    blocks: Tuple[Block, ...]
    contacts: Tuple[ContactRecord, ...]
    options: RenderOptions
    title: str = ""
    footer: str = "Powered by Didactidigital"

    def sections(self) -> List[Section]:
        out: List[Section] = []
        for block in self.blocks:
            if isinstance(block, SectionPair):
                out.extend([block.left, block.right])
            else:
                out.append(block)
        return out

    def section_titles(self) -> List[str]:
        return [s.title for s in self.sections()]

    def find_section(self, title: str) -> Optional[Section]:
        for section in self.sections():
            if section.title == title:
                return section
        return None
