"""Section composition and the canonical advance sheet layout."""
from typing import Iterable, List, Optional, Sequence

from .contacts import collect_contacts
from .fields import build_rows, lodging_opted_out, lodging_value
from .formatting import format_value
from .types import (
    ContactRecord,
    Document,
    FieldSpec,
    FormRecord,
    RenderMode,
    RenderOptions,
    Row,
    Section,
    SectionPair,
)

FOOTER_TEXT = "Powered by Didactidigital"
SECTION_SPACING = "section-spacing"

SETTLEMENT_TITLE = "Settlement (Internal)"


def compose_section(title: str, groups: Iterable[Sequence[Optional[Row]]],
                    multi_column: bool = False, omit_heading: bool = False,
                    class_name: str = SECTION_SPACING) -> Section:
    """Drop hidden rows, then drop groups left with nothing to show."""
    kept = []
    for group in groups:
        rows = tuple(row for row in group if row is not None)
        if rows:
            kept.append(rows)
    return Section(
        title=title,
        groups=tuple(kept),
        multi_column=multi_column,
        omit_heading=omit_heading,
        class_name=class_name,
    )


class _SectionBuilder:
    """Binds a record and render options so call sites read like the form."""

    def __init__(self, record: FormRecord, options: RenderOptions):
        self.record = record
        self.options = options
        self.mode = options.mode

    def field(self, label: str, key: str, value: Optional[str] = None, **kwargs) -> FieldSpec:
        if value is None:
            value = self.record.get(key)
        return FieldSpec(label=label, value=value, **kwargs)

    def checkbox(self, label: str, key: str, **kwargs) -> FieldSpec:
        return FieldSpec(label=label, value=self.record.get(key), checkbox=True, **kwargs)

    def section(self, title: str, groups: Iterable[Sequence[FieldSpec]], **kwargs) -> Section:
        return compose_section(title, [build_rows(group, self.options) for group in groups], **kwargs)

    def hero_row(self, css_class: str, value: str, large: bool = False) -> Row:
        unit = format_value(
            value,
            multiline=False,
            large=large,
            policy=self.options.placeholder_policy,
            placeholder=self.options.placeholder_text,
        )
        return Row(label=None, unit=unit, raw=(value or "").strip(), css_class=css_class)

    # ----------------------------
    # Sections, in document order
    # ----------------------------

    def header(self) -> Section:
        r = self.record
        address = ", ".join(
            part.strip() for part in (r.get("venueStreet"), r.get("venueCityStateZip")) if part.strip()
        )
        rows = [
            self.hero_row("pdf-title", r.get("eventName"), large=True),
            self.hero_row("pdf-date", r.get("eventDate")),
            self.hero_row("pdf-venue", r.get("venueName")),
            self.hero_row("pdf-address", address),
        ]
        return compose_section("Header", [rows], omit_heading=True,
                               class_name=f"{SECTION_SPACING} hero-section")

    def overview(self) -> Section:
        return self.section("Event Overview", [[
            self.field("Promoter", "promoterName"),
            self.field("Show Type", "showType"),
            self.field("Venue Capacity", "capacity"),
        ]])

    def _timeline(self, set_lengths_label: str) -> List[FieldSpec]:
        return [
            self.field("Load-in", "loadInTime"),
            self.field("Soundcheck", "soundcheckTime"),
            self.field("Doors", "doorsTime"),
            self.field("Show Start", "showStartTime"),
            self.field(set_lengths_label, "setLengths"),
            self.field("Curfew / Hard Out", "curfew"),
            self.field("Load-out", "loadOutTime"),
        ]

    def _key_contacts(self) -> List[FieldSpec]:
        return [
            self.field("Promoter / Event Management", "keyPromoter"),
            self.field("Venue GM", "keyVenueGm"),
            self.field("Day-of Show Runner", "keyRunner"),
            self.field("Production Manager", "keyProductionManager"),
            self.field("Security Lead", "keySecurityLead"),
            self.field("Box Office Lead", "keyBoxOfficeLead"),
            self.field("Artist Tour Manager / Advancing", "keyTourManager"),
            self.field("FOH Engineer", "keyFohEngineer"),
        ]

    def at_a_glance(self) -> Section:
        return self.section("At-a-glance", [self._timeline("Set Lengths")], multi_column=True)

    def key_contacts(self) -> Section:
        return self.section("Key Contacts", [self._key_contacts()], multi_column=True)

    def event_details(self) -> Section:
        return self.section("Event Details", [[
            self.field("Announce Date", "announceDate"),
            self.field("On-Sale Date / Time", "onSaleDateTime"),
            self.field("Event Date(s)", "eventDates"),
            self.field("Doors / ROS Line", "doorsRos"),
        ]], multi_column=True)

    def schedule(self) -> Section:
        return self.section(
            "Schedule / Timeline",
            [self._timeline("Set Lengths (Support / Headliner)")],
            multi_column=True,
        )

    def talent(self) -> Section:
        return self.section("Event Talent", [[
            self.field("Headliner", "headliner"),
            self.field("Support", "support"),
        ]], class_name="")

    def ticketing(self) -> Section:
        return self.section("Ticketing / Box Office", [[
            self.field("Ticket Platform", "ticketPlatform"),
            self.field("Box Office Open", "boxOfficeOpen"),
            self.field("Will Call Process", "willCallProcess"),
            self.field("Format (Reserved vs GA)", "format"),
            self.field("Artist Comps", "artistComps"),
            self.field("Venue Comps", "venueComps"),
            self.field("On-Sale Date / Time", "onSaleDateTime"),
            self.field("Door Price", "doorPrice", internal_only=True),
            self.field("ADA Needs", "adaNeeds"),
        ]], multi_column=True)

    def load_in(self) -> Section:
        return self.section("Load-in & Parking", [[
            self.field("Load-in Entrance / Address", "loadInAddress"),
            self.field("Dock / Ramp Notes", "dockNotes"),
            self.field("Parking Instructions", "parkingInstructions"),
            self.field("Credentials / Access Notes", "accessNotes"),
        ]], multi_column=True)

    def house(self) -> Section:
        return self.section("House Management", [[
            self.checkbox("Strobe Lights", "strobeLights", hide_if_empty_in_production=True),
            self.field("Audience Photo / Video Policy", "audiencePolicy"),
            self.field("Professional Photo / Video", "professionalPhotoVideo",
                       hide_if_empty_in_production=True),
            self.checkbox("GA Reserved Seats", "gaReservedSeats"),
        ]], class_name="")

    def hospitality(self) -> Section:
        return self.section("Hospitality & Catering", [[
            self.field("Budget", "budget"),
            self.field("Caterer", "caterer"),
            self.field("Meals for # Artists / Personnel", "mealsFor"),
            self.field("Meal Times", "mealTimes"),
            self.field("Dietary Restrictions", "dietaryRestrictions"),
            self.field("Meal Location", "mealLocation"),
        ]], multi_column=True)

    def transportation(self) -> Section:
        return self.section("Transportation", [[
            self.field("Transportation Notes", "transportationNotes"),
        ]])

    def merchandise(self) -> Section:
        return self.section("Merchandise", [[
            self.checkbox("Merch Allowed", "merchAllowed"),
            self.field("Merch Location", "merchLocation"),
            self.field("Cashless Policy", "cashlessPolicy"),
            self.field("Staffing", "merchStaffing"),
            self.field("Merch Split %", "merchSplit", internal_only=True),
        ]], multi_column=True)

    def lodging(self) -> Section:
        opted_out = lodging_opted_out(self.record)

        def lodging_field(label, key):
            return self.field(label, key, value=lodging_value(self.record.get(key), opted_out))

        return self.section("Lodging", [[
            lodging_field("Artist Provides vs Venue Provides", "lodgingProvider"),
            lodging_field("Rooms / Nights", "roomsNights"),
            lodging_field("Property Name", "propertyName"),
            lodging_field("Check-in / Check-out", "checkInCheckOut"),
            lodging_field("Names / Confirmation Numbers", "namesConfirmations"),
        ]], multi_column=True)

    def security(self) -> Section:
        return self.section("Security & Staffing", [[
            self.checkbox("Bag Check", "bagCheck"),
            self.checkbox("Theater Security", "theaterSecurity"),
            self.field("Re-entry Policy", "reEntryPolicy"),
            self.field("Bag Policy Details", "bagPolicyDetails"),
            self.checkbox("Barricade Security", "barricadeSecurity"),
            self.field("Artist Escort Policy", "artistEscortPolicy"),
            self.field("Emergency Procedures", "emergencyProcedures"),
        ]], multi_column=True)

    def production(self) -> Section:
        return self.section("Production Requirements", [
            [
                self.field("Staging", "staging"),
                self.field("Drum Riser / Platforms", "stagePlatforms"),
                self.field("Lighting / Haze", "lightingHaze"),
            ],
            [
                self.field("Rigging", "linesetRigging"),
                self.field("Plot", "plot"),
            ],
            [
                self.field("Audio - Band Provides", "audioBackline"),
                self.field("Audio - Venue Provides", "productionOther",
                           hide_if_empty_in_production=True),
                self.field("Audio Notes", "productionNotes"),
            ],
            [
                self.field("Video Streaming", "videoStreaming", hide_if_empty_in_production=True),
                self.field("Piano / Tuning", "pianoTuning", hide_if_empty_in_production=True),
            ],
            [
                self.field("Crew - They Bring", "crewTheyBring"),
                self.field("Crew - We Provide", "crewWeProvide"),
            ],
        ], multi_column=True)

    def settlement(self) -> Optional[Section]:
        if self.mode == RenderMode.PRODUCTION:
            return None
        return self.section(SETTLEMENT_TITLE, [[
            self.field("Settlement Location", "settlementLocation"),
            self.field("Who Attends", "settlementAttendees"),
            self.field("Paperwork Required", "settlementPaperwork"),
            self.field("Payment Method", "settlementPaymentMethod"),
            self.field("Cut-off Time", "settlementCutoff"),
        ]])

    def next_time(self) -> Section:
        return self.section("Next Time Notes", [[
            self.field("Notes", "nextTimeNotes"),
        ]])


def build_document(record: FormRecord, contacts: Optional[Iterable] = None,
                   options: Optional[RenderOptions] = None) -> Document:
    """Lay out every section of the advance sheet in its fixed order."""
    options = options or RenderOptions()
    if not isinstance(record, FormRecord):
        record = FormRecord.from_mapping(record)
    b = _SectionBuilder(record, options)

    blocks = [
        SectionPair(b.header(), b.overview()),
        SectionPair(b.at_a_glance(), b.key_contacts()),
        b.event_details(),
        b.schedule(),
        b.talent(),
        b.ticketing(),
        b.load_in(),
        b.house(),
        b.hospitality(),
        b.transportation(),
        b.merchandise(),
        b.lodging(),
        b.security(),
        b.production(),
    ]
    settlement = b.settlement()
    if settlement is not None:
        blocks.append(settlement)
    blocks.append(b.next_time())

    snapshot: List[ContactRecord] = collect_contacts(contacts)
    return Document(
        blocks=tuple(blocks),
        contacts=tuple(snapshot),
        options=options,
        title=record.get("eventName").strip(),
        footer=FOOTER_TEXT,
    )
