"""Typed read-only views over GEDCOM records.

Each structure wraps a single record and answers questions by querying that
record's live children collection. Nothing is cached, so a structure always
reflects the current state of the record it wraps.
"""

from gedcom_records import GedcomRecord
from gedcom_tags import (
    FAMILY_EVENT_TAGS,
    INDIVIDUAL_EVENT_TAGS,
    GedcomTag,
)
from record_list import GedcomRecordList


class GedcomStructure:
    """Base view: exposes the wrapped record's fields and its children."""

    def __init__(self, record: GedcomRecord):
        self.record = record

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.record!r})"

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def level(self) -> int:
        return self.record.level

    @property
    def tag(self) -> str:
        return self.record.tag

    @property
    def xref(self) -> str:
        return self.record.xref

    @property
    def data(self) -> str:
        return self.record.data

    @property
    def child_records(self) -> GedcomRecordList:
        return self.record.children

    @property
    def notes(self) -> list[str]:
        """Data of every NOTE child (inline text or a note xref pointer)."""
        return [note.data for note in self.child_records.all_by_tag(GedcomTag.NOTE)]

    @property
    def source_citations(self) -> list["SourceCitationStructure"]:
        return [
            SourceCitationStructure(record)
            for record in self.child_records.all_by_tag(GedcomTag.SOUR)
        ]


class SourceEventStructure(GedcomStructure):
    """The EVEN structure under a source's DATA: events recorded by the source."""

    @property
    def events(self) -> str:
        return self.data

    @property
    def date(self) -> str:
        return self.child_records.data_for_tag(GedcomTag.DATE)

    @property
    def place(self) -> str:
        return self.child_records.data_for_tag(GedcomTag.PLAC)


class EventStructure(GedcomStructure):
    """An individual or family event (BIRT, DEAT, MARR, EVEN, ...)."""

    @property
    def event_type(self) -> str:
        """The event tag, or the TYPE text for a generic EVEN."""
        if self.record.tag_name == GedcomTag.EVEN:
            return self.child_records.data_for_tag(GedcomTag.TYPE) or self.tag
        return self.tag

    @property
    def description(self) -> str:
        return self.data

    @property
    def date(self) -> str:
        return self.child_records.data_for_tag(GedcomTag.DATE)

    @property
    def place(self) -> str:
        return self.child_records.data_for_tag(GedcomTag.PLAC)

    @property
    def cause(self) -> str:
        return self.child_records.data_for_tag(GedcomTag.CAUS)

    @property
    def age(self) -> str:
        return self.child_records.data_for_tag(GedcomTag.AGE)


class SourceCitationStructure(GedcomStructure):
    """A SOUR citation attached to a record or event."""

    @property
    def source_xref(self) -> str:
        """Pointer to the cited SOUR record, empty for inline citations."""
        data = self.data.strip()
        if data.startswith("@") and data.endswith("@"):
            return data
        return ""

    @property
    def page(self) -> str:
        return self.child_records.data_for_tag(GedcomTag.PAGE)

    @property
    def quality(self) -> int | None:
        """Certainty assessment (QUAY 0-3), or None if missing or not a number."""
        value = self.child_records.data_for_tag(GedcomTag.QUAY).strip()
        if not value.isdigit():
            return None
        return int(value)

    @property
    def _data_records(self) -> GedcomRecordList:
        data = self.child_records.first_by_tag(GedcomTag.DATA)
        if data is None:
            return GedcomRecordList()
        return data.children

    @property
    def date(self) -> str:
        return self._data_records.data_for_tag(GedcomTag.DATE)

    @property
    def text(self) -> str:
        return self._data_records.data_for_tag(GedcomTag.TEXT)

    @property
    def events(self) -> list[SourceEventStructure]:
        return [
            SourceEventStructure(record)
            for record in self._data_records.all_by_tag(GedcomTag.EVEN)
        ]


class SourceStructure(GedcomStructure):
    """A level-0 SOUR record."""

    @property
    def title(self) -> str:
        return self.child_records.data_for_tag(GedcomTag.TITL)

    @property
    def author(self) -> str:
        return self.child_records.data_for_tag(GedcomTag.AUTH)

    @property
    def publication(self) -> str:
        return self.child_records.data_for_tag(GedcomTag.PUBL)

    @property
    def abbreviation(self) -> str:
        return self.child_records.data_for_tag(GedcomTag.ABBR)

    @property
    def text(self) -> str:
        return self.child_records.data_for_tag(GedcomTag.TEXT)

    @property
    def repository_xref(self) -> str:
        return self.child_records.data_for_tag(GedcomTag.REPO)

    @property
    def data_events(self) -> list[SourceEventStructure]:
        data = self.child_records.first_by_tag(GedcomTag.DATA)
        if data is None:
            return []
        return [SourceEventStructure(record) for record in data.children.all_by_tag(GedcomTag.EVEN)]


class IndividualStructure(GedcomStructure):
    """A level-0 INDI record."""

    @property
    def name(self) -> str:
        """Display name with the surname slashes removed."""
        return " ".join(self.child_records.data_for_tag(GedcomTag.NAME).replace("/", " ").split())

    @property
    def given_name(self) -> str:
        name_record = self.child_records.first_by_tag(GedcomTag.NAME)
        if name_record is None:
            return ""
        given = name_record.children.data_for_tag(GedcomTag.GIVN)
        if given:
            return given
        return name_record.data.split("/")[0].strip()

    @property
    def surname(self) -> str:
        name_record = self.child_records.first_by_tag(GedcomTag.NAME)
        if name_record is None:
            return ""
        surname = name_record.children.data_for_tag(GedcomTag.SURN)
        if surname:
            return surname
        parts = name_record.data.split("/")
        return parts[1].strip() if len(parts) > 1 else ""

    @property
    def sex(self) -> str:
        return self.child_records.data_for_tag(GedcomTag.SEX)

    @property
    def occupation(self) -> str:
        return self.child_records.data_for_tag(GedcomTag.OCCU)

    @property
    def events(self) -> list[EventStructure]:
        return [EventStructure(record) for record in self.child_records.all_by_any_tag(INDIVIDUAL_EVENT_TAGS)]

    @property
    def birth(self) -> EventStructure | None:
        record = self.child_records.first_by_tag(GedcomTag.BIRT)
        return EventStructure(record) if record is not None else None

    @property
    def death(self) -> EventStructure | None:
        record = self.child_records.first_by_tag(GedcomTag.DEAT)
        return EventStructure(record) if record is not None else None

    @property
    def child_family_xrefs(self) -> list[str]:
        return [record.data for record in self.child_records.all_by_tag(GedcomTag.FAMC)]

    @property
    def spouse_family_xrefs(self) -> list[str]:
        return [record.data for record in self.child_records.all_by_tag(GedcomTag.FAMS)]


class FamilyStructure(GedcomStructure):
    """A level-0 FAM record."""

    @property
    def husband_xref(self) -> str:
        return self.child_records.data_for_tag(GedcomTag.HUSB)

    @property
    def wife_xref(self) -> str:
        return self.child_records.data_for_tag(GedcomTag.WIFE)

    @property
    def child_xrefs(self) -> list[str]:
        return [record.data for record in self.child_records.all_by_tag(GedcomTag.CHIL)]

    @property
    def events(self) -> list[EventStructure]:
        return [EventStructure(record) for record in self.child_records.all_by_any_tag(FAMILY_EVENT_TAGS)]

    @property
    def marriage(self) -> EventStructure | None:
        record = self.child_records.first_by_tag(GedcomTag.MARR)
        return EventStructure(record) if record is not None else None
