"""Tests for the typed structure views over GEDCOM records."""

import os
import sys

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gedcom_records import GedcomRecord, new_child_record
from gedcom_structures import (
    EventStructure,
    FamilyStructure,
    GedcomStructure,
    IndividualStructure,
    SourceCitationStructure,
    SourceEventStructure,
    SourceStructure,
)
from gedcom_tags import GedcomTag


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def source_record():
    """A SOUR record with a DATA.EVEN source event."""
    source = GedcomRecord(level=0, tag="SOUR", xref="@S1@", id="@S1@")
    new_child_record(source, GedcomTag.TITL, "Parish Register")
    new_child_record(source, GedcomTag.AUTH, "St. Mary's")
    new_child_record(source, GedcomTag.REPO, "@R1@")
    data = new_child_record(source, GedcomTag.DATA)
    event = new_child_record(data, GedcomTag.EVEN, "BIRT, MARR")
    new_child_record(event, GedcomTag.DATE, "FROM 1800 TO 1850")
    new_child_record(event, GedcomTag.PLAC, "Kent, England")
    return source


@pytest.fixture
def individual_record():
    person = GedcomRecord(level=0, tag="INDI", xref="@I1@", id="@I1@")
    new_child_record(person, GedcomTag.NAME, "Mary /Jones/")
    new_child_record(person, GedcomTag.SEX, "F")
    birth = new_child_record(person, GedcomTag.BIRT)
    new_child_record(birth, GedcomTag.DATE, "4 JUL 1810")
    new_child_record(birth, GedcomTag.PLAC, "Kent, England")
    citation = new_child_record(birth, GedcomTag.SOUR, "@S1@")
    new_child_record(citation, GedcomTag.PAGE, "Folio 12")
    new_child_record(citation, GedcomTag.QUAY, "2")
    new_child_record(person, GedcomTag.FAMC, "@F1@")
    new_child_record(person, GedcomTag.FAMS, "@F2@")
    new_child_record(person, GedcomTag.FAMS, "@F3@")
    new_child_record(person, GedcomTag.NOTE, "Emigrated in 1840")
    return person


# ============================================================================
# Source Structures
# ============================================================================

class TestSourceStructures:
    """Tests for sources and their recorded events."""

    def test_source_event_structure(self, source_record):
        """The source event exposes its events, date and place."""
        event_record = source_record.children.first_by_tag(GedcomTag.DATA).children.first_by_tag(GedcomTag.EVEN)
        event = SourceEventStructure(event_record)

        assert event.events == "BIRT, MARR"
        assert event.date == "FROM 1800 TO 1850"
        assert event.place == "Kent, England"

    def test_source_event_missing_fields(self):
        """Missing children read as empty strings."""
        event = SourceEventStructure(GedcomRecord(level=2, tag="EVEN", data="DEAT", id="1"))

        assert event.date == ""
        assert event.place == ""

    def test_source_structure(self, source_record):
        source = SourceStructure(source_record)

        assert source.title == "Parish Register"
        assert source.author == "St. Mary's"
        assert source.publication == ""
        assert source.repository_xref == "@R1@"
        assert [event.events for event in source.data_events] == ["BIRT, MARR"]

    def test_structures_read_live_children(self, source_record):
        """Views are not cached: changes to the children show up immediately."""
        source = SourceStructure(source_record)
        title = source_record.children.first_by_tag(GedcomTag.TITL)

        source_record.children.remove(title)
        assert source.title == ""

        new_child_record(source_record, GedcomTag.TITL, "Revised Register")
        assert source.title == "Revised Register"


# ============================================================================
# Individual and Event Structures
# ============================================================================

class TestIndividualStructure:
    """Tests for individuals and their events."""

    def test_names(self, individual_record):
        person = IndividualStructure(individual_record)

        assert person.name == "Mary Jones"
        assert person.given_name == "Mary"
        assert person.surname == "Jones"
        assert person.sex == "F"

    def test_name_parts_prefer_givn_and_surn(self):
        person = GedcomRecord(level=0, tag="INDI", xref="@I9@", id="@I9@")
        name = new_child_record(person, GedcomTag.NAME, "Bill /Smith/")
        new_child_record(name, GedcomTag.GIVN, "William")
        new_child_record(name, GedcomTag.SURN, "Smyth")

        view = IndividualStructure(person)
        assert view.given_name == "William"
        assert view.surname == "Smyth"

    def test_missing_name(self):
        view = IndividualStructure(GedcomRecord(level=0, tag="INDI", xref="@I9@", id="@I9@"))

        assert view.name == ""
        assert view.given_name == ""
        assert view.surname == ""
        assert view.birth is None

    def test_birth_event(self, individual_record):
        birth = IndividualStructure(individual_record).birth

        assert isinstance(birth, EventStructure)
        assert birth.event_type == "BIRT"
        assert birth.date == "4 JUL 1810"
        assert birth.place == "Kent, England"

    def test_family_links(self, individual_record):
        person = IndividualStructure(individual_record)

        assert person.child_family_xrefs == ["@F1@"]
        assert person.spouse_family_xrefs == ["@F2@", "@F3@"]

    def test_events_in_document_order(self, individual_record):
        """Events come back in document order across event tags."""
        death = new_child_record(individual_record, GedcomTag.DEAT)
        new_child_record(death, GedcomTag.CAUS, "Fever")
        person = IndividualStructure(individual_record)

        assert [event.tag for event in person.events] == ["BIRT", "DEAT"]
        assert person.death.cause == "Fever"

    def test_generic_event_type(self):
        record = GedcomRecord(level=1, tag="EVEN", data="Left for America", id="1")
        new_child_record(record, GedcomTag.TYPE, "Emigration")

        event = EventStructure(record)
        assert event.event_type == "Emigration"
        assert event.description == "Left for America"

    def test_notes(self, individual_record):
        assert IndividualStructure(individual_record).notes == ["Emigrated in 1840"]

    def test_source_citation(self, individual_record):
        """Citations under an event expose the cited source, page and quality."""
        citations = IndividualStructure(individual_record).birth.source_citations

        assert len(citations) == 1
        citation = citations[0]
        assert citation.source_xref == "@S1@"
        assert citation.page == "Folio 12"
        assert citation.quality == 2

    def test_inline_citation(self):
        record = GedcomRecord(level=2, tag="SOUR", data="Family bible", id="1")
        new_child_record(record, GedcomTag.QUAY, "unknown")
        data = new_child_record(record, GedcomTag.DATA)
        new_child_record(data, GedcomTag.TEXT, "Born at home")

        citation = SourceCitationStructure(record)
        assert citation.source_xref == ""
        assert citation.quality is None
        assert citation.text == "Born at home"
        assert citation.date == ""
        assert citation.events == []


# ============================================================================
# Family Structure
# ============================================================================

class TestFamilyStructure:
    """Tests for families."""

    def test_family_members_and_marriage(self):
        family = GedcomRecord(level=0, tag="FAM", xref="@F1@", id="@F1@")
        new_child_record(family, GedcomTag.HUSB, "@I1@")
        new_child_record(family, GedcomTag.WIFE, "@I2@")
        new_child_record(family, GedcomTag.CHIL, "@I3@")
        new_child_record(family, GedcomTag.CHIL, "@I4@")
        marriage = new_child_record(family, GedcomTag.MARR)
        new_child_record(marriage, GedcomTag.DATE, "1 JUN 1835")

        view = FamilyStructure(family)
        assert view.husband_xref == "@I1@"
        assert view.wife_xref == "@I2@"
        assert view.child_xrefs == ["@I3@", "@I4@"]
        assert view.marriage.date == "1 JUN 1835"
        assert [event.tag for event in view.events] == ["MARR"]

    def test_base_structure_fields(self):
        record = GedcomRecord(level=0, tag="FAM", xref="@F1@", id="@F1@")
        view = GedcomStructure(record)

        assert (view.id, view.level, view.tag, view.xref, view.data) == ("@F1@", 0, "FAM", "@F1@", "")
        assert view.child_records is record.children
