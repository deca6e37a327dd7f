"""Loading GEDCOM text into indexed record collections."""

import io
import logging
from collections import Counter
from typing import Any

from gedcom.element.element import Element
from gedcom.parser import GedcomFormatViolationError, Parser

from gedcom_records import GedcomRecord, render_record_tree
from gedcom_structures import FamilyStructure, IndividualStructure, SourceStructure
from gedcom_tags import GedcomTag
from record_list import GedcomRecordList

logger = logging.getLogger("treeindex.document")


class GedcomLoadError(Exception):
    """The GEDCOM text could not be turned into records."""


# ============================================================================
# Document
# ============================================================================

class GedcomDocument:
    """A loaded GEDCOM file: the level-0 records in document order."""

    def __init__(self, records: GedcomRecordList | None = None):
        self.records = records if records is not None else GedcomRecordList()

    def __len__(self) -> int:
        return len(self.records)

    def get(self, record_id: str) -> GedcomRecord | None:
        """Find a level-0 record by id (``@I1@`` or ``I1``), or None."""
        record_id = record_id.strip()
        if not record_id.startswith("@"):
            position = self.records.index_of_id(f"@{record_id}@")
            if position >= 0:
                return self.records[position]
        position = self.records.index_of_id(record_id)
        if position < 0:
            return None
        return self.records[position]

    @property
    def header(self) -> GedcomRecord | None:
        return self.records.first_by_tag(GedcomTag.HEAD)

    def individuals(self) -> list[IndividualStructure]:
        return [IndividualStructure(record) for record in self.records.all_by_tag(GedcomTag.INDI)]

    def families(self) -> list[FamilyStructure]:
        return [FamilyStructure(record) for record in self.records.all_by_tag(GedcomTag.FAM)]

    def sources(self) -> list[SourceStructure]:
        return [SourceStructure(record) for record in self.records.all_by_tag(GedcomTag.SOUR)]

    def summary(self) -> dict[str, int]:
        """Number of level-0 records per tag, in order of first appearance."""
        return dict(Counter(record.tag for record in self.records))

    def render(self) -> str:
        """The whole document as GEDCOM lines, one record per line."""
        return "".join(f"{render_record_tree(record)}\n" for record in self.records)


def get_individual_data(individual: IndividualStructure) -> dict[str, Any]:
    """Summarize an individual for API responses."""
    birth = individual.birth
    death = individual.death
    return {
        "id": individual.id,
        "fullName": individual.name,
        "firstName": individual.given_name,
        "lastName": individual.surname,
        "gender": individual.sex or None,
        "birthDate": birth.date or None if birth else None,
        "birthPlace": birth.place or None if birth else None,
        "deathDate": death.date or None if death else None,
        "deathPlace": death.place or None if death else None,
        "childOfFamilies": individual.child_family_xrefs,
        "spouseInFamilies": individual.spouse_family_xrefs,
    }


# ============================================================================
# Loading
# ============================================================================

def _element_to_record(element: Element, siblings: GedcomRecordList) -> GedcomRecord:
    """Convert a python-gedcom element (and its subtree) and file it into ``siblings``."""
    tag = element.get_tag()
    pointer = element.get_pointer() or ""
    level = element.get_level()

    # Level-0 records are addressed by their xref; everything else gets a per-tag counter
    if level == 0 and pointer:
        record_id = pointer
    else:
        record_id = str(siblings.next_id(tag))

    record = GedcomRecord(
        level=level,
        tag=tag,
        xref=pointer,
        data=element.get_value() or "",
        id=record_id,
    )
    siblings.append(record)

    for child in element.get_child_elements():
        _element_to_record(child, record.children)
    return record


def _parser_to_document(parser: Parser) -> GedcomDocument:
    document = GedcomDocument()
    for element in parser.get_root_element().get_child_elements():
        _element_to_record(element, document.records)
    logger.info(f"Loaded {len(document.records)} top-level records")
    return document


def load_gedcom_file(file_path: str) -> GedcomDocument:
    """Parse a GEDCOM file into a document."""
    logger.info(f"Loading GEDCOM file: {file_path}")
    parser = Parser()
    try:
        parser.parse_file(file_path, strict=False)
    except (GedcomFormatViolationError, UnicodeDecodeError, ValueError) as e:
        raise GedcomLoadError(f"Failed to parse {file_path}: {e}") from e
    return _parser_to_document(parser)


def load_gedcom_content(content: str) -> GedcomDocument:
    """Parse GEDCOM text into a document."""
    # python-gedcom expects every line, including the last, to end with a newline
    lines = [line for line in content.splitlines() if line.strip()]
    stream = io.BytesIO("".join(f"{line}\n" for line in lines).encode("utf-8"))
    parser = Parser()
    try:
        parser.parse(stream, strict=False)
    except (GedcomFormatViolationError, UnicodeDecodeError, ValueError) as e:
        raise GedcomLoadError(f"Failed to parse GEDCOM content: {e}") from e
    return _parser_to_document(parser)
