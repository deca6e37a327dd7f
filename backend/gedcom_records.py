"""GEDCOM record value type and the helpers that print and compare records."""

import re
from dataclasses import dataclass, field

from gedcom_tags import GedcomTag
from record_list import GedcomRecordList


IDENTITY_FIELDS = ("id", "level", "data", "tag", "xref")

# "@I12@", "I12", "S3", "7"
_NUMERIC_ID_RE = re.compile(r"^@?[A-Za-z_]*(\d+)@?$")


@dataclass(frozen=True)
class GedcomRecord:
    """One GEDCOM line: ``level [xref] tag data``.

    Equality is value based over ``id``, ``level``, ``data``, ``tag`` and
    ``xref``. ``children`` holds the sub-records (lines at ``level + 1``) and
    does not take part in equality.
    """
    level: int
    tag: str
    xref: str = ""
    data: str = ""
    id: str = ""
    children: GedcomRecordList = field(
        default_factory=GedcomRecordList, compare=False, hash=False, repr=False
    )

    @property
    def tag_name(self) -> GedcomTag:
        """Registry member for this record's tag (``UNKNOWN`` for custom tags)."""
        return GedcomTag.from_text(self.tag)

    @property
    def numeric_id(self) -> int:
        """Numeric component of ``id`` (``@I12@`` -> 12), or -1 if there is none."""
        match = _NUMERIC_ID_RE.match(self.id)
        if not match:
            return -1
        return int(match.group(1))

    def __str__(self) -> str:
        parts = [str(self.level)]
        if self.xref:
            parts.append(self.xref)
        parts.append(self.tag)
        if self.data:
            parts.append(self.data)
        return " ".join(parts)


def render_record_tree(record: GedcomRecord) -> str:
    """Render a record and all of its descendants, depth first, one line each."""
    lines = []

    def record_to_lines(current: GedcomRecord):
        lines.append(str(current))
        for child in current.children:
            record_to_lines(child)

    record_to_lines(record)
    return "\n".join(lines)


def new_child_record(
    parent: GedcomRecord,
    tag: GedcomTag | str,
    data: str = "",
    xref: str = "",
) -> GedcomRecord:
    """
    Create a child record under ``parent`` and append it to its children.

    The child's id is minted from the parent's children collection, so it is
    always greater than any numeric id already filed under the same tag.
    """
    tag_text = tag.value if isinstance(tag, GedcomTag) else tag
    child = GedcomRecord(
        level=parent.level + 1,
        tag=tag_text,
        xref=xref,
        data=data,
        id=str(parent.children.next_id(tag_text)),
    )
    parent.children.append(child)
    return child


def record_differences(first: GedcomRecord, second: GedcomRecord) -> list[str]:
    """Names of the identity fields on which two records differ (empty if equal)."""
    return [
        name for name in IDENTITY_FIELDS
        if getattr(first, name) != getattr(second, name)
    ]
