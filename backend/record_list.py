"""Indexed GEDCOM record collection.

``GedcomRecordList`` is an ordered, index-addressable list of records that also
keeps two secondary indices in lockstep with the primary sequence:

* a tag index mapping each tag to the records carrying it, in document order.
  A tag with no records has no entry at all.
* a max-id index mapping each tag to the highest numeric id seen under it,
  used by ``next_id`` to mint identifiers for new records.

Every structure (individual, family, source, event) answers its questions by
querying the list holding its record's children.
"""

import logging
from collections.abc import Iterable, MutableSequence
from typing import TYPE_CHECKING

from gedcom_tags import GedcomTag

if TYPE_CHECKING:
    from gedcom_records import GedcomRecord

logger = logging.getLogger("treeindex.record_list")

_verify_on_mutation = False


def set_index_verification(enabled: bool) -> None:
    """Re-check the tag index after every mutation (slow, meant for debugging)."""
    global _verify_on_mutation
    _verify_on_mutation = enabled


# ============================================================================
# Errors
# ============================================================================

class RecordListError(Exception):
    """Base class for record collection errors."""


class RecordIndexError(RecordListError, IndexError):
    """A positional operation was given an out-of-range position."""


class RecordNotFoundError(RecordListError, ValueError):
    """A record (or record id) that must be present is not in the collection."""


class RecordIndexCorruptedError(RecordListError, RuntimeError):
    """The tag index no longer agrees with the primary sequence."""


def _resolve_tag(tag: GedcomTag | str) -> GedcomTag:
    if isinstance(tag, GedcomTag):
        return tag
    return GedcomTag.from_text(tag)


def _check_record(record) -> None:
    """Raise TypeError for values that cannot be filed, before anything is mutated."""
    try:
        record.tag_name
        record.numeric_id
    except AttributeError:
        raise TypeError(f"GedcomRecordList holds GEDCOM records, not {type(record).__name__}") from None


# ============================================================================
# Collection
# ============================================================================

class GedcomRecordList(MutableSequence):
    """Ordered collection of GEDCOM records indexed by tag."""

    def __init__(self, records: Iterable["GedcomRecord"] | None = None):
        self._records: list["GedcomRecord"] = []
        self._tag_index: dict[GedcomTag, list["GedcomRecord"]] = {}
        self._max_ids: dict[GedcomTag, int] = {}
        if records is not None:
            self.extend(records)

    # ------------------------------------------------------------------
    # Index bookkeeping
    # ------------------------------------------------------------------

    def _bucket_position(self, position: int, tag_name: GedcomTag) -> int:
        """Position within the tag bucket for a record at ``position`` in the list."""
        bucket = self._tag_index.get(tag_name)
        if bucket is None:
            return 0
        if position >= len(self._records):
            return len(bucket)
        return sum(1 for record in self._records[:position] if record.tag_name == tag_name)

    def _file(self, position: int, record: "GedcomRecord") -> None:
        """Insert into the primary sequence and the tag index, then bump the max id."""
        _check_record(record)
        tag_name = record.tag_name
        bucket_position = self._bucket_position(position, tag_name)
        self._tag_index.setdefault(tag_name, []).insert(bucket_position, record)
        self._records.insert(position, record)
        self._update_max_id(tag_name, record)

    def _unfile(self, position: int) -> "GedcomRecord":
        """Remove the record at ``position`` from the tag index and the primary sequence."""
        record = self._records[position]
        tag_name = record.tag_name
        bucket = self._tag_index.get(tag_name)
        bucket_position = self._bucket_position(position, tag_name)
        if bucket is None or bucket_position >= len(bucket) or bucket[bucket_position] != record:
            raise RecordIndexCorruptedError(
                f"Record {record.id!r} at position {position} is missing from the {tag_name} bucket"
            )
        del bucket[bucket_position]
        if not bucket:
            del self._tag_index[tag_name]
        del self._records[position]
        return record

    def _update_max_id(self, tag_name: GedcomTag, record: "GedcomRecord") -> None:
        numeric_id = record.numeric_id
        if numeric_id < 0:
            return
        if numeric_id > self._max_ids.get(tag_name, -1):
            self._max_ids[tag_name] = numeric_id

    def _normalize_position(self, position: int) -> int:
        if not isinstance(position, int):
            raise TypeError(f"Record positions must be integers, not {type(position).__name__}")
        size = len(self._records)
        normalized = position + size if position < 0 else position
        if not 0 <= normalized < size:
            raise RecordIndexError(f"Position {position} out of range for {size} records")
        return normalized

    def _after_mutation(self) -> None:
        if _verify_on_mutation:
            self.verify_index()

    # ------------------------------------------------------------------
    # MutableSequence protocol
    # ------------------------------------------------------------------

    def __getitem__(self, position):
        if isinstance(position, slice):
            return GedcomRecordList(self._records[position])
        return self._records[self._normalize_position(position)]

    def __setitem__(self, position, record: "GedcomRecord") -> None:
        if isinstance(position, slice):
            raise TypeError("GedcomRecordList does not support slice assignment")
        self.replace_at(position, record)

    def __delitem__(self, position) -> None:
        if isinstance(position, slice):
            for index in sorted(range(*position.indices(len(self._records))), reverse=True):
                self._unfile(index)
            self._after_mutation()
            return
        self.remove_at(position)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def __contains__(self, record) -> bool:
        return record in self._records

    def __eq__(self, other) -> bool:
        if isinstance(other, GedcomRecordList):
            return self._records == other._records
        if isinstance(other, list):
            return self._records == other
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"GedcomRecordList({self._records!r})"

    def __str__(self) -> str:
        return "".join(f"{record}\n" for record in self._records)

    def insert(self, position: int, record: "GedcomRecord") -> None:
        """Insert ``record`` before ``position`` (0 <= position <= len)."""
        size = len(self._records)
        if not isinstance(position, int) or not 0 <= position <= size:
            raise RecordIndexError(f"Insert position {position} out of range for {size} records")
        self._file(position, record)
        self._after_mutation()

    def append(self, record: "GedcomRecord") -> None:
        self._file(len(self._records), record)
        self._after_mutation()

    def extend(self, records: Iterable["GedcomRecord"]) -> None:
        """Append every record, filing each one into the tag and max-id indices."""
        records = list(records)
        for record in records:
            _check_record(record)
        for record in records:
            self._file(len(self._records), record)
        self._after_mutation()

    def replace_at(self, position: int, record: "GedcomRecord") -> "GedcomRecord":
        """Replace the record at ``position`` and return the one it displaced.

        The displaced record leaves its tag bucket before the new one is filed.
        The max id of the displaced record's tag is left as it was.
        """
        _check_record(record)
        position = self._normalize_position(position)
        old = self._unfile(position)
        self._file(position, record)
        logger.debug(f"Replaced {old.tag} record {old.id!r} with {record.tag} record {record.id!r}")
        self._after_mutation()
        return old

    def remove_at(self, position: int) -> "GedcomRecord":
        """Remove and return the record at ``position``."""
        record = self._unfile(self._normalize_position(position))
        self._after_mutation()
        return record

    def pop(self, position: int = -1) -> "GedcomRecord":
        return self.remove_at(position)

    def remove(self, record: "GedcomRecord") -> None:
        """Remove the first record equal to ``record``.

        Raises RecordNotFoundError if no such record is present.
        """
        try:
            position = self._records.index(record)
        except ValueError:
            raise RecordNotFoundError(f"Record not in collection: {record}") from None
        self._unfile(position)
        logger.debug(f"Removed {record.tag} record {record.id!r} from position {position}")
        self._after_mutation()

    def clear(self) -> None:
        """Remove every record. The max-id index is kept, so new ids keep counting up."""
        self._records.clear()
        self._tag_index.clear()
        self._after_mutation()

    # ------------------------------------------------------------------
    # Tag queries
    # ------------------------------------------------------------------

    def first_by_tag(self, tag: GedcomTag | str) -> "GedcomRecord | None":
        """First record (in document order) filed under ``tag``, or None."""
        bucket = self._tag_index.get(_resolve_tag(tag))
        if not bucket:
            return None
        return bucket[0]

    def all_by_tag(self, tag: GedcomTag | str) -> "GedcomRecordList":
        """All records filed under ``tag``, in document order (empty if none)."""
        return GedcomRecordList(self._tag_index.get(_resolve_tag(tag), ()))

    def all_by_any_tag(self, tags: Iterable[GedcomTag | str]) -> list["GedcomRecord"]:
        """
        Records whose tag is one of ``tags``, in document order.

        A ``GedcomTag`` matches on the registry member, so ``GedcomTag.UNKNOWN``
        selects every custom tag. Plain strings match the raw tag text, so
        ``"_UID"`` selects only ``_UID`` records.
        """
        members = set()
        raw_tags = set()
        for tag in tags:
            if isinstance(tag, GedcomTag):
                members.add(tag)
            else:
                raw_tags.add(tag.strip().upper())
        return [
            record for record in self._records
            if record.tag_name in members or record.tag.strip().upper() in raw_tags
        ]

    def data_for_tag(self, tag: GedcomTag | str) -> str:
        """Data of the first record under ``tag``, or an empty string."""
        record = self.first_by_tag(tag)
        return record.data if record is not None else ""

    def xref_for_tag(self, tag: GedcomTag | str) -> str:
        """Cross-reference id of the first record under ``tag``, or an empty string."""
        record = self.first_by_tag(tag)
        return record.xref if record is not None else ""

    def xrefs_for_tag(self, tag: GedcomTag | str) -> list[str]:
        """Cross-reference ids of every record under ``tag``, in order."""
        return [record.xref for record in self._tag_index.get(_resolve_tag(tag), ())]

    def tags(self) -> list[GedcomTag]:
        """Tags that currently have at least one record."""
        return list(self._tag_index)

    def next_id(self, tag: GedcomTag | str) -> int:
        """Next free numeric id for ``tag``: one past the highest seen, or 1."""
        tag_name = _resolve_tag(tag)
        if tag_name in self._max_ids:
            return self._max_ids[tag_name] + 1
        return 1

    # ------------------------------------------------------------------
    # Id lookups (linear scans)
    # ------------------------------------------------------------------

    def index_of_id(self, record_id: str) -> int:
        """Position of the first record whose id is ``record_id``, or -1."""
        for position, record in enumerate(self._records):
            if record.id == record_id:
                return position
        return -1

    def get_by_id(self, record_id: str) -> "GedcomRecord":
        position = self.index_of_id(record_id)
        if position < 0:
            raise RecordNotFoundError(f"No record with id {record_id!r}")
        return self._records[position]

    def set_by_id(self, record_id: str, record: "GedcomRecord") -> "GedcomRecord":
        position = self.index_of_id(record_id)
        if position < 0:
            raise RecordNotFoundError(f"No record with id {record_id!r}")
        return self.replace_at(position, record)

    # ------------------------------------------------------------------
    # Conversion and checks
    # ------------------------------------------------------------------

    def to_list(self) -> list["GedcomRecord"]:
        return list(self._records)

    def copy(self) -> "GedcomRecordList":
        return GedcomRecordList(self._records)

    def verify_index(self) -> None:
        """
        Re-derive the tag index from the primary sequence and compare.

        Raises RecordIndexCorruptedError when a bucket is empty, holds records
        that are not in the primary sequence under that tag, or the max-id
        index is behind a filed record.
        """
        expected: dict[GedcomTag, list["GedcomRecord"]] = {}
        for record in self._records:
            expected.setdefault(record.tag_name, []).append(record)

        for tag_name, bucket in self._tag_index.items():
            if not bucket:
                raise RecordIndexCorruptedError(f"Empty bucket left for {tag_name}")
            if expected.get(tag_name) != bucket:
                raise RecordIndexCorruptedError(f"Bucket for {tag_name} does not match the records")
        if set(expected) != set(self._tag_index):
            missing = sorted(str(tag) for tag in set(expected) - set(self._tag_index))
            raise RecordIndexCorruptedError(f"No bucket for tags: {', '.join(missing)}")

        bucketed = sum(len(bucket) for bucket in self._tag_index.values())
        if bucketed != len(self._records):
            raise RecordIndexCorruptedError(
                f"Tag index holds {bucketed} records, list holds {len(self._records)}"
            )

        for record in self._records:
            if record.numeric_id > self._max_ids.get(record.tag_name, -1):
                raise RecordIndexCorruptedError(
                    f"Max id for {record.tag_name} is behind record {record.id!r}"
                )
