"""Ordered contact list that is never empty."""
from typing import Iterable, Iterator, List, Mapping, Optional, Union

from .types import ContactRecord

ContactLike = Union[ContactRecord, Mapping]


def _coerce(record: Optional[ContactLike]) -> ContactRecord:
    if record is None:
        return ContactRecord()
    if isinstance(record, ContactRecord):
        return record
    return ContactRecord.from_mapping(record)


class ContactList:
    """
    Insertion-ordered contacts. Always holds at least one (possibly blank)
    record; removing the last one is refused.
    """

    def __init__(self, records: Optional[Iterable[ContactLike]] = None):
        self._records: List[ContactRecord] = [_coerce(r) for r in (records or [])]
        if not self._records:
            self._records.append(ContactRecord())

    @classmethod
    def from_iterable(cls, records: Optional[Iterable[ContactLike]]) -> "ContactList":
        return cls(records)

    def add(self, record: Optional[ContactLike] = None) -> ContactRecord:
        contact = _coerce(record)
        self._records.append(contact)
        return contact

    def remove(self, index: int) -> bool:
        """Remove the record at index; False when refused or out of range."""
        if len(self._records) <= 1:
            return False
        if index < 0 or index >= len(self._records):
            return False
        del self._records[index]
        return True

    def collect(self) -> List[ContactRecord]:
        """Snapshot copy for rendering."""
        if not self._records:
            return [ContactRecord()]
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ContactRecord]:
        return iter(list(self._records))

    def __getitem__(self, index: int) -> ContactRecord:
        return self._records[index]


def collect_contacts(records: Optional[Iterable[ContactLike]]) -> List[ContactRecord]:
    return ContactList(records).collect()
