"""In-memory buffer for confirmations issued during the running session."""

from __future__ import annotations

from collections import OrderedDict

from tourbook.core.config import get_settings
from tourbook.services.confirmation_service import ConfirmationRecord

_RECORDS: OrderedDict[str, ConfirmationRecord] = OrderedDict()


def _capacity() -> int:
    return get_settings().confirmation_store_size


def put(record: ConfirmationRecord) -> None:
    """Keep ``record``, evicting the oldest entries past capacity."""
    _RECORDS[record.confirmation_id] = record
    _RECORDS.move_to_end(record.confirmation_id)
    while len(_RECORDS) > _capacity():
        _RECORDS.popitem(last=False)


def get(confirmation_id: str) -> ConfirmationRecord | None:
    return _RECORDS.get(confirmation_id)


def snapshot(limit: int = 50) -> list[ConfirmationRecord]:
    """Return up to ``limit`` most recent confirmations, newest last."""
    if limit <= 0:
        return []
    records = list(_RECORDS.values())
    return records[-limit:]


def clear() -> None:
    """Clear the store (mainly for tests)."""
    _RECORDS.clear()
