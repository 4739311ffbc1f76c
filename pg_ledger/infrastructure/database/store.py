"""Record store boundary: whole-collection load and save"""

import copy
from typing import Any, Dict, List, Protocol

from sqlalchemy.orm import Session

from pg_ledger.infrastructure.database.models import LedgerRecord

Record = Dict[str, Any]


class RecordStore(Protocol):
    """Generic key-value store of record collections"""

    def load_all(self, collection: str) -> List[Record]:
        ...

    def save_all(self, collection: str, records: List[Record]) -> None:
        ...


class InMemoryRecordStore:
    """Dict-backed store; records are copied in and out so callers never share state"""

    def __init__(self, initial: Dict[str, List[Record]] | None = None):
        self._collections: Dict[str, List[Record]] = copy.deepcopy(initial or {})

    def load_all(self, collection: str) -> List[Record]:
        return copy.deepcopy(self._collections.get(collection, []))

    def save_all(self, collection: str, records: List[Record]) -> None:
        self._collections[collection] = copy.deepcopy(records)


class SqlRecordStore:
    """Store backed by the ledger_record table; the caller owns the transaction"""

    def __init__(self, db: Session):
        self.db = db

    def load_all(self, collection: str) -> List[Record]:
        rows = (
            self.db.query(LedgerRecord)
            .filter(LedgerRecord.collection == collection)
            .order_by(LedgerRecord.id)
            .all()
        )
        return [copy.deepcopy(row.payload) for row in rows]

    def save_all(self, collection: str, records: List[Record]) -> None:
        """Replace the whole collection (flushed, not committed)"""
        self.db.query(LedgerRecord).filter(LedgerRecord.collection == collection).delete(
            synchronize_session=False
        )
        for record in records:
            self.db.add(
                LedgerRecord(
                    collection=collection,
                    record_id=str(record["id"]),
                    payload=record,
                )
            )
        self.db.flush()
