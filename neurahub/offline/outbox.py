"""Persisted queue of local changes waiting to reach the server."""

import logging
import time
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel

from .snapshot import LocalSnapshotStore, OUTBOX_KEY

logger = logging.getLogger(__name__)

TEMP_ID_PREFIX = "temp-"


class OutboxOperation(BaseModel):
    op: Literal["upsert", "delete"]
    collection: str
    record_id: str
    payload: Dict[str, Any] = {}
    seq: int = 0
    attempts: int = 0
    last_error: Optional[str] = None
    queued_at: int = 0

    @property
    def key(self) -> Tuple[str, str]:
        return (self.collection, self.record_id)


class Outbox:
    """
    Ordered pending operations, at most one per (collection, record id).

    A newer change to the same record replaces the queued one: the latest
    payload wins and a delete supersedes a pending upsert. Every replacement
    bumps the operation's ``seq`` so a flush that was already in flight only
    clears the version it actually sent.
    """

    def __init__(self, store: LocalSnapshotStore, key: str = OUTBOX_KEY):
        self.store = store
        self.key = key
        self._ops: List[OutboxOperation] = [
            OutboxOperation(**raw) for raw in (store.read(key, []) or [])
        ]
        self._next_seq = max((op.seq for op in self._ops), default=0) + 1

    def __len__(self) -> int:
        return len(self._ops)

    def _persist(self) -> None:
        self.store.write(self.key, [op.model_dump() for op in self._ops])

    def _enqueue(self, op: str, collection: str, record_id: str, payload: Dict[str, Any]) -> bool:
        if not record_id or record_id.startswith(TEMP_ID_PREFIX):
            logger.debug(f"Not queueing {collection}/{record_id}: temporary id")
            return False

        seq = self._next_seq
        self._next_seq += 1
        for i, queued in enumerate(self._ops):
            if queued.key == (collection, record_id):
                self._ops[i] = queued.model_copy(update={
                    "op": op, "payload": payload, "seq": seq, "attempts": 0, "last_error": None,
                })
                break
        else:
            self._ops.append(OutboxOperation(
                op=op,
                collection=collection,
                record_id=record_id,
                payload=payload,
                seq=seq,
                queued_at=int(time.time() * 1000),
            ))
        self._persist()
        return True

    def enqueue_upsert(self, collection: str, record: Dict[str, Any]) -> bool:
        return self._enqueue("upsert", collection, str(record.get("id") or ""), dict(record))

    def enqueue_delete(self, collection: str, record_id: str) -> bool:
        return self._enqueue("delete", collection, str(record_id or ""), {})

    def pending(self) -> List[OutboxOperation]:
        return list(self._ops)

    def mark_applied(self, sent: List[OutboxOperation]) -> None:
        """Drop operations the server applied, unless they changed since being sent"""
        done = {(op.key, op.seq) for op in sent}
        self._ops = [op for op in self._ops if (op.key, op.seq) not in done]
        self._persist()

    def mark_failed(self, sent: List[OutboxOperation], error: str) -> None:
        """Keep failed operations queued and count the attempt"""
        failed = {(op.key, op.seq) for op in sent}
        self._ops = [
            op.model_copy(update={"attempts": op.attempts + 1, "last_error": error})
            if (op.key, op.seq) in failed else op
            for op in self._ops
        ]
        self._persist()
