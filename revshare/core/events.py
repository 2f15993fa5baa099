"""Notification sinks for deposit and claim records.

A sink is any callable taking a ``Record``. Delivery and ordering beyond
"called once, synchronously, after the operation's state change" are the
sink's concern.
"""

from __future__ import annotations

import logging
from typing import Callable, List

from ..structured_logging import log_event
from .types import ClaimRecord, DepositRecord, Record

EventSink = Callable[[Record], None]

log = logging.getLogger("revshare.events")


class RecordingSink:
    """Keeps every record in memory, in emission order."""

    def __init__(self) -> None:
        self.records: List[Record] = []

    def __call__(self, record: Record) -> None:
        self.records.append(record)

    def deposits(self) -> List[DepositRecord]:
        return [r for r in self.records if isinstance(r, DepositRecord)]

    def claims(self) -> List[ClaimRecord]:
        return [r for r in self.records if isinstance(r, ClaimRecord)]


class LoggingSink:
    """Writes each record as one structured log line."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or log

    def __call__(self, record: Record) -> None:
        if isinstance(record, ClaimRecord):
            log_event(
                self._logger,
                record.event.value,
                share_id=record.share_id,
                asset_kind=record.asset_kind,
                reward_kind=record.reward_kind,
                amount=record.amount,
            )
            return
        log_event(
            self._logger,
            record.event.value,
            asset_kind=record.asset_kind,
            reward_kind=record.reward_kind,
            amount=record.amount,
        )


def null_sink(record: Record) -> None:
    """Discards records."""
