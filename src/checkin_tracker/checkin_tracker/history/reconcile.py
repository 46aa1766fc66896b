"""Read-time reconciliation of the weekly ledger.

The ledger is append-only, so the same (owner, student, week) can appear more
than once: a retried End Week, two tabs racing each other. The total for a
week is the highest count among its rows (observed max). This is not
last-write-wins and must not become it; a lower, later row never hides a
higher one.
"""
from __future__ import annotations

import logging
import math
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from ..common.datetime_utils import coerce_date
from ..common.validators import clean_subject, normalize_tenant, subject_key
from .model import LedgerRecord, WeeklyTotal
from .repository import RawRow

logger = logging.getLogger(__name__)


def parse_count(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) and value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return int(number) if math.isfinite(number) and number.is_integer() else None
    return None


def parse_ledger_row(row: RawRow) -> Optional[LedgerRecord]:
    """Turn a raw store row into a record, or None when the row is unusable."""

    owner = normalize_tenant(row.get("owner"))
    subject = clean_subject(row.get("student"))
    week_ending = coerce_date(row.get("week_ending"))
    count = parse_count(row.get("checkins"))
    if owner is None or subject is None or week_ending is None or count is None:
        return None

    notes = row.get("notes")
    return LedgerRecord(
        owner=owner,
        subject=subject,
        week_ending=week_ending,
        count=count,
        annotation_summary=str(notes).strip() if notes is not None else "",
    )


def parse_ledger_rows(rows: Iterable[RawRow]) -> List[LedgerRecord]:
    records: List[LedgerRecord] = []
    for index, row in enumerate(rows):
        record = parse_ledger_row(row)
        if record is None:
            logger.debug("Skipping malformed ledger row #%d: %r", index, row)
            continue
        records.append(record)
    return records


def reconcile(rows: Iterable[RawRow], tenant: str, subject: str) -> List[WeeklyTotal]:
    """One total per week for (tenant, subject), most recent week first."""

    tenant_key = normalize_tenant(tenant)
    wanted = subject_key(subject)

    best: Dict[date, LedgerRecord] = {}
    for record in parse_ledger_rows(rows):
        if record.owner != tenant_key or subject_key(record.subject) != wanted:
            continue
        current = best.get(record.week_ending)
        # Strictly greater: on a tie the first row seen stays.
        if current is None or record.count > current.count:
            best[record.week_ending] = record

    return [
        WeeklyTotal(week_ending=r.week_ending, count=r.count, annotation_summary=r.annotation_summary)
        for r in sorted(best.values(), key=lambda r: r.week_ending, reverse=True)
    ]
