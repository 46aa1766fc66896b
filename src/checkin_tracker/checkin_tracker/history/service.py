from __future__ import annotations

import logging
from datetime import date

from ..common.results import ReadResult
from ..common.validators import clean_subject, normalize_tenant, subject_key
from ..core.exceptions import StoreError
from .model import LedgerRecord, WeeklyTotal
from .reconcile import parse_ledger_rows, reconcile
from .repository import LedgerRepository

logger = logging.getLogger(__name__)


class HistoryService:
    """Use case: read and append weekly totals."""

    def __init__(self, ledger: LedgerRepository):
        self._ledger = ledger

    def read_reconciled(self, tenant: str, subject: str) -> ReadResult[WeeklyTotal]:
        tenant_key = normalize_tenant(tenant)
        name = clean_subject(subject)
        if tenant_key is None or name is None:
            return ReadResult()

        try:
            rows = self._ledger.read_records(tenant_key)
        except StoreError as e:
            logger.warning("History read failed for %s/%s: %s", tenant_key, name, e)
            return ReadResult(error=str(e))

        return ReadResult(items=tuple(reconcile(rows, tenant_key, name)))

    def subjects_for(self, tenant: str) -> ReadResult[str]:
        """Student names seen in the tenant's (valid) ledger rows, first spelling wins."""

        tenant_key = normalize_tenant(tenant)
        if tenant_key is None:
            return ReadResult()

        try:
            rows = self._ledger.read_records(tenant_key)
        except StoreError as e:
            logger.warning("History read failed for %s: %s", tenant_key, e)
            return ReadResult(error=str(e))

        seen: dict[str, str] = {}
        for record in parse_ledger_rows(rows):
            if record.owner == tenant_key:
                seen.setdefault(subject_key(record.subject), record.subject)
        return ReadResult(items=tuple(seen.values()))

    def append(self, *, tenant: str, subject: str, week_ending: date, count: int, annotation_summary: str = "") -> None:
        """Append one record. Duplicates are not collapsed here; reads do that."""

        record = LedgerRecord(
            owner=normalize_tenant(tenant) or "",
            subject=clean_subject(subject) or "",
            week_ending=week_ending,
            count=int(count),
            annotation_summary=annotation_summary or "",
        )
        self._ledger.append_record(record)
        logger.info(
            "Recorded week %s for %s/%s: %d check-ins",
            week_ending.isoformat(),
            record.owner,
            record.subject,
            record.count,
        )
