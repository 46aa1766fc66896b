from __future__ import annotations

import locale
import logging
from typing import Dict, List, Optional

from ..common.results import ReadResult
from ..common.validators import clean_subject, normalize_tenant, subject_key
from ..core.constants import DEFAULT_STUDENT_NAME
from ..core.exceptions import StoreError
from ..history.service import HistoryService
from .model import RosterEntry
from .repository import RosterRepository

logger = logging.getLogger(__name__)


def sort_names(names: List[str]) -> List[str]:
    """Case-insensitive ordering, collated by the process LC_COLLATE.

    Nothing here calls `locale.setlocale`; under the default C locale this is
    a code-point sort of the casefolded names.
    """

    return sorted(names, key=lambda n: (locale.strxfrm(n.casefold()), n))


class RosterService:
    """Use case: which students an owner sees, and registering new ones.

    The visible roster is the union of
      1. the owner's explicit roster rows,
      2. legacy ownerless rows, only while the owner has no explicit rows,
      3. every student the owner has history for.
    An empty union yields a single placeholder student.
    """

    def __init__(self, roster: RosterRepository, history: HistoryService, *, default_name: str = DEFAULT_STUDENT_NAME):
        self._roster = roster
        self._history = history
        self._default_name = default_name

    def _read_entries(self, tenant_key: str) -> List[RosterEntry]:
        entries = []
        for row in self._roster.read_roster(tenant_key):
            entry = RosterEntry.from_row(row)
            if entry is not None:
                entries.append(entry)
        return entries

    def list_subjects(self, tenant: str) -> ReadResult[str]:
        tenant_key = normalize_tenant(tenant)
        if tenant_key is None:
            return ReadResult(items=(self._default_name,))

        errors: List[str] = []
        explicit: List[str] = []
        legacy: List[str] = []
        try:
            for entry in self._read_entries(tenant_key):
                if entry.is_legacy:
                    legacy.append(entry.subject)
                elif entry.owner == tenant_key:
                    explicit.append(entry.subject)
        except StoreError as e:
            logger.warning("Roster read failed for %s: %s", tenant_key, e)
            errors.append(str(e))

        from_history = self._history.subjects_for(tenant_key)
        if from_history.degraded:
            errors.append(from_history.error or "")

        names: Dict[str, str] = {}
        sources = [explicit, [] if explicit else legacy, list(from_history.items)]
        for source in sources:
            for name in source:
                names.setdefault(subject_key(name), name)

        if not names:
            names[subject_key(self._default_name)] = self._default_name

        error: Optional[str] = "; ".join(errors) if errors else None
        return ReadResult(items=tuple(sort_names(list(names.values()))), error=error)

    def ensure_registered(self, tenant: str, subject: str) -> bool:
        """Append (tenant, subject) unless already on the owner's explicit roster.

        Returns True when a row was written. Check-then-append is not atomic;
        an occasional duplicate row is harmless since listing de-duplicates.
        Store failures propagate; callers decide whether they matter.
        """

        tenant_key = normalize_tenant(tenant)
        name = clean_subject(subject)
        if tenant_key is None or name is None:
            return False

        wanted = subject_key(name)
        for entry in self._read_entries(tenant_key):
            if entry.owner == tenant_key and subject_key(entry.subject) == wanted:
                return False

        self._roster.append_roster_entry(tenant_key, name)
        logger.info("Registered student %s for %s", name, tenant_key)
        return True
