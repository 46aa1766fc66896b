from __future__ import annotations

from typing import Any, Optional


def normalize_tenant(value: Any) -> Optional[str]:
    """Tenant key: trimmed and lower-cased. Blank gives None."""

    if value is None:
        return None
    text = str(value).strip().lower()
    return text or None


def clean_subject(value: Any) -> Optional[str]:
    """Display form of a student name: trimmed. Blank gives None."""

    if value is None:
        return None
    text = str(value).strip()
    return text or None


def subject_key(value: str) -> str:
    """Comparison form of a student name.

    Student names are matched case-insensitively everywhere (counter keys,
    roster membership, ledger lookups).
    """

    return value.strip().casefold()
