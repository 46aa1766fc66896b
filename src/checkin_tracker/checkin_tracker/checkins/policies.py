"""Failure policies for the sub-steps of an operation.

BEST_EFFORT: a store failure is logged and the operation carries on.
ALL_OR_NOTHING: a store failure aborts the operation and is re-raised.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, TypeVar

from ..core.enums import FailurePolicy
from ..core.exceptions import StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_step(policy: FailurePolicy, step: str, action: Callable[[], T]) -> Optional[T]:
    try:
        return action()
    except StoreError as e:
        if policy is FailurePolicy.ALL_OR_NOTHING:
            logger.error("%s failed: %s", step, e)
            raise
        logger.warning("%s failed, continuing: %s", step, e)
        return None
