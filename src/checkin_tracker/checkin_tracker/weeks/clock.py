"""Week clock: which Friday a moment in time rolls up to.

Work weeks run Monday to Friday and are identified by their Friday
("week ending"). Weekdays are numbered Sun=0 ... Sat=6 here.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Union

from ..common.datetime_utils import format_iso_date
from ..core.constants import FRIDAY, SATURDAY, SUNDAY


def sunday_based_weekday(day: date) -> int:
    # date.weekday() is Mon=0 ... Sun=6
    return (day.weekday() + 1) % 7


def week_ending_date(now: Union[datetime, date]) -> date:
    """Friday that `now` belongs to.

    Mon-Fri give the Friday of the same week (today on a Friday). A weekend
    day gives the Friday just passed: Saturday steps back one day, Sunday two.
    Only local calendar components are used; no timezone conversion.
    """

    today = now.date() if isinstance(now, datetime) else now
    weekday = sunday_based_weekday(today)

    if weekday == SATURDAY:
        return today - timedelta(days=1)
    if weekday == SUNDAY:
        return today - timedelta(days=2)
    return today + timedelta(days=FRIDAY - weekday)


def week_ending_iso(now: Union[datetime, date]) -> str:
    return format_iso_date(week_ending_date(now))
