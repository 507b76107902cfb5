# lumen/dates.py
from __future__ import annotations
from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo


def today_local(tz_name: str, now: Optional[datetime] = None) -> date:
    """
    Civil date in `tz_name`, never system-local or UTC.
    `now` must be timezone-aware when given.
    """
    tz = ZoneInfo(tz_name)
    if now is None:
        return datetime.now(tz).date()
    if now.tzinfo is None:
        raise ValueError("now must be timezone-aware")
    return now.astimezone(tz).date()


def iso(d: date) -> str:
    return d.isoformat()


def usccb_slug(d: date) -> str:
    """2026-10-18 -> '101826'"""
    return d.strftime("%m%d%y")


def usccb_url(base: str, d: date) -> str:
    return f"{base}/{usccb_slug(d)}.cfm.md"


def utc_stamp(now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")
