from __future__ import annotations

from datetime import date


def _resolve_today(today: date | None) -> date:
    return today if today is not None else date.today()


def parse_due_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def days_until(due: date, today: date | None = None) -> int:
    """Whole calendar days from ``today`` to ``due``; negative when past."""
    return (due - _resolve_today(today)).days


def is_overdue(value: str | None, today: date | None = None) -> bool:
    due = parse_due_date(value)
    if due is None:
        return False
    return days_until(due, today) < 0


def format_date(value: str | None, today: date | None = None) -> str:
    """Human label for a due date relative to ``today``."""
    due = parse_due_date(value)
    if due is None:
        return value or "No due date"
    delta = days_until(due, today)
    if delta == 0:
        return "Today"
    if delta == 1:
        return "Tomorrow"
    if delta == -1:
        return "Yesterday"
    if delta < 0:
        return f"{-delta} days overdue"
    return f"{due.strftime('%b')} {due.day}"
