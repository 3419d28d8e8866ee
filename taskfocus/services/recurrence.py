# taskfocus/services/recurrence.py
from datetime import date, timedelta
from typing import Optional

DATE_FORMAT = "%Y-%m-%d"

SATURDAY = 5
SUNDAY = 6


def parse_date(value: str) -> date:
    return date.fromisoformat(value)


def next_due_date(
    due_date: Optional[str],
    recurring: Optional[str],
    working_days_only: bool = False,
) -> Optional[str]:
    """
    반복 작업의 다음 마감일 (YYYY-MM-DD, 타임존 변환 없음).

    - daily: 하루 뒤. working_days_only 면 토요일 → 월요일(+2), 일요일 → 월요일(+1)
    - weekly: 7일 뒤
    마감일이나 반복 값이 없으면 입력을 그대로 돌려준다.
    """
    if not due_date or not recurring:
        return due_date

    current = parse_date(due_date)

    if recurring == "daily":
        nxt = current + timedelta(days=1)
        if working_days_only:
            if nxt.weekday() == SATURDAY:
                nxt += timedelta(days=2)
            elif nxt.weekday() == SUNDAY:
                nxt += timedelta(days=1)
    elif recurring == "weekly":
        nxt = current + timedelta(days=7)
    else:
        raise ValueError(f"unknown recurrence: {recurring!r}")

    return nxt.strftime(DATE_FORMAT)
