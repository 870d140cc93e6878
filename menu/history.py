"""The last few days of menus, newest first."""

from datetime import datetime
import logging
from typing import Any

from menu.models import DayMenu, History, HistoryEntry


logger = logging.getLogger(__name__)


HISTORY_SIZE = 3
RECENT_DAYS = 2


def today_key(now: datetime | None = None) -> str:
    """Local calendar day as `YYYY-MM-DD`."""
    now = datetime.now() if now is None else now
    return now.strftime("%Y-%m-%d")


def trim(history: History, *, size: int = HISTORY_SIZE) -> History:
    return history[:size]


def find_entry(history: History, date_key: str) -> HistoryEntry | None:
    return next((h for h in history if h.date == date_key), None)


def without_date(history: History, date_key: str) -> History:
    return [h for h in history if h.date != date_key]


def recent_entries(
    history: History,
    exclude_date_key: str,
    *,
    days: int = RECENT_DAYS,
) -> History:
    """The window of prior days whose dishes should not come up again."""
    return without_date(history, exclude_date_key)[:days]


def prepend(history: History, date_key: str, menu: DayMenu) -> History:
    """Put `menu` first as the entry for `date_key`."""
    return [HistoryEntry(date=date_key, menu=menu), *without_date(history, date_key)]


def history_from_list(data: Any) -> History:
    """Non-lists are discarded. Bad entries and repeated dates are skipped."""
    if not isinstance(data, list):
        logger.warning("History data is not a list, starting empty.")
        return []
    history: History = []
    seen: set[str] = set()
    for item in data:
        try:
            entry = HistoryEntry.from_dict(item)
        except ValueError as e:
            logger.warning(f"Skipping history entry: {e}")
            continue
        if entry.date in seen:
            continue
        seen.add(entry.date)
        history.append(entry)
    return history


def history_to_list(history: History) -> list[dict[str, Any]]:
    return [h.to_dict() for h in history]
