from menu.models import Category, DayMenu, HistoryEntry, Meal


def meal(**dishes: str) -> Meal:
    return {c: dishes.get(c.value, "") for c in Category}


def entry(date: str, lunch: Meal | None = None, dinner: Meal | None = None) -> HistoryEntry:
    lunch = meal() if lunch is None else lunch
    dinner = meal() if dinner is None else dinner
    return HistoryEntry(date=date, menu=DayMenu(lunch=lunch, dinner=dinner))
