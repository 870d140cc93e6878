"""Random menus that avoid what was eaten in the last couple of days.

The recency rule is soft. When every dish of a category was eaten recently
the pick falls back to the whole list, and an empty list gives an empty dish.
"""

import random

from menu.catalog import Catalog, dish_key
from menu.models import Category, DayMenu, History, Meal


def excluded_dishes(recent: History) -> dict[Category, set[str]]:
    excluded: dict[Category, set[str]] = {c: set() for c in Category}
    for entry in recent:
        for _, meal in entry.menu.meals():
            for category in Category:
                dish = meal.get(category, "")
                if dish:
                    excluded[category].add(dish_key(dish))
    return excluded


def pick(
    pool: list[str],
    excluded: set[str],
    *,
    rng: random.Random | None = None,
) -> str:
    rng = random.Random() if rng is None else rng
    if not pool:
        return ""
    filtered = [d for d in pool if dish_key(d) not in excluded]
    return rng.choice(filtered or pool)


def make_meal(
    catalog: Catalog,
    recent: History,
    *,
    rng: random.Random | None = None,
) -> Meal:
    rng = random.Random() if rng is None else rng
    excluded = excluded_dishes(recent)
    return {c: pick(catalog.pool(c), excluded[c], rng=rng) for c in Category}


def make_day_menu(
    catalog: Catalog,
    recent: History,
    *,
    rng: random.Random | None = None,
) -> DayMenu:
    """Lunch and dinner drawn independently from the same window.

    They may repeat each other; only earlier days are excluded.
    """
    rng = random.Random() if rng is None else rng
    return DayMenu(
        lunch=make_meal(catalog, recent, rng=rng),
        dinner=make_meal(catalog, recent, rng=rng),
    )
