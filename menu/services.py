import logging
import random

from menu.catalog import Catalog, parse_lines
from menu.generator import make_day_menu, make_meal
from menu.history import find_entry, prepend, recent_entries, today_key, trim, without_date
from menu.models import Category, DayMenu, MealSlot
from menu.repository import CatalogRepository, HistoryRepository


logger = logging.getLogger(__name__)


async def today_menu(
    *,
    catalogs: CatalogRepository,
    histories: HistoryRepository,
    today: str | None = None,
    rng: random.Random | None = None,
) -> DayMenu:
    """Today's menu, generated and stored the first time it is asked for."""
    today = today_key() if today is None else today
    history = trim(await histories.load(), size=histories.size)
    existing = find_entry(history, today)
    if existing is not None:
        return existing.menu

    catalog = await catalogs.load()
    menu = make_day_menu(catalog, recent_entries(history, today), rng=rng)
    await histories.save(prepend(history, today, menu))
    logger.info(f"Generated menu for {today}.")
    return menu


async def refresh_day(
    *,
    catalogs: CatalogRepository,
    histories: HistoryRepository,
    today: str | None = None,
    rng: random.Random | None = None,
) -> DayMenu:
    today = today_key() if today is None else today
    history = without_date(await histories.load(), today)
    catalog = await catalogs.load()
    menu = make_day_menu(catalog, recent_entries(history, today), rng=rng)
    await histories.save(prepend(history, today, menu))
    logger.info(f"Refreshed menu for {today}.")
    return menu


async def refresh_meal(
    slot: MealSlot,
    *,
    catalogs: CatalogRepository,
    histories: HistoryRepository,
    today: str | None = None,
    rng: random.Random | None = None,
) -> DayMenu:
    """Swap one meal of today's menu, keeping the other exactly as it was."""
    today = today_key() if today is None else today
    history = await histories.load()
    recent = recent_entries(history, today)
    catalog = await catalogs.load()

    meal = make_meal(catalog, recent, rng=rng)
    current = find_entry(history, today)
    base = make_day_menu(catalog, recent, rng=rng) if current is None else current.menu
    menu = base.replace(slot, meal)

    await histories.save(prepend(history, today, menu))
    logger.info(f"Refreshed {slot.value} for {today}.")
    return menu


async def save_catalog(
    texts: dict[Category, str],
    *,
    catalogs: CatalogRepository,
) -> Catalog:
    """Replace the dish lists of the given categories from admin text."""
    catalog = await catalogs.load()
    for category, text in texts.items():
        catalog = catalog.replace(category, parse_lines(text))
    await catalogs.save(catalog)
    logger.info(f"Saved catalog {catalog!r}.")
    return catalog
