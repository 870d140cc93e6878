"""Per-category dish lists, the input to menu generation."""

import logging
from typing import Any, Iterable

from menu.models import Category


logger = logging.getLogger(__name__)


DEFAULT_DISHES: dict[Category, list[str]] = {
    Category.meat: [
        "Nem",
        "Sườn xào chua ngọt",
        "Thịt viên sốt cà chua",
        "Bò xào mướp đắng",
        "Trứng thịt",
        "Thịt kho",
        "Gà",
    ],
    Category.fish: ["Cá kho", "Mực luộc", "Cá sốt cà chua"],
    Category.vegetable: ["Rau muống xào tỏi", "Cải chíp xào tỏi", "Khoai tây hầm xương"],
    Category.side: ["Đậu rán", "Cà", "Dưa góp (Dưa chuột)"],
    Category.soup: [
        "Canh mùng tơi",
        "Canh cải ngọt",
        "Canh rau dền",
        "Canh bắp cải cà chua",
    ],
    Category.fruit: ["Dưa hấu", "Bưởi", "Lựu"],
}


def normalize(name: str) -> str:
    return name.strip()


def dish_key(name: str) -> str:
    """Comparison key for a dish name."""
    return normalize(name).lower()


def deduplicate(names: Iterable[str]) -> list[str]:
    """Drop empty names and later case-insensitive duplicates.

    Order and the first spelling of each dish are kept.
    """
    seen: set[str] = set()
    result: list[str] = []
    for name in names:
        norm = normalize(name)
        if not norm:
            continue
        key = norm.lower()
        if key not in seen:
            seen.add(key)
            result.append(norm)
    return result


def parse_lines(text: str) -> list[str]:
    """One dish per line, as typed into the admin editor."""
    return deduplicate(line.strip() for line in text.splitlines())


def _is_name_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


class Catalog:
    def __init__(self, dishes: dict[Category, list[str]] | None = None) -> None:
        dishes = DEFAULT_DISHES if dishes is None else dishes
        self.dishes: dict[Category, list[str]] = {
            c: deduplicate(dishes.get(c, DEFAULT_DISHES[c])) for c in Category
        }

    def __repr__(self) -> str:
        sizes = ", ".join(f"{c.value}={len(v)}" for c, v in self.dishes.items())
        return f"<Catalog({sizes})>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Catalog):
            return NotImplemented
        return self.dishes == other.dishes

    def pool(self, category: Category) -> list[str]:
        return deduplicate(self.dishes[category])

    def replace(self, category: Category, names: Iterable[str]) -> "Catalog":
        dishes = dict(self.dishes)
        dishes[category] = deduplicate(names)
        return Catalog(dishes)

    def as_text(self, category: Category) -> str:
        return "\n".join(self.dishes[category])

    def to_dict(self) -> dict[str, list[str]]:
        return {c.value: deduplicate(self.dishes[c]) for c in Category}

    @classmethod
    def from_dict(cls, data: Any) -> "Catalog":
        """Merge a persisted, possibly partial catalog over the defaults."""
        if not isinstance(data, dict):
            logger.warning("Catalog data is not an object, using defaults.")
            return cls()
        dishes: dict[Category, list[str]] = {}
        for category in Category:
            value = data.get(category.value)
            if _is_name_list(value):
                dishes[category] = value
            else:
                if value is not None:
                    logger.warning(f"Invalid dish list for {category.value}.")
                dishes[category] = DEFAULT_DISHES[category]
        return cls(dishes)
