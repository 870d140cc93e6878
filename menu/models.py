from enum import Enum
from typing import Any


class Category(Enum):
    meat = "meat"
    fish = "fish"
    vegetable = "vegetable"
    side = "side"
    soup = "soup"
    fruit = "fruit"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    Category.meat: "Món thịt",
    Category.fish: "Món cá",
    Category.vegetable: "Món rau",
    Category.side: "Món phụ",
    Category.soup: "Món canh",
    Category.fruit: "Hoa quả",
}


class MealSlot(Enum):
    lunch = "lunch"
    dinner = "dinner"

    @property
    def label(self) -> str:
        return MEAL_LABELS[self]


MEAL_LABELS = {
    MealSlot.lunch: "Bữa trưa",
    MealSlot.dinner: "Bữa tối",
}


type Meal = dict[Category, str]


def meal_to_dict(meal: Meal) -> dict[str, str]:
    return {c.value: meal.get(c, "") for c in Category}


def meal_from_dict(data: dict[str, Any]) -> Meal:
    """Missing or non-string values read as no dish."""
    meal: Meal = {}
    for category in Category:
        value = data.get(category.value)
        meal[category] = value if isinstance(value, str) else ""
    return meal


class DayMenu:
    def __init__(self, *, lunch: Meal, dinner: Meal) -> None:
        self.lunch = lunch
        self.dinner = dinner

    def __repr__(self) -> str:
        return f"<DayMenu(lunch={self.lunch}, dinner={self.dinner})>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DayMenu):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def meal(self, slot: MealSlot) -> Meal:
        return self.lunch if slot == MealSlot.lunch else self.dinner

    def meals(self) -> list[tuple[MealSlot, Meal]]:
        return [(slot, self.meal(slot)) for slot in MealSlot]

    def replace(self, slot: MealSlot, meal: Meal) -> "DayMenu":
        """A copy with one slot swapped, the other slot untouched."""
        if slot == MealSlot.lunch:
            return DayMenu(lunch=meal, dinner=dict(self.dinner))
        return DayMenu(lunch=dict(self.lunch), dinner=meal)

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {slot.value: meal_to_dict(meal) for slot, meal in self.meals()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DayMenu":
        lunch, dinner = data.get("lunch"), data.get("dinner")
        if not isinstance(lunch, dict) or not isinstance(dinner, dict):
            raise ValueError("Day menu needs a lunch and a dinner.")
        return cls(lunch=meal_from_dict(lunch), dinner=meal_from_dict(dinner))


class HistoryEntry:
    def __init__(self, *, date: str, menu: DayMenu) -> None:
        self.date = date
        self.menu = menu

    def __repr__(self) -> str:
        return f"<HistoryEntry(date={self.date})>"

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date, "menu": self.menu.to_dict()}

    @classmethod
    def from_dict(cls, data: Any) -> "HistoryEntry":
        if not isinstance(data, dict):
            raise ValueError("History entry is not an object.")
        date, menu = data.get("date"), data.get("menu")
        if not isinstance(date, str) or not isinstance(menu, dict):
            raise ValueError("History entry needs a date and a menu.")
        return cls(date=date, menu=DayMenu.from_dict(menu))


type History = list[HistoryEntry]
