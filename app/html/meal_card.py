from jinja2 import Environment
from markupsafe import Markup

from menu.models import Category, Meal, MealSlot


class MealCard:
    def __init__(
        self,
        slot: MealSlot,
        meal: Meal,
        *,
        environment: Environment,
        template_name: str = "meal-card.html",
    ) -> None:
        self.slot = slot
        self.meal = meal
        self.env = environment
        self.name = template_name

    @property
    def title(self) -> str:
        return self.slot.label

    @property
    def refresh_url(self) -> str:
        return f"/refresh/{self.slot.value}"

    @property
    def rows(self) -> list[tuple[str, str]]:
        return [(c.label, self.meal.get(c, "") or "—") for c in Category]

    def render(self) -> str:
        return Markup(self.env.get_template(self.name).render(card=self))
