"""Weekly blueprint rendering: serving scaling and unit conversion for display."""

import copy
from dataclasses import asdict, dataclass, field
from typing import Any

from mealprint.config import get_settings
from mealprint.logging_config import get_logger
from mealprint.normalize.units import (
    convert_to_imperial,
    scale_embedded_quantities,
    scale_ingredient_line,
    scale_quantity,
)

logger = get_logger(__name__)

# Shopping items stored as plain strings look like "Chicken breast – 2.0 lbs"
ITEM_SEPARATOR = "–"

MEAL_TYPES = ("breakfast", "lunch", "dinner")
DAYS_OF_WEEK = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


@dataclass
class ShoppingItem:
    """A single shopping list entry."""

    item: str
    quantity: str = ""
    bought: bool = False
    note: str | None = None

    @classmethod
    def from_raw(cls, raw: Any) -> "ShoppingItem":
        """
        Parse a shopping item from its stored form.

        Handles both the object format ``{"item": ..., "quantity": ...}`` and
        the string format ``"Item – quantity"``.
        """
        if isinstance(raw, dict):
            name = raw.get("item") if isinstance(raw.get("item"), str) else ""
            quantity = raw.get("quantity") if isinstance(raw.get("quantity"), str) else ""
            note = raw.get("note") if isinstance(raw.get("note"), str) else None

            # Quantity might be embedded in the item name
            if name.strip() and not quantity.strip() and ITEM_SEPARATOR in name:
                name, quantity = _split_item(name)

            return cls(
                item=name,
                quantity=quantity,
                bought=raw.get("bought") is True,
                note=note,
            )

        if isinstance(raw, str):
            name, quantity = _split_item(raw)
            return cls(item=name, quantity=quantity)

        return cls(item=str(raw))

    def to_dict(self) -> dict[str, Any]:
        """Convert to the object storage format."""
        return asdict(self)


def _split_item(text: str) -> tuple[str, str]:
    parts = text.split(ITEM_SEPARATOR, 1)
    if len(parts) == 2:
        return parts[0].strip(), parts[1].strip()
    return text.strip(), ""


@dataclass
class ShoppingList:
    """Rendered shopping list grouped by category."""

    categories: dict[str, list[ShoppingItem]] = field(default_factory=dict)
    total_items: int = 0
    bought_items: int = 0

    def add_item(self, category: str, item: ShoppingItem) -> None:
        """Add an item and update computed fields."""
        self.categories.setdefault(category, []).append(item)
        self.total_items += 1
        if item.bought:
            self.bought_items += 1

    @property
    def progress(self) -> float:
        """Fraction of items already bought."""
        if self.total_items == 0:
            return 0.0
        return self.bought_items / self.total_items


@dataclass
class RenderedMeal:
    """A meal with display-ready ingredient lines."""

    meal_type: str
    name: str
    ingredients: list[str] = field(default_factory=list)


@dataclass
class RenderedDay:
    """All meals of one blueprint day."""

    day: str
    meals: list[RenderedMeal] = field(default_factory=list)


def is_imperial_blueprint(blueprint: dict[str, Any]) -> bool:
    """Check if the blueprint was generated in imperial units."""
    return blueprint.get("useImperial") is True


def blueprint_servings(blueprint: dict[str, Any]) -> int:
    """Get the number of servings the blueprint recipes were written for."""
    servings = blueprint.get("servings")
    if isinstance(servings, int) and not isinstance(servings, bool) and servings > 0:
        return servings
    return get_settings().blueprint_default_servings


def scale_factor(selected_servings: int, original_servings: int) -> float:
    """Ratio of requested servings to authored servings (1.0 if unknown)."""
    if original_servings <= 0:
        return 1.0
    return selected_servings / original_servings


def _ingredient_lines(meal: Any) -> list[str]:
    if not isinstance(meal, dict):
        return []
    ingredients = meal.get("ingredients")
    if not isinstance(ingredients, list):
        return []
    return [str(ingredient) for ingredient in ingredients]


class BlueprintRenderer:
    """
    Renders a weekly blueprint for display:
    - Rescales quantities from authored servings to the selected servings
    - Converts metric units to imperial when the user prefers imperial and
      the blueprint was generated in metric
    """

    def __init__(self, selected_servings: int | None = None, use_imperial: bool = False):
        self.selected_servings = selected_servings
        self.use_imperial = use_imperial

    def factor_for(self, blueprint: dict[str, Any]) -> float:
        """Get the scale factor for a blueprint."""
        original = blueprint_servings(blueprint)
        if self.selected_servings is None:
            return 1.0
        return scale_factor(self.selected_servings, original)

    def needs_conversion(self, blueprint: dict[str, Any]) -> bool:
        """Check if blueprint text has to be converted to imperial."""
        return self.use_imperial and not is_imperial_blueprint(blueprint)

    def render_item(self, item: ShoppingItem, factor: float, convert: bool) -> ShoppingItem:
        """Render one shopping item without touching the original."""
        name = scale_embedded_quantities(item.item, factor)
        quantity = scale_quantity(item.quantity, factor)
        if convert:
            name = convert_to_imperial(name)
            quantity = convert_to_imperial(quantity)
        return ShoppingItem(item=name, quantity=quantity, bought=item.bought, note=item.note)

    def render_shopping_list(self, blueprint: dict[str, Any]) -> ShoppingList:
        """
        Render the blueprint shopping list.

        Args:
            blueprint: Weekly blueprint document.

        Returns:
            ShoppingList with scaled and, if needed, converted items.
        """
        factor = self.factor_for(blueprint)
        convert = self.needs_conversion(blueprint)
        shopping_list = ShoppingList()

        raw_list = blueprint.get("shoppingList")
        if not isinstance(raw_list, dict):
            return shopping_list

        for category, items in raw_list.items():
            if not isinstance(items, list):
                continue
            for raw in items:
                item = ShoppingItem.from_raw(raw)
                shopping_list.add_item(str(category), self.render_item(item, factor, convert))

        logger.debug(
            f"Rendered shopping list: {shopping_list.total_items} items, "
            f"factor={factor:.2f}, imperial={convert}"
        )
        return shopping_list

    def render_ingredients(
        self,
        ingredients: list[str],
        factor: float = 1.0,
        convert: bool = False,
    ) -> list[str]:
        """Scale the leading quantity of each ingredient line, then convert."""
        rendered = []
        for ingredient in ingredients:
            line = scale_ingredient_line(ingredient, factor)
            if convert:
                line = convert_to_imperial(line)
            rendered.append(line)
        return rendered

    def render_meals(self, blueprint: dict[str, Any]) -> list[RenderedDay]:
        """Render ingredient lines for every meal of every day."""
        factor = self.factor_for(blueprint)
        convert = self.needs_conversion(blueprint)

        meals = blueprint.get("meals")
        if not isinstance(meals, list):
            return []

        days: list[RenderedDay] = []
        for index, day_data in enumerate(meals):
            if not isinstance(day_data, dict):
                continue

            day_name = day_data.get("day")
            if not isinstance(day_name, str) or not day_name:
                day_name = DAYS_OF_WEEK[index] if index < len(DAYS_OF_WEEK) else f"Day {index + 1}"
            day = RenderedDay(day=day_name)

            for meal_type in MEAL_TYPES:
                meal = day_data.get(meal_type)
                if isinstance(meal, dict):
                    day.meals.append(self._render_meal(meal_type, meal, factor, convert))

            snacks = day_data.get("snacks")
            if isinstance(snacks, list):
                for snack in snacks:
                    if isinstance(snack, dict):
                        day.meals.append(self._render_meal("snack", snack, factor, convert))

            days.append(day)

        return days

    def _render_meal(
        self,
        meal_type: str,
        meal: dict[str, Any],
        factor: float,
        convert: bool,
    ) -> RenderedMeal:
        name = meal.get("name") if isinstance(meal.get("name"), str) else "Meal"
        return RenderedMeal(
            meal_type=meal_type,
            name=name,
            ingredients=self.render_ingredients(_ingredient_lines(meal), factor, convert),
        )


def _convert_ingredient_list(meal: dict[str, Any]) -> None:
    ingredients = meal.get("ingredients")
    if isinstance(ingredients, list):
        meal["ingredients"] = [
            convert_to_imperial(str(ingredient)) if str(ingredient).strip() else str(ingredient)
            for ingredient in ingredients
        ]


def convert_blueprint_to_imperial(blueprint: dict[str, Any]) -> dict[str, Any]:
    """
    Convert every metric quantity in a blueprint to imperial.

    Blueprints generated in imperial are returned as-is. Otherwise a converted
    deep copy is returned; the input is never modified.
    """
    if is_imperial_blueprint(blueprint):
        logger.debug("Blueprint already in imperial - skipping conversion")
        return blueprint

    converted = copy.deepcopy(blueprint)

    shopping_list = converted.get("shoppingList")
    if isinstance(shopping_list, dict):
        for items in shopping_list.values():
            if not isinstance(items, list):
                continue
            for index, item in enumerate(items):
                if isinstance(item, str):
                    items[index] = convert_to_imperial(item)
                    continue
                if not isinstance(item, dict):
                    continue
                for key in ("quantity", "item"):
                    value = item.get(key)
                    if isinstance(value, str) and value.strip():
                        item[key] = convert_to_imperial(value)

    meals = converted.get("meals")
    if isinstance(meals, list):
        for day in meals:
            if not isinstance(day, dict):
                continue
            for meal_type in MEAL_TYPES:
                meal = day.get(meal_type)
                if isinstance(meal, dict):
                    _convert_ingredient_list(meal)
            snacks = day.get("snacks")
            if isinstance(snacks, list):
                for snack in snacks:
                    if isinstance(snack, dict):
                        _convert_ingredient_list(snack)

    return converted
