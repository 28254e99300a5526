"""Weekly blueprint rendering."""

from mealprint.plan.blueprint import (
    BlueprintRenderer,
    RenderedDay,
    RenderedMeal,
    ShoppingItem,
    ShoppingList,
    blueprint_servings,
    convert_blueprint_to_imperial,
    scale_factor,
)

__all__ = [
    "BlueprintRenderer",
    "RenderedDay",
    "RenderedMeal",
    "ShoppingItem",
    "ShoppingList",
    "blueprint_servings",
    "convert_blueprint_to_imperial",
    "scale_factor",
]
