"""Normalize quantities and nutrition values for display."""

from mealprint.normalize.nutrition import estimate_sugar, resolve_sugar
from mealprint.normalize.units import (
    UnitSystem,
    convert_to_imperial,
    format_scaled_number,
    render_quantity,
    scale_embedded_quantities,
    scale_ingredient_line,
    scale_quantity,
)

__all__ = [
    "UnitSystem",
    "convert_to_imperial",
    "estimate_sugar",
    "format_scaled_number",
    "render_quantity",
    "resolve_sugar",
    "scale_embedded_quantities",
    "scale_ingredient_line",
    "scale_quantity",
]
