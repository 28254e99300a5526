"""Nutrition value helpers."""

# =============================================================================
# Sugar Estimation Tables
# =============================================================================

# Most of the carbohydrate is sugar
HIGH_SUGAR_KEYWORDS: tuple[str, ...] = (
    "candy",
    "chocolate",
    "cookie",
    "cake",
    "donut",
    "muffin",
    "pastry",
    "soda",
    "juice",
    "drink",
    "beverage",
    "sweet",
    "syrup",
    "honey",
    "jam",
    "jelly",
    "preserve",
    "marmalade",
    "fruit",
    "berries",
)

# Processed foods, breads, cereals, dairy
MEDIUM_SUGAR_KEYWORDS: tuple[str, ...] = (
    "bread",
    "cereal",
    "crackers",
    "granola",
    "bar",
    "snack",
    "yogurt",
    "milk",
    "cream",
    "ice cream",
    "frozen",
)

# Whole grains, vegetables, proteins
LOW_SUGAR_KEYWORDS: tuple[str, ...] = (
    "rice",
    "pasta",
    "quinoa",
    "oats",
    "potato",
    "sweet potato",
    "chicken",
    "beef",
    "pork",
    "fish",
    "salmon",
    "turkey",
    "broccoli",
    "spinach",
    "lettuce",
    "cucumber",
    "tomato",
    "pepper",
)

# Checked in order, first hit wins
SUGAR_TIERS: tuple[tuple[tuple[str, ...], float], ...] = (
    (HIGH_SUGAR_KEYWORDS, 0.85),
    (MEDIUM_SUGAR_KEYWORDS, 0.40),
    (LOW_SUGAR_KEYWORDS, 0.10),
)
DEFAULT_SUGAR_RATIO = 0.30


def estimate_sugar(carbs: float, food_name: str) -> float:
    """
    Estimate sugar grams from total carbohydrate grams.

    Used when a food source reports carbs but no sugar. The share of carbs
    assumed to be sugar depends on keywords in the food name.

    Examples:
        estimate_sugar(20.0, "white bread") -> 8.0
        estimate_sugar(10.0, "grilled chicken") -> 1.0
    """
    if carbs <= 0:
        return 0.0

    name_lower = (food_name or "").lower()

    for keywords, ratio in SUGAR_TIERS:
        if any(keyword in name_lower for keyword in keywords):
            return carbs * ratio

    return carbs * DEFAULT_SUGAR_RATIO


def resolve_sugar(sugar: float | None, carbs: float | None, food_name: str) -> float:
    """Prefer a reported sugar value, otherwise estimate it from carbs."""
    if sugar is not None and sugar > 0:
        return sugar
    if carbs is not None and carbs > 0:
        return estimate_sugar(carbs, food_name)
    return 0.0
