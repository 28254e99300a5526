"""Quantity scaling and metric-to-imperial conversion for display strings."""

import math
import re
from collections.abc import Callable
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from mealprint.config import get_settings
from mealprint.logging_config import get_logger

logger = get_logger(__name__)


class UnitSystem(str, Enum):
    """Measurement system a quantity string is rendered in."""

    METRIC = "metric"
    IMPERIAL = "imperial"


# =============================================================================
# Conversion Constants
# =============================================================================

KG_TO_LBS = 2.20462
G_TO_OZ = 0.035274
L_TO_FL_OZ = 33.814
ML_TO_FL_OZ = 0.033814
ML_TO_TSP = 0.202884
CM_TO_IN = 0.393701

OZ_PER_LB = 16
FL_OZ_PER_QT = 32
FL_OZ_PER_CUP = 8
TSP_PER_TBSP = 3
IN_PER_FT = 12

# Below this many fl oz a volume is shown in teaspoons
MIN_FL_OZ = 0.5


# =============================================================================
# Patterns
# =============================================================================

NUMBER = r"(?<![\d.])(\d+\.?\d*)"

# Units recognized when rescaling a quantity string
SCALABLE_UNIT_PATTERN = re.compile(
    NUMBER + r"\s*(lbs?|oz|ounces?|cups?|fl\s*oz|tbsp|tsp|quarts?|pints?|g|kg|ml|L|item|items)\b",
    re.IGNORECASE,
)

# Item names may also embed lengths ("30cm skewers")
EMBEDDED_QUANTITY_PATTERN = re.compile(
    NUMBER
    + r"\s*(lbs?|oz|ounces?|cups?|fl\s*oz|tbsp|tsp|quarts?|pints?|inches?|ft|feet|g|kg|ml|L|cm)\b",
    re.IGNORECASE,
)

LEADING_NUMBER_PATTERN = re.compile(r"^" + NUMBER)
INGREDIENT_LEADING_PATTERN = re.compile(r"^" + NUMBER + r"\s+")

# Words that, when following a metric unit, mean the text is already converted
# or is a nutrition label rather than an ingredient amount.
_IMPERIAL_GUARD = r"oz|fl\s*oz|lbs?|cups?|tbsp|tsp|quarts?|pints?|inches?|ft|feet"
_LABEL_GUARD = _IMPERIAL_GUARD + r"|of|protein|carbs|fat"
_LENGTH_GUARD = r"(?:in|inches?|ft|feet)\b|'|\""

KG_PATTERN = re.compile(
    NUMBER + r"\s*(kilogrammes?|kilograms?|kg)\b(?!\s*(?:" + _IMPERIAL_GUARD + r")\b)",
    re.IGNORECASE,
)
G_PATTERN = re.compile(
    NUMBER + r"\s*(grammes?|grams?|g)\b(?!\s*(?:" + _LABEL_GUARD + r")\b)",
    re.IGNORECASE,
)
L_PATTERN = re.compile(
    NUMBER + r"\s*(litres?|liters?|l)\b(?!\s*(?:" + _LABEL_GUARD + r")\b)",
    re.IGNORECASE,
)
ML_PATTERN = re.compile(
    NUMBER + r"\s*(millilitres?|milliliters?|ml)\b(?!\s*(?:" + _LABEL_GUARD + r")\b)",
    re.IGNORECASE,
)
CM_PATTERN = re.compile(
    NUMBER + r"\s*(centimetres?|centimeters?|cm)\b(?!\s*(?:" + _LENGTH_GUARD + r"))",
    re.IGNORECASE,
)


# =============================================================================
# Number Formatting
# =============================================================================


def format_scaled_number(value: float) -> str:
    """
    Format a scaled magnitude for display.

    Whole values drop the decimals ("4"), everything else keeps exactly one
    decimal digit ("1.5").
    """
    if float(value).is_integer():
        return str(int(value))
    return format_one_decimal(value)


def format_one_decimal(value: float) -> str:
    """Format a value with exactly one decimal digit, rounding halves up ("2.25" -> "2.3")."""
    decimal = Decimal(repr(float(value))).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{decimal:.1f}"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _split_units(total: float, per_unit: int, major: str, minor: str) -> str:
    """Render a magnitude as whole major units plus a rounded minor remainder."""
    whole = int(total // per_unit)
    remainder = _round_half_up(total % per_unit)
    if remainder >= per_unit:
        whole += 1
        remainder -= per_unit
    if remainder > 0:
        return f"{whole} {major} {remainder} {minor}"
    return f"{whole} {major}"


def _parse_number(token: str) -> float | None:
    try:
        value = float(token)
    except ValueError:
        logger.debug(f"Skipping unparsable number: {token!r}")
        return None
    if not math.isfinite(value):
        return None
    return value


# =============================================================================
# Scaling
# =============================================================================


def _is_valid_factor(factor: float) -> bool:
    try:
        valid = math.isfinite(factor) and factor > 0
    except TypeError:
        valid = False
    if not valid:
        logger.warning(f"Ignoring invalid scale factor: {factor!r}")
    return valid


def _scale_token(token: str, factor: float) -> str | None:
    value = _parse_number(token)
    if value is None:
        return None
    scaled = value * factor
    if not math.isfinite(scaled):
        return None
    return format_scaled_number(scaled)


def _replace_group(text: str, match: re.Match[str], replacement: str) -> str:
    return text[: match.start(1)] + replacement + text[match.end(1) :]


def _should_scale(text: str, factor: float) -> bool:
    if not text or not text.strip():
        return False
    if not _is_valid_factor(factor):
        return False
    return factor != 1.0


def scale_quantity(quantity: str, factor: float = 1.0) -> str:
    """
    Scale the first quantity found in a string.

    Looks for a number followed by a recognized unit anywhere in the string
    ("Chicken breast 2.0 lbs"), falling back to a bare leading number ("3").
    Only the numeric token is replaced.

    Examples:
        scale_quantity("2.0 lbs", 2.0) -> "4 lbs"
        scale_quantity("1.5 cups", 2.0) -> "3 cups"
        scale_quantity("3", 0.5) -> "1.5"

    Args:
        quantity: Quantity string, possibly embedded in prose.
        factor: Requested servings divided by authored servings.

    Returns:
        The rescaled string, or the input unchanged if nothing was recognized.
    """
    if not _should_scale(quantity, factor):
        return quantity

    for pattern in (SCALABLE_UNIT_PATTERN, LEADING_NUMBER_PATTERN):
        match = pattern.search(quantity)
        if match is None:
            continue
        scaled = _scale_token(match.group(1), factor)
        if scaled is not None:
            return _replace_group(quantity, match, scaled)

    return quantity


def scale_ingredient_line(text: str, factor: float = 1.0) -> str:
    """
    Scale the leading quantity of an ingredient line.

    "1.5 lbs chicken" at factor 2 becomes "3 lbs chicken". Lines that do not
    start with a number followed by whitespace are returned unchanged.
    """
    if not _should_scale(text, factor):
        return text

    match = INGREDIENT_LEADING_PATTERN.match(text)
    if match is None:
        return text

    scaled = _scale_token(match.group(1), factor)
    if scaled is None:
        return text
    return _replace_group(text, match, scaled)


def scale_embedded_quantities(text: str, factor: float = 1.0) -> str:
    """Scale every number+unit occurrence in a piece of free text."""
    if not _should_scale(text, factor):
        return text

    def _scale_match(match: re.Match[str]) -> str:
        scaled = _scale_token(match.group(1), factor)
        if scaled is None:
            return match.group(0)
        return scaled + match.group(0)[match.end(1) - match.start() :]

    return EMBEDDED_QUANTITY_PATTERN.sub(_scale_match, text)


# =============================================================================
# Metric to Imperial
# =============================================================================


def _format_kilograms(kg: float) -> str:
    return f"{format_one_decimal(kg * KG_TO_LBS)} lbs"


def _format_grams(grams: float) -> str:
    oz = grams * G_TO_OZ
    if oz >= OZ_PER_LB:
        return _split_units(oz, OZ_PER_LB, "lbs", "oz")
    return f"{format_one_decimal(oz)} oz"


def _format_fluid(fl_oz: float, tsp: float) -> str:
    if fl_oz >= FL_OZ_PER_QT:
        return _split_units(fl_oz, FL_OZ_PER_QT, "qt", "fl oz")
    if fl_oz >= FL_OZ_PER_CUP:
        return _split_units(fl_oz, FL_OZ_PER_CUP, "cups", "fl oz")
    if fl_oz >= MIN_FL_OZ:
        return f"{format_one_decimal(fl_oz)} fl oz"
    if tsp >= TSP_PER_TBSP:
        return _split_units(tsp, TSP_PER_TBSP, "tbsp", "tsp")
    return f"{format_one_decimal(tsp)} tsp"


def _format_liters(liters: float) -> str:
    fl_oz = liters * L_TO_FL_OZ
    if fl_oz >= FL_OZ_PER_QT:
        return _split_units(fl_oz, FL_OZ_PER_QT, "qt", "fl oz")
    # Liters never drop to fl oz or spoons, even below one cup
    return _split_units(fl_oz, FL_OZ_PER_CUP, "cups", "fl oz")


def _format_milliliters(ml: float) -> str:
    return _format_fluid(ml * ML_TO_FL_OZ, ml * ML_TO_TSP)


def _format_centimeters(cm: float) -> str:
    inches = cm * CM_TO_IN
    if inches >= IN_PER_FT:
        return _split_units(inches, IN_PER_FT, "ft", "in")
    return f"{format_one_decimal(inches)} in"


# Applied in order on every pass; kg must run before g.
CONVERSION_RULES: list[tuple[re.Pattern[str], Callable[[float], str]]] = [
    (KG_PATTERN, _format_kilograms),
    (G_PATTERN, _format_grams),
    (L_PATTERN, _format_liters),
    (ML_PATTERN, _format_milliliters),
    (CM_PATTERN, _format_centimeters),
]


def _apply_rule(text: str, pattern: re.Pattern[str], formatter: Callable[[float], str]) -> str:
    def _convert_match(match: re.Match[str]) -> str:
        value = _parse_number(match.group(1))
        # Leave magnitudes alone that would overflow once converted
        if value is None or not math.isfinite(value * 1000):
            return match.group(0)
        return formatter(value)

    return pattern.sub(_convert_match, text)


def convert_to_imperial(quantity: str, max_passes: int | None = None) -> str:
    """
    Rewrite metric quantities in a string as imperial ones.

    Handles kg -> lbs, g -> oz/lbs, L and ml -> fl oz/cups/qt/tsp/tbsp and
    cm -> in/ft, with or without a space between number and unit. Text that
    is already imperial, and macro grams such as "50g protein", is left alone,
    so running the conversion twice gives the same result as running it once.

    Args:
        quantity: Quantity string assumed to be authored in metric.
        max_passes: Upper bound on rule-set passes. Defaults to the
            ``conversion_max_passes`` setting.

    Returns:
        The converted string, or the input unchanged if nothing matched.
    """
    if not quantity or not quantity.strip():
        return quantity

    if max_passes is None:
        max_passes = get_settings().conversion_max_passes

    result = quantity
    for _ in range(max(1, max_passes)):
        before_pass = result
        for pattern, formatter in CONVERSION_RULES:
            result = _apply_rule(result, pattern, formatter)
        if result == before_pass:
            break

    return result


def render_quantity(
    quantity: str,
    factor: float = 1.0,
    unit_system: UnitSystem = UnitSystem.METRIC,
) -> str:
    """Scale a metric quantity string, then convert it if imperial is requested."""
    rendered = scale_quantity(quantity, factor)
    if UnitSystem(unit_system) is UnitSystem.IMPERIAL:
        rendered = convert_to_imperial(rendered)
    return rendered
