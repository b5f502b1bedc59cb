"""Cost estimation domain logic.

CALCULATION:
- add_ons_total = sum of add-on prices (times the add-on price multiplier)
- subtotal = base package price + add_ons_total
- tax_amount = subtotal * tax_percent / 100
- final_estimate = subtotal + tax_amount

The configured min/max range is shown to the patient next to the exact
estimate; the estimate itself is never clamped into it. Currency conversion
happens before calling in.
"""

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from medivoy.core.exceptions import AddOnLimitExceededError, ValidationError
from medivoy.schemas.cost import AddOn, AddOnCategory, CategoryTotal, CostEstimate

MAX_ADDONS_ALLOWED = 20
DEFAULT_MIN_RANGE = Decimal("10000")
DEFAULT_MAX_RANGE = Decimal("20000")
DEFAULT_TAX_PERCENT = Decimal("10")

# Add-on categories in display order
ADDON_DISPLAY_ORDER: tuple[AddOnCategory, ...] = tuple(AddOnCategory)

CENT = Decimal("0.01")


def to_decimal(value: Decimal | int | float | str, field: str = "amount") -> Decimal:
    """Parse a finite decimal number.

    Raises:
        ValidationError: If ``value`` is not a number, or is NaN or infinite
    """
    if isinstance(value, float):
        value = str(value)
    try:
        number = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"Invalid {field}: {value!r}") from None
    if not number.is_finite():
        raise ValidationError(f"Invalid {field}: {value!r}")
    return number


def to_money(value: Decimal | int | float | str, field: str = "amount") -> Decimal:
    """Quantize a monetary value to cents."""
    return to_decimal(value, field).quantize(CENT, rounding=ROUND_HALF_UP)


def category_breakdown(add_ons: Sequence[AddOn], multiplier: Decimal = Decimal("1")) -> tuple[CategoryTotal, ...]:
    """Per-category add-on totals in display order, empty categories omitted."""
    breakdown = []
    for category in ADDON_DISPLAY_ORDER:
        selected = [add_on for add_on in add_ons if add_on.category == category]
        if not selected:
            continue
        total = to_money(sum((add_on.price for add_on in selected), Decimal("0")) * multiplier)
        breakdown.append(CategoryTotal(category=category, count=len(selected), total=total))
    return tuple(breakdown)


def estimate(
    base_price: Decimal | int | str,
    add_ons: Sequence[AddOn],
    tax_percent: Decimal | int | str = DEFAULT_TAX_PERCENT,
    *,
    min_range: Decimal | int | str = DEFAULT_MIN_RANGE,
    max_range: Decimal | int | str = DEFAULT_MAX_RANGE,
    addon_multiplier: Decimal | int | str = Decimal("1"),
    max_add_ons: int = MAX_ADDONS_ALLOWED,
    currency: str = "USD",
) -> CostEstimate:
    """Compute a cost estimate for a package and its selected add-ons.

    Args:
        base_price: Package base price
        add_ons: Selected add-ons (a set by id)
        tax_percent: Tax rate as a percentage (e.g. 10 for 10%)
        min_range: Lower bound of the displayed range
        max_range: Upper bound of the displayed range
        addon_multiplier: Factor applied to every add-on price
        max_add_ons: Maximum number of add-ons a booking may hold
        currency: ISO currency code of all amounts

    Returns:
        CostEstimate: Exact estimate plus the configured range

    Raises:
        AddOnLimitExceededError: If more than ``max_add_ons`` add-ons are given
        ValidationError: If amounts are out of bounds or add-on ids repeat
    """
    if len(add_ons) > max_add_ons:
        raise AddOnLimitExceededError(len(add_ons), max_add_ons)

    ids = [add_on.id for add_on in add_ons]
    if len(set(ids)) != len(ids):
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        raise ValidationError(f"Duplicate add-ons selected: {', '.join(duplicates)}")

    base = to_money(base_price, "base price")
    if base < 0:
        raise ValidationError(f"Base price must not be negative, got {base}")

    tax_rate = to_decimal(tax_percent, "tax percent")
    if not Decimal("0") <= tax_rate <= Decimal("100"):
        raise ValidationError(f"Tax percent must be between 0 and 100, got {tax_rate}")

    low, high = to_money(min_range, "minimum range"), to_money(max_range, "maximum range")
    if low > high:
        raise ValidationError(f"Invalid estimation range: {low} > {high}")

    multiplier = to_decimal(addon_multiplier, "add-on multiplier")
    add_ons_total = to_money(sum((add_on.price for add_on in add_ons), Decimal("0")) * multiplier)
    subtotal = base + add_ons_total
    tax_amount = to_money(subtotal * tax_rate / Decimal("100"))

    return CostEstimate(
        base_price=base,
        add_ons_total=add_ons_total,
        subtotal=subtotal,
        tax_percent=tax_rate,
        tax_amount=tax_amount,
        final_estimate=subtotal + tax_amount,
        min_range=low,
        max_range=high,
        currency=currency,
        breakdown=category_breakdown(add_ons, multiplier),
    )
