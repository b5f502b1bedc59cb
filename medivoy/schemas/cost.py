"""Cost estimation Pydantic schemas."""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class AddOnCategory(str, Enum):
    """Add-on categories, in display order."""

    TRAVELER = "traveler"
    TRAVEL = "travel"
    ACCOMMODATION = "accommodation"
    VISA = "visa"
    INSURANCE = "insurance"
    SERVICE = "service"


class AddOn(BaseModel):
    """An optional priced feature attachable to a booking."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, max_length=64)
    category: AddOnCategory
    price: Decimal = Field(..., ge=0)
    name: str | None = Field(None, max_length=200)


class CategoryTotal(BaseModel):
    """Add-on spend for one category."""

    model_config = ConfigDict(frozen=True)

    category: AddOnCategory
    count: int
    total: Decimal


class CostEstimate(BaseModel):
    """Derived price estimate for a booking.

    Always recomputable from the package price and add-on selection; never
    stored as the source of truth.
    """

    model_config = ConfigDict(frozen=True)

    base_price: Decimal
    add_ons_total: Decimal
    subtotal: Decimal
    tax_percent: Decimal
    tax_amount: Decimal
    final_estimate: Decimal
    min_range: Decimal
    max_range: Decimal
    currency: str
    breakdown: tuple[CategoryTotal, ...] = ()

    @computed_field
    @property
    def within_range(self) -> bool:
        """Whether the exact estimate falls inside the displayed range."""
        return self.min_range <= self.final_estimate <= self.max_range


class CostEstimateRequest(BaseModel):
    """Schema for estimating a package with selected add-ons."""

    package_id: str = Field(..., min_length=1)
    add_on_ids: list[str] = Field(default_factory=list)
