"""Tests for the catalog-backed cost estimation service."""

from decimal import Decimal

import pytest

from medivoy.config import Settings
from medivoy.core.exceptions import AddOnLimitExceededError, NotFoundError
from medivoy.schemas.cost import AddOnCategory, CostEstimateRequest
from medivoy.services.estimation_service import CostEstimationService


class TestCostEstimationService:
    @pytest.mark.asyncio
    async def test_estimate_with_catalog_add_ons(self, catalog):
        service = CostEstimationService(catalog, Settings())

        result = await service.estimate_package("knee-replacement", ["flight", "hotel"])

        assert result.base_price == Decimal("10000")
        assert result.add_ons_total == Decimal("800")
        assert result.tax_amount == Decimal("1080")
        assert result.final_estimate == Decimal("11880")
        assert result.min_range == Decimal("10000")
        assert result.max_range == Decimal("20000")
        assert result.currency == "USD"

    @pytest.mark.asyncio
    async def test_uses_configured_tax_and_range(self, catalog):
        config = Settings(tax_percent=Decimal("5"), cost_min_range=Decimal("1000"), cost_max_range=Decimal("5000"))
        service = CostEstimationService(catalog, config)

        result = await service.estimate_package("dental-basic", ["visa", "companion"])

        assert result.subtotal == Decimal("2820.50")
        assert result.tax_amount == Decimal("141.03")
        assert result.final_estimate == Decimal("2961.53")
        assert result.within_range is True
        assert [line.category for line in result.breakdown] == [AddOnCategory.TRAVELER, AddOnCategory.VISA]

    @pytest.mark.asyncio
    async def test_unknown_package(self, catalog):
        service = CostEstimationService(catalog, Settings())

        with pytest.raises(NotFoundError):
            await service.estimate_package("heart-transplant", [])

    @pytest.mark.asyncio
    async def test_unknown_add_on(self, catalog):
        service = CostEstimationService(catalog, Settings())

        with pytest.raises(NotFoundError, match="limo"):
            await service.estimate_package("knee-replacement", ["flight", "limo"])

    @pytest.mark.asyncio
    async def test_limit_checked_before_catalog_lookup(self, catalog):
        service = CostEstimationService(catalog, Settings(max_addons_allowed=1))

        with pytest.raises(AddOnLimitExceededError):
            await service.estimate_package("knee-replacement", ["flight", "hotel"])

    @pytest.mark.asyncio
    async def test_estimate_request(self, catalog):
        service = CostEstimationService(catalog, Settings())
        request = CostEstimateRequest(package_id="knee-replacement", add_on_ids=["visa"])

        result = await service.estimate_request(request)

        assert result.add_ons_total == Decimal("120.50")
