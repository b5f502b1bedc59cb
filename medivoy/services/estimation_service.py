"""Cost estimation service.

Resolves a package and selected add-on ids against the catalog, then runs
the pure estimate with the configured tax rate and display range.
"""

import logging
from collections.abc import Sequence
from decimal import Decimal
from typing import Protocol

from medivoy.config import Settings, settings
from medivoy.core.exceptions import AddOnLimitExceededError, NotFoundError
from medivoy.domain.cost_estimation import estimate
from medivoy.schemas.cost import AddOn, CostEstimate, CostEstimateRequest

logger = logging.getLogger(__name__)


class PackageCatalog(Protocol):
    """Catalog interface consumed by the estimation service."""

    async def base_price(self, package_id: str) -> Decimal | None: ...

    async def add_on_catalog(self) -> Sequence[AddOn]: ...


class CostEstimationService:
    """Service for pricing a package with its selected add-ons."""

    def __init__(self, catalog: PackageCatalog, config: Settings | None = None) -> None:
        self.catalog = catalog
        self.config = config or settings

    async def estimate_package(self, package_id: str, add_on_ids: Sequence[str] = ()) -> CostEstimate:
        """Estimate the cost of a package with selected add-ons.

        Args:
            package_id: Catalog package identifier
            add_on_ids: Selected add-on identifiers

        Returns:
            CostEstimate: Estimate with breakdown and configured range

        Raises:
            AddOnLimitExceededError: If too many add-ons are selected
            NotFoundError: If the package or an add-on is not in the catalog
            ValidationError: If add-on ids repeat
        """
        if len(add_on_ids) > self.config.max_addons_allowed:
            raise AddOnLimitExceededError(len(add_on_ids), self.config.max_addons_allowed)

        base_price = await self.catalog.base_price(package_id)
        if base_price is None:
            raise NotFoundError("Package", package_id)

        available = {add_on.id: add_on for add_on in await self.catalog.add_on_catalog()}
        selected = []
        for add_on_id in add_on_ids:
            add_on = available.get(add_on_id)
            if add_on is None:
                raise NotFoundError("Add-on", add_on_id)
            selected.append(add_on)

        result = estimate(
            base_price,
            selected,
            self.config.tax_percent,
            min_range=self.config.cost_min_range,
            max_range=self.config.cost_max_range,
            addon_multiplier=self.config.addon_price_multiplier,
            max_add_ons=self.config.max_addons_allowed,
            currency=self.config.currency,
        )
        logger.debug(
            f"Estimated package {package_id} with {len(selected)} add-ons: "
            f"{result.final_estimate} {result.currency}"
        )
        return result

    async def estimate_request(self, request: CostEstimateRequest) -> CostEstimate:
        return await self.estimate_package(request.package_id, request.add_on_ids)
