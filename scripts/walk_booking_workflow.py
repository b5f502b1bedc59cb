#!/usr/bin/env python3
"""
Walk the booking-creation workflow and print a cost estimate.

DO NOT ADD BUSINESS LOGIC HERE.
This script only calls the lifecycle core.

Usage:
    python scripts/walk_booking_workflow.py --base-price 10000 --add-on travel:500 --add-on visa:300
    python scripts/walk_booking_workflow.py --base-price 15000 --tax-percent 5 --from-step 5
"""

import argparse
import sys
from decimal import Decimal, InvalidOperation

from medivoy.config import settings
from medivoy.core.exceptions import AppException
from medivoy.core.logging import configure_logging
from medivoy.domain.cost_estimation import estimate
from medivoy.domain.workflow import WorkflowStep, next_step, step_metadata
from medivoy.schemas.cost import AddOn, AddOnCategory


def parse_add_on(index: int, raw: str) -> AddOn:
    """Parse CATEGORY:PRICE into an add-on."""
    try:
        category, price = raw.split(":", 1)
        return AddOn(id=f"addon-{index}", category=AddOnCategory(category), price=Decimal(price))
    except (ValueError, InvalidOperation):
        print(f"ERROR: Invalid add-on '{raw}', expected CATEGORY:PRICE")
        sys.exit(2)


def main() -> int:
    parser = argparse.ArgumentParser(description="Walk the booking workflow")
    parser.add_argument("--base-price", required=True, help="Package base price")
    parser.add_argument("--add-on", action="append", default=[], help="CATEGORY:PRICE, repeatable")
    parser.add_argument("--tax-percent", default=str(settings.tax_percent), help="Tax rate in percent")
    parser.add_argument("--from-step", type=int, default=int(WorkflowStep.TREATMENT_SELECTION))
    args = parser.parse_args()
    configure_logging()

    add_ons = [parse_add_on(i, raw) for i, raw in enumerate(args.add_on, start=1)]

    try:
        step = WorkflowStep(args.from_step)
    except ValueError:
        print(f"ERROR: Unknown workflow step {args.from_step}")
        return 2

    while step is not None:
        meta = step_metadata(step)
        print(f"[{meta.step:>2}] {meta.label} - {meta.description}")

        if step is WorkflowStep.COST_ESTIMATION:
            try:
                result = estimate(
                    args.base_price,
                    add_ons,
                    args.tax_percent,
                    min_range=settings.cost_min_range,
                    max_range=settings.cost_max_range,
                    addon_multiplier=settings.addon_price_multiplier,
                    max_add_ons=settings.max_addons_allowed,
                    currency=settings.currency,
                )
            except AppException as e:
                print(f"ERROR: {e.detail}")
                return 1

            print(f"     Base price:   {result.base_price} {result.currency}")
            for line in result.breakdown:
                print(f"     {line.category.value:<13} {line.total} ({line.count})")
            print(f"     Add-ons:      {result.add_ons_total}")
            print(f"     Tax ({result.tax_percent}%): {result.tax_amount}")
            print(f"     Estimate:     {result.final_estimate}")
            print(f"     Range:        {result.min_range} - {result.max_range}")

        step = next_step(step)

    print("Workflow complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
