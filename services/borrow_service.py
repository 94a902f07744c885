"""
Buy, Borrow, Die calculator.

Models holding an appreciating asset and borrowing against it every year
instead of selling.  Two borrowing modes:

  percentage  borrow a fixed percentage of the asset's value each year
  income      borrow enough to fund a monthly income, optionally rising
              with inflation

When inflation adjustment is on (income mode only) asset growth uses the
real return ``(1 + return) / (1 + inflation) - 1``.
"""
from dataclasses import dataclass
from typing import List


PERCENTAGE_MODE = 'percentage'
INCOME_MODE = 'income'


@dataclass
class BorrowInputs:
    current_asset_value: float
    expected_annual_return: float  # %
    target_ltv: float  # %
    interest_rate: float  # %
    mode: str = PERCENTAGE_MODE
    annual_borrow_rate: float = 0.0  # %, percentage mode
    monthly_income: float = 0.0  # income mode
    adjust_for_inflation: bool = False
    inflation_rate: float = 0.0  # %


@dataclass
class BorrowYear:
    year: int
    asset_value: float
    amount_borrowed: float
    cumulative_borrowed: float
    ltv_ratio: float
    interest_paid: float
    monthly_borrow_amount: float
    exceeds_target_ltv: bool


class BorrowService:

    @staticmethod
    def calculate(inputs: BorrowInputs, years: int = 50) -> List[BorrowYear]:
        if inputs.mode not in (PERCENTAGE_MODE, INCOME_MODE):
            raise ValueError(f'Unknown calculation mode: {inputs.mode}')

        annual_return = inputs.expected_annual_return / 100
        interest_rate = inputs.interest_rate / 100
        adjust = inputs.adjust_for_inflation and inputs.mode == INCOME_MODE
        inflation = inputs.inflation_rate / 100 if adjust else 0.0
        real_return = (1 + annual_return) / (1 + inflation) - 1

        results = []
        cumulative = 0.0
        for year in range(1, years + 1):
            asset_value = inputs.current_asset_value * (1 + real_return) ** year

            if inputs.mode == PERCENTAGE_MODE:
                borrowed = asset_value * inputs.annual_borrow_rate / 100
                monthly = borrowed / 12
            else:
                monthly = inputs.monthly_income
                if adjust:
                    monthly *= (1 + inflation) ** (year - 1)
                borrowed = monthly * 12

            cumulative += borrowed
            if asset_value:
                ltv_ratio = cumulative / asset_value * 100
            else:
                ltv_ratio = float('inf') if cumulative else 0.0

            results.append(BorrowYear(
                year=year,
                asset_value=asset_value,
                amount_borrowed=borrowed,
                cumulative_borrowed=cumulative,
                ltv_ratio=ltv_ratio,
                interest_paid=cumulative * interest_rate,
                monthly_borrow_amount=monthly,
                exceeds_target_ltv=ltv_ratio > inputs.target_ltv,
            ))
        return results

    @staticmethod
    def first_breach(results):
        """First year whose LTV passes the target, or None."""
        for row in results:
            if row.exceeds_target_ltv:
                return row
        return None
