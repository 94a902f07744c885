"""
Projection Service
==================
Dashboard averages and forward projections built from aggregated periods.

Averages divide totals by the number of periods that have data.  The
savings rate is ``avg_savings / avg_income * 100`` and is NaN when there is
no income.  Projections use two growth models:

  linear       total = monthly average x months (+ starting balance)
  compounding  once per whole year: balance = balance x (1 + roi/100) + annual savings

Nothing here rounds; presentation formats to two decimals.
"""
import math
from dataclasses import dataclass
from typing import List, Optional


DEFAULT_HORIZONS = (
    ('1 Year', 12),
    ('3 Years', 36),
    ('5 Years', 60),
    ('10 Years', 120),
    ('30 Years', 360),
)


@dataclass
class DashboardMetrics:
    total_income: float
    total_expense: float
    total_months: int
    current_balance: float = 0.0

    @property
    def total_savings(self) -> float:
        return self.total_income - self.total_expense

    @property
    def avg_income(self) -> float:
        return self.total_income / self.total_months

    @property
    def avg_expense(self) -> float:
        return self.total_expense / self.total_months

    @property
    def avg_savings(self) -> float:
        return self.total_savings / self.total_months

    @property
    def avg_savings_rate(self) -> float:
        if self.avg_income == 0:
            return math.nan
        return self.avg_savings / self.avg_income * 100


@dataclass
class Projection:
    period: str
    months: int
    total_savings: float
    total_income: float
    total_expense: float
    projected_assets: float


@dataclass
class YearlyProjection:
    year: int
    cumulative_savings: float
    total_assets: float


@dataclass
class NetWorthProjection:
    period: str
    years: int
    projected_savings: float
    projected_net_worth: float


class ProjectionService:

    @staticmethod
    def calculate_metrics(periods, current_balance=0.0) -> Optional[DashboardMetrics]:
        """Totals over *periods*; ``None`` when there are no periods."""
        if not periods:
            return None
        return DashboardMetrics(
            total_income=sum(p.income for p in periods),
            total_expense=sum(p.expense for p in periods),
            total_months=len(periods),
            current_balance=current_balance or 0.0,
        )

    @staticmethod
    def compound(start, annual_savings, roi, years):
        """Grow *start* for *years* whole years at *roi* percent, adding savings each year."""
        balance = start
        for _ in range(int(years)):
            balance = balance * (1 + roi / 100) + annual_savings
        return balance

    @staticmethod
    def project_horizons(metrics, roi, horizons=DEFAULT_HORIZONS, starting_balance=None) -> List[Projection]:
        """One Projection per (label, months) horizon.

        ``starting_balance`` defaults to the metrics' current balance.
        """
        start = metrics.current_balance if starting_balance is None else starting_balance
        annual_savings = metrics.avg_savings * 12
        projections = []
        for label, months in horizons:
            projections.append(Projection(
                period=label,
                months=months,
                total_savings=metrics.avg_savings * months + start,
                total_income=metrics.avg_income * months,
                total_expense=metrics.avg_expense * months,
                projected_assets=ProjectionService.compound(start, annual_savings, roi, months // 12),
            ))
        return projections

    @staticmethod
    def yearly_projections(metrics, roi, years=30) -> List[YearlyProjection]:
        """Year-by-year linear vs compounding series for the growth chart."""
        start = metrics.current_balance
        annual_savings = metrics.avg_savings * 12
        total_assets = start
        series = []
        for year in range(1, years + 1):
            total_assets = total_assets * (1 + roi / 100) + annual_savings
            series.append(YearlyProjection(
                year=year,
                cumulative_savings=annual_savings * year + start,
                total_assets=total_assets,
            ))
        return series

    @staticmethod
    def networth_projections(net_worth, avg_savings, roi, horizons=DEFAULT_HORIZONS) -> List[NetWorthProjection]:
        """Project the latest net worth forward.

        Savings are added at the start of each year and then grown, so the
        compounding order differs from ``project_horizons``.
        """
        annual_savings = avg_savings * 12
        rate = roi / 100
        projections = []
        for label, months in horizons:
            years = months // 12
            value = net_worth
            for _ in range(years):
                value = (value + annual_savings) * (1 + rate)
            projections.append(NetWorthProjection(
                period=label,
                years=years,
                projected_savings=net_worth + annual_savings * years,
                projected_net_worth=value,
            ))
        return projections

    @staticmethod
    def parse_roi(raw, default):
        """ROI percentage from a query string value, clamped to 0..100."""
        if raw is None or raw == '':
            return float(default)
        try:
            roi = float(raw)
        except (TypeError, ValueError):
            return float(default)
        if math.isnan(roi):
            return float(default)
        return max(0.0, min(roi, 100.0))
