"""
Record types kept in the per-user record slots.

These are plain dataclasses rather than tables: each logical collection is
stored as one JSON document (see ``services.record_store``).  ``to_dict`` /
``from_dict`` use the camelCase keys of the stored layout.
"""
import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from dateutil.parser import isoparse


MONTHS = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December'
]

INCOME = 'Income'
EXPENSE = 'Expense'
TRANSACTION_TYPES = (INCOME, EXPENSE)

# Monthly-equivalent factor per recurring cost frequency
FREQUENCY_FACTORS = {
    'monthly': 1,
    'quarterly': 1 / 3,
    'yearly': 1 / 12,
}

BUDGET_GROUPS = ('needs', 'wants')
COST_KINDS = ('recurring', 'oneTime')

OTHER_CATEGORY = 'Other'
TOTAL_CATEGORY = 'Total'

ASSET_CATEGORIES = [
    'Cash',
    'Stocks',
    'Crypto',
    'Real Estate/Property',
    'Other Investments',
    OTHER_CATEGORY,
]

LIABILITY_CATEGORIES = [
    'Credit Cards',
    'Student Loans',
    'Car Loans',
    'Mortgages',
    'Other Loans',
    OTHER_CATEGORY,
]


def month_index(month):
    """Position of *month* in the calendar, or -1 for an unknown name."""
    try:
        return MONTHS.index(month)
    except ValueError:
        return -1


def generate_id(existing_ids: Iterable[str] = ()) -> str:
    """Millisecond timestamp id, bumped until it is unique among *existing_ids*."""
    taken = set(existing_ids)
    candidate = int(time.time() * 1000)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


# ---------------------------------------------------------------------------
# Income / expense tracker
# ---------------------------------------------------------------------------

@dataclass
class Transaction:
    id: str
    year: int
    month: str
    type: str
    amount: float

    def to_dict(self):
        return {
            'id': self.id,
            'year': self.year,
            'month': self.month,
            'type': self.type,
            'amount': self.amount,
        }

    @classmethod
    def from_dict(cls, data):
        if data['type'] not in TRANSACTION_TYPES:
            raise ValueError(f"Unknown transaction type: {data['type']!r}")
        return cls(
            id=str(data['id']),
            year=int(data['year']),
            month=str(data['month']),
            type=data['type'],
            amount=float(data['amount']),
        )


@dataclass
class AggregatedPeriod:
    """Income and expense totals of one (year, month) bucket."""
    year: int
    month: str
    income: float = 0.0
    expense: float = 0.0

    @property
    def net(self) -> float:
        return self.income - self.expense

    def to_dict(self):
        return {
            'year': self.year,
            'month': self.month,
            'income': self.income,
            'expense': self.expense,
            'net': self.net,
        }


@dataclass
class CurrentBalance:
    year: int
    month: str
    amount: float

    def to_dict(self):
        return {'year': self.year, 'month': self.month, 'amount': self.amount}

    @classmethod
    def from_dict(cls, data):
        return cls(year=int(data['year']), month=str(data['month']), amount=float(data['amount']))


@dataclass
class LastUsedPeriod:
    year: int
    month: str


# ---------------------------------------------------------------------------
# Planning budget
# ---------------------------------------------------------------------------

@dataclass
class RecurringCost:
    id: str
    name: str
    amount: float
    frequency: str = 'monthly'

    @property
    def monthly_amount(self) -> float:
        return self.amount * FREQUENCY_FACTORS.get(self.frequency, 0)

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'amount': self.amount, 'frequency': self.frequency}

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=str(data['id']),
            name=str(data['name']),
            amount=float(data['amount']),
            frequency=str(data.get('frequency') or 'monthly'),
        )


@dataclass
class OneTimeCost:
    id: str
    name: str
    amount: float

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'amount': self.amount}

    @classmethod
    def from_dict(cls, data):
        return cls(id=str(data['id']), name=str(data['name']), amount=float(data['amount']))


@dataclass
class CostGroup:
    recurring: List[RecurringCost] = field(default_factory=list)
    one_time: List[OneTimeCost] = field(default_factory=list)

    def costs(self, kind):
        if kind == 'recurring':
            return self.recurring
        if kind == 'oneTime':
            return self.one_time
        raise ValueError(f'Unknown cost type: {kind}')

    def to_dict(self):
        return {
            'recurring': [c.to_dict() for c in self.recurring],
            'oneTime': [c.to_dict() for c in self.one_time],
        }

    @classmethod
    def from_dict(cls, data):
        """Build a group from stored data.

        Older saves stored a group as a bare list of recurring costs; that
        shape is migrated into ``recurring``.  Anything else unrecognised
        becomes an empty list.
        """
        if isinstance(data, list):
            return cls(recurring=[RecurringCost.from_dict(c) for c in data])
        if not isinstance(data, dict):
            return cls()
        recurring = data.get('recurring')
        one_time = data.get('oneTime')
        return cls(
            recurring=[RecurringCost.from_dict(c) for c in recurring] if isinstance(recurring, list) else [],
            one_time=[OneTimeCost.from_dict(c) for c in one_time] if isinstance(one_time, list) else [],
        )


@dataclass
class PlanningBudget:
    needs: CostGroup = field(default_factory=CostGroup)
    wants: CostGroup = field(default_factory=CostGroup)

    def group(self, name) -> CostGroup:
        if name not in BUDGET_GROUPS:
            raise ValueError(f'Unknown budget group: {name}')
        return getattr(self, name)

    def to_dict(self):
        return {'needs': self.needs.to_dict(), 'wants': self.wants.to_dict()}

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            return cls()
        return cls(
            needs=CostGroup.from_dict(data.get('needs')),
            wants=CostGroup.from_dict(data.get('wants')),
        )


# ---------------------------------------------------------------------------
# Net worth
# ---------------------------------------------------------------------------

@dataclass
class LineItem:
    """One asset or liability row."""
    id: str
    category: str
    amount: float
    custom_category: Optional[str] = None

    @property
    def label(self) -> str:
        """Display name: the custom label for 'Other' rows, else the category."""
        if self.category == OTHER_CATEGORY:
            return (self.custom_category or '').strip() or OTHER_CATEGORY
        return self.category

    def to_dict(self):
        data = {'id': self.id, 'category': self.category, 'amount': self.amount}
        if self.custom_category is not None:
            data['customCategory'] = self.custom_category
        return data

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=str(data['id']),
            category=str(data['category']),
            amount=float(data['amount']),
            custom_category=data.get('customCategory'),
        )


@dataclass
class NetWorthEntry:
    id: str
    date: str  # ISO-8601 timestamp of first save that day
    assets: List[LineItem] = field(default_factory=list)
    liabilities: List[LineItem] = field(default_factory=list)
    total_assets: float = 0.0
    total_liabilities: float = 0.0
    net_worth: float = 0.0
    notes: Optional[str] = None

    @property
    def day(self) -> str:
        return self.date.split('T')[0]

    def to_dict(self):
        data = {
            'id': self.id,
            'date': self.date,
            'assets': [i.to_dict() for i in self.assets],
            'liabilities': [i.to_dict() for i in self.liabilities],
            'totalAssets': self.total_assets,
            'totalLiabilities': self.total_liabilities,
            'netWorth': self.net_worth,
        }
        if self.notes:
            data['notes'] = self.notes
        return data

    @classmethod
    def from_dict(cls, data):
        # sort_entries needs a parseable timestamp
        isoparse(data['date'])
        return cls(
            id=str(data['id']),
            date=str(data['date']),
            assets=[LineItem.from_dict(i) for i in data.get('assets') or []],
            liabilities=[LineItem.from_dict(i) for i in data.get('liabilities') or []],
            total_assets=float(data.get('totalAssets', 0)),
            total_liabilities=float(data.get('totalLiabilities', 0)),
            net_worth=float(data.get('netWorth', 0)),
            notes=data.get('notes'),
        )
