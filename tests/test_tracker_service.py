"""
Tests for TrackerService: period aggregation and transaction edits.

Everything runs against a MemoryRecordStore, so no database is involved.
"""
from datetime import date

import pytest

from models.records import Transaction
from services.record_store import TRANSACTIONS_SLOT
from services.tracker_service import TrackerService


def txn(txn_id, year, month, txn_type, amount):
    return Transaction(id=txn_id, year=year, month=month, type=txn_type, amount=amount)


@pytest.fixture
def two_months():
    return [
        txn('1', 2024, 'January', 'Income', 3000),
        txn('2', 2024, 'January', 'Expense', 1200),
        txn('3', 2024, 'February', 'Income', 3000),
        txn('4', 2024, 'February', 'Expense', 1500),
    ]


# ---------------------------------------------------------------------------
# aggregate_transactions
# ---------------------------------------------------------------------------

class TestAggregateTransactions:
    def test_empty_input_gives_no_periods(self):
        assert TrackerService.aggregate_transactions([]) == []

    def test_two_months_newest_first(self, two_months):
        periods = TrackerService.aggregate_transactions(two_months)

        assert [(p.year, p.month) for p in periods] == [(2024, 'February'), (2024, 'January')]
        assert periods[0].income == 3000
        assert periods[0].expense == 1500
        assert periods[0].net == 1500
        assert periods[1].net == 1800

    def test_totals_are_preserved(self, two_months):
        periods = TrackerService.aggregate_transactions(two_months)

        assert sum(p.income for p in periods) == 6000
        assert sum(p.expense for p in periods) == 2700

    def test_one_period_per_year_month(self):
        transactions = [
            txn('1', 2023, 'March', 'Income', 100),
            txn('2', 2023, 'March', 'Income', 50),
            txn('3', 2024, 'March', 'Expense', 10),
        ]

        periods = TrackerService.aggregate_transactions(transactions)

        assert len(periods) == 2
        assert periods[0].year == 2024
        assert periods[1].income == 150

    def test_years_sort_before_months(self):
        transactions = [
            txn('1', 2023, 'December', 'Income', 1),
            txn('2', 2024, 'January', 'Income', 1),
            txn('3', 2023, 'June', 'Income', 1),
        ]

        periods = TrackerService.aggregate_transactions(transactions)

        assert [(p.year, p.month) for p in periods] == [
            (2024, 'January'), (2023, 'December'), (2023, 'June'),
        ]

    def test_period_with_only_expense_has_zero_income(self):
        periods = TrackerService.aggregate_transactions([txn('1', 2024, 'May', 'Expense', 80)])

        assert periods[0].income == 0
        assert periods[0].net == -80


# ---------------------------------------------------------------------------
# Store edits
# ---------------------------------------------------------------------------

class TestAddTransaction:
    def test_appends_and_remembers_period(self, store):
        TrackerService.add_transaction(store, 2024, 'March', 'Income', 2500)

        transactions = store.load_transactions()
        assert len(transactions) == 1
        assert transactions[0].amount == 2500
        last = store.load_last_period()
        assert (last.year, last.month) == (2024, 'March')

    def test_ids_are_unique(self, store):
        first = TrackerService.add_transaction(store, 2024, 'March', 'Income', 1)
        second = TrackerService.add_transaction(store, 2024, 'March', 'Income', 1)

        assert first.id != second.id

    @pytest.mark.parametrize('month, txn_type, amount', [
        ('Smarch', 'Income', 10),
        ('March', 'Gift', 10),
        ('March', 'Income', -1),
        ('March', 'Income', float('inf')),
        ('March', 'Expense', float('nan')),
    ])
    def test_invalid_input_rejected(self, store, month, txn_type, amount):
        with pytest.raises(ValueError):
            TrackerService.add_transaction(store, 2024, month, txn_type, amount)
        assert store.load_transactions() == []


class TestDeleteAndClear:
    def test_delete_single_transaction(self, store, two_months):
        store.save_transactions(two_months)

        assert TrackerService.delete_transaction(store, '2') is True
        assert [t.id for t in store.load_transactions()] == ['1', '3', '4']
        assert TrackerService.delete_transaction(store, '2') is False

    def test_delete_period_removes_only_that_month(self, store, two_months):
        store.save_transactions(two_months)

        removed = TrackerService.delete_period(store, 2024, 'January')

        assert removed == 2
        assert {t.month for t in store.load_transactions()} == {'February'}

    def test_delete_missing_period_changes_nothing(self, store, two_months):
        store.save_transactions(two_months)

        assert TrackerService.delete_period(store, 2023, 'January') == 0
        assert len(store.load_transactions()) == 4

    def test_clear_removes_slot(self, store, two_months):
        store.save_transactions(two_months)

        TrackerService.clear_transactions(store)

        assert store.read_slot(TRANSACTIONS_SLOT) is None
        assert store.load_transactions() == []


class TestBalanceAndLastPeriod:
    def test_set_current_balance_stamps_month(self, store):
        TrackerService.set_current_balance(store, 5000, today=date(2024, 7, 15))

        balance = store.load_current_balance()
        assert (balance.year, balance.month, balance.amount) == (2024, 'July', 5000)

    def test_non_finite_balance_rejected(self, store):
        with pytest.raises(ValueError):
            TrackerService.set_current_balance(store, float('nan'))
        assert store.load_current_balance() is None

    def test_last_period_defaults_to_today(self, store):
        period = TrackerService.get_last_period(store, today=date(2025, 2, 1))

        assert (period.year, period.month) == (2025, 'February')


def test_export_csv_has_header_and_rows(two_months):
    lines = TrackerService.export_csv(two_months).strip().splitlines()

    assert lines[0] == 'id,year,month,type,amount'
    assert lines[1] == '1,2024,January,Income,3000.00'
    assert len(lines) == 5
