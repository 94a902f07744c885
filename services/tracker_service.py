"""
Tracker Service
===============
Income/expense transactions grouped into (year, month) periods.

Primary entry points
--------------------
  aggregate_transactions()  one AggregatedPeriod per period, newest first
  add_transaction()         append a transaction and remember its period
  delete_transaction()      drop one transaction by id
  delete_period()           drop every transaction of one period
  clear_transactions()      drop every transaction
  set_current_balance()     overwrite the current balance singleton
  get_last_period()         period the transaction form should default to
  export_csv()              transactions as CSV text
"""
import csv
import io
import logging
import math
from datetime import date

from models.records import (
    AggregatedPeriod,
    CurrentBalance,
    INCOME,
    LastUsedPeriod,
    MONTHS,
    TRANSACTION_TYPES,
    Transaction,
    generate_id,
    month_index,
)


logger = logging.getLogger(__name__)


class TrackerService:

    @staticmethod
    def aggregate_transactions(transactions):
        """
        Group *transactions* by (year, month).

        Returns one AggregatedPeriod per distinct period, most recent year
        first and months in reverse calendar order within a year.  An empty
        input gives an empty list, which callers treat as "no data".
        """
        periods = {}
        for txn in transactions:
            key = (txn.year, txn.month)
            period = periods.get(key)
            if period is None:
                period = periods[key] = AggregatedPeriod(year=txn.year, month=txn.month)
            if txn.type == INCOME:
                period.income += txn.amount
            else:
                period.expense += txn.amount

        return sorted(
            periods.values(),
            key=lambda p: (p.year, month_index(p.month)),
            reverse=True,
        )

    @staticmethod
    def add_transaction(store, year, month, txn_type, amount):
        """Append a transaction to *store* and record its period as last used."""
        if txn_type not in TRANSACTION_TYPES:
            raise ValueError(f'Unknown transaction type: {txn_type}')
        if month not in MONTHS:
            raise ValueError(f'Unknown month: {month}')
        amount = float(amount)
        if not math.isfinite(amount):
            raise ValueError('Amount must be a finite number')
        if amount < 0:
            raise ValueError('Amount cannot be negative')

        transactions = store.load_transactions()
        txn = Transaction(
            id=generate_id(t.id for t in transactions),
            year=int(year),
            month=month,
            type=txn_type,
            amount=amount,
        )
        transactions.append(txn)
        store.save_transactions(transactions)
        store.save_last_period(LastUsedPeriod(year=txn.year, month=txn.month))
        return txn

    @staticmethod
    def delete_transaction(store, transaction_id):
        """Remove one transaction by id; returns False if it was not found."""
        transactions = store.load_transactions()
        kept = [t for t in transactions if t.id != transaction_id]
        if len(kept) == len(transactions):
            return False
        store.save_transactions(kept)
        return True

    @staticmethod
    def delete_period(store, year, month):
        """Remove all transactions of (year, month); returns how many went."""
        transactions = store.load_transactions()
        kept = [t for t in transactions if not (t.year == year and t.month == month)]
        removed = len(transactions) - len(kept)
        if removed:
            store.save_transactions(kept)
            logger.info(f'deleted {removed} transactions for {month} {year}')
        return removed

    @staticmethod
    def clear_transactions(store):
        from services.record_store import TRANSACTIONS_SLOT
        store.remove(TRANSACTIONS_SLOT)

    @staticmethod
    def set_current_balance(store, amount, today=None):
        """Overwrite the balance singleton, stamped with today's year and month."""
        amount = float(amount)
        if not math.isfinite(amount):
            raise ValueError('Balance must be a finite number')
        today = today or date.today()
        balance = CurrentBalance(year=today.year, month=MONTHS[today.month - 1], amount=amount)
        store.save_current_balance(balance)
        return balance

    @staticmethod
    def get_last_period(store, today=None):
        period = store.load_last_period()
        if period is not None:
            return period
        today = today or date.today()
        return LastUsedPeriod(year=today.year, month=MONTHS[today.month - 1])

    @staticmethod
    def export_csv(transactions):
        """CSV text of *transactions* in stored order."""
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(['id', 'year', 'month', 'type', 'amount'])
        for txn in transactions:
            writer.writerow([txn.id, txn.year, txn.month, txn.type, f'{txn.amount:.2f}'])
        return buffer.getvalue()
