"""
Record Store
============
Typed load/save access to a user's named record slots.

Every logical collection is kept as one JSON document under a fixed slot
name:

  incomeExpenseTransactions    list of transactions
  incomeExpenseLastYear        last year used on the transaction form
  incomeExpenseLastMonth       last month used on the transaction form
  incomeExpenseCurrentBalance  current balance singleton
  planningBudgetData           needs/wants x recurring/oneTime costs
  netWorthEntries              list of net worth entries

Backends only move raw JSON strings in and out (``read_slot`` /
``write_slot`` / ``remove``); decoding lives in ``RecordStore`` so every
backend degrades the same way.  A slot that holds malformed JSON, or a
record that cannot be decoded, is logged and treated as "no data".

Backends
--------
  SqlRecordStore       one RecordSlot row per (user, slot); the default
  JsonFileRecordStore  one JSON file per user under RECORD_STORE_PATH
  MemoryRecordStore    plain dict; for tests and scripts
"""
import json
import logging
import os

from models.records import (
    CurrentBalance,
    LastUsedPeriod,
    NetWorthEntry,
    PlanningBudget,
    Transaction,
)


logger = logging.getLogger(__name__)

TRANSACTIONS_SLOT = 'incomeExpenseTransactions'
LAST_YEAR_SLOT = 'incomeExpenseLastYear'
LAST_MONTH_SLOT = 'incomeExpenseLastMonth'
CURRENT_BALANCE_SLOT = 'incomeExpenseCurrentBalance'
PLANNING_BUDGET_SLOT = 'planningBudgetData'
NETWORTH_ENTRIES_SLOT = 'netWorthEntries'


class RecordStore:
    """Base class: JSON decoding plus one load/save pair per collection."""

    # -- raw slot access, implemented by backends --------------------------

    def read_slot(self, slot):
        raise NotImplementedError

    def write_slot(self, slot, raw):
        raise NotImplementedError

    def remove(self, slot):
        raise NotImplementedError

    # -- JSON layer ---------------------------------------------------------

    def load(self, slot, default=None):
        """Decode *slot*, returning *default* when it is missing or malformed."""
        raw = self.read_slot(slot)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as exc:
            logger.warning(f'Malformed JSON in slot {slot!r}, treating as empty: {exc}')
            return default

    def save(self, slot, value):
        self.write_slot(slot, json.dumps(value))

    def _load_records(self, slot, record_cls):
        data = self.load(slot, [])
        if not isinstance(data, list):
            logger.warning(f'Slot {slot!r} does not hold a list, treating as empty')
            return []
        records = []
        for item in data:
            try:
                records.append(record_cls.from_dict(item))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning(f'Skipping undecodable record in {slot!r}: {exc}')
        return records

    # -- Transactions -------------------------------------------------------

    def load_transactions(self):
        return self._load_records(TRANSACTIONS_SLOT, Transaction)

    def save_transactions(self, transactions):
        self.save(TRANSACTIONS_SLOT, [t.to_dict() for t in transactions])

    # -- Last used year/month ----------------------------------------------

    def load_last_period(self):
        """Return the remembered form period, or ``None`` if either half is missing."""
        year = self.load(LAST_YEAR_SLOT)
        month = self.load(LAST_MONTH_SLOT)
        if year is None or not month:
            return None
        try:
            return LastUsedPeriod(year=int(year), month=str(month))
        except (TypeError, ValueError):
            logger.warning(f'Invalid last used period {year!r}/{month!r}, ignoring')
            return None

    def save_last_period(self, period):
        self.save(LAST_YEAR_SLOT, period.year)
        self.save(LAST_MONTH_SLOT, period.month)

    # -- Current balance ----------------------------------------------------

    def load_current_balance(self):
        data = self.load(CURRENT_BALANCE_SLOT)
        if data is None:
            return None
        try:
            return CurrentBalance.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning(f'Invalid current balance, ignoring: {exc}')
            return None

    def save_current_balance(self, balance):
        self.save(CURRENT_BALANCE_SLOT, balance.to_dict())

    # -- Planning budget ----------------------------------------------------

    def load_planning_budget(self):
        data = self.load(PLANNING_BUDGET_SLOT)
        try:
            return PlanningBudget.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning(f'Invalid planning budget, starting empty: {exc}')
            return PlanningBudget()

    def save_planning_budget(self, budget):
        self.save(PLANNING_BUDGET_SLOT, budget.to_dict())

    # -- Net worth entries --------------------------------------------------

    def load_networth_entries(self):
        return self._load_records(NETWORTH_ENTRIES_SLOT, NetWorthEntry)

    def save_networth_entries(self, entries):
        self.save(NETWORTH_ENTRIES_SLOT, [e.to_dict() for e in entries])


class MemoryRecordStore(RecordStore):
    """Keeps raw slot strings in a dict (optionally shared between instances)."""

    def __init__(self, slots=None):
        self.slots = {} if slots is None else slots

    def read_slot(self, slot):
        return self.slots.get(slot)

    def write_slot(self, slot, raw):
        self.slots[slot] = raw

    def remove(self, slot):
        self.slots.pop(slot, None)


class JsonFileRecordStore(RecordStore):
    """All of one user's slots in ``<directory>/user_<id>.json``."""

    def __init__(self, directory, user_id):
        self.path = os.path.join(directory, f'user_{user_id}.json')

    def _read_all(self):
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except ValueError as exc:
            logger.warning(f'Malformed record file {self.path}, treating as empty: {exc}')
            return {}
        return data if isinstance(data, dict) else {}

    def _write_all(self, slots):
        os.makedirs(os.path.dirname(self.path), exist_ok=True)
        tmp_path = self.path + '.tmp'
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(slots, f, indent=2)
        os.replace(tmp_path, self.path)

    def read_slot(self, slot):
        return self._read_all().get(slot)

    def write_slot(self, slot, raw):
        slots = self._read_all()
        slots[slot] = raw
        self._write_all(slots)

    def remove(self, slot):
        slots = self._read_all()
        if slot in slots:
            del slots[slot]
            self._write_all(slots)


class SqlRecordStore(RecordStore):
    """One RecordSlot row per (user, slot) through Flask-SQLAlchemy."""

    def __init__(self, user_id):
        self.user_id = user_id

    def _row(self, slot):
        from models.record_slot import RecordSlot
        return RecordSlot.query.filter_by(user_id=self.user_id, key=slot).first()

    def read_slot(self, slot):
        row = self._row(slot)
        return row.payload if row else None

    def write_slot(self, slot, raw):
        from extensions import db
        from models.record_slot import RecordSlot

        row = self._row(slot)
        if row:
            row.payload = raw
        else:
            db.session.add(RecordSlot(user_id=self.user_id, key=slot, payload=raw))
        db.session.commit()

    def remove(self, slot):
        from extensions import db

        row = self._row(slot)
        if row:
            db.session.delete(row)
            db.session.commit()


def create_record_store(backend, user_id, directory=None, memory=None):
    """Build the store for *user_id* on the named *backend*.

    ``memory`` is the dict-of-dicts that keeps memory-backend slots alive
    between requests; each user gets its own inner dict.
    """
    if backend == 'sql':
        return SqlRecordStore(user_id)
    if backend == 'file':
        if not directory:
            raise ValueError('The file record store needs a directory')
        return JsonFileRecordStore(directory, user_id)
    if backend == 'memory':
        if memory is None:
            memory = {}
        return MemoryRecordStore(memory.setdefault(user_id, {}))
    raise ValueError(f'Unknown record store backend: {backend}')
