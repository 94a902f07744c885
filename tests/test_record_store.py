"""
Tests for the record store backends.

The JSON decoding rules live in the RecordStore base class, so they are
checked once on the memory backend; the file and SQL backends are checked
for persistence and per-user isolation.
"""
import pytest

from models.records import CurrentBalance, Transaction
from services.record_store import (
    JsonFileRecordStore,
    MemoryRecordStore,
    NETWORTH_ENTRIES_SLOT,
    SqlRecordStore,
    TRANSACTIONS_SLOT,
    create_record_store,
)
from services.networth_service import NetWorthService


def sample_transaction(txn_id='1'):
    return Transaction(id=txn_id, year=2024, month='January', type='Income', amount=100)


class TestDecoding:
    def test_missing_slots_give_defaults(self, store):
        assert store.load_transactions() == []
        assert store.load_current_balance() is None
        assert store.load_last_period() is None
        assert store.load_networth_entries() == []

    def test_malformed_json_treated_as_empty(self):
        store = MemoryRecordStore({TRANSACTIONS_SLOT: '{not json'})

        assert store.load_transactions() == []

    def test_non_list_slot_treated_as_empty(self):
        store = MemoryRecordStore({TRANSACTIONS_SLOT: '{"id": "1"}'})

        assert store.load_transactions() == []

    def test_bad_record_skipped(self):
        store = MemoryRecordStore({
            TRANSACTIONS_SLOT: '[{"id": "1", "year": 2024, "month": "May", "type": "Income", "amount": 5},'
                               ' {"id": "2"}]'
        })

        assert [t.id for t in store.load_transactions()] == ['1']

    def test_unknown_transaction_type_skipped(self):
        store = MemoryRecordStore({
            TRANSACTIONS_SLOT: '[{"id": "1", "year": 2024, "month": "May", "type": "Gift", "amount": 5},'
                               ' {"id": "2", "year": 2024, "month": "May", "type": "Expense", "amount": 3}]'
        })

        assert [t.type for t in store.load_transactions()] == ['Expense']

    def test_networth_entry_with_bad_date_skipped(self):
        store = MemoryRecordStore({
            NETWORTH_ENTRIES_SLOT: '[{"id": "1", "date": "not-a-date", "netWorth": 10},'
                                   ' {"id": "2", "date": "2024-03-01T09:00:00.000Z", "netWorth": 20}]'
        })

        entries = NetWorthService.get_entries(store)

        assert [e.id for e in entries] == ['2']
        assert NetWorthService.latest_entry(entries).net_worth == 20

    def test_stored_layout_uses_camel_case(self, store):
        store.save_current_balance(CurrentBalance(year=2024, month='June', amount=10))

        assert store.load('incomeExpenseCurrentBalance') == {'year': 2024, 'month': 'June', 'amount': 10}


class TestFileBackend:
    def test_persists_between_instances(self, tmp_path):
        JsonFileRecordStore(str(tmp_path), 7).save_transactions([sample_transaction()])

        reopened = JsonFileRecordStore(str(tmp_path), 7)

        assert [t.id for t in reopened.load_transactions()] == ['1']
        assert (tmp_path / 'user_7.json').exists()

    def test_users_are_isolated(self, tmp_path):
        JsonFileRecordStore(str(tmp_path), 1).save_transactions([sample_transaction()])

        assert JsonFileRecordStore(str(tmp_path), 2).load_transactions() == []

    def test_corrupt_file_treated_as_empty(self, tmp_path):
        (tmp_path / 'user_3.json').write_text('garbage', encoding='utf-8')

        assert JsonFileRecordStore(str(tmp_path), 3).load_transactions() == []

    def test_remove(self, tmp_path):
        store = JsonFileRecordStore(str(tmp_path), 1)
        store.save_transactions([sample_transaction()])

        store.remove(TRANSACTIONS_SLOT)

        assert store.read_slot(TRANSACTIONS_SLOT) is None


class TestSqlBackend:
    def test_write_then_overwrite(self, app, user):
        store = SqlRecordStore(user.id)
        store.save_transactions([sample_transaction('1')])
        store.save_transactions([sample_transaction('1'), sample_transaction('2')])

        assert len(store.load_transactions()) == 2
        assert user.slots.count() == 1

    def test_users_are_isolated(self, app, user):
        from extensions import db
        from models.users import User

        other = User(email='other@example.com', name='Other')
        other.set_password('TestPass1!')
        db.session.add(other)
        db.session.commit()

        SqlRecordStore(user.id).save_transactions([sample_transaction()])

        assert SqlRecordStore(other.id).load_transactions() == []

    def test_remove(self, app, user):
        store = SqlRecordStore(user.id)
        store.save_transactions([sample_transaction()])

        store.remove(TRANSACTIONS_SLOT)

        assert store.read_slot(TRANSACTIONS_SLOT) is None


class TestFactory:
    def test_memory_backend_shares_dict_per_user(self):
        memory = {}
        create_record_store('memory', 1, memory=memory).save_transactions([sample_transaction()])

        assert len(create_record_store('memory', 1, memory=memory).load_transactions()) == 1
        assert create_record_store('memory', 2, memory=memory).load_transactions() == []

    def test_file_backend_needs_directory(self):
        with pytest.raises(ValueError):
            create_record_store('file', 1)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            create_record_store('cloud', 1)
