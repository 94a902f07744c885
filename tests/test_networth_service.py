"""
Tests for NetWorthService: same-day merge, ordering and form parsing.
"""
from datetime import datetime, timedelta, timezone

import pytest

from models.records import ASSET_CATEGORIES, LineItem, NetWorthEntry
from services.networth_service import NetWorthService


NOON = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)


def item(category, amount, custom=None, item_id='1'):
    return LineItem(id=item_id, category=category, amount=amount, custom_category=custom)


def amounts(items):
    return {i.label: i.amount for i in items}


# ---------------------------------------------------------------------------
# merge_items
# ---------------------------------------------------------------------------

class TestMergeItems:
    def test_same_category_is_summed(self):
        merged = NetWorthService.merge_items([item('Cash', 10)], [item('Cash', 5)])

        assert amounts(merged) == {'Cash': 15}

    def test_merging_nothing_keeps_existing(self):
        existing = [item('Cash', 10), item('Stocks', 20)]

        merged = NetWorthService.merge_items(existing, [])

        assert amounts(merged) == {'Cash': 10, 'Stocks': 20}

    def test_categories_on_one_side_pass_through(self):
        merged = NetWorthService.merge_items([item('Cash', 10)], [item('Crypto', 3)])

        assert amounts(merged) == {'Cash': 10, 'Crypto': 3}
        assert [i.category for i in merged] == ['Cash', 'Crypto']

    def test_other_rows_keyed_by_custom_label(self):
        merged = NetWorthService.merge_items(
            [item('Other', 100, 'Gold')],
            [item('Other', 50, ' gold '), item('Other', 7, 'Art')],
        )

        assert amounts(merged) == {'Gold': 150, 'Art': 7}

    def test_custom_label_matching_a_category_stays_separate(self):
        merged = NetWorthService.merge_items([item('Cash', 10)], [item('Other', 4, 'cash')])

        assert [(i.category, i.amount) for i in merged] == [('Cash', 10), ('Other', 4)]

    def test_inputs_not_mutated(self):
        existing = [item('Cash', 10)]

        NetWorthService.merge_items(existing, [item('Cash', 5)])

        assert existing[0].amount == 10


# ---------------------------------------------------------------------------
# save_entry
# ---------------------------------------------------------------------------

class TestSaveEntry:
    def test_first_save_creates_entry_with_totals(self):
        entries, entry = NetWorthService.save_entry(
            [], [item('Cash', 1000)], [item('Credit Cards', 250)], now=NOON
        )

        assert len(entries) == 1
        assert entry.total_assets == 1000
        assert entry.total_liabilities == 250
        assert entry.net_worth == 750
        assert entry.day == '2024-05-10'

    def test_second_save_same_day_merges(self):
        entries, first = NetWorthService.save_entry([], [item('Cash', 10)], [], now=NOON)

        entries, second = NetWorthService.save_entry(
            entries, [item('Cash', 5)], [], now=NOON + timedelta(hours=3)
        )

        assert len(entries) == 1
        assert second.id == first.id
        assert second.date == first.date
        assert amounts(second.assets) == {'Cash': 15}
        assert second.net_worth == 15

    def test_next_day_creates_new_entry_first_in_list(self):
        entries, _ = NetWorthService.save_entry([], [item('Cash', 10)], [], now=NOON)

        entries, entry = NetWorthService.save_entry(
            entries, [item('Cash', 20)], [], now=NOON + timedelta(days=1)
        )

        assert len(entries) == 2
        assert entries[0] is entry
        assert entries[1].total_assets == 10

    def test_notes_fall_back_to_existing(self):
        entries, _ = NetWorthService.save_entry([], [], [], notes='bonus month', now=NOON)

        _, entry = NetWorthService.save_entry(entries, [item('Cash', 1)], [], now=NOON)

        assert entry.notes == 'bonus month'

    def test_net_worth_is_assets_minus_liabilities(self):
        _, entry = NetWorthService.save_entry(
            [], [item('Cash', 100), item('Stocks', 50, item_id='2')],
            [item('Mortgages', 400)], now=NOON
        )

        assert entry.net_worth == entry.total_assets - entry.total_liabilities == -250


class TestOrdering:
    def test_sort_newest_first(self):
        older = NetWorthEntry(id='a', date='2024-01-01T09:00:00.000Z')
        newer = NetWorthEntry(id='b', date='2024-03-01T09:00:00.000+00:00')

        assert [e.id for e in NetWorthService.sort_entries([older, newer])] == ['b', 'a']

    def test_naive_dates_compare_with_aware(self):
        naive = NetWorthEntry(id='a', date='2024-01-01T09:00:00')
        aware = NetWorthEntry(id='b', date='2023-12-31T09:00:00+00:00')

        assert NetWorthService.latest_entry([aware, naive]).id == 'a'

    def test_latest_entry_empty(self):
        assert NetWorthService.latest_entry([]) is None

    def test_chart_series_oldest_first(self):
        entries = [
            NetWorthEntry(id='b', date='2024-03-01T09:00:00Z', net_worth=20),
            NetWorthEntry(id='a', date='2024-01-01T09:00:00Z', net_worth=10),
        ]

        series = NetWorthService.chart_series(entries)

        assert [p['date'] for p in series] == ['Jan 2024', 'Mar 2024']
        assert series[-1]['net_worth'] == 20


# ---------------------------------------------------------------------------
# Store helpers
# ---------------------------------------------------------------------------

class TestStoreHelpers:
    def test_record_and_remove(self, store):
        entry = NetWorthService.record_entry(store, [item('Cash', 10)], [], now=NOON)

        assert [e.id for e in NetWorthService.get_entries(store)] == [entry.id]
        assert NetWorthService.remove_entry(store, entry.id) is True
        assert NetWorthService.get_entries(store) == []

    def test_remove_unknown_entry(self, store):
        assert NetWorthService.remove_entry(store, 'missing') is False


# ---------------------------------------------------------------------------
# Form parsing
# ---------------------------------------------------------------------------

class TestParseLineItems:
    def test_empty_amounts_skipped(self):
        items = NetWorthService.parse_line_items(
            ['Cash', 'Stocks', 'Other'], ['100', '', '25.5'], ['', '', ' Gold '], ASSET_CATEGORIES
        )

        assert [(i.category, i.amount, i.custom_category) for i in items] == [
            ('Cash', 100.0, None),
            ('Other', 25.5, 'Gold'),
        ]
        assert items[0].id != items[1].id

    @pytest.mark.parametrize('category, raw', [
        ('Lottery', '10'),
        ('Cash', 'ten'),
        ('Cash', '-5'),
        ('Cash', 'inf'),
        ('Cash', 'nan'),
    ])
    def test_invalid_rows_rejected(self, category, raw):
        with pytest.raises(ValueError):
            NetWorthService.parse_line_items([category], [raw], [''], ASSET_CATEGORIES)

    def test_total_items(self):
        assets, liabilities = NetWorthService.total_items(500, 200)

        assert amounts(assets) == {'Total': 500.0}
        assert amounts(liabilities) == {'Total': 200.0}
