"""
Net Worth Service
=================
Day-by-day net worth entries built from asset and liability line items.

Same-day merge
--------------
At most one entry exists per calendar day.  Saving again on a day that
already has an entry merges the new line items into it: items are keyed by
category, or by the custom label for 'Other' rows, and amounts sharing a key
are summed.  The merged entry keeps the original id and timestamp so the
list order stays stable.

Custom labels are matched case-insensitively after trimming ("Gold",
" gold ", "GOLD" are one key); the first spelling seen is kept.  They never
merge into a fixed category: an 'Other' row labelled "Cash" stays separate
from the Cash row.

Primary entry points
--------------------
  merge_items()        sum two lists of line items per key
  save_entry()         create or merge today's entry; returns sorted list
  delete_entry()       drop an entry by id
  latest_entry()       most recent entry, or None
  chart_series()       oldest-first totals for the timeline chart
  parse_line_items()   build line items from submitted form rows
"""
import math
from datetime import datetime, timezone

from dateutil.parser import isoparse

from models.records import (
    LineItem,
    NetWorthEntry,
    OTHER_CATEGORY,
    TOTAL_CATEGORY,
    generate_id,
)


def _entry_timestamp(entry):
    stamp = isoparse(entry.date)
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp


class NetWorthService:

    @staticmethod
    def merge_key(item):
        if item.category == OTHER_CATEGORY:
            return f'other:{item.label.casefold()}'
        return item.category.casefold()

    @staticmethod
    def merge_items(existing, incoming):
        """Combine *existing* and *incoming* items, summing amounts per key.

        Keys keep first-seen order; a key present on only one side keeps its
        amount unchanged.  Input items are never mutated.
        """
        merged = {}
        for item in list(existing) + list(incoming):
            key = NetWorthService.merge_key(item)
            if key in merged:
                merged[key].amount += item.amount
            else:
                merged[key] = LineItem(
                    id=item.id,
                    category=item.category,
                    amount=item.amount,
                    custom_category=item.custom_category,
                )
        return list(merged.values())

    @staticmethod
    def calculate_totals(assets, liabilities):
        total_assets = sum(i.amount for i in assets)
        total_liabilities = sum(i.amount for i in liabilities)
        return {
            'total_assets': total_assets,
            'total_liabilities': total_liabilities,
            'net_worth': total_assets - total_liabilities,
        }

    @staticmethod
    def sort_entries(entries):
        """Newest first."""
        return sorted(entries, key=_entry_timestamp, reverse=True)

    @staticmethod
    def find_entry_for_day(entries, day):
        for entry in entries:
            if entry.day == day:
                return entry
        return None

    @staticmethod
    def save_entry(entries, assets, liabilities, notes=None, now=None):
        """
        Create today's entry or merge into it.

        Returns ``(entries, entry)`` where *entries* is a new list sorted
        newest first and *entry* is the saved entry.
        """
        now = now or datetime.now(timezone.utc)
        today = now.date().isoformat()
        existing = NetWorthService.find_entry_for_day(entries, today)

        if existing is not None:
            merged_assets = NetWorthService.merge_items(existing.assets, assets)
            merged_liabilities = NetWorthService.merge_items(existing.liabilities, liabilities)
            entry_id = existing.id
            entry_date = existing.date
            notes = notes or existing.notes
        else:
            merged_assets = NetWorthService.merge_items([], assets)
            merged_liabilities = NetWorthService.merge_items([], liabilities)
            entry_id = generate_id(e.id for e in entries)
            entry_date = now.isoformat(timespec='milliseconds')

        totals = NetWorthService.calculate_totals(merged_assets, merged_liabilities)
        entry = NetWorthEntry(
            id=entry_id,
            date=entry_date,
            assets=merged_assets,
            liabilities=merged_liabilities,
            notes=notes or None,
            **totals,
        )

        updated = [e for e in entries if e is not existing] + [entry]
        return NetWorthService.sort_entries(updated), entry

    @staticmethod
    def delete_entry(entries, entry_id):
        return [e for e in entries if e.id != entry_id]

    @staticmethod
    def latest_entry(entries):
        ordered = NetWorthService.sort_entries(entries)
        return ordered[0] if ordered else None

    @staticmethod
    def chart_series(entries):
        """Oldest-first points for the timeline chart."""
        return [
            {
                'date': _entry_timestamp(e).strftime('%b %Y'),
                'net_worth': e.net_worth,
                'assets': e.total_assets,
                'liabilities': e.total_liabilities,
            }
            for e in reversed(NetWorthService.sort_entries(entries))
        ]

    @staticmethod
    def category_breakdown(items):
        """``[{'name', 'value'}]`` per merged category, for the pie charts."""
        return [{'name': i.label, 'value': i.amount} for i in NetWorthService.merge_items([], items)]

    @staticmethod
    def parse_line_items(categories, amounts, custom_labels, allowed):
        """
        Build line items from parallel form lists.

        Rows with an empty amount are skipped.  Raises ValueError for an
        unknown category or an amount that is not a finite, non-negative number.
        """
        items = []
        taken = []
        for index, category in enumerate(categories):
            raw_amount = amounts[index].strip() if index < len(amounts) else ''
            if not raw_amount:
                continue
            if category not in allowed:
                raise ValueError(f'Unknown category: {category}')
            try:
                amount = float(raw_amount)
            except ValueError:
                raise ValueError(f'Invalid amount for {category}: {raw_amount}')
            if not math.isfinite(amount):
                raise ValueError(f'Invalid amount for {category}: {raw_amount}')
            if amount < 0:
                raise ValueError(f'Amount for {category} cannot be negative')
            custom = None
            if category == OTHER_CATEGORY:
                custom = (custom_labels[index] if index < len(custom_labels) else '').strip() or None
            item_id = generate_id(taken)
            taken.append(item_id)
            items.append(LineItem(id=item_id, category=category, amount=amount, custom_category=custom))
        return items

    @staticmethod
    def total_items(total_assets, total_liabilities):
        """Single 'Total' rows used when the user enters totals only."""
        return (
            [LineItem(id='1', category=TOTAL_CATEGORY, amount=float(total_assets))],
            [LineItem(id='1', category=TOTAL_CATEGORY, amount=float(total_liabilities))],
        )

    # ------------------------------------------------------------------
    # Store-level helpers
    # ------------------------------------------------------------------

    @staticmethod
    def get_entries(store):
        return NetWorthService.sort_entries(store.load_networth_entries())

    @staticmethod
    def record_entry(store, assets, liabilities, notes=None, now=None):
        entries, entry = NetWorthService.save_entry(
            store.load_networth_entries(), assets, liabilities, notes=notes, now=now
        )
        store.save_networth_entries(entries)
        return entry

    @staticmethod
    def remove_entry(store, entry_id):
        entries = store.load_networth_entries()
        remaining = NetWorthService.delete_entry(entries, entry_id)
        if len(remaining) == len(entries):
            return False
        store.save_networth_entries(remaining)
        return True
