"""
Tests for lump-sum back-filling.
"""
import random
from datetime import datetime, timezone

import pytest

from sat_tracker.models.transaction import TransactionType
from sat_tracker.services.lumpsum import create_lumpsum_transactions


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


class TestCreateLumpsumTransactions:
    """Evenly spaced buys."""

    def test_weekly_split_with_remainder_on_last(self, store):
        created = create_lumpsum_transactions(
            store, utc(2024, 1, 1), utc(2024, 1, 29), 1_000_003, 10_001, 'weekly', memo="Old stack"
        )

        assert len(created) == 4
        assert [t.amount_sats for t in created] == [250_000, 250_000, 250_000, 250_003]
        assert [t.subtotal_cents for t in created] == [2_500, 2_500, 2_500, 2_501]
        assert [t.timestamp.day for t in created] == [1, 8, 15, 22]
        assert all(t.type == TransactionType.BUY and t.memo == "Old stack" for t in created)
        assert sum(t.amount_sats for t in store.list_transactions()) == 1_000_003

    def test_short_period_gives_one_buy(self, store):
        created = create_lumpsum_transactions(store, utc(2024, 1, 1), utc(2024, 1, 3), 5_000, 100, 'monthly')
        assert len(created) == 1
        assert created[0].amount_sats == 5_000

    def test_default_memo(self, store):
        created = create_lumpsum_transactions(
            store, utc(2024, 1, 1), utc(2024, 1, 3), 200, 100, 'daily', rng=random.Random(1)
        )
        assert len(created) == 2
        assert created[0].memo.startswith("DCA ")
        assert 1000 <= int(created[0].memo[4:]) <= 9999
        assert created[0].memo == created[1].memo

    def test_start_after_end(self, store):
        with pytest.raises(ValueError):
            create_lumpsum_transactions(store, utc(2024, 2, 1), utc(2024, 1, 1), 1_000, 100, 'weekly')

    def test_unknown_frequency(self, store):
        with pytest.raises(ValueError):
            create_lumpsum_transactions(store, utc(2024, 1, 1), utc(2024, 2, 1), 1_000, 100, 'hourly')

    def test_too_few_sats(self, store):
        with pytest.raises(ValueError):
            create_lumpsum_transactions(store, utc(2024, 1, 1), utc(2024, 1, 11), 5, 100, 'daily')
        assert store.list_transactions() == []
