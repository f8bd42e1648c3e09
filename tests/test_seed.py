"""
Tests for the sample data generator.
"""
import random

from sat_tracker.models.transaction import TransactionType
from sat_tracker.seed import generate_events, seed_store


class TestGenerateEvents:
    """Generated event mix."""

    def test_reproducible(self, now):
        assert generate_events(random.Random(7), now) == generate_events(random.Random(7), now)

    def test_mix_and_span(self, now):
        transactions, fees = generate_events(random.Random(7), now)

        total = len(transactions) + len(fees)
        assert 50 <= total <= 250
        buys = [t for t in transactions if t.type == TransactionType.BUY]
        assert len(buys) == int(total * 0.75)
        assert all(t.timestamp <= now for t in transactions)
        assert all(t.amount_sats > 0 for t in transactions)

    def test_oldest_first(self, now):
        transactions, _ = generate_events(random.Random(3), now)
        timestamps = [t.timestamp for t in transactions]
        assert timestamps == sorted(timestamps)


class TestSeedStore:
    """Writing sample data."""

    def test_counts_match_store(self, store, now):
        transactions, fees = seed_store(store, random.Random(11), now)

        assert len(store.list_transactions()) == transactions
        assert len(store.list_onchain_fees()) == fees
