"""
Tests for portfolio overview rollups.
"""
from datetime import datetime, timezone

import pytest

from sat_tracker.models.transaction import LogicalTransaction, OnchainFee, TransactionType
from sat_tracker.services.overview import OverviewService


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def overview(session):
    return OverviewService(session)


@pytest.fixture
def portfolio(store):
    store.insert_transaction(LogicalTransaction(TransactionType.BUY, 1_000_000, utc(2025, 6, 15), subtotal_cents=50_000))
    store.insert_transaction(LogicalTransaction(TransactionType.BUY, 2_000_000, utc(2025, 6, 1), subtotal_cents=100_000))
    store.insert_transaction(LogicalTransaction(TransactionType.BUY, 500_000, utc(2025, 1, 10)))
    store.insert_transaction(LogicalTransaction(TransactionType.SELL, 300_000, utc(2025, 6, 10), subtotal_cents=30_000))
    store.add_onchain_fee(OnchainFee(amount_sats=1_000, timestamp=utc(2025, 6, 12)))
    return store


class TestOverviewMetrics:
    """Rollups over a small portfolio."""

    def test_balances(self, overview, portfolio, now):
        metrics = overview.get_overview_metrics(now)

        assert metrics.total_sats_stacked == 3_500_000
        assert metrics.current_sats == 3_199_000
        assert metrics.total_sats_spent == 301_000
        assert metrics.total_onchain_fees_paid_sats == 1_000

    def test_cost_basis(self, overview, portfolio, now):
        metrics = overview.get_overview_metrics(now)

        assert metrics.total_invested_cents == 150_000
        assert metrics.fiat_extracted_cents == 30_000
        assert metrics.avg_buy_price == pytest.approx(1_500 / 0.035)
        assert metrics.avg_sell_price == pytest.approx(100_000.0)

    def test_recent_windows(self, overview, portfolio, now):
        metrics = overview.get_overview_metrics(now)

        assert metrics.sats_stacked_7d == 1_000_000
        assert metrics.usd_invested_7d_cents == 50_000
        assert metrics.sats_stacked_31d == 3_000_000
        assert metrics.usd_invested_31d_cents == 150_000

    def test_empty_store(self, overview, now):
        metrics = overview.get_overview_metrics(now)

        assert metrics.current_sats == 0
        assert metrics.total_sats_stacked == 0
        assert metrics.total_invested_cents == 0
        assert metrics.avg_buy_price is None
        assert metrics.avg_sell_price is None

    def test_session_required(self):
        with pytest.raises(ValueError):
            OverviewService(None)
