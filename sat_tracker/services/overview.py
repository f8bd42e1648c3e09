"""Portfolio overview rollups"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from sqlalchemy import and_, case, func
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from sat_tracker.errors import StoreError
from sat_tracker.models.db import ExchangeTransaction, OnchainFeeRecord
from sat_tracker.models.overview import OverviewMetrics
from sat_tracker.models.transaction import TransactionType, ensure_utc

logger = logging.getLogger(__name__)

SATS_PER_BTC = 100_000_000

class OverviewService:
    """Sums over exchange transactions and on-chain fees"""

    def __init__(self, session: Session):
        if not session:
            raise ValueError("Database session is required")
        self.session = session

    @staticmethod
    def _sum_where(column, *conditions):
        return func.coalesce(func.sum(case((and_(*conditions), column), else_=0)), 0)

    @staticmethod
    def _count_where(*conditions):
        return func.count(case((and_(*conditions), 1)))

    def get_overview_metrics(self, now: Optional[datetime] = None) -> OverviewMetrics:
        now = ensure_utc(now) if now else datetime.now(timezone.utc)
        week_ago = now - timedelta(days=7)
        month_ago = now - timedelta(days=31)

        tx = ExchangeTransaction
        is_buy = tx.type == TransactionType.BUY.value
        is_sell = tx.type == TransactionType.SELL.value
        priced = tx.subtotal_cents.isnot(None)

        try:
            row = self.session.query(
                self._sum_where(tx.amount_sats, is_buy).label('total_bought_sats'),
                self._sum_where(tx.amount_sats, is_sell).label('total_sold_sats'),
                self._sum_where(tx.subtotal_cents, is_buy, priced).label('total_invested_cents'),
                self._sum_where(tx.subtotal_cents, is_sell, priced).label('total_extracted_cents'),
                self._count_where(is_buy, priced).label('buy_count'),
                self._count_where(is_sell, priced).label('sell_count'),
                self._sum_where(tx.amount_sats, is_buy, tx.timestamp >= week_ago).label('sats_stacked_7d'),
                self._sum_where(tx.subtotal_cents, is_buy, priced, tx.timestamp >= week_ago).label('usd_invested_7d_cents'),
                self._sum_where(tx.amount_sats, is_buy, tx.timestamp >= month_ago).label('sats_stacked_31d'),
                self._sum_where(tx.subtotal_cents, is_buy, priced, tx.timestamp >= month_ago).label('usd_invested_31d_cents'),
            ).one()

            total_fees = self.session.query(
                func.coalesce(func.sum(OnchainFeeRecord.amount_sats), 0)
            ).scalar()
        except SQLAlchemyError as e:
            logger.error(f"Database error computing overview metrics: {e}")
            raise StoreError(f"Database error computing overview metrics: {str(e)}")

        avg_buy_price = None
        if row.buy_count > 0 and row.total_bought_sats > 0:
            avg_buy_price = (row.total_invested_cents / 100) / (row.total_bought_sats / SATS_PER_BTC)

        avg_sell_price = None
        if row.sell_count > 0 and row.total_sold_sats > 0:
            avg_sell_price = (row.total_extracted_cents / 100) / (row.total_sold_sats / SATS_PER_BTC)

        metrics = OverviewMetrics(
            current_sats=row.total_bought_sats - row.total_sold_sats - total_fees,
            total_sats_stacked=row.total_bought_sats,
            avg_buy_price=avg_buy_price,
            total_invested_cents=row.total_invested_cents,
            avg_sell_price=avg_sell_price,
            fiat_extracted_cents=row.total_extracted_cents,
            total_sats_spent=row.total_sold_sats + total_fees,
            total_onchain_fees_paid_sats=total_fees,
            sats_stacked_7d=row.sats_stacked_7d,
            usd_invested_7d_cents=row.usd_invested_7d_cents,
            sats_stacked_31d=row.sats_stacked_31d,
            usd_invested_31d_cents=row.usd_invested_31d_cents
        )
        logger.info(f"Calculated overview metrics: {metrics.model_dump()}")
        return metrics
