"""Database storage service for exchange transactions and on-chain fees"""
import logging
from typing import List
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from sat_tracker.errors import StoreError
from sat_tracker.models.db import ExchangeTransaction, OnchainFeeRecord
from sat_tracker.models.transaction import (
    BuyEvent, LogicalTransaction, OnchainFee, TransactionType, ensure_utc
)

logger = logging.getLogger(__name__)

class StorageService:
    """Handles all database operations"""

    def __init__(self, session: Session):
        if not session:
            raise ValueError("Database session is required")
        self.session = session

    @staticmethod
    def _to_transaction(row: ExchangeTransaction) -> LogicalTransaction:
        return LogicalTransaction(
            id=row.id,
            type=TransactionType.parse(row.type),
            amount_sats=row.amount_sats,
            subtotal_cents=row.subtotal_cents,
            fee_cents=row.fee_cents,
            memo=row.memo,
            timestamp=row.timestamp,
            created_at=row.created_at,
            provider_id=row.provider_id
        )

    @staticmethod
    def _to_fee(row: OnchainFeeRecord) -> OnchainFee:
        return OnchainFee(
            id=row.id,
            amount_sats=row.amount_sats,
            tx_hash=row.tx_hash,
            memo=row.memo,
            timestamp=row.timestamp,
            created_at=row.created_at
        )

    def transaction_exists(self, provider_id: str) -> bool:
        """Check whether a transaction with this synthetic identity was already stored"""
        try:
            count = self.session.query(ExchangeTransaction).filter_by(
                provider_id=provider_id
            ).count()
            return count > 0
        except SQLAlchemyError as e:
            logger.error(f"Database error checking for existing transaction: {e}")
            raise StoreError(f"Database error checking for existing transaction: {str(e)}")

    def insert_transaction(self, transaction: LogicalTransaction) -> LogicalTransaction:
        """Append one transaction and commit it on its own"""
        if transaction.amount_sats <= 0:
            raise ValueError("amount_sats must be positive")

        row = ExchangeTransaction(
            type=transaction.type.value,
            amount_sats=transaction.amount_sats,
            subtotal_cents=transaction.subtotal_cents,
            fee_cents=transaction.fee_cents,
            memo=transaction.memo,
            timestamp=ensure_utc(transaction.timestamp),
            provider_id=transaction.provider_id
        )

        try:
            self.session.add(row)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Database error storing transaction: {e}")
            raise StoreError(f"Failed to store transaction: {str(e)}")

        return self._to_transaction(row)

    def list_buy_events(self) -> List[BuyEvent]:
        """All Buy transactions as (timestamp, amount) pairs, oldest first"""
        try:
            rows = self.session.query(
                ExchangeTransaction.timestamp, ExchangeTransaction.amount_sats
            ).filter(
                ExchangeTransaction.type == TransactionType.BUY.value
            ).order_by(ExchangeTransaction.timestamp.asc()).all()
        except SQLAlchemyError as e:
            logger.error(f"Database error listing buy events: {e}")
            raise StoreError(f"Database error listing buy events: {str(e)}")

        return [BuyEvent(timestamp=timestamp, amount_sats=amount_sats) for timestamp, amount_sats in rows]

    def list_transactions(self) -> List[LogicalTransaction]:
        """All exchange transactions, newest first"""
        try:
            rows = self.session.query(ExchangeTransaction).order_by(
                ExchangeTransaction.timestamp.desc()
            ).all()
        except SQLAlchemyError as e:
            logger.error(f"Database error listing transactions: {e}")
            raise StoreError(f"Database error listing transactions: {str(e)}")

        return [self._to_transaction(row) for row in rows]

    def add_onchain_fee(self, fee: OnchainFee) -> OnchainFee:
        """Record an on-chain fee"""
        row = OnchainFeeRecord(
            amount_sats=fee.amount_sats,
            tx_hash=fee.tx_hash,
            memo=fee.memo,
            timestamp=ensure_utc(fee.timestamp)
        )

        try:
            self.session.add(row)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Database error storing on-chain fee: {e}")
            raise StoreError(f"Failed to store on-chain fee: {str(e)}")

        return self._to_fee(row)

    def list_onchain_fees(self) -> List[OnchainFee]:
        """All on-chain fees, newest first"""
        try:
            rows = self.session.query(OnchainFeeRecord).order_by(
                OnchainFeeRecord.timestamp.desc()
            ).all()
        except SQLAlchemyError as e:
            logger.error(f"Database error listing on-chain fees: {e}")
            raise StoreError(f"Database error listing on-chain fees: {str(e)}")

        return [self._to_fee(row) for row in rows]
