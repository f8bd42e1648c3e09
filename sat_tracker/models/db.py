"""SQLAlchemy database models for exchange transactions and on-chain fees"""
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, BigInteger, DateTime, TypeDecorator
from sqlalchemy.orm import declarative_base

Base = declarative_base()

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

def _new_id() -> str:
    return str(uuid.uuid4())

class UTCDateTime(TypeDecorator):
    """
    Stores datetimes as naive UTC and hands them back timezone-aware.
    SQLite has no native timezone support.
    """
    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)

class ExchangeTransaction(Base):
    """
    Reconciled buy or sell event.
    provider_id is the synthetic identity used to skip re-imported rows.
    """
    __tablename__ = 'exchange_transactions'

    id = Column(String, primary_key=True, default=_new_id)
    type = Column(String, nullable=False, index=True)
    amount_sats = Column(BigInteger, nullable=False)
    subtotal_cents = Column(BigInteger, nullable=True)
    fee_cents = Column(BigInteger, nullable=True)
    memo = Column(String, nullable=True)
    timestamp = Column(UTCDateTime, nullable=False, index=True)
    created_at = Column(UTCDateTime, nullable=False, default=_utcnow)
    provider_id = Column(String, unique=True, nullable=True, index=True)

class OnchainFeeRecord(Base):
    """
    Pure on-chain cost, kept apart from exchange transactions
    """
    __tablename__ = 'onchain_fees'

    id = Column(String, primary_key=True, default=_new_id)
    amount_sats = Column(BigInteger, nullable=False)
    tx_hash = Column(String, nullable=True)
    memo = Column(String, nullable=True)
    timestamp = Column(UTCDateTime, nullable=False)
    created_at = Column(UTCDateTime, nullable=False, default=_utcnow)
