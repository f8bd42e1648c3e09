"""Domain models for reconciled transactions"""
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

class TransactionType(Enum):
    """Direction of an exchange transaction"""
    BUY = 'buy'
    SELL = 'sell'

    @classmethod
    def parse(cls, value: str) -> 'TransactionType':
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid transaction type: {value}")

@dataclass
class LogicalTransaction:
    """A buy or sell reconciled from one or more raw export rows"""
    type: TransactionType
    amount_sats: int
    timestamp: datetime
    subtotal_cents: Optional[int] = None
    fee_cents: Optional[int] = None
    memo: Optional[str] = None
    provider_id: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None

@dataclass
class OnchainFee:
    """On-chain cost record, disjoint from exchange transactions"""
    amount_sats: int
    timestamp: datetime
    tx_hash: Optional[str] = None
    memo: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None

@dataclass(frozen=True)
class BuyEvent:
    """Minimal (timestamp, amount) view of a Buy used by the activity metrics"""
    timestamp: datetime
    amount_sats: int

def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
