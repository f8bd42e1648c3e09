# sat_tracker/models/records.py
from dataclasses import dataclass
from datetime import datetime

from sat_tracker.models.transaction import TransactionType

@dataclass
class CoinbaseRecord:
    record_id: str              # ID
    timestamp: datetime         # Timestamp
    transaction_type: str       # Transaction Type
    asset: str                  # Asset
    quantity_transacted: str    # Quantity Transacted
    subtotal: str               # Subtotal
    total_inclusive: str        # Total (inclusive of fees and/or spread)
    fees_and_spread: str        # Fees and/or Spread
    notes: str                  # Notes
    direction: TransactionType  # Derived from Transaction Type

@dataclass
class RiverRecord:
    timestamp: datetime         # Date
    sent_amount: str            # Sent Amount
    sent_currency: str          # Sent Currency
    received_amount: str        # Received Amount
    received_currency: str      # Received Currency
    fee_amount: str             # Fee Amount
    fee_currency: str           # Fee Currency
    tag: str                    # Tag
    direction: TransactionType  # Derived from Tag
