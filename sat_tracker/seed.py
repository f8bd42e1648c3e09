"""
Reproducible sample data for development and tests.

Nothing here is used by the import or metrics engines; the random source and
clock are always passed in.
"""
import logging
import random
from datetime import datetime, timedelta
from typing import List, Tuple

from sat_tracker.models.transaction import LogicalTransaction, OnchainFee, TransactionType
from sat_tracker.services.storage import StorageService

logger = logging.getLogger(__name__)

STARTING_PRICE_CENTS = 3_000_000  # $30k per BTC

def generate_events(
        rng: random.Random,
        now: datetime,
        min_events: int = 50,
        max_events: int = 250,
        span_days: int = 365
) -> Tuple[List[LogicalTransaction], List[OnchainFee]]:
    """
    Build a shuffled mix of ~75% buys, ~15% sells and on-chain fees spread
    over the span_days before now, oldest first. The simulated price rises
    $500-$2000 with every event.
    """
    total_events = rng.randint(min_events, max_events)
    buy_count = int(total_events * 0.75)
    sell_count = int(total_events * 0.15)
    fee_count = total_events - buy_count - sell_count

    event_types = ['Buy'] * buy_count + ['Sell'] * sell_count + ['Fee'] * fee_count
    rng.shuffle(event_types)

    offsets = sorted((rng.randint(0, span_days * 24 * 3600) for _ in event_types), reverse=True)
    price_cents = STARTING_PRICE_CENTS

    transactions = []
    fees = []
    for event_type, offset in zip(event_types, offsets):
        price_cents += rng.randint(50_000, 200_000)
        timestamp = now - timedelta(seconds=offset)

        if event_type == 'Fee':
            fees.append(OnchainFee(
                amount_sats=rng.randint(100, 10_000),
                timestamp=timestamp,
                memo="Network fee" if rng.random() < 0.5 else None
            ))
            continue

        amount_sats = rng.randint(5_000, 1_000_000)
        if event_type == 'Buy':
            transaction_type = TransactionType.BUY
            memo = "DCA" if rng.random() < 0.3 else None
        else:
            transaction_type = TransactionType.SELL
            memo = "Emergency" if rng.random() < 0.4 else None

        transactions.append(LogicalTransaction(
            type=transaction_type,
            amount_sats=amount_sats,
            subtotal_cents=int(amount_sats / 100_000_000 * price_cents),
            fee_cents=0,
            memo=memo,
            timestamp=timestamp
        ))

    return transactions, fees

def seed_store(store: StorageService, rng: random.Random, now: datetime) -> Tuple[int, int]:
    """Write generated events to the store; returns (transactions, fees) written"""
    transactions, fees = generate_events(rng, now)
    for transaction in transactions:
        store.insert_transaction(transaction)
    for fee in fees:
        store.add_onchain_fee(fee)

    logger.info(f"Seeded {len(transactions)} transactions and {len(fees)} on-chain fees")
    return len(transactions), len(fees)
