"""Back-filling undocumented historical purchases as evenly spaced buys"""
import logging
import random
from datetime import datetime, timedelta
from typing import List, Optional

from sat_tracker.models.transaction import LogicalTransaction, TransactionType, ensure_utc
from sat_tracker.services.storage import StorageService

logger = logging.getLogger(__name__)

FREQUENCY_DAYS = {
    'daily': 1,
    'weekly': 7,
    'monthly': 30,
}

def create_lumpsum_transactions(
        store: StorageService,
        start: datetime,
        end: datetime,
        total_sats: int,
        total_usd_cents: int,
        frequency: str,
        memo: Optional[str] = None,
        rng: Optional[random.Random] = None
) -> List[LogicalTransaction]:
    """
    Spread a lump sum over regular buys between start and end.

    Args:
        store: Transaction store to write into
        start: First purchase time, must be before end
        end: End of the period
        total_sats: Sats to distribute
        total_usd_cents: Cost basis to distribute
        frequency: 'daily', 'weekly' or 'monthly'
        memo: Memo for every buy; defaults to "DCA <4-digit id>"
        rng: Random source for the default memo

    Returns:
        The created transactions, oldest first

    Raises:
        ValueError: If the dates or frequency are invalid
    """
    start = ensure_utc(start)
    end = ensure_utc(end)
    if start >= end:
        raise ValueError("Start date must be before end date")

    interval_days = FREQUENCY_DAYS.get(frequency)
    if interval_days is None:
        raise ValueError("Invalid frequency. Use 'daily', 'weekly', or 'monthly'")

    if memo is None:
        memo = f"DCA {(rng or random.Random()).randint(1000, 9999)}"

    intervals = max((end - start).days // interval_days, 1)
    if total_sats < intervals:
        raise ValueError(f"total_sats must cover at least one sat per interval ({intervals} intervals)")

    sats_per_interval, remaining_sats = divmod(total_sats, intervals)
    cents_per_interval, remaining_cents = divmod(total_usd_cents, intervals)

    created = []
    current = start
    for i in range(intervals):
        is_last = i == intervals - 1
        transaction = LogicalTransaction(
            type=TransactionType.BUY,
            amount_sats=sats_per_interval + (remaining_sats if is_last else 0),
            subtotal_cents=cents_per_interval + (remaining_cents if is_last else 0),
            fee_cents=0,
            memo=memo,
            timestamp=current
        )
        created.append(store.insert_transaction(transaction))
        current += timedelta(days=interval_days)

    logger.info(f"Created {len(created)} {frequency} lump-sum transactions ({memo})")
    return created
