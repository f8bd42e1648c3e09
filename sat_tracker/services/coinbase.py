"""Coinbase transaction export parsing"""
import logging
from typing import Dict, List

from sat_tracker.errors import ParseError
from sat_tracker.models.records import CoinbaseRecord
from sat_tracker.models.transaction import LogicalTransaction, TransactionType
from sat_tracker.services.detector import read_rows
from sat_tracker.services.grouping import group_by_time, grouped_provider_id
from sat_tracker.services.parsing import btc_to_sats, usd_to_cents, parse_coinbase_timestamp

logger = logging.getLogger(__name__)

class CoinbaseCsvParser:
    """Turns Coinbase export rows into grouped buy and sell transactions"""

    provider = 'coinbase'

    REQUIRED_COLUMNS = ('ID', 'Timestamp', 'Transaction Type', 'Asset', 'Quantity Transacted')

    TRANSACTION_TYPES = {
        'Buy': TransactionType.BUY,
        'Advanced Trade Buy': TransactionType.BUY,
        'Sell': TransactionType.SELL,
        'Advanced Trade Sell': TransactionType.SELL,
    }

    def __init__(self, bitcoin_asset: str = 'BTC', tolerance_seconds: float = 5):
        self.bitcoin_asset = bitcoin_asset
        self.tolerance_seconds = tolerance_seconds

    def read(self, content: str, header_line: int) -> List[Dict[str, str]]:
        return read_rows(content, header_line, self.REQUIRED_COLUMNS)

    def is_bitcoin_trade(self, row: Dict[str, str]) -> bool:
        """Row is a Bitcoin buy or sell that an import would keep"""
        return (row.get('Asset') == self.bitcoin_asset
                and row.get('Transaction Type') in self.TRANSACTION_TYPES)

    def parse_rows(self, rows: List[Dict[str, str]]) -> List[CoinbaseRecord]:
        """Decode Bitcoin buy/sell rows, skipping other assets and sub-types"""
        records = []
        for row in rows:
            if row.get('Asset') != self.bitcoin_asset:
                continue

            transaction_type = row.get('Transaction Type', '')
            direction = self.TRANSACTION_TYPES.get(transaction_type)
            if direction is None:
                logger.info(f"Skipping transaction type: {transaction_type}")
                continue

            records.append(CoinbaseRecord(
                record_id=row.get('ID', ''),
                timestamp=parse_coinbase_timestamp(row.get('Timestamp', '')),
                transaction_type=transaction_type,
                asset=row['Asset'],
                quantity_transacted=row.get('Quantity Transacted', ''),
                subtotal=row.get('Subtotal', ''),
                total_inclusive=row.get('Total (inclusive of fees and/or spread)', ''),
                fees_and_spread=row.get('Fees and/or Spread', ''),
                notes=row.get('Notes', ''),
                direction=direction
            ))
        return records

    def group(self, records: List[CoinbaseRecord]) -> List[List[CoinbaseRecord]]:
        """Split fills of one order arrive as several rows; buys first, then sells"""
        groups = []
        for direction in (TransactionType.BUY, TransactionType.SELL):
            partition = [r for r in records if r.direction == direction]
            direction_groups = group_by_time(partition, lambda r: r.timestamp, self.tolerance_seconds)
            logger.info(
                f"Grouped {len(partition)} {direction.value} records into {len(direction_groups)} transactions"
            )
            groups.extend(direction_groups)
        return groups

    @staticmethod
    def native_id(record: CoinbaseRecord) -> str:
        if record.record_id:
            return record.record_id
        return f"{int(record.timestamp.timestamp())}_{record.quantity_transacted}"

    def provider_id(self, group: List[CoinbaseRecord]) -> str:
        return grouped_provider_id(self.provider, [self.native_id(r) for r in group])

    def build_transaction(self, group: List[CoinbaseRecord], provider_id: str) -> LogicalTransaction:
        """Sum amounts across the group; the first row supplies the timestamp"""
        amount_sats = 0
        subtotal_cents = 0
        fee_cents = 0
        notes = []

        for record in group:
            amount_sats += btc_to_sats(record.quantity_transacted, 'Quantity Transacted')
            subtotal_cents += usd_to_cents(record.subtotal, 'Subtotal')
            fee_cents += usd_to_cents(record.fees_and_spread, 'Fees and/or Spread')
            if record.notes:
                notes.append(record.notes)

        if amount_sats == 0:
            raw = ', '.join(r.quantity_transacted for r in group)
            raise ParseError('Quantity Transacted', raw, "amount rounds to zero sats")

        if len(group) > 1:
            memo = f"Coinbase (grouped {len(group)} transactions): {', '.join(notes)}"
        else:
            memo = f"Coinbase: {', '.join(notes)}"

        return LogicalTransaction(
            type=group[0].direction,
            amount_sats=amount_sats,
            subtotal_cents=subtotal_cents,
            fee_cents=fee_cents,
            memo=memo,
            timestamp=group[0].timestamp,
            provider_id=provider_id
        )
