"""River transaction export parsing"""
import logging
from typing import Dict, List

from sat_tracker.errors import ParseError
from sat_tracker.models.records import RiverRecord
from sat_tracker.models.transaction import LogicalTransaction, TransactionType
from sat_tracker.services.detector import read_rows
from sat_tracker.services.grouping import fingerprint_provider_id
from sat_tracker.services.parsing import btc_to_sats, usd_to_cents, parse_river_timestamp

logger = logging.getLogger(__name__)

class RiverCsvParser:
    """Turns River export rows into one transaction per row"""

    provider = 'river'

    REQUIRED_COLUMNS = ('Date', 'Sent Amount', 'Sent Currency', 'Received Amount', 'Received Currency', 'Tag')

    TAGS = {
        'Buy': TransactionType.BUY,
        'Sell': TransactionType.SELL,
    }

    def __init__(self, bitcoin_asset: str = 'BTC'):
        self.bitcoin_asset = bitcoin_asset
        self.currencies = {
            TransactionType.BUY: ('USD', bitcoin_asset),
            TransactionType.SELL: (bitcoin_asset, 'USD'),
        }

    def read(self, content: str, header_line: int) -> List[Dict[str, str]]:
        return read_rows(content, header_line, self.REQUIRED_COLUMNS)

    def _currencies_match(self, direction: TransactionType, sent: str, received: str) -> bool:
        return self.currencies[direction] == (sent, received)

    def is_bitcoin_trade(self, row: Dict[str, str]) -> bool:
        """Row is a Bitcoin buy or sell that an import would keep"""
        direction = self.TAGS.get(row.get('Tag', ''))
        if direction is None:
            return False
        return self._currencies_match(direction, row.get('Sent Currency', ''), row.get('Received Currency', ''))

    def parse_rows(self, rows: List[Dict[str, str]]) -> List[RiverRecord]:
        """Decode Bitcoin buy/sell rows, skipping other tags and currency pairs"""
        records = []
        for row in rows:
            tag = row.get('Tag', '')
            direction = self.TAGS.get(tag)
            if direction is None:
                logger.info(f"Skipping transaction with unsupported tag: {tag}")
                continue

            sent_currency = row.get('Sent Currency', '')
            received_currency = row.get('Received Currency', '')
            if not self._currencies_match(direction, sent_currency, received_currency):
                logger.info(
                    f"Skipping {direction.value} transaction with unexpected currencies: "
                    f"{sent_currency} -> {received_currency}"
                )
                continue

            records.append(RiverRecord(
                timestamp=parse_river_timestamp(row.get('Date', '')),
                sent_amount=row.get('Sent Amount', ''),
                sent_currency=sent_currency,
                received_amount=row.get('Received Amount', ''),
                received_currency=received_currency,
                fee_amount=row.get('Fee Amount', ''),
                fee_currency=row.get('Fee Currency', ''),
                tag=tag,
                direction=direction
            ))
        return records

    def group(self, records: List[RiverRecord]) -> List[List[RiverRecord]]:
        """River reports one row per transaction, processed oldest first"""
        return [[record] for record in sorted(records, key=lambda r: r.timestamp)]

    @staticmethod
    def _amounts(record: RiverRecord):
        """(btc amount, usd amount) strings for the record's direction"""
        if record.direction == TransactionType.BUY:
            return record.received_amount, record.sent_amount
        return record.sent_amount, record.received_amount

    def provider_id(self, group: List[RiverRecord]) -> str:
        record = group[0]
        btc_amount, _ = self._amounts(record)
        amount_sats = btc_to_sats(btc_amount, 'BTC amount')
        return fingerprint_provider_id(self.provider, record.timestamp, amount_sats)

    def build_transaction(self, group: List[RiverRecord], provider_id: str) -> LogicalTransaction:
        record = group[0]
        btc_amount, usd_amount = self._amounts(record)
        amount_sats = btc_to_sats(btc_amount, 'BTC amount')
        if amount_sats == 0:
            raise ParseError('BTC amount', btc_amount, "amount rounds to zero sats")
        subtotal_cents = usd_to_cents(usd_amount, 'USD amount')
        fee_cents = usd_to_cents(record.fee_amount, 'Fee Amount')

        return LogicalTransaction(
            type=record.direction,
            amount_sats=amount_sats,
            subtotal_cents=subtotal_cents,
            fee_cents=fee_cents,
            memo="River",
            timestamp=record.timestamp,
            provider_id=provider_id
        )
