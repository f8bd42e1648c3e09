"""CSV import orchestration: detect, parse, group, deduplicate, store"""
import logging
from pathlib import Path
from typing import List, Optional, Union

from sat_tracker.config import Settings, settings as default_settings
from sat_tracker.models.imports import CsvFormat, CsvPreview
from sat_tracker.models.transaction import LogicalTransaction
from sat_tracker.services.coinbase import CoinbaseCsvParser
from sat_tracker.services.detector import detect_csv_format
from sat_tracker.services.river import RiverCsvParser
from sat_tracker.services.storage import StorageService

logger = logging.getLogger(__name__)

class CsvImporter:
    """Imports exchange CSV exports into the transaction store"""

    def __init__(self, store: StorageService, settings: Optional[Settings] = None):
        """Initialize importer with a store and settings"""
        self.store = store
        self.settings = settings or default_settings

        self.parsers = {
            CsvFormat.COINBASE: CoinbaseCsvParser(
                bitcoin_asset=self.settings.BITCOIN_ASSET,
                tolerance_seconds=self.settings.GROUPING_TOLERANCE_SECONDS
            ),
            CsvFormat.RIVER: RiverCsvParser(bitcoin_asset=self.settings.BITCOIN_ASSET),
        }

    @staticmethod
    def _read_file(file_path: Union[str, Path]) -> str:
        try:
            return Path(file_path).read_text(encoding='utf-8-sig')
        except OSError as e:
            logger.error(f"Failed to read file '{file_path}': {e}")
            raise

    def analyze(self, content: str) -> CsvPreview:
        """Report the detected format and how many rows an import would use, without writing"""
        detected = detect_csv_format(content)
        parser = self.parsers[detected.format]
        rows = parser.read(content, detected.header_line)

        return CsvPreview(
            format=detected.format.value,
            headers_found_at_line=detected.header_line + 1,
            bitcoin_transactions_found=sum(1 for row in rows if parser.is_bitcoin_trade(row)),
            total_rows_in_file=len(rows),
            sample_records=rows[:self.settings.PREVIEW_SAMPLE_SIZE]
        )

    def analyze_file(self, file_path: Union[str, Path]) -> CsvPreview:
        return self.analyze(self._read_file(file_path))

    def import_csv(self, content: str) -> List[LogicalTransaction]:
        """
        Import an export and return the transactions that were newly created.

        Groups are written one at a time. A parse failure stops the import but
        keeps the groups already written; re-running after fixing the file
        skips them as duplicates.

        Raises:
            FormatError: Unknown format or missing columns, before any writes
            ParseError: Unparsable amount or timestamp
            StoreError: Store read or write failed
        """
        detected = detect_csv_format(content)
        parser = self.parsers[detected.format]

        rows = parser.read(content, detected.header_line)
        records = parser.parse_rows(rows)
        created = []

        try:
            for group in parser.group(records):
                provider_id = parser.provider_id(group)

                if self.store.transaction_exists(provider_id):
                    logger.info(f"Skipping duplicate transaction with provider_id: {provider_id}")
                    continue

                transaction = parser.build_transaction(group, provider_id)
                created.append(self.store.insert_transaction(transaction))
                logger.info(
                    f"Created {detected.format.value} {transaction.type.value} transaction: "
                    f"{transaction.amount_sats} sats ({provider_id})"
                )
        except Exception as e:
            logger.error(f"Error importing {detected.format.value} CSV after {len(created)} transactions: {e}")
            raise

        logger.info(f"Successfully imported {len(created)} transactions from {detected.format.value} CSV")
        return created

    def import_file(self, file_path: Union[str, Path]) -> List[LogicalTransaction]:
        return self.import_csv(self._read_file(file_path))
