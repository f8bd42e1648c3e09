"""CSV import format and preview models"""
from enum import Enum
from typing import Any, Dict, List
from pydantic import BaseModel

class CsvFormat(Enum):
    """Supported exchange export formats"""
    COINBASE = "Coinbase"
    RIVER = "River"

class CsvPreview(BaseModel):
    """
    Result of analyzing an export without writing anything.

    Attributes:
        format: Detected provider name
        headers_found_at_line: 1-based line number of the real header row
        bitcoin_transactions_found: Rows that an import would turn into buys or sells
        total_rows_in_file: Data rows after the header
        sample_records: First few raw rows keyed by column name
    """
    format: str
    headers_found_at_line: int
    bitcoin_transactions_found: int = 0
    total_rows_in_file: int = 0
    sample_records: List[Dict[str, Any]] = []
