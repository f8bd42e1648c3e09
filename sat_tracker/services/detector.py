"""Exchange export format detection"""
import csv
import io
import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

from sat_tracker.errors import FormatError
from sat_tracker.models.imports import CsvFormat

logger = logging.getLogger(__name__)

# Substrings that must all appear on a header line; checked in this order
FINGERPRINTS: Dict[CsvFormat, Tuple[str, ...]] = {
    CsvFormat.COINBASE: ('ID', 'Timestamp', 'Transaction Type'),
    CsvFormat.RIVER: ('Date', 'Sent Amount', 'Sent Currency', 'Received Amount', 'Received Currency', 'Tag'),
}

@dataclass
class DetectedFormat:
    format: CsvFormat
    header_line: int  # zero-based

def split_lines(content: str) -> List[str]:
    """Physical lines split on LF only; a trailing CR is left for the csv reader"""
    return content.lstrip('\ufeff').split('\n')

def detect_csv_format(content: str) -> DetectedFormat:
    """
    Find the first line carrying a known header fingerprint.

    Exports may start with preamble rows, so every line is scanned and the
    match gives the offset where the real CSV begins.

    Raises:
        FormatError: If the file is empty or no fingerprint matches
    """
    lines = split_lines(content)
    if not any(line.strip() for line in lines):
        raise FormatError("Empty CSV file")

    for i, line in enumerate(lines):
        for csv_format, required in FINGERPRINTS.items():
            if all(token in line for token in required):
                logger.info(f"Found {csv_format.value} format at line {i}")
                return DetectedFormat(format=csv_format, header_line=i)

    raise FormatError("Unrecognized CSV format. Expected Coinbase or River format.")

def read_rows(content: str, header_line: int, required_columns: Tuple[str, ...]) -> List[Dict[str, str]]:
    """
    Read CSV rows starting at the detected header line.

    Columns are selected by name so reordered or extra columns are tolerated.
    Missing trailing cells come back as empty strings.

    Raises:
        FormatError: If a required column is absent from the header
    """
    csv_data = io.StringIO('\n'.join(split_lines(content)[header_line:]), newline='')
    reader = csv.DictReader(csv_data)

    fieldnames = [name.strip() for name in (reader.fieldnames or [])]
    missing = [column for column in required_columns if column not in fieldnames]
    if missing:
        raise FormatError(f"Missing required columns: {', '.join(missing)}")
    reader.fieldnames = fieldnames

    rows = []
    for row in reader:
        rows.append({
            key: (value or '').strip()
            for key, value in row.items()
            if key is not None
        })
    return rows
