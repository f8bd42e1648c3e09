"""Money and timestamp parsing for exchange exports"""
import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from sat_tracker.errors import ParseError

SATS_PER_BTC = Decimal(100_000_000)
CENTS_PER_USD = Decimal(100)

RFC3339_RE = re.compile(
    r'^(\d{4}-\d{2}-\d{2})[Tt](\d{2}:\d{2}:\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})$'
)

def _to_decimal(text: str, field: str) -> Decimal:
    try:
        value = Decimal(text.strip())
    except (InvalidOperation, AttributeError):
        raise ParseError(field, text, "not a decimal number")
    if not value.is_finite():
        raise ParseError(field, text, "not a finite number")
    return value

def _round_abs(value: Decimal) -> int:
    # Sign carries no meaning here, direction comes from the transaction type
    return int(abs(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))

def btc_to_sats(text: str, field: str = 'BTC amount') -> int:
    """Convert a decimal BTC quantity string to absolute satoshis"""
    return _round_abs(_to_decimal(text, field) * SATS_PER_BTC)

def usd_to_cents(text: str, field: str = 'USD amount') -> int:
    """
    Convert a currency string like "$1,234.56" to absolute cents.
    Blank input means the provider omitted the field and yields 0.
    """
    trimmed = (text or '').strip()
    if not trimmed:
        return 0
    cleaned = trimmed.replace('$', '').replace(',', '')
    try:
        return _round_abs(_to_decimal(cleaned, field) * CENTS_PER_USD)
    except ParseError:
        raise ParseError(field, text, "not a currency amount")

def parse_rfc3339(text: str) -> datetime:
    """Parse "2024-01-15T10:30:45Z" style timestamps; ValueError otherwise"""
    match = RFC3339_RE.match(text.strip())
    if not match:
        raise ValueError(f"not an RFC3339 timestamp: {text}")

    day, clock, fraction, offset = match.groups()
    # fromisoformat before 3.11 only takes 3 or 6 fraction digits
    micros = (fraction or '').ljust(6, '0')[:6]
    if offset in ('Z', 'z'):
        offset = '+00:00'
    value = datetime.fromisoformat(f"{day}T{clock}.{micros}{offset}")
    return value.astimezone(timezone.utc)

def parse_naive_utc(text: str) -> datetime:
    """Parse "YYYY-MM-DD HH:MM:SS" and treat it as UTC; ValueError otherwise"""
    return datetime.strptime(text.strip(), '%Y-%m-%d %H:%M:%S').replace(tzinfo=timezone.utc)

def parse_coinbase_timestamp(text: str) -> datetime:
    """RFC3339 first, then the "2025-10-10 21:28:40 UTC" export format"""
    try:
        return parse_rfc3339(text)
    except ValueError:
        pass

    try:
        return parse_naive_utc(text.strip().removesuffix(' UTC'))
    except ValueError:
        raise ParseError('Coinbase timestamp', text, "unsupported format")

def parse_river_timestamp(text: str) -> datetime:
    try:
        return parse_naive_utc(text)
    except ValueError as e:
        raise ParseError('River timestamp', text, str(e))
