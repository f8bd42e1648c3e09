"""Error types raised by the import and metrics engines"""

class SatTrackerError(Exception):
    """Base exception for sat tracker errors"""
    pass

class FormatError(SatTrackerError):
    """File content matches no known exchange export format"""
    pass

class ParseError(SatTrackerError):
    """A single field of an exchange export could not be parsed"""

    def __init__(self, field: str, value: str, reason: str = ''):
        self.field = field
        self.value = value
        message = f"Failed to parse {field} '{value}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)

class StoreError(SatTrackerError):
    """Underlying transaction store operation failed"""
    pass
