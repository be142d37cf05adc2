"""
Exceptions raised at the boundaries of the converter.

The parser itself never raises on malformed SQL; these are for callers
that need to turn a result into a failure.
"""


class DdlToErError(Exception):
    """Base class for all converter errors"""


class NoTablesFoundError(DdlToErError):
    """No CREATE TABLE statement could be extracted from the input"""

    def __init__(self, message: str = "No CREATE TABLE statements found in the SQL."):
        super().__init__(message)


class VisionServiceError(DdlToErError):
    """The vision service failed or returned an unusable answer"""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class VisionNotConfiguredError(VisionServiceError):
    """No API key is configured for the vision service"""
