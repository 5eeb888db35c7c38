"""
Error Types
Exceptions raised by the loading, cleaning and reporting stages.
"""


class PovertyAnalysisError(Exception):
    """Base class for pipeline errors."""


class LoadError(PovertyAnalysisError):
    """Input file is missing, unreadable or does not have the expected layout."""


class ParseError(PovertyAnalysisError):
    """A numeric or date cell could not be parsed."""

    def __init__(self, column: str, values: list):
        self.column = column
        self.values = values
        preview = ', '.join(repr(v) for v in values[:5])
        super().__init__(
            f"{len(values)} unparseable value(s) in column '{column}': {preview}"
        )


class WriteError(PovertyAnalysisError):
    """Output file could not be written."""
