"""
gpxparser — Errors

Only tokenizer-level failures are fatal. Content-level problems (bad numbers,
bad timestamps, unknown elements) never surface here.
"""


class GPXParserError(Exception):
    """Base class for fatal parse failures."""

    label = "Error"

    def __init__(self, detail: str = ""):
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.label}: {self.detail}"


class InitializationError(GPXParserError):
    """The tokenizer could not be constructed from the given source."""
    label = "Initialization error"


class ParsingError(GPXParserError):
    """The tokenizer reported malformed XML."""
    label = "Parsing error"


class GeneralError(GPXParserError):
    label = "General error"
