"""
Error taxonomy for the extraction run.

None of these are recovered locally; they abort the run.
"""


class ExtractionError(Exception):
    """Base class for failures that abort an extraction run."""


class AuthError(ExtractionError):
    """Login or portal session bootstrap failed."""


class DiscoveryError(ExtractionError):
    """The search index request failed."""


class FetchError(ExtractionError):
    """The batch company details request failed."""
