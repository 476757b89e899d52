"""Exception hierarchy for polardigest.

Malformed sample tokens and empty channels never raise; these exceptions
cover input that cannot be interpreted at all.
"""


class PolarDigestError(Exception):
    """Base class for all polardigest errors."""


class ClockFormatError(PolarDigestError, ValueError):
    """A clock-of-day label or timestamp could not be parsed."""


class UnknownEntityError(PolarDigestError, ValueError):
    """The pipeline was asked to summarize an entity kind it does not know."""
