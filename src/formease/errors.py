"""formease exception hierarchy.

Validation failures are data, not exceptions: rules return error strings
and the controller stores them. Exceptions here signal programmer
misconfiguration only.
"""


class FormeaseError(Exception):
    """Base for all formease-specific errors."""


class ConfigurationError(FormeaseError):
    """Raised when a schema entry or an event cannot be interpreted.

    Typically surfaces the first time the offending field is validated,
    not at controller construction.
    """
