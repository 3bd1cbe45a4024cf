"""Validation result — immutable container for validated data or errors."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating a value mapping against a schema.

    ``is_valid`` is True when there are no errors.
    The result is falsy when invalid, so you can write::

        result = await validate(form, schema)
        if not result:
            return render_form(form, errors=result.errors)

    ``data`` contains the values of every field that passed.

    ``errors`` maps each failing field to its first error message::

        {"title": "This field is required",
         "email": "Please enter a valid email"}
    """

    data: dict[str, Any]
    errors: dict[str, str]

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    def __bool__(self) -> bool:
        """Falsy when invalid — enables ``if not result:`` pattern."""
        return self.is_valid
