"""Form validation — composable rules, clean results.

Usage::

    from formease.validation import validate, required, max_length, email

    async def create_post(form):
        result = await validate(form, {
            "title": [required(), max_length(200)],
            "body": [required()],
            "email": [required(), email()],
        })
        if not result:
            return render("form.html", form=form, errors=result.errors)
        # result.data has the values that passed
"""

from collections.abc import Mapping
from typing import Any

from formease.validation.result import ValidationResult
from formease.validation.rules import (
    DROPDOWN_UNSELECTED,
    Rule,
    alpha,
    alpha_numeric,
    boolean,
    custom,
    date,
    different_from,
    dropdown,
    email,
    future_date,
    match,
    max_length,
    max_value_allowed,
    min_length,
    min_value_allowed,
    number,
    pattern,
    required,
    required_if,
    strong_password,
    url,
)
from formease.validation.schema import Schema, rules_for, run_rules

__all__ = [
    "DROPDOWN_UNSELECTED",
    "Rule",
    "Schema",
    "ValidationResult",
    "alpha",
    "alpha_numeric",
    "boolean",
    "custom",
    "date",
    "different_from",
    "dropdown",
    "email",
    "future_date",
    "match",
    "max_length",
    "max_value_allowed",
    "min_length",
    "min_value_allowed",
    "number",
    "pattern",
    "required",
    "required_if",
    "strong_password",
    "url",
    "validate",
]


async def validate(data: Mapping[str, Any], schema: Schema) -> ValidationResult:
    """Validate data against a schema in one shot.

    Args:
        data: Any mapping of field names to values — a plain ``dict``,
            a controller's ``values``, or parsed form data.
        schema: A dict mapping field names to a rule or a list of rules.
            Each rule returns an error message on failure, or ``None``
            on success, and may be async.

    Returns:
        A ``ValidationResult`` with ``.data`` (values of passing fields)
        and ``.errors`` (field → first error message).

    Example::

        result = await validate(form, {
            "title": [required(), max_length(200)],
            "body": [required(), min_length(10)],
        })
        if not result:
            # result.errors == {"body": "Must be at least 10 characters"}
            ...
    """
    errors: dict[str, str] = {}
    cleaned: dict[str, Any] = {}

    for field_name in schema:
        value = data.get(field_name)
        error = await run_rules(rules_for(schema, field_name), value, data)
        if error:
            errors[field_name] = error
        else:
            cleaned[field_name] = value

    return ValidationResult(data=cleaned, errors=errors)
