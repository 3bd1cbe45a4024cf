"""formease — form state and composable validation for Python UIs.

Tracks field values, errors, and touched flags, and runs declarative
rules on change, on blur, and on submit.

Basic usage::

    from formease import FormController
    from formease.validation import required, email, min_length, match

    form = FormController(
        {"email": "", "password": "", "confirm": ""},
        {
            "email": [required(), email()],
            "password": [required(), min_length(8)],
            "confirm": [required(), match("password")],
        },
    )

    submit = form.handle_submit(save_account)
    await submit(event)

One-shot validation, no controller::

    from formease import validate
    result = await validate(data, schema)
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "FieldEvent",
    "FieldProps",
    "FieldTarget",
    "FormConfig",
    "FormController",
    "FormState",
    "FormeaseError",
    "ValidationResult",
    "validate",
]

# Public name → defining module
_LAZY_IMPORTS: dict[str, str] = {
    "ConfigurationError": "formease.errors",
    "FieldEvent": "formease.form.events",
    "FieldProps": "formease.form.events",
    "FieldTarget": "formease.form.events",
    "FormConfig": "formease.config",
    "FormController": "formease.form.controller",
    "FormState": "formease.form.state",
    "FormeaseError": "formease.errors",
    "ValidationResult": "formease.validation.result",
    "validate": "formease.validation",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import formease`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    from importlib import import_module

    return getattr(import_module(module_name), name)
