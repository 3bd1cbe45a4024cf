"""Form controller, state snapshots, and event shapes."""

from formease.form.controller import FormController
from formease.form.events import FieldEvent, FieldProps, FieldTarget
from formease.form.state import FormState

__all__ = [
    "FieldEvent",
    "FieldProps",
    "FieldTarget",
    "FormController",
    "FormState",
]
