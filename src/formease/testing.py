"""Test helpers — build the events a UI would send.

Usage::

    from formease.testing import blur_event, change_event

    await form.handle_change(change_event("email", "a@b.com"))
    await form.handle_blur(blur_event("email"))
"""

from typing import Any

from formease.form.events import FieldEvent, FieldTarget


def change_event(name: str, value: Any, *, type: str = "text") -> FieldEvent:  # noqa: A002
    """A change event for a regular input."""
    return FieldEvent(target=FieldTarget(name=name, value=value, type=type))


def checkbox_event(name: str, checked: bool, *, value: Any = "on") -> FieldEvent:
    """A change event for a checkbox; the form reads ``checked``."""
    return FieldEvent(target=FieldTarget(name=name, value=value, type="checkbox", checked=checked))


def blur_event(name: str) -> FieldEvent:
    """A blur event for *name*."""
    return FieldEvent(target=FieldTarget(name=name))


def submit_event() -> FieldEvent:
    """A submit event with no target; records ``prevent_default()``."""
    return FieldEvent()
