"""Event shapes consumed and produced by the form controller.

Host adapters pass in any object with a ``target`` exposing ``name``,
``value``, ``type``, and (for checkboxes) ``checked`` — as attributes or
mapping keys. ``FieldEvent`` and ``FieldTarget`` are ready-made
implementations of that shape.
"""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from formease.errors import ConfigurationError

type EventHandler = Callable[[Any], Awaitable[None]]


@dataclass(slots=True)
class FieldTarget:
    """The input element an event came from."""

    name: str
    value: Any = ""
    type: str = "text"
    checked: bool = False


@dataclass(slots=True)
class FieldEvent:
    """A change, blur, or submit event.

    Records whether ``prevent_default()`` was called so tests and
    adapters can check it.
    """

    target: FieldTarget | None = None
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


@dataclass(frozen=True, slots=True)
class FieldProps:
    """Everything an input needs to bind to a form field.

    Usage::

        props = form.get_field_props("email")
        render_input(name=props.name, value=props.value,
                     on_change=props.on_change, on_blur=props.on_blur)
    """

    name: str
    value: Any
    on_change: EventHandler
    on_blur: EventHandler


def _get(obj: Any, key: str, default: Any = None) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(key, default)
    return getattr(obj, key, default)


def read_name(event: Any) -> str:
    """Return the field name of *event*'s target.

    Raises ``ConfigurationError`` when the target has no name.
    """
    target = _get(event, "target")
    name = _get(target, "name") if target is not None else None
    if not name:
        msg = f"Event target has no field name: {event!r}"
        raise ConfigurationError(msg)
    return name


def read_event(event: Any) -> tuple[str, Any]:
    """Return ``(name, value)`` for a change event.

    Checkbox targets report their ``checked`` flag, everything else
    its raw ``value``.
    """
    name = read_name(event)
    target = _get(event, "target")
    if _get(target, "type") == "checkbox":
        return name, bool(_get(target, "checked", False))
    return name, _get(target, "value")


def prevent_default(event: Any) -> None:
    """Suppress the event's default behavior, if it has any."""
    for attr in ("prevent_default", "preventDefault"):
        method = getattr(event, attr, None)
        if callable(method):
            method()
            return
