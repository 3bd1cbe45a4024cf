"""FormState — one immutable snapshot of everything a form tracks.

Values, errors, touched flags, and the submitting flag move together.
Every transition returns a new snapshot, so the controller swaps state
in a single assignment and callers never see a half-applied update.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True)
class FormState:
    """Immutable form state.

    The three maps are read-only views over private copies::

        state = FormState(values={"email": ""})
        state = state.with_value("email", "a@b.com").with_touched("email")
        state.values["email"]  # "a@b.com"
    """

    values: Mapping[str, Any] = field(default_factory=dict)
    errors: Mapping[str, str] = field(default_factory=dict)
    touched: Mapping[str, bool] = field(default_factory=dict)
    submitting: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))
        object.__setattr__(self, "errors", MappingProxyType(dict(self.errors)))
        object.__setattr__(self, "touched", MappingProxyType(dict(self.touched)))

    # -- Values --

    def with_value(self, name: str, value: Any) -> FormState:
        return replace(self, values={**self.values, name: value})

    # -- Errors --

    def with_error(self, name: str, error: str | None) -> FormState:
        """Set *name*'s error. A falsy *error* removes the entry."""
        if not error:
            return self.without_error(name)
        return replace(self, errors={**self.errors, name: error})

    def with_errors(self, errors: Mapping[str, str]) -> FormState:
        """Merge *errors* over the current ones; other fields keep theirs."""
        return replace(self, errors={**self.errors, **errors})

    def without_error(self, name: str) -> FormState:
        if name not in self.errors:
            return self
        return replace(self, errors=_drop(self.errors, name))

    def without_errors(self) -> FormState:
        return replace(self, errors={})

    # -- Touched / submitting --

    def with_touched(self, name: str, touched: bool = True) -> FormState:
        return replace(self, touched={**self.touched, name: touched})

    def with_submitting(self, submitting: bool) -> FormState:
        return replace(self, submitting=submitting)

    # -- Whole field --

    def without_field(self, name: str) -> FormState:
        """Forget *name* entirely: value, error, and touched flag."""
        return replace(
            self,
            values=_drop(self.values, name),
            errors=_drop(self.errors, name),
            touched=_drop(self.touched, name),
        )


def _drop[V](mapping: Mapping[str, V], name: str) -> dict[str, V]:
    return {key: value for key, value in mapping.items() if key != name}
