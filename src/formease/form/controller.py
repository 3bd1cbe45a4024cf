"""FormController — form state plus validation orchestration.

Owns one ``FormState`` and exposes the operations a UI binds to::

    from formease import FormController, FormConfig
    from formease.validation import required, email

    form = FormController(
        {"email": ""},
        {"email": [required(), email()]},
        FormConfig(validate_on_change=True),
    )

    await form.handle_blur(event)      # marks touched, validates
    await form.handle_change(event)    # writes value, re-validates if touched
    submit = form.handle_submit(save)  # validates everything, then calls save(values)

Untouched fields are never validated on change, so typing into a fresh
field does not flash errors before the first blur.

Overlapping validations:
    Each field has a generation counter, bumped by every write to its
    value or error. A validation result is kept only if the generation
    it started under is still current, so a slow validation of an old
    value cannot overwrite the result for a newer one. Disable with
    ``FormConfig(discard_stale_validations=False)``.
"""

import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any

from formease._internal.invoke import invoke
from formease.config import FormConfig
from formease.form.events import FieldProps, prevent_default, read_event, read_name
from formease.form.state import FormState
from formease.validation.schema import Schema, rules_for, run_rules

logger = logging.getLogger("formease.form")

type SubmitCallback = Callable[[dict[str, Any]], Any]
type SubmitHandler = Callable[..., Awaitable[None]]


class FormController:
    """Tracks values, errors, and touched flags for one form.

    Args:
        initial_values: Starting field values. Restored by ``reset()``.
        schema: Field name → rule or list of rules. Fields without an
            entry always pass.
        config: Validation triggers and seed state. Defaults to
            ``FormConfig()``.
    """

    def __init__(
        self,
        initial_values: Mapping[str, Any] | None = None,
        schema: Schema | None = None,
        config: FormConfig | None = None,
    ) -> None:
        self._config = config or FormConfig()
        self._schema: Schema = schema if schema is not None else {}
        self._initial = FormState(
            values=initial_values or {},
            errors=self._config.initial_errors,
            touched=self._config.initial_touched,
        )
        self._state = self._initial
        self._epoch = 0
        self._generations: dict[str, int] = {}

    def __repr__(self) -> str:
        return (
            f"FormController(fields={list(self._state.values)!r}, "
            f"errors={dict(self._state.errors)!r}, submitting={self._state.submitting!r})"
        )

    # -- State --

    @property
    def state(self) -> FormState:
        """The current immutable snapshot."""
        return self._state

    @property
    def values(self) -> Mapping[str, Any]:
        return self._state.values

    @property
    def errors(self) -> Mapping[str, str]:
        return self._state.errors

    @property
    def touched(self) -> Mapping[str, bool]:
        return self._state.touched

    @property
    def is_submitting(self) -> bool:
        return self._state.submitting

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def config(self) -> FormConfig:
        return self._config

    # -- Generations --

    def _stamp(self, name: str) -> tuple[int, int]:
        return self._epoch, self._generations.get(name, 0)

    def _bump(self, name: str) -> None:
        self._generations[name] = self._generations.get(name, 0) + 1

    def _bump_all(self) -> None:
        self._epoch += 1
        self._generations.clear()

    def _is_current(self, name: str, stamp: tuple[int, int]) -> bool:
        if not self._config.discard_stale_validations:
            return True
        if self._stamp(name) == stamp:
            return True
        logger.debug("Discarding stale validation result for %r", name)
        return False

    # -- Validation --

    async def validate_field(
        self,
        name: str,
        value: Any,
        all_values: Mapping[str, Any] | None = None,
    ) -> str | None:
        """Return the first error *value* produces for *name*, or ``None``.

        Rules run in declaration order and stop at the first failure.
        Does not touch form state; *all_values* defaults to the current
        values.
        """
        if all_values is None:
            all_values = self._state.values
        return await run_rules(rules_for(self._schema, name), value, all_values)

    async def validate_fields(
        self,
        names: Iterable[str] | None = None,
        values: Mapping[str, Any] | None = None,
    ) -> bool:
        """Validate *names* (default: every schema field) and record failures.

        Errors found are merged into ``errors``; fields that pass keep
        whatever entry they already had. Returns True when every
        visited field passed.
        """
        field_names = list(self._schema) if names is None else list(names)
        vals = self._state.values if values is None else values
        stamps = {name: self._stamp(name) for name in field_names}

        found: dict[str, str] = {}
        for name in field_names:
            error = await self.validate_field(name, vals.get(name), vals)
            if error:
                found[name] = error

        fresh = {name: error for name, error in found.items() if self._is_current(name, stamps[name])}
        if fresh:
            self._state = self._state.with_errors(fresh)
        return not found

    async def validate(self) -> bool:
        """Validate every schema field. Returns True when all pass."""
        return await self.validate_fields(list(self._schema))

    async def _validate_into_errors(self, name: str) -> None:
        stamp = self._stamp(name)
        values = self._state.values
        error = await self.validate_field(name, values.get(name), values)
        if error and self._is_current(name, stamp):
            self._state = self._state.with_error(name, error)

    # -- Event handlers --

    async def handle_change(self, event: Any) -> None:
        """Write the event's value and clear the field's error.

        Re-validates only when ``validate_on_change`` is set and the
        field has been touched.
        """
        name, value = read_event(event)
        self._bump(name)
        self._state = self._state.with_value(name, value).without_error(name)

        if self._config.validate_on_change and self._state.touched.get(name):
            await self._validate_into_errors(name)

    async def handle_blur(self, event: Any) -> None:
        """Mark the field touched and validate it if ``validate_on_blur``."""
        name = read_name(event)
        self._state = self._state.with_touched(name)

        if self._config.validate_on_blur:
            await self._validate_into_errors(name)

    def handle_submit(self, on_submit: SubmitCallback) -> SubmitHandler:
        """Wrap *on_submit* in a submit event handler.

        The handler validates the whole form first (when
        ``validate_on_submit``) and calls ``on_submit(values)`` only if
        it passes. Exceptions from *on_submit* are logged, not raised.
        ``is_submitting`` is True for the duration and always False
        afterwards.
        """

        async def submit(event: Any = None) -> None:
            if event is not None:
                prevent_default(event)
            self._state = self._state.with_submitting(True)
            try:
                if self._config.validate_on_submit and not await self.validate():
                    return
                try:
                    await invoke(on_submit, dict(self._state.values))
                except Exception:
                    logger.exception("Form submission error")
            finally:
                self._state = self._state.with_submitting(False)

        return submit

    # -- Direct writes --

    def set_value(self, name: str, value: Any) -> None:
        """Set a value without validating."""
        self._bump(name)
        self._state = self._state.with_value(name, value)

    def set_error(self, name: str, error: str | None) -> None:
        """Set an error without validating. ``None`` removes it."""
        self._bump(name)
        self._state = self._state.with_error(name, error)

    def clear_field(self, name: str) -> None:
        """Remove *name* from values, errors, and touched."""
        self._bump(name)
        self._state = self._state.without_field(name)

    def clear_errors(self) -> None:
        self._bump_all()
        self._state = self._state.without_errors()

    def reset(self) -> None:
        """Restore the construction-time values, errors, and touched flags."""
        self._bump_all()
        self._state = self._initial

    # -- Accessors --

    def has_error(self, name: str) -> bool:
        """True if *name* has an error and has been touched."""
        return bool(self._state.errors.get(name)) and bool(self._state.touched.get(name))

    def get_field_props(self, name: str) -> FieldProps:
        """Bundle ``name``, ``value``, ``on_change``, and ``on_blur`` for an input."""
        value = self._state.values.get(name)
        return FieldProps(
            name=name,
            value="" if value is None else value,
            on_change=self.handle_change,
            on_blur=self.handle_blur,
        )
