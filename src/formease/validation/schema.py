"""Schema lookup and the fail-fast rule runner.

A schema maps field names to one rule or an ordered sequence of rules::

    schema = {
        "email": [required(), email()],
        "agree": boolean(),
    }

Fields without an entry have no rules and always pass.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from formease._internal.invoke import invoke
from formease.errors import ConfigurationError
from formease.validation.rules import Rule

type Schema = Mapping[str, Rule | Sequence[Rule]]


def rules_for(schema: Schema, name: str) -> tuple[Rule, ...]:
    """Return the ordered rules declared for *name*.

    Raises ``ConfigurationError`` when the entry is neither a callable
    nor a sequence of callables.
    """
    entry = schema.get(name)
    if entry is None:
        return ()
    if callable(entry):
        return (entry,)
    if isinstance(entry, Sequence) and not isinstance(entry, str | bytes):
        rules = tuple(entry)
        for rule in rules:
            if not callable(rule):
                msg = f"Schema entry for {name!r} contains a non-callable rule: {rule!r}"
                raise ConfigurationError(msg)
        return rules
    msg = f"Schema entry for {name!r} must be a rule or a sequence of rules, got {type(entry).__name__}"
    raise ConfigurationError(msg)


async def run_rules(
    rules: Sequence[Rule],
    value: Any,
    all_values: Mapping[str, Any],
) -> str | None:
    """Evaluate *rules* in order and return the first error.

    Every rule is awaited in turn, sync or not, so evaluation order is
    the declaration order. Remaining rules are skipped after a failure.
    """
    for rule in rules:
        error = await invoke(rule, value, all_values)
        if error:
            return error
    return None
