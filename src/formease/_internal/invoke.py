"""Invoke helper — await a rule, predicate, or submit callback if needed.

A field's schema can mix ``def`` and ``async def`` rules freely.
``run_rules`` awaits each rule through ``invoke`` before looking at the
next one, so fail-fast order is the list order whether a rule answers
immediately or after a network round trip. ``custom()`` and
``FormController.handle_submit`` go through the same path.

Usage::

    from formease._internal.invoke import invoke

    error = await invoke(rule, value, all_values)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it's awaitable.

    A schema entry like ``[required(), username_free]`` works whichever
    way ``username_free`` is written::

        # checked against a local set; returns the message directly
        def username_free(value, all_values):
            return "Username is taken" if value in RESERVED else None

        # checked against the backend; the coroutine is awaited here
        async def username_free(value, all_values):
            return "Username is taken" if await users.exists(value) else None

    Rule exceptions are not caught; they surface from ``validate_field``.
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
