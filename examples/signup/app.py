"""Signup — registration form driven through a FormController.

Plays the part of a UI: feeds change/blur/submit events into the form
and prints what a template would show next to each field.

Demonstrates:
- Built-in rules: ``required``, ``email``, ``min_length``, ``strong_password``,
  ``match``, ``boolean``
- An async rule (simulated username lookup)
- ``has_error()`` hiding errors on untouched fields
- ``handle_submit()`` skipping the callback while the form is invalid

Run:
    python app.py
"""

import anyio

from formease import FormConfig, FormController
from formease.testing import blur_event, change_event, checkbox_event, submit_event
from formease.validation import (
    alpha_numeric,
    boolean,
    email,
    match,
    min_length,
    required,
    strong_password,
)

# ---------------------------------------------------------------------------
# In-memory "database"
# ---------------------------------------------------------------------------

_taken = {"admin", "root"}
_users: list[dict] = []


async def username_available(value, all_values):
    """Pretend to ask a server whether the username is free."""
    await anyio.sleep(0.01)
    if value and value.lower() in _taken:
        return "That username is taken"
    return None


# ---------------------------------------------------------------------------
# Form
# ---------------------------------------------------------------------------

SCHEMA = {
    "username": [required(), min_length(3), alpha_numeric(), username_available],
    "email": [required(), email()],
    "password": [required(), strong_password()],
    "confirm": [required(), match("password", "Passwords do not match")],
    "terms": [boolean(), lambda value, all_values: None if value else "You must accept the terms"],
}


def build_form() -> FormController:
    return FormController(
        {"username": "", "email": "", "password": "", "confirm": "", "terms": False},
        SCHEMA,
        FormConfig(),
    )


async def register(values: dict) -> None:
    _taken.add(values["username"].lower())
    _users.append({"username": values["username"], "email": values["email"]})


def render(form: FormController) -> str:
    """What a template would show: one line per field."""
    lines = []
    for name in SCHEMA:
        props = form.get_field_props(name)
        error = f"  <- {form.errors[name]}" if form.has_error(name) else ""
        lines.append(f"{name:>10}: {props.value!r}{error}")
    return "\n".join(lines)


async def main() -> None:
    form = build_form()
    submit = form.handle_submit(register)

    await form.handle_change(change_event("username", "admin"))
    await form.handle_blur(blur_event("username"))
    await form.handle_change(change_event("email", "not-an-email"))
    await form.handle_blur(blur_event("email"))
    print(render(form), end="\n\n")

    await form.handle_change(change_event("username", "alice"))
    await form.handle_change(change_event("email", "alice@example.com"))
    await form.handle_change(change_event("password", "Sup3r$ecret", type="password"))
    await form.handle_change(change_event("confirm", "Sup3r$ecret", type="password"))
    await form.handle_change(checkbox_event("terms", True))
    await submit(submit_event())
    print(render(form))
    print(f"\nRegistered: {_users}")


if __name__ == "__main__":
    anyio.run(main)
