"""Tests for formease.form.state — immutable snapshots and transitions."""

import pytest

from formease.form.state import FormState


class TestFormState:
    def test_defaults(self) -> None:
        state = FormState()
        assert dict(state.values) == {}
        assert dict(state.errors) == {}
        assert dict(state.touched) == {}
        assert state.submitting is False

    def test_frozen(self) -> None:
        state = FormState()
        with pytest.raises(AttributeError):
            state.submitting = True  # type: ignore[misc]

    def test_maps_are_copies(self) -> None:
        values = {"name": "alice"}
        state = FormState(values=values)
        values["name"] = "bob"
        assert state.values["name"] == "alice"

    def test_maps_are_read_only(self) -> None:
        state = FormState(values={"name": "alice"})
        with pytest.raises(TypeError):
            state.values["name"] = "bob"  # type: ignore[index]

    def test_equality(self) -> None:
        assert FormState(values={"a": 1}) == FormState(values={"a": 1})
        assert FormState(values={"a": 1}) != FormState(values={"a": 2})


class TestTransitions:
    def test_with_value_returns_new_state(self) -> None:
        before = FormState(values={"name": ""})
        after = before.with_value("name", "alice")
        assert after.values["name"] == "alice"
        assert before.values["name"] == ""

    def test_with_error(self) -> None:
        state = FormState().with_error("email", "Bad")
        assert state.errors["email"] == "Bad"

    def test_with_falsy_error_removes(self) -> None:
        state = FormState(errors={"email": "Bad"}).with_error("email", "")
        assert "email" not in state.errors

    def test_with_errors_merges(self) -> None:
        state = FormState(errors={"a": "A", "b": "B"}).with_errors({"b": "B2", "c": "C"})
        assert dict(state.errors) == {"a": "A", "b": "B2", "c": "C"}

    def test_without_error_missing_is_noop(self) -> None:
        state = FormState()
        assert state.without_error("email") is state

    def test_without_errors(self) -> None:
        state = FormState(errors={"a": "A"}).without_errors()
        assert dict(state.errors) == {}

    def test_with_touched(self) -> None:
        state = FormState().with_touched("email")
        assert state.touched["email"] is True

    def test_with_submitting(self) -> None:
        assert FormState().with_submitting(True).submitting is True

    def test_without_field(self) -> None:
        state = FormState(
            values={"a": 1, "b": 2},
            errors={"a": "A"},
            touched={"a": True, "b": True},
        ).without_field("a")
        assert dict(state.values) == {"b": 2}
        assert dict(state.errors) == {}
        assert dict(state.touched) == {"b": True}
