"""Built-in validation rules for formease forms.

Every rule constructor returns a rule — a callable with the signature::

    def rule(value, all_values=None) -> str | None:
        '''Return error message, or None if valid.'''

``all_values`` is the full value mapping of the form, used by cross-field
rules such as ``match`` and ``required_if``. Constructors take their policy
parameters first and an optional message last::

    def min_length(n: int, message: str | None = None) -> Rule:
        def check(value, all_values=None):
            if value and len(value) < n:
                return message or f"Must be at least {n} characters"
            return None
        return check

Custom rules follow the same protocol. A rule may also be ``async def``;
the form controller awaits every rule, so sync and async rules mix freely
in one schema.

Most rules let empty values through. Compose with ``required()`` when the
field is mandatory::

    {"email": [required(), email()]}
"""

import math
import re
from collections.abc import Awaitable, Callable, Iterable, Mapping
from datetime import UTC, date as _date, datetime
from email.utils import parsedate_to_datetime
from typing import Any
from urllib.parse import urlsplit

from formease._internal.invoke import invoke

# Type alias for a rule function
type Rule = Callable[..., str | None | Awaitable[str | None]]

# Dropdown value meaning "nothing selected yet"
DROPDOWN_UNSELECTED = "default"


def _other(all_values: Mapping[str, Any] | None, field: str) -> Any:
    """Read *field* from the form values, ``None`` when absent."""
    if not all_values:
        return None
    return all_values.get(field)


def _strict_equal(a: Any, b: Any) -> bool:
    """Equality without cross-type coercion (``True != 1``, ``"1" != 1``)."""
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if isinstance(a, int | float) and isinstance(b, int | float):
        return a == b
    return type(a) is type(b) and a == b


def _length(value: Any) -> int | None:
    try:
        return len(value)
    except TypeError:
        return None


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required(message: str = "This field is required") -> Rule:
    """Field must be set. ``False`` and ``0`` count as set."""

    def check(value: Any, all_values: Mapping[str, Any] | None = None) -> str | None:
        if value is None or (isinstance(value, str) and value == ""):
            return message
        return None

    return check


def required_if(
    field: str,
    expected: Any,
    message: str = "This field is required",
) -> Rule:
    """Field must be truthy whenever *field* equals *expected*."""

    def check(value: Any, all_values: Mapping[str, Any] | None = None) -> str | None:
        if _strict_equal(_other(all_values, field), expected) and not value:
            return message
        return None

    return check


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def min_length(n: int, message: str | None = None) -> Rule:
    """Value must be at least *n* characters (empty passes)."""

    def check(value: Any, all_values: Mapping[str, Any] | None = None) -> str | None:
        size = _length(value) if value else None
        if size is not None and size < n:
            return message or f"Must be at least {n} characters"
        return None

    return check


def max_length(n: int, message: str | None = None) -> Rule:
    """Value must be at most *n* characters (empty passes)."""

    def check(value: Any, all_values: Mapping[str, Any] | None = None) -> str | None:
        size = _length(value) if value else None
        if size is not None and size > n:
            return message or f"Must be at most {n} characters"
        return None

    return check


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Basic email pattern; checks structure, not deliverability
_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

# 8+ chars from the allowed set, with one of each character class
_STRONG_PASSWORD_RE = re.compile(
    r"(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9])(?=.*[@$!%*?&])[A-Za-z0-9@$!%*?&]{8,}"
)
_ALPHA_RE = re.compile(r"[A-Za-z]+")
_ALPHA_NUMERIC_RE = re.compile(r"[A-Za-z0-9]+")


def email(message: str = "Please enter a valid email") -> Rule:
    """Value must look like ``local@domain.tld`` (empty passes)."""

    def check(value: Any, all_values: Mapping[str, Any] | None = None) -> str | None:
        if value and not _EMAIL_RE.fullmatch(str(value)):
            return message
        return None

    return check


def pattern(regex: str | re.Pattern[str], message: str = "Invalid format") -> Rule:
    """Value must contain a match for *regex* (empty passes).

    The pattern is searched, not anchored — anchor it with ``^...$``
    to require a full match. A malformed pattern raises ``re.error``
    here, at construction.
    """
    compiled = re.compile(regex)

    def check(value: Any, all_values: Mapping[str, Any] | None = None) -> str | None:
        if value and not compiled.search(str(value)):
            return message
        return None

    return check


def strong_password(
    message: str = (
        "Password must include uppercase, lowercase, number, special character, "
        "and be at least 8 characters long"
    ),
) -> Rule:
    """Value must mix cases, digits, and one of ``@$!%*?&`` (empty passes)."""

    def check(value: Any, all_values: Mapping[str, Any] | None = None) -> str | None:
        if not value:
            return None
        if not _STRONG_PASSWORD_RE.fullmatch(str(value)):
            return message
        return None

    return check


def alpha(message: str = "Only letters allowed") -> Rule:
    """Value must be ASCII letters only (empty passes)."""

    def check(value: Any, all_values: Mapping[str, Any] | None = None) -> str | None:
        if value and not _ALPHA_RE.fullmatch(str(value)):
            return message
        return None

    return check


def alpha_numeric(message: str = "Only letters and numbers allowed") -> Rule:
    """Value must be ASCII letters and digits only (empty passes)."""

    def check(value: Any, all_values: Mapping[str, Any] | None = None) -> str | None:
        if value and not _ALPHA_NUMERIC_RE.fullmatch(str(value)):
            return message
        return None

    return check


_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")

# Schemes that are meaningless without a host
_HOST_SCHEMES = frozenset({"http", "https", "ftp", "ws", "wss"})


def _is_url(text: str) -> bool:
    text = text.strip()
    scheme, sep, rest = text.partition(":")
    if not sep or not _SCHEME_RE.fullmatch(scheme) or not rest:
        return False
    try:
        parts = urlsplit(text)
        parts.port  # noqa: B018 (raises ValueError on a malformed port)
    except ValueError:
        return False
    if any(ch.isspace() for ch in parts.netloc):
        return False
    if parts.scheme in _HOST_SCHEMES:
        return bool(parts.hostname)
    return True


def url(message: str = "Invalid URL format") -> Rule:
    """Value must be an absolute URL with a scheme (empty passes)."""

    def check(value: Any, all_values: Mapping[str, Any] | None = None) -> str | None:
        if value and not _is_url(str(value)):
            return message
        return None

    return check


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------


def dropdown(
    options: Iterable[Any] = (),
    message: str = "Please select a valid option",
    *,
    empty_message: str = "Please select an option",
) -> Rule:
    """A selection must be made, and be one of *options* when given.

    ``None``, ``""``, and ``DROPDOWN_UNSELECTED`` all mean nothing was
    selected and report *empty_message*. An unknown selection reports
    *message*.
    """
    allowed = tuple(options)

    def check(value: Any, all_values: Mapping[str, Any] | None = None) -> str | None:
        if value is None or (isinstance(value, str) and value in ("", DROPDOWN_UNSELECTED)):
            return empty_message
        if allowed and not any(_strict_equal(value, option) for option in allowed):
            return message
        return None

    return check


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

_DECIMAL_RE = re.compile(r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|Infinity)")
_RADIX_RE = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")


def _as_float(value: int | float) -> float:
    """Convert to float, saturating to infinity instead of overflowing."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def to_number(value: Any) -> float | None:
    """Coerce *value* to a number, or ``None`` when it is not numeric.

    Strings are stripped first and an empty string coerces to ``0``.
    Booleans coerce to ``1``/``0``; NaN is never a number.
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, int | float):
        result = _as_float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if _RADIX_RE.fullmatch(text):
            result = _as_float(int(text, 0))
        elif _DECIMAL_RE.fullmatch(text):
            result = float(text.replace("Infinity", "inf"))
        else:
            return None
    else:
        return None
    if math.isnan(result):
        return None
    return result


def number(message: str = "Must be a number") -> Rule:
    """Value must be numeric (empty passes)."""

    def check(value: Any, all_values: Mapping[str, Any] | None = None) -> str | None:
        if value and to_number(value) is None:
            return message
        return None

    return check


def min_value_allowed(minimum: float, message: str | None = None) -> Rule:
    """Numeric value must be at least *minimum*. Non-numeric values pass."""

    def check(value: Any, all_values: Mapping[str, Any] | None = None) -> str | None:
        if value is None or (isinstance(value, str) and value == ""):
            return None
        num = to_number(value)
        if num is not None and num < minimum:
            return message or f"Must be at least {minimum}"
        return None

    return check


def max_value_allowed(maximum: float, message: str | None = None) -> Rule:
    """Numeric value must be at most *maximum*. Non-numeric values pass."""

    def check(value: Any, all_values: Mapping[str, Any] | None = None) -> str | None:
        if value is None or (isinstance(value, str) and value == ""):
            return None
        num = to_number(value)
        if num is not None and num > maximum:
            return message or f"Must be at most {maximum}"
        return None

    return check


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


def to_instant(value: Any) -> datetime | None:
    """Parse *value* into an aware ``datetime``, or ``None``.

    Accepts ``date``/``datetime`` objects, ISO 8601 strings, and RFC 2822
    strings such as ``"Tue, 01 Nov 2016 00:00:00 GMT"``. Date-only values
    are midnight UTC; naive date-times are taken as local time. A naive
    value that cannot be placed in the local zone (year 1 or 9999 near
    the edge) is unparseable.
    """
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, _date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    elif isinstance(value, str):
        text = value.strip()
        try:
            day = _date.fromisoformat(text)
        except ValueError:
            pass
        else:
            return datetime(day.year, day.month, day.day, tzinfo=UTC)
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            try:
                moment = parsedate_to_datetime(text)
            except (TypeError, ValueError, IndexError):
                return None
    else:
        return None
    if moment.tzinfo is None:
        try:
            moment = moment.astimezone()
        except (ValueError, OverflowError, OSError):
            return None
    return moment


def _utcnow() -> datetime:
    return datetime.now(UTC)


def date(message: str = "Invalid date") -> Rule:
    """Value must parse as a date (empty passes)."""

    def check(value: Any, all_values: Mapping[str, Any] | None = None) -> str | None:
        if value and to_instant(value) is None:
            return message
        return None

    return check


def future_date(
    message: str = "Date must be in the future",
    *,
    clock: Callable[[], datetime] = _utcnow,
) -> Rule:
    """Value must be strictly after now. Empty or unparseable values pass.

    *clock* returns the current aware ``datetime``; override it to pin
    "now" in tests.
    """

    def check(value: Any, all_values: Mapping[str, Any] | None = None) -> str | None:
        if not value:
            return None
        moment = to_instant(value)
        if moment is not None and moment <= clock():
            return message
        return None

    return check


# ---------------------------------------------------------------------------
# Cross-field
# ---------------------------------------------------------------------------


def match(field: str, message: str = "Values do not match") -> Rule:
    """Value must equal the value of *field* (password confirmation)."""

    def check(value: Any, all_values: Mapping[str, Any] | None = None) -> str | None:
        if not _strict_equal(value, _other(all_values, field)):
            return message
        return None

    return check


def different_from(field: str, message: str = "Must be different") -> Rule:
    """Value must not equal the value of *field*."""

    def check(value: Any, all_values: Mapping[str, Any] | None = None) -> str | None:
        if _strict_equal(value, _other(all_values, field)):
            return message
        return None

    return check


# ---------------------------------------------------------------------------
# Misc
# ---------------------------------------------------------------------------


def boolean(message: str = "Must be true or false") -> Rule:
    """Value must be exactly ``True`` or ``False``."""

    def check(value: Any, all_values: Mapping[str, Any] | None = None) -> str | None:
        if value is not True and value is not False:
            return message
        return None

    return check


def custom(predicate: Callable[..., Any], message: str = "Invalid value") -> Rule:
    """Value must satisfy ``predicate(value, all_values)``.

    The predicate may be sync or async; the returned rule is always
    ``async`` and awaits it.
    """

    async def check(value: Any, all_values: Mapping[str, Any] | None = None) -> str | None:
        if not await invoke(predicate, value, all_values):
            return message
        return None

    return check
