"""Form configuration.

FormConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class FormConfig:
    """Form controller options. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = FormConfig(validate_on_change=False, initial_touched={"email": True})
    """

    # Validation triggers
    validate_on_change: bool = True  # Re-validate touched fields on change
    validate_on_blur: bool = True
    validate_on_submit: bool = True  # Full validation before calling on_submit

    # Seed state, also what reset() restores
    initial_errors: Mapping[str, str] = field(default_factory=dict)
    initial_touched: Mapping[str, bool] = field(default_factory=dict)

    # Drop results of validations overtaken by a newer write to the same field
    discard_stale_validations: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "initial_errors", dict(self.initial_errors))
        object.__setattr__(self, "initial_touched", dict(self.initial_touched))
