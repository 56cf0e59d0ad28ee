"""Numeric field input handling.

Keystroke filtering, parsing and advisory range checks for free-text numeric
fields (quantity, rate, MRP, charges, percentages).

Three layers, from the input boundary inwards:
1. ``accepts_keystroke`` drops keys that could never form a number.
2. ``parse`` rejects malformed text; the caller keeps its previous value.
3. ``validate`` reports sign/range problems as advisory messages; the value is
   still stored, only form submission enforces hard constraints.
"""

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union


logger = logging.getLogger(__name__)


class _Rejected:
    """Marker returned by ``parse`` for malformed input."""

    _instance: Optional["_Rejected"] = None

    def __new__(cls) -> "_Rejected":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "REJECTED"


REJECTED = _Rejected()

ParseResult = Union[str, _Rejected]

_DECIMAL_PATTERN = re.compile(r"-?\d*(\.\d*)?")
_INTEGER_PATTERN = re.compile(r"-?\d*")

# In-progress states that are accepted but carry no number yet
_IN_PROGRESS = {"", ".", "-", "-."}

CONTROL_KEYS = frozenset({
    "Backspace", "Delete", "Tab", "Escape", "Enter",
    "ArrowLeft", "ArrowRight", "Home", "End",
})


@dataclass(frozen=True)
class NumericFieldConfig:
    """Constraints for one numeric field."""

    min_value: Optional[float] = None
    max_value: Optional[float] = None
    allow_negative: bool = False
    allow_decimals: bool = True


@dataclass(frozen=True)
class NumericCheck:
    """Outcome of an advisory check."""

    ok: bool
    message: Optional[str] = None


@dataclass(frozen=True)
class NumericInputState:
    """Field state after an edit was offered."""

    value: str
    error: Optional[str]
    changed: bool


DEFAULT_CONFIG = NumericFieldConfig()


def is_in_progress(value: str) -> bool:
    """True for partial input such as ``""`` or ``"."`` that has no number yet."""
    return value in _IN_PROGRESS


def parse(raw: Any, config: NumericFieldConfig = DEFAULT_CONFIG) -> ParseResult:
    """
    Parse raw text from a numeric field.

    A leading minus sign is always accepted here; whether negatives are
    allowed is an advisory concern of ``validate``.

    Args:
        raw: Text typed by the user (numbers are stringified)
        config: Field constraints

    Returns:
        The accepted text, or REJECTED for malformed input
    """
    if raw is None:
        return ""
    if isinstance(raw, bool):
        return REJECTED
    if isinstance(raw, (int, float)):
        if not math.isfinite(raw):
            return REJECTED
        raw = str(raw)
    if not isinstance(raw, str):
        return REJECTED

    pattern = _DECIMAL_PATTERN if config.allow_decimals else _INTEGER_PATTERN
    if not pattern.fullmatch(raw):
        return REJECTED
    return raw


def to_number(value: Any) -> float:
    """
    Coerce a field value to a number.

    Args:
        value: Number or text

    Returns:
        The numeric value, 0.0 for blank or invalid input
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    return number if math.isfinite(number) else 0.0


def validate(value: Any, config: NumericFieldConfig = DEFAULT_CONFIG) -> NumericCheck:
    """
    Check sign and range of an accepted value.

    Args:
        value: Parsed text or number
        config: Field constraints

    Returns:
        NumericCheck; a failed check is advisory only
    """
    if isinstance(value, str) and is_in_progress(value):
        return NumericCheck(ok=True)

    number = to_number(value)
    if not config.allow_negative and number < 0:
        return NumericCheck(ok=False, message="Negative values not allowed")
    if config.min_value is not None and number < config.min_value:
        return NumericCheck(ok=False, message=f"Minimum value is {config.min_value:g}")
    if config.max_value is not None and number > config.max_value:
        return NumericCheck(ok=False, message=f"Maximum value is {config.max_value:g}")
    return NumericCheck(ok=True)


def accepts_keystroke(
    current: str,
    key: str,
    config: NumericFieldConfig = DEFAULT_CONFIG,
    position: Optional[int] = None,
) -> bool:
    """
    Keystroke filter applied before parsing.

    Args:
        current: Text currently in the field
        key: Key name or typed character
        config: Field constraints
        position: Caret position (defaults to the end of the text)

    Returns:
        True if the key may reach the field
    """
    if key in CONTROL_KEYS:
        return True
    if len(key) != 1:
        return False
    if key.isdigit():
        return True
    if key == ".":
        return config.allow_decimals and "." not in current
    if key == "-":
        caret = len(current) if position is None else position
        return config.allow_negative and caret == 0 and "-" not in current
    return False


def apply_input(
    current: str,
    raw: Any,
    config: NumericFieldConfig = DEFAULT_CONFIG,
) -> NumericInputState:
    """
    Offer an edit to a numeric field.

    Args:
        current: Value currently stored
        raw: Text the user produced
        config: Field constraints

    Returns:
        NumericInputState; a rejected edit leaves the stored value unchanged
    """
    parsed = parse(raw, config)
    if parsed is REJECTED:
        logger.debug(f"Numeric input rejected: {raw!r}")
        return NumericInputState(value=current, error=None, changed=False)

    check = validate(parsed, config)
    return NumericInputState(value=parsed, error=check.message, changed=parsed != current)


@dataclass
class NumericFields:
    """Values and advisory errors for a group of numeric fields."""

    initial_values: Mapping[str, str] = field(default_factory=dict)
    configs: Mapping[str, NumericFieldConfig] = field(default_factory=dict)
    values: Dict[str, str] = field(init=False)
    errors: Dict[str, Optional[str]] = field(init=False)

    def __post_init__(self) -> None:
        self.values = dict(self.initial_values)
        self.errors = {}

    def config_for(self, name: str) -> NumericFieldConfig:
        return self.configs.get(name, DEFAULT_CONFIG)

    def change(self, name: str, raw: Any) -> bool:
        """
        Apply an edit to one field.

        Args:
            name: Field name
            raw: Text the user produced

        Returns:
            False if the edit was rejected
        """
        parsed = parse(raw, self.config_for(name))
        if parsed is REJECTED:
            return False
        self.values[name] = parsed
        self.errors[name] = validate(parsed, self.config_for(name)).message
        return True

    def number(self, name: str) -> float:
        return to_number(self.values.get(name, ""))

    def reset(self) -> None:
        self.values = dict(self.initial_values)
        self.errors = {}
