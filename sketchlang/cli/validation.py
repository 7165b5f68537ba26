"""
Input validation for CLI operations.

Numeric command-line options are checked here so commands can rely on
well-formed values.
"""

from typing import Any, Optional

from .errors import CLIValidationError


def validate_int(
    value: Any,
    *,
    name: str = "value",
    allow_none: bool = False,
    min_value: Optional[int] = None,
) -> Optional[int]:
    """
    Validate and convert value to integer with an optional lower bound.

    Raises:
        CLIValidationError: If value is not an integer or below ``min_value``

    Examples:
        >>> validate_int("3", name="--frames", min_value=1)
        3
        >>> validate_int(0, name="--frames", min_value=1)
        Traceback (most recent call last):
        ...
        sketchlang.cli.errors.CLIValidationError: --frames must be at least 1, got 0
    """
    if value is None:
        if allow_none:
            return None
        raise CLIValidationError(f"{name} is required")
    try:
        result = int(value)
    except (TypeError, ValueError):
        raise CLIValidationError(
            f"{name} must be an integer, got {value!r}",
            hint="Use a whole number",
        ) from None
    if min_value is not None and result < min_value:
        raise CLIValidationError(f"{name} must be at least {min_value}, got {result}")
    return result


def validate_positive_float(value: Any, *, name: str = "value") -> Optional[float]:
    if value is None:
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        raise CLIValidationError(f"{name} must be a number, got {value!r}") from None
    if not result > 0:
        raise CLIValidationError(f"{name} must be positive, got {value!r}")
    return result
