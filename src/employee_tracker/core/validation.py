"""Input normalization and validation helpers.

The ``validate_*`` functions follow questionary's ``validate=``
contract: return ``True`` when the input is acceptable, otherwise the
message to show under the prompt.  They are pure and safe to call from
any layer.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from employee_tracker.exceptions import InvalidInputError

_CENTS = Decimal("0.01")
MAX_SALARY = Decimal("99999999.99")
"""Largest amount the ``Numeric(10, 2)`` salary column can hold."""


def capitalize(name: str) -> str:
    """Upper-case the first letter only, leaving the rest untouched.

    ``"mcdonald"`` becomes ``"Mcdonald"`` while ``"McDonald"`` is kept
    as typed.
    """
    if not name:
        return name
    return name[0].upper() + name[1:]


def validate_required(value: str) -> bool | str:
    if value.strip() == "":
        return "Input is required"
    return True


def validate_salary(value: str) -> bool | str:
    try:
        parse_salary(value)
    except InvalidInputError as exc:
        return str(exc)
    return True


def parse_salary(value: str | int | float | Decimal) -> Decimal:
    """Parse a salary into a non-negative two-decimal :class:`Decimal`.

    Raises
    ------
    InvalidInputError
        If *value* is not a finite, non-negative number, or exceeds
        :data:`MAX_SALARY`.
    """
    try:
        amount = Decimal(str(value).strip().replace(",", ""))
    except InvalidOperation as exc:
        raise InvalidInputError("Please enter a valid number") from exc
    if not amount.is_finite():
        raise InvalidInputError("Please enter a valid number")
    if amount < 0:
        raise InvalidInputError("Salary must not be negative")
    try:
        amount = amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise InvalidInputError("Please enter a valid number") from exc
    if amount > MAX_SALARY:
        raise InvalidInputError(f"Salary must not exceed {MAX_SALARY:,}")
    return amount


def require_text(value: str, field: str) -> str:
    """Strip *value* and raise :class:`InvalidInputError` if nothing remains."""
    stripped = value.strip()
    if not stripped:
        raise InvalidInputError(f"{field} is required.")
    return stripped
