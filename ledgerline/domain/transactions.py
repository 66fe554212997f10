"""Pure functions for transaction validation.

This module contains the functional core for transaction input:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Incoming payloads are untyped (JSON bodies, CLI arguments), so every field is
checked here before anything reaches the store.
"""

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from ledgerline.domain.models import Amount, TransactionType
from ledgerline.errors import ValidationError

MUTABLE_FIELDS = ("description", "amount", "type")


@dataclass(frozen=True)
class TransactionInput:
    """Validated description, amount and type ready for insertion or update."""

    description: str
    amount: Amount
    type: TransactionType


def check_description(value: Any) -> tuple[str | None, str | None]:
    """Check a description value.

    Args:
        value: Raw description.

    Returns:
        Tuple of (description, error). Exactly one of them is None.
    """
    if value is None:
        return None, "is required"
    if not isinstance(value, str):
        return None, "must be text"
    description = value.strip()
    if not description:
        return None, "is required"
    return description, None


def check_amount(value: Any) -> tuple[Amount | None, str | None]:
    """Check and coerce an amount value.

    Numbers and numeric strings are accepted. Booleans are rejected even
    though Python treats them as integers.

    Args:
        value: Raw amount.

    Returns:
        Tuple of (amount, error). Exactly one of them is None.
    """
    if value is None:
        return None, "is required"
    if isinstance(value, bool):
        return None, "must be a number"

    if not isinstance(value, (str, int, float, Decimal)):
        return None, "must be a number"

    # sNaN raises ValueError and huge integers raise OverflowError on conversion
    try:
        number = float(Decimal(value.strip())) if isinstance(value, str) else float(value)
    except (InvalidOperation, ValueError, OverflowError):
        return None, "must be a number"

    if not math.isfinite(number):
        return None, "must be a finite number"
    if number < 0:
        return None, "must not be negative"
    return Amount(number), None


def check_type(value: Any) -> tuple[TransactionType | None, str | None]:
    """Check a transaction type value.

    Args:
        value: Raw type, either a TransactionType or its exact string value.

    Returns:
        Tuple of (type, error). Exactly one of them is None.
    """
    if value is None or value == "":
        return None, "is required"
    if isinstance(value, TransactionType):
        return value, None
    if isinstance(value, str):
        try:
            return TransactionType(value), None
        except ValueError:
            pass
    return None, "must be 'income' or 'expense'"


def validate_transaction_fields(description: Any, amount: Any, type: Any) -> TransactionInput:
    """Validate the mutable transaction fields.

    Args:
        description: Raw description.
        amount: Raw amount.
        type: Raw transaction type.

    Returns:
        TransactionInput with normalised values.

    Raises:
        ValidationError: Naming every missing or invalid field.
    """
    clean_description, description_error = check_description(description)
    clean_amount, amount_error = check_amount(amount)
    clean_type, type_error = check_type(type)

    errors = {
        name: error
        for name, error in zip(MUTABLE_FIELDS, (description_error, amount_error, type_error))
        if error is not None
    }
    if errors:
        raise ValidationError(errors)

    assert clean_description is not None and clean_amount is not None and clean_type is not None
    return TransactionInput(description=clean_description, amount=clean_amount, type=clean_type)


def validate_payload(payload: Any) -> TransactionInput:
    """Validate a request body mapping with description, amount and type keys.

    Args:
        payload: Decoded request body.

    Returns:
        TransactionInput with normalised values.

    Raises:
        ValidationError: If the body is not a mapping or a field is invalid.
    """
    if not isinstance(payload, dict):
        raise ValidationError({"body": "must be a JSON object"})
    return validate_transaction_fields(payload.get("description"), payload.get("amount"), payload.get("type"))
