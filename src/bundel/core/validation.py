from __future__ import annotations

from typing import Any

from typeguard import TypeCheckError, check_type

from .errors import InvalidArgumentError


def validate_desired_length(desired_length: Any, *, argument: str = "desired_length") -> int:
    """Checks that a batch length is a positive integer and returns it.

    Raises:
        InvalidArgumentError: If the value is not an int, is a bool, or is
            smaller than 1.
    """
    try:
        check_type(desired_length, int)
    except TypeCheckError as e:
        raise InvalidArgumentError(argument, desired_length, "must be an integer") from e
    if isinstance(desired_length, bool):
        raise InvalidArgumentError(argument, desired_length, "must be an integer, not a bool")
    if desired_length < 1:
        raise InvalidArgumentError(argument, desired_length, "batch size cannot be smaller than 1")
    return desired_length


def validate_action(on_batch: Any, *, argument: str = "on_batch") -> None:
    """Checks that a per-batch action can be called.

    Raises:
        InvalidArgumentError: If `on_batch` is not callable.
    """
    if not callable(on_batch):
        raise InvalidArgumentError(argument, on_batch, "must be callable")
