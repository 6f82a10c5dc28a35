from __future__ import annotations

from typing import Any


class BundelError(Exception):
    """Base class for all exceptions raised by the bundel library."""

    pass


class InvalidArgumentError(BundelError, ValueError):
    """Raised when a batching operation is configured with an invalid argument.

    Attributes:
        argument (str): The name of the offending argument.
        value (Any): The value that was rejected.
    """

    def __init__(self, argument: str, value: Any, message: str):
        self.argument = argument
        self.value = value
        self.message = message
        super().__init__(f"Invalid value for '{argument}' ({value!r}): {message}")
