from typing import Any


class InvalidArgument(ValueError):
    """Raised when a caller passes a missing or empty argument to one of the API clients"""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(f"{message} (parameter: {name})")
        self.name = name


def argument_not_null(value: Any, name: str) -> None:
    """Ensures that a required object argument was actually supplied"""
    if value is None:
        raise InvalidArgument(name, "Value cannot be None")


def argument_not_null_or_empty_string(value: Any, name: str) -> None:
    """Ensures that a string argument identifying a resource is present and not blank"""
    argument_not_null(value, name)
    if not isinstance(value, str):
        raise InvalidArgument(name, f"Expected a string, got {type(value).__name__}")
    if not value.strip():
        raise InvalidArgument(name, "String cannot be empty")
