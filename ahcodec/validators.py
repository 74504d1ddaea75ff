"""
validators.py

Shared codes for input validation in ahcodec.
"""


import os
from typing import Any, Optional

def validate_type(variable: Any, name: str, expected_type: type) -> None:
    """Validate that variable is of the expected type."""
    if not isinstance(variable, expected_type):
        raise ValueError(f"{name} must be of type {expected_type.__name__}")


def validate_file_exists(file_path: str) -> None:
    """Validate that the given file path exists."""
    if not os.path.exists(file_path):
        raise ValueError(f"File does not exist: {file_path}")


def validate_int_range(variable: Any, name: str, minimum: Optional[int] = None, maximum: Optional[int] = None) -> None:
    """Validate that variable is an int (not a bool) within [minimum, maximum]."""
    if isinstance(variable, bool) or not isinstance(variable, int):
        raise ValueError(f"{name} must be of type int")
    if minimum is not None and variable < minimum:
        raise ValueError(f"{name} must be at least {minimum}")
    if maximum is not None and variable > maximum:
        raise ValueError(f"{name} must be at most {maximum}")
