"""Exception hierarchy for helixia_db.

Every failure raised by the store derives from :class:`DatabaseError`, and
also from the matching builtin so callers can catch either.
"""

from __future__ import annotations


class DatabaseError(Exception):
    """Base exception for all store errors."""

    error_code = "DATABASE_ERROR"
    default_message = "Database error."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    def __str__(self) -> str:
        # KeyError quotes its argument; keep messages readable for every subclass.
        return str(self.args[0]) if self.args else self.default_message


class DatabaseFileNotFoundError(DatabaseError, FileNotFoundError):
    error_code = "FILE_NOT_FOUND"
    default_message = "The database file could not be found."


class InvalidFormatError(DatabaseError, ValueError):
    error_code = "INVALID_JSON"
    default_message = "The database file contains invalid JSON."


class InvalidValueError(DatabaseError, ValueError):
    error_code = "INVALID_VALUE"
    default_message = "The value provided cannot be null or undefined."


class KeyNotFoundError(DatabaseError, KeyError):
    error_code = "KEY_NOT_FOUND"
    default_message = "The requested key does not exist in the database."


class ObjectNotFoundError(DatabaseError, TypeError):
    error_code = "OBJECT_NOT_FOUND"
    default_message = "The requested key is not an object."


class ArrayNotFoundError(DatabaseError, TypeError):
    error_code = "ARRAY_NOT_FOUND"
    default_message = "The requested key is not an array."


class MathError(DatabaseError, ArithmeticError):
    """Base for failures of :meth:`Database.math`."""

    error_code = "MATH_ERROR"
    default_message = "Arithmetic operation failed."


class NotANumberError(MathError):
    error_code = "NOT_A_NUMBER"
    default_message = "The value associated with the key is not a number."


class InvalidOperatorError(MathError):
    error_code = "INVALID_OPERATOR"
    default_message = "Invalid operator."


class DivisionByZeroError(MathError, ZeroDivisionError):
    error_code = "DIVISION_BY_ZERO"
    default_message = "Division by zero."
