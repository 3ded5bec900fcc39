"""
Exception types raised by callkit.

Contract violations inside the models are assertions, not exceptions. These classes are for problems
a user can fix: a bad model name, a malformed parameter file, an unreadable input table.
"""

__all__ = [
    "CallkitError",
    "IndelErrorModelError",
    "InputFormatError"
]


class CallkitError(Exception):
    """Base exception for callkit errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.details = details or {}


class IndelErrorModelError(CallkitError):
    """
    Raised when the indel error model cannot be constructed: the model name is not recognized,
    the name is missing from the model file, or the file itself is malformed.

    :param message: Description of the problem
    :param model_name: The requested model name
    :param model_file: The model parameter file, if one was given
    """

    def __init__(self, message: str, model_name: str | None = None, model_file=None, details: dict = None):
        super().__init__(message, details)
        self.model_name = model_name
        self.model_file = model_file


class InputFormatError(CallkitError):
    """Raised when an input table or VCF line cannot be parsed."""
