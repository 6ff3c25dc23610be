class StackError(Exception):
    """Base error for stack encoding and decoding."""


class StackDecodeError(StackError):
    """Raised when a serialized error stack cannot be decoded."""
