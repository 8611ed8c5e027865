"""Errors raised when reading an environment variable.

Reading a variable can fail in exactly two ways:

- **NotPresentError** — the name has no current value.  This is the
  common case; callers usually fall back to a default.
- **InvalidValueError** — a value exists but is not valid text.  The OS
  environment table stores raw bytes, so a process can inherit a value
  that does not decode as UTF-8.  Only the real environment can produce
  this; a fake environment stores text only.

Both derive from ``VarError`` so callers can catch either with one
``except`` clause, and each also derives from the builtin error that
matches its meaning (``KeyError`` for a miss, ``ValueError`` for bad
data).

Malformed *writes* (an empty name, ``=`` in a name, a NUL character)
are not part of this hierarchy.  They raise the builtin ``ValueError``,
exactly like ``os.putenv``.
"""


class VarError(Exception):
    """Raised when an environment variable cannot be read."""

    def __init__(self, name: str, message: str) -> None:
        """Create the error for variable *name*."""
        super().__init__(message)
        self.name = name

    def __str__(self) -> str:
        """Return the message (KeyError would otherwise repr() it)."""
        return str(self.args[0])


class NotPresentError(VarError, KeyError):
    """Raised when the variable is not set."""

    def __init__(self, name: str) -> None:
        """Create the error for the missing variable *name*."""
        super().__init__(name, f"environment variable not found: {name}")


class InvalidValueError(VarError, ValueError):
    """Raised when the variable's value is not valid UTF-8 text.

    Attributes:
        raw: The undecodable value, as bytes.

    """

    def __init__(self, name: str, raw: bytes) -> None:
        """Create the error for *name* holding the undecodable *raw* bytes."""
        super().__init__(name, f"environment variable was not valid unicode: {name}")
        self.raw = raw
