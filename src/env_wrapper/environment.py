"""The Environment interface shared by every environment provider.

Code that reads or changes environment variables should accept an
``Environment`` argument instead of touching ``os.environ`` directly.
Production code passes a ``RealEnvironment``; each test passes its own
``FakeEnvironment``, so tests never see each other's variables (or the
developer's shell).

The providers share no data and no base class, only these method
signatures.  Any class with the same methods is a valid environment.
"""

from collections.abc import Iterator
from typing import Protocol, runtime_checkable

from env_wrapper.errors import NotPresentError


@runtime_checkable
class Environment(Protocol):
    """Interface that every environment provider must satisfy."""

    def var(self, name: str) -> str:
        """Return the value of *name*.

        Raises:
            NotPresentError: If *name* is not set.
            InvalidValueError: If the value is not valid UTF-8 text.

        """
        ...  # pragma: no cover

    def var_os(self, name: str) -> bytes | None:
        """Return the raw value of *name* as bytes, or None if not set.

        No text validation is done; use ``var`` when valid text is needed.
        """
        ...  # pragma: no cover

    def set_var(self, name: str, value: str) -> None:
        """Set *name* to *value* (creates or overwrites)."""
        ...  # pragma: no cover

    def remove_var(self, name: str) -> None:
        """Remove *name*.  Removing an unset variable does nothing."""
        ...  # pragma: no cover

    def vars(self) -> Iterator[tuple[str, str]]:
        """Return a snapshot of all (name, value) pairs, in no set order."""
        ...  # pragma: no cover


def var_or_default(env: Environment, name: str, default: str) -> str:
    """Return the value of *name* from *env*, or *default* if it is not set.

    Only a missing variable falls back.  An ``InvalidValueError`` still
    propagates, since an unreadable value is not the same as no value.
    """
    try:
        return env.var(name)
    except NotPresentError:
        return default


def check_assignment(name: str, value: str) -> None:
    """Reject a name/value pair that is not a valid text assignment.

    Every provider runs this before storing anything, so a write the
    real environment refuses is refused by a fake too.

    Raises:
        ValueError: If *name* is empty or contains ``=``, either argument
            contains a NUL character, or either is not valid UTF-8 text
            (e.g. holds a lone surrogate).

    """
    if "\0" in name or "\0" in value:
        msg = "embedded null byte"
        raise ValueError(msg)
    if not name or "=" in name:
        msg = "illegal environment variable name"
        raise ValueError(msg)
    try:
        name.encode("utf-8")
        value.encode("utf-8")
    except UnicodeEncodeError:
        msg = "environment variable name or value is not valid text"
        raise ValueError(msg) from None
