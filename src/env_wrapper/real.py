"""The real process environment.

``RealEnvironment`` forwards every call to ``os.environ``, which in turn
calls the C library's ``getenv``/``setenv``/``unsetenv``.  It holds no
state: every instance reads and writes the *same* process-wide table,
and so does any other code in the process that uses ``os.environ``.

Nothing here adds locking.  Concurrent writes from several threads are
only as safe as the platform primitives underneath; callers that need
stronger guarantees must coordinate themselves.

Undecodable values:
    The OS table holds bytes.  Python decodes them with the filesystem
    encoding and the ``surrogateescape`` handler, so bytes that are not
    valid UTF-8 show up as lone surrogates in the ``str`` value.  ``var``
    detects those and raises ``InvalidValueError``; ``var_os`` returns
    the original bytes untouched.
"""

import os
from collections.abc import Iterator

from env_wrapper.environment import check_assignment
from env_wrapper.errors import InvalidValueError, NotPresentError


def _lookup(name: str) -> str | None:
    """Return the ``os.environ`` value of *name*, or None if it is unset.

    A name the OS cannot encode can never have been set, so it reads as
    unset instead of raising ``UnicodeEncodeError``.
    """
    try:
        return os.environ.get(name)
    except UnicodeEncodeError:
        return None


class RealEnvironment:
    """The running process's environment.

    When testing, ``FakeEnvironment`` should almost always be used
    instead.  All instances refer to the same underlying environment.
    """

    __slots__ = ()

    def var(self, name: str) -> str:
        """Return the value of *name* from the process environment.

        Raises:
            NotPresentError: If *name* is not set.
            InvalidValueError: If the stored bytes are not valid UTF-8.

        """
        value = _lookup(name)
        if value is None:
            raise NotPresentError(name)
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            raise InvalidValueError(name, os.fsencode(value)) from None
        return value

    def var_os(self, name: str) -> bytes | None:
        """Return the raw bytes of *name*, or None if not set."""
        value = _lookup(name)
        if value is None:
            return None
        return os.fsencode(value)

    def set_var(self, name: str, value: str) -> None:
        """Set *name* to *value* for the whole process.

        Raises:
            ValueError: If the pair fails ``check_assignment``.

        """
        check_assignment(name, value)
        os.environ[name] = value

    def remove_var(self, name: str) -> None:
        """Remove *name* from the process environment, if set."""
        if _lookup(name) is not None:
            os.environ.pop(name, None)

    def vars(self) -> Iterator[tuple[str, str]]:
        """Return a snapshot of every variable set right now."""
        return iter(list(os.environ.items()))

    def __eq__(self, other: object) -> bool:
        """All real environments are the same environment."""
        if not isinstance(other, RealEnvironment):
            return NotImplemented
        return True

    def __hash__(self) -> int:
        """Hash consistently with ``__eq__``."""
        return hash(RealEnvironment)

    def __repr__(self) -> str:
        """Return ``RealEnvironment()``."""
        return "RealEnvironment()"
