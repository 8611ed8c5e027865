"""A fake environment for tests, with variables kept in a private dict.

Every ``FakeEnvironment`` is an independent store.  Setting a variable
on one instance is invisible to every other instance and to the real
process environment, so tests can run in any order (or in parallel)
without leaking state into each other.

Each instance owns its own dict; ``copy()`` and the ``initial`` mapping
are copied into it, never shared.  Writes go through the same
``check_assignment`` rules as ``RealEnvironment``, which also refuse
lone surrogates, so every stored value is valid UTF-8 and ``var`` never
raises ``InvalidValueError``.

Use a new instance for each test.
"""

import os
import threading
from collections.abc import Iterator, Mapping
from typing import Self

from env_wrapper.environment import Environment, check_assignment
from env_wrapper.errors import NotPresentError


class FakeEnvironment:
    """An in-memory, per-instance environment.

    A lock guards the dict so an instance shared between threads stays
    consistent, though one instance per test is the intended use.
    """

    def __init__(self, initial: Mapping[str, str] | None = None) -> None:
        """Create an environment, optionally pre-populated.

        Args:
            initial: Variables to seed the fake with; the mapping itself
                is not kept.

        Raises:
            ValueError: If any pair in *initial* is not a valid assignment.

        """
        self._lock = threading.Lock()
        self._vars: dict[str, str] = {}
        if initial:
            for name, value in initial.items():
                check_assignment(name, value)
                self._vars[name] = value

    @classmethod
    def from_environment(cls, env: Environment) -> Self:
        """Create a fake seeded with a snapshot of *env*'s variables."""
        return cls(initial=dict(env.vars()))

    def var(self, name: str) -> str:
        """Return the value of *name*.

        Raises:
            NotPresentError: If *name* is not set.

        """
        with self._lock:
            try:
                return self._vars[name]
            except KeyError:
                raise NotPresentError(name) from None

    def var_os(self, name: str) -> bytes | None:
        """Return the value of *name* encoded as the OS would store it."""
        with self._lock:
            value = self._vars.get(name)
        if value is None:
            return None
        return os.fsencode(value)

    def set_var(self, name: str, value: str) -> None:
        """Set *name* to *value* (creates or overwrites)."""
        check_assignment(name, value)
        with self._lock:
            self._vars[name] = value

    def remove_var(self, name: str) -> None:
        """Remove *name*, if set."""
        with self._lock:
            self._vars.pop(name, None)

    def vars(self) -> Iterator[tuple[str, str]]:
        """Return a snapshot of all (name, value) pairs."""
        with self._lock:
            return iter(list(self._vars.items()))

    def copy(self) -> Self:
        """Return a new fake holding the same variables, unlinked from this one."""
        with self._lock:
            return type(self)(initial=self._vars)

    def __len__(self) -> int:
        """Return how many variables are set."""
        with self._lock:
            return len(self._vars)

    def __contains__(self, name: object) -> bool:
        """Return True if *name* is set."""
        with self._lock:
            return name in self._vars

    def __eq__(self, other: object) -> bool:
        """Two fakes are equal when they hold the same variables."""
        if not isinstance(other, FakeEnvironment):
            return NotImplemented
        return dict(self.vars()) == dict(other.vars())

    def __repr__(self) -> str:
        """Return e.g. ``FakeEnvironment({'HOME': '/root'})``."""
        return f"FakeEnvironment({dict(self.vars())!r})"
