"""Audit log for environment access.

The providers never log on their own.  To see what code did with its
environment, wrap the provider in an ``AuditedEnvironment``: every call
is forwarded unchanged and recorded as a structured entry in an
``AuditLog``.

An entry names the operation (``EnvOp``), the variable, any value
written, and a severity (``LogLevel``).  ``AuditLog`` only ever grows
until ``clear()``; ``filter()`` narrows it by level, operation or name.

Levels:
    Reads are DEBUG, writes are INFO, a lookup of an unset variable is
    WARNING, and an undecodable value is ERROR.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum, StrEnum

from env_wrapper.environment import Environment
from env_wrapper.errors import InvalidValueError, NotPresentError


class LogLevel(IntEnum):
    """How notable an environment access is; higher is more notable."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3


class EnvOp(StrEnum):
    """The environment operation an entry records."""

    VAR = "var"
    VAR_OS = "var_os"
    SET_VAR = "set_var"
    REMOVE_VAR = "remove_var"
    VARS = "vars"


@dataclass(frozen=True)
class AuditEntry:
    """A single structured audit record.

    Attributes:
        level: The severity of this event.
        op: The operation that was called.
        name: The variable name, or None for ``vars``.
        value: The value written by ``set_var``, otherwise None.
        source: A label for the wrapped environment (e.g. "env").

    """

    level: LogLevel
    op: EnvOp
    name: str | None = None
    value: str | None = None
    source: str = "env"

    def __str__(self) -> str:
        """Format as ``[LEVEL] source: op name=value``."""
        text = f"[{self.level.name}] {self.source}: {self.op}"
        if self.name is not None:
            text += f" {self.name}"
        if self.value is not None:
            text += f"={self.value}"
        return text


class AuditLog:
    """Append-only buffer of audit entries with filtering."""

    def __init__(self) -> None:
        """Create an empty log."""
        self._entries: list[AuditEntry] = []

    @property
    def entries(self) -> list[AuditEntry]:
        """Return all entries in chronological order."""
        return list(self._entries)

    def record(self, entry: AuditEntry) -> None:
        """Append *entry* to the log."""
        self._entries.append(entry)

    def filter(
        self,
        *,
        min_level: LogLevel | None = None,
        op: EnvOp | None = None,
        name: str | None = None,
    ) -> list[AuditEntry]:
        """Return entries matching the given criteria.

        Args:
            min_level: If set, only return entries at or above this level.
            op: If set, only return entries for this operation.
            name: If set, only return entries for this variable.

        Returns:
            A filtered list of audit entries.

        """
        result = list(self._entries)
        if min_level is not None:
            result = [e for e in result if e.level >= min_level]
        if op is not None:
            result = [e for e in result if e.op == op]
        if name is not None:
            result = [e for e in result if e.name == name]
        return result

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()

    def __len__(self) -> int:
        """Return the number of entries."""
        return len(self._entries)


class AuditedEnvironment:
    """An environment that records every call made through it.

    Errors from the wrapped environment are recorded and then re-raised
    unchanged.
    """

    def __init__(
        self,
        inner: Environment,
        log: AuditLog | None = None,
        *,
        source: str = "env",
    ) -> None:
        """Wrap *inner*, recording into *log* (a new log if omitted)."""
        self.inner = inner
        self.log = log if log is not None else AuditLog()
        self.source = source

    def _record(
        self,
        level: LogLevel,
        op: EnvOp,
        name: str | None = None,
        value: str | None = None,
    ) -> None:
        self.log.record(
            AuditEntry(level=level, op=op, name=name, value=value, source=self.source)
        )

    def var(self, name: str) -> str:
        """Forward ``var`` and record the lookup."""
        try:
            value = self.inner.var(name)
        except NotPresentError:
            self._record(LogLevel.WARNING, EnvOp.VAR, name)
            raise
        except InvalidValueError:
            self._record(LogLevel.ERROR, EnvOp.VAR, name)
            raise
        self._record(LogLevel.DEBUG, EnvOp.VAR, name)
        return value

    def var_os(self, name: str) -> bytes | None:
        """Forward ``var_os`` and record the lookup."""
        value = self.inner.var_os(name)
        level = LogLevel.DEBUG if value is not None else LogLevel.WARNING
        self._record(level, EnvOp.VAR_OS, name)
        return value

    def set_var(self, name: str, value: str) -> None:
        """Forward ``set_var`` and record the assignment."""
        self.inner.set_var(name, value)
        self._record(LogLevel.INFO, EnvOp.SET_VAR, name, value)

    def remove_var(self, name: str) -> None:
        """Forward ``remove_var`` and record the removal."""
        self.inner.remove_var(name)
        self._record(LogLevel.INFO, EnvOp.REMOVE_VAR, name)

    def vars(self) -> Iterator[tuple[str, str]]:
        """Forward ``vars`` and record the enumeration."""
        result = self.inner.vars()
        self._record(LogLevel.DEBUG, EnvOp.VARS)
        return result
