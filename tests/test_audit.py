"""Tests for the environment audit log.

AuditedEnvironment wraps any environment and records each call in an
AuditLog: reads at DEBUG, writes at INFO, misses at WARNING, and
undecodable values at ERROR.
"""

import pytest

from env_wrapper.audit import AuditedEnvironment, AuditEntry, AuditLog, EnvOp, LogLevel
from env_wrapper.environment import Environment
from env_wrapper.errors import InvalidValueError, NotPresentError
from env_wrapper.fake import FakeEnvironment


class _UnreadableEnvironment(FakeEnvironment):
    """A fake whose every lookup hits undecodable bytes."""

    def var(self, name: str) -> str:
        """Always fail as if the stored bytes were not UTF-8."""
        raise InvalidValueError(name, b"\x80")


def _audited() -> AuditedEnvironment:
    """Create an audited wrapper around a fresh fake."""
    return AuditedEnvironment(FakeEnvironment())


class TestLogLevel:
    """Verify log level ordering."""

    def test_levels_are_ordered(self) -> None:
        """DEBUG < INFO < WARNING < ERROR."""
        assert LogLevel.DEBUG < LogLevel.INFO
        assert LogLevel.INFO < LogLevel.WARNING
        assert LogLevel.WARNING < LogLevel.ERROR


class TestAuditEntry:
    """Verify audit entry structure."""

    def test_entry_str_with_value(self) -> None:
        """A set_var entry should render its name and value."""
        entry = AuditEntry(level=LogLevel.INFO, op=EnvOp.SET_VAR, name="HOME", value="/root")
        assert str(entry) == "[INFO] env: set_var HOME=/root"

    def test_entry_str_without_name(self) -> None:
        """A vars entry has no name to render."""
        entry = AuditEntry(level=LogLevel.DEBUG, op=EnvOp.VARS, source="test")
        assert str(entry) == "[DEBUG] test: vars"

    def test_entry_is_frozen(self) -> None:
        """Entries should be immutable."""
        entry = AuditEntry(level=LogLevel.DEBUG, op=EnvOp.VAR, name="X")
        with pytest.raises(AttributeError):
            entry.name = "Y"  # type: ignore[misc]


class TestAuditLog:
    """Verify the append-only log buffer."""

    def test_starts_empty(self) -> None:
        """A new log has no entries."""
        assert len(AuditLog()) == 0

    def test_filter_by_level_op_and_name(self) -> None:
        """Filters should combine."""
        log = AuditLog()
        log.record(AuditEntry(level=LogLevel.DEBUG, op=EnvOp.VAR, name="A"))
        log.record(AuditEntry(level=LogLevel.INFO, op=EnvOp.SET_VAR, name="A", value="1"))
        log.record(AuditEntry(level=LogLevel.INFO, op=EnvOp.SET_VAR, name="B", value="2"))
        expected_info = 2
        assert len(log.filter(min_level=LogLevel.INFO)) == expected_info
        assert [e.name for e in log.filter(op=EnvOp.SET_VAR, name="B")] == ["B"]
        assert log.filter(op=EnvOp.REMOVE_VAR) == []

    def test_entries_returns_a_copy(self) -> None:
        """Mutating the returned list should not change the log."""
        log = AuditLog()
        log.record(AuditEntry(level=LogLevel.DEBUG, op=EnvOp.VARS))
        log.entries.clear()
        assert len(log) == 1

    def test_clear(self) -> None:
        """clear() should remove every entry."""
        log = AuditLog()
        log.record(AuditEntry(level=LogLevel.DEBUG, op=EnvOp.VARS))
        log.clear()
        assert log.entries == []


class TestAuditedEnvironment:
    """Verify the recording wrapper."""

    def test_is_an_environment(self) -> None:
        """The wrapper should itself satisfy the Environment protocol."""
        assert isinstance(_audited(), Environment)

    def test_forwards_to_inner(self) -> None:
        """Writes through the wrapper should land in the wrapped fake."""
        inner = FakeEnvironment()
        env = AuditedEnvironment(inner)
        env.set_var("A", "1")
        assert inner.var("A") == "1"
        assert env.var("A") == "1"
        assert dict(env.vars()) == {"A": "1"}

    def test_records_calls_in_order(self) -> None:
        """Each call should append one entry, in call order."""
        env = _audited()
        env.set_var("A", "1")
        env.var("A")
        env.var_os("A")
        env.remove_var("A")
        env.vars()
        assert [e.op for e in env.log.entries] == [
            EnvOp.SET_VAR,
            EnvOp.VAR,
            EnvOp.VAR_OS,
            EnvOp.REMOVE_VAR,
            EnvOp.VARS,
        ]

    def test_levels(self) -> None:
        """Reads are DEBUG and writes are INFO."""
        env = _audited()
        env.set_var("A", "1")
        env.var("A")
        assert [e.level for e in env.log.entries] == [LogLevel.INFO, LogLevel.DEBUG]
        assert env.log.entries[0].value == "1"

    def test_miss_is_recorded_and_reraised(self) -> None:
        """A NotPresentError should be logged at WARNING and re-raised."""
        env = _audited()
        with pytest.raises(NotPresentError):
            env.var("MISSING")
        assert env.log.filter(min_level=LogLevel.WARNING)[0].name == "MISSING"

    def test_var_os_miss_is_warning(self) -> None:
        """var_os of an unset variable should be logged at WARNING."""
        env = _audited()
        assert env.var_os("MISSING") is None
        assert env.log.entries[0].level is LogLevel.WARNING

    def test_invalid_value_is_error(self) -> None:
        """An InvalidValueError should be logged at ERROR and re-raised."""
        env = AuditedEnvironment(_UnreadableEnvironment())
        with pytest.raises(InvalidValueError):
            env.var("BROKEN")
        assert env.log.entries[0].level is LogLevel.ERROR

    def test_rejected_write_is_not_recorded(self) -> None:
        """A write the inner environment refuses should leave no entry."""
        env = _audited()
        with pytest.raises(ValueError, match="illegal"):
            env.set_var("A=B", "1")
        assert len(env.log) == 0

    def test_shared_log_and_source(self) -> None:
        """Several wrappers can write to one log under different labels."""
        log = AuditLog()
        first = AuditedEnvironment(FakeEnvironment(), log, source="first")
        second = AuditedEnvironment(FakeEnvironment(), log, source="second")
        first.set_var("A", "1")
        second.remove_var("A")
        assert [e.source for e in log.entries] == ["first", "second"]
