"""Injectable access to environment variables.

Instead of reading ``os.environ`` directly, accept an ``Environment``
and let the caller decide which one::

    from env_wrapper import Environment, RealEnvironment, var_or_default

    def config_location(env: Environment) -> str:
        return var_or_default(env, "CONFIG_LOCATION", "/etc/my_app/service.conf")

    config_location(RealEnvironment())

Tests pass a fresh ``FakeEnvironment`` instead, so each test gets its
own private set of variables::

    from env_wrapper import FakeEnvironment

    env = FakeEnvironment()
    env.set_var("CONFIG_LOCATION", "/a/user/specified/location")
    assert config_location(env) == "/a/user/specified/location"
"""

from env_wrapper.audit import AuditedEnvironment, AuditEntry, AuditLog, EnvOp, LogLevel
from env_wrapper.environment import Environment, check_assignment, var_or_default
from env_wrapper.errors import InvalidValueError, NotPresentError, VarError
from env_wrapper.fake import FakeEnvironment
from env_wrapper.real import RealEnvironment

__all__ = [
    "AuditEntry",
    "AuditLog",
    "AuditedEnvironment",
    "EnvOp",
    "Environment",
    "FakeEnvironment",
    "InvalidValueError",
    "LogLevel",
    "NotPresentError",
    "RealEnvironment",
    "VarError",
    "check_assignment",
    "var_or_default",
]
