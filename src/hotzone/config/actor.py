"""Acting-user configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_var
from .errors import ConfigurationError

ACTOR_ENV_VAR = "HOTZONE_USER_ID"


@dataclass(frozen=True, slots=True)
class ActorConfig:
    """Identifies the user every inventory operation is scoped to."""

    user_id: int

    @classmethod
    def from_environment(cls) -> ActorConfig:
        return cls(user_id=parse_user_id(require_env_var(ACTOR_ENV_VAR)))


def parse_user_id(value: str) -> int:
    try:
        user_id = int(value.strip())
    except ValueError as exc:
        raise ConfigurationError(f"Invalid user id: {value}") from exc
    if user_id <= 0:
        raise ConfigurationError(f"Invalid user id: {value}")
    return user_id


def get_actor_config(user_id: str | None = None) -> ActorConfig:
    """Resolve the acting user from an explicit value or the environment."""

    if user_id is not None:
        return ActorConfig(user_id=parse_user_id(user_id))
    return ActorConfig.from_environment()
