# ABOUTME: Runtime configuration for shelfscan, read from SHELFSCAN_* environment variables.
# ABOUTME: The CLI exposes the same settings as options that fall back to these variables.

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from shelfscan.db.connection import DEFAULT_DB_PATH
from shelfscan.scanning.gate import IsbnPolicy
from shelfscan.scanning.notifier import DEFAULT_COOLDOWN


class ConfigError(ValueError):
    """Raised when an environment variable holds an unusable value."""


@dataclass(frozen=True)
class ShelfscanConfig:
    db_path: Path = DEFAULT_DB_PATH
    cooldown: float = DEFAULT_COOLDOWN
    isbn_policy: IsbnPolicy = IsbnPolicy.STRICT
    category: str | None = None
    postgrest_url: str | None = None
    postgrest_key: str | None = None

    @property
    def uses_postgrest(self) -> bool:
        """Whether the hosted table should be used instead of the local file."""
        return bool(self.postgrest_url)


def load_config(environ: Mapping[str, str] | None = None) -> ShelfscanConfig:
    """Build a ShelfscanConfig from environment variables.

    Raises:
        ConfigError: On a non-numeric, non-finite or negative cool-down, an unknown ISBN
            policy, or a PostgREST URL without a key.
    """
    env = os.environ if environ is None else environ

    raw_cooldown = env.get("SHELFSCAN_COOLDOWN")
    cooldown = DEFAULT_COOLDOWN
    if raw_cooldown:
        try:
            cooldown = float(raw_cooldown)
        except ValueError:
            raise ConfigError(f"SHELFSCAN_COOLDOWN must be a number: {raw_cooldown!r}") from None
        if not math.isfinite(cooldown):
            raise ConfigError(f"SHELFSCAN_COOLDOWN must be finite: {raw_cooldown!r}")
        if cooldown < 0:
            raise ConfigError("SHELFSCAN_COOLDOWN must not be negative")

    policy = IsbnPolicy.STRICT
    if env.get("SHELFSCAN_ISBN_POLICY"):
        try:
            policy = IsbnPolicy.from_name(env["SHELFSCAN_ISBN_POLICY"])
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

    postgrest_url = env.get("SHELFSCAN_POSTGREST_URL") or None
    postgrest_key = env.get("SHELFSCAN_POSTGREST_KEY") or None
    if postgrest_url and not postgrest_key:
        raise ConfigError("SHELFSCAN_POSTGREST_URL is set but SHELFSCAN_POSTGREST_KEY is not")

    db = env.get("SHELFSCAN_DB")
    return ShelfscanConfig(
        db_path=Path(db).expanduser() if db else DEFAULT_DB_PATH,
        cooldown=cooldown,
        isbn_policy=policy,
        category=env.get("SHELFSCAN_CATEGORY") or None,
        postgrest_url=postgrest_url,
        postgrest_key=postgrest_key,
    )
