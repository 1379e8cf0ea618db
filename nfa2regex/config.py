"""Application settings, overridable through NFA2REGEX_* environment variables."""

import os
from dataclasses import dataclass, fields

ENV_PREFIX = "NFA2REGEX_"


def _to_bool(value):
    return str(value).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    log_level: str = "INFO"
    default_sample: int = 0
    max_test_length: int = 6          # longest string enumerated when checking languages
    implicit_concat: bool = False     # show ab instead of a·b
    graph_rankdir: str = "LR"

    @classmethod
    def from_env(cls, environ=None):
        """Defaults overridden by the environment (``NFA2REGEX_LOG_LEVEL`` etc.)."""
        environ = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            if f.type is bool or f.type == "bool":
                values[f.name] = _to_bool(raw)
            elif f.type is int or f.type == "int":
                try:
                    values[f.name] = int(raw)
                except ValueError as exc:
                    raise ValueError(f"{ENV_PREFIX}{f.name.upper()} must be an integer, got {raw!r}") from exc
            else:
                values[f.name] = raw.strip()
        settings = cls(**values)
        settings.log_level = settings.log_level.upper()
        if settings.max_test_length < 0:
            raise ValueError(f"{ENV_PREFIX}MAX_TEST_LENGTH must not be negative")
        return settings
