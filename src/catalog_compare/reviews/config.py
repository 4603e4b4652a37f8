"""ServiceConfig: runtime settings for ``ReviewService``.

Values come from the constructor or, via ``ServiceConfig.from_env``, from
environment variables:

- ``CATALOG_COMPARE_MAX_WRITE_ATTEMPTS``: attempts per mutation (int >= 1).
- ``CATALOG_COMPARE_INCLUDE_DISABLED_REVIEWS``: ``true``/``false``.
- ``CATALOG_COMPARE_RETRY_WAIT_MAX``: upper bound of one backoff wait, seconds.

Unset variables fall back to the defaults.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

__all__ = ["ServiceConfig"]

_ENV_PREFIX = "CATALOG_COMPARE_"
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True, slots=True)
class ServiceConfig:
    """Immutable configuration for ``ReviewService``.

    Attributes:
        max_write_attempts: How many times a read-modify-write is attempted
            before a ``WriteConflict`` is surfaced (>= 1).
        include_disabled_in_rating: Count disabled reviews in product ratings.
        retry_wait_max: Upper bound in seconds of the jittered exponential
            backoff between attempts (>= 0).
    """

    max_write_attempts: int = 5
    include_disabled_in_rating: bool = False
    retry_wait_max: float = 0.5

    def __post_init__(self) -> None:
        if self.max_write_attempts < 1:
            msg = f"max_write_attempts must be >= 1, got {self.max_write_attempts}"
            raise ValueError(msg)
        if self.retry_wait_max < 0.0:
            msg = f"retry_wait_max must be >= 0.0, got {self.retry_wait_max}"
            raise ValueError(msg)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServiceConfig:
        """Build a config from ``environ`` (defaults to ``os.environ``).

        Raises:
            ValueError: If a variable is set to something unparseable.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        attempts = env.get(f"{_ENV_PREFIX}MAX_WRITE_ATTEMPTS")
        include = env.get(f"{_ENV_PREFIX}INCLUDE_DISABLED_REVIEWS")
        wait_max = env.get(f"{_ENV_PREFIX}RETRY_WAIT_MAX")

        return cls(
            max_write_attempts=(
                defaults.max_write_attempts if attempts is None else int(attempts)
            ),
            include_disabled_in_rating=(
                defaults.include_disabled_in_rating
                if include is None
                else _parse_bool(include)
            ),
            retry_wait_max=(
                defaults.retry_wait_max if wait_max is None else float(wait_max)
            ),
        )


def _parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    msg = f"expected a boolean, got {raw!r}"
    raise ValueError(msg)
