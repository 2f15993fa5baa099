"""
Runtime configuration for revshare.

Values come from keyword arguments or from the environment
(``RevenueConfig.from_env``). Malformed environment values fall back to the
defaults rather than failing at startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .structured_logging import configure_structured_logging


def _env_str(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "y", "on"}:
        return True
    if v in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclass(frozen=True)
class RevenueConfig:
    """Config for one asset and its command engine."""

    # Run the whole-asset audit after every accepted engine step. The audit
    # walks every live share, so keep it off outside tests and tooling.
    check_invariants: bool = False
    log_level: str = "INFO"
    # Route deposit / claim records through the structured logger when no
    # explicit sink is supplied.
    log_events: bool = True

    @classmethod
    def from_env(cls) -> RevenueConfig:
        return cls(
            check_invariants=_env_bool("REVSHARE_CHECK_INVARIANTS", False),
            log_level=_env_str("REVSHARE_LOG_LEVEL", "INFO").upper(),
            log_events=_env_bool("REVSHARE_LOG_EVENTS", True),
        )

    def configure_logging(self) -> None:
        """Install the JSON-lines handler on the ``revshare`` logger at ``log_level``."""
        configure_structured_logging(self.log_level)
