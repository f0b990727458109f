"""Settings read from the environment (and a .env file, loaded by the CLI)."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from unoflip.engine.game import WINNING_SCORE

DEFAULT_SAVE_PATH = "unoflip.sav"


def _int_env(environ: Mapping[str, str], key: str) -> Optional[int]:
    raw = environ.get(key, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    save_path: str = DEFAULT_SAVE_PATH
    log_level: str = "WARNING"
    seed: Optional[int] = None
    target_score: int = WINNING_SCORE

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        target = _int_env(env, "UNOFLIP_TARGET_SCORE")
        if target is not None and target <= 0:
            raise ValueError("UNOFLIP_TARGET_SCORE must be positive")
        return cls(
            save_path=env.get("UNOFLIP_SAVE_PATH") or DEFAULT_SAVE_PATH,
            log_level=(env.get("UNOFLIP_LOG_LEVEL") or "WARNING").upper(),
            seed=_int_env(env, "UNOFLIP_SEED"),
            target_score=target if target is not None else WINNING_SCORE,
        )
