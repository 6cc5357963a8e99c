import os
from dataclasses import dataclass
from typing import Optional

from .engine import DEFAULT_CHECK_INTERVAL
from .errors import InputError

# deterministic deployment proxy, the CREATE2 factory forge scripts deploy through
DEFAULT_FACTORY = "0x4e59b44847b379578588920cA78FbF26c0B4956C"


@dataclass(frozen=True)
class MinerConfig:
    factory: str = DEFAULT_FACTORY
    workers: Optional[int] = None
    check_interval: int = DEFAULT_CHECK_INTERVAL
    timeout: Optional[float] = None
    flags: str = ""
    log_file: Optional[str] = None


def _env_number(name, cast, default):
    raw = os.environ.get(name, "").strip()
    if raw == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise InputError(f"{name} must be a number, got {raw!r}") from None


def load_config() -> MinerConfig:
    """Read miner settings from the environment.

    A .env file is not read here; scripts call load_dotenv() once at startup.
    """
    return MinerConfig(
        factory=os.environ.get("HOOK_FACTORY") or DEFAULT_FACTORY,
        workers=_env_number("MAX_WORKERS", int, None),
        check_interval=_env_number("CHECK_INTERVAL", int, DEFAULT_CHECK_INTERVAL),
        timeout=_env_number("MINE_TIMEOUT", float, None),
        flags=os.environ.get("HOOK_FLAGS", ""),
        log_file=os.environ.get("LOG_FILE") or None,
    )
