"""Runtime settings, read from the environment (and a local .env file)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = _DEFAULT_DATA_DIR
    redis_url: str = ""
    redis_channel: str = "inventory_events"
    log_level: str = "INFO"

    @property
    def realtime_enabled(self) -> bool:
        return bool(self.redis_url)

    @classmethod
    def from_env(cls) -> Settings:
        load_dotenv()
        return cls(
            data_dir=Path(os.getenv("SHOP_DATA_DIR", str(_DEFAULT_DATA_DIR))),
            redis_url=os.getenv("SHOP_REDIS_URL", ""),
            redis_channel=os.getenv("SHOP_REDIS_CHANNEL", "inventory_events"),
            log_level=os.getenv("SHOP_LOG_LEVEL", "INFO").upper(),
        )
