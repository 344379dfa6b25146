# catalog/config.py
import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Settings are read once, when the app is built.


@dataclass(frozen=True)
class Settings:
    port: int = 3000
    host: str = "0.0.0.0"
    api_key: Optional[str] = None
    log_level: str = "INFO"


def load_settings(env_file: Optional[str] = ".env") -> Settings:
    # values already in the environment win over the .env file
    if env_file:
        load_dotenv(env_file, override=False)
    raw_port = os.environ.get("PORT") or "3000"
    try:
        port = int(raw_port)
    except ValueError:
        port = 3000
    return Settings(
        port=port,
        host=os.environ.get("HOST", "0.0.0.0"),
        api_key=os.environ.get("API_KEY"),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger("catalog")
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    root.setLevel(level)
