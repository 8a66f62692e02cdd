# core/config.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://lyricus-api.onrender.com/api/lyrics"
DEFAULT_TIMEOUT_S = 15.0
DEFAULT_USER_AGENT = "lyricus-pyside6/0.1"


@dataclass(frozen=True)
class Config:
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout_s: Optional[float] = DEFAULT_TIMEOUT_S
    user_agent: str = DEFAULT_USER_AGENT
    download_dir: str = ""


def default_download_dir() -> str:
    from PySide6.QtCore import QStandardPaths

    base = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.DownloadLocation)
    return base or os.path.join(os.path.expanduser("~"), "Downloads")


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or raw.strip() == "":
        return DEFAULT_TIMEOUT_S
    # "0" / "none" disables the transport timeout
    if raw.strip().lower() in ("0", "none", "off"):
        return None
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid LYRICUS_TIMEOUT=%r, using %.0fs", raw, DEFAULT_TIMEOUT_S)
        return DEFAULT_TIMEOUT_S
    if value < 0:
        logger.warning("Ignoring negative LYRICUS_TIMEOUT=%r, using %.0fs", raw, DEFAULT_TIMEOUT_S)
        return DEFAULT_TIMEOUT_S
    return value


def load_config(env: Mapping[str, str] | None = None) -> Config:
    env = os.environ if env is None else env

    base_url = (env.get("LYRICUS_API_URL") or DEFAULT_API_BASE_URL).strip().rstrip("/")
    download_dir = (env.get("LYRICUS_DOWNLOAD_DIR") or "").strip() or default_download_dir()

    return Config(
        api_base_url=base_url,
        request_timeout_s=_parse_timeout(env.get("LYRICUS_TIMEOUT")),
        user_agent=(env.get("LYRICUS_USER_AGENT") or DEFAULT_USER_AGENT).strip(),
        download_dir=download_dir,
    )
