from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any, Optional

import requests

from core.config import DEFAULT_API_BASE_URL, DEFAULT_TIMEOUT_S, DEFAULT_USER_AGENT, Config
from core.models import DownloadedFile, LyricRecord, NewLyricRequest

logger = logging.getLogger(__name__)

_FILENAME_RE = re.compile(r'filename="(.+)"')


class TransportError(Exception):
    """
    Any failed interaction with the lyrics API.
    status/reason are set when the server answered with a non-success code.
    """

    def __init__(self, message: str, status: Optional[int] = None, reason: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.reason = reason

    def __str__(self) -> str:
        return self.message


class NetworkError(TransportError):
    """No response at all: connection refused, DNS, timeout."""


def filename_from_disposition(header: Optional[str], lyric_id: int) -> str:
    if header:
        match = _FILENAME_RE.search(header)
        if match:
            return match.group(1)
    return f"lyric-{lyric_id}.pdf"


def save_download(downloaded: DownloadedFile, directory: str | os.PathLike) -> Path:
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    # never let a server supplied name escape the target directory
    name = Path(downloaded.filename.replace("\\", "/")).name or "lyric.pdf"
    path = target_dir / name
    path.write_bytes(downloaded.content)
    return path


class LyricusClient:
    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: Optional[float] = DEFAULT_TIMEOUT_S,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent})

    @classmethod
    def from_config(cls, config: Config, session: Optional[requests.Session] = None) -> "LyricusClient":
        return cls(
            base_url=config.api_base_url,
            user_agent=config.user_agent,
            timeout=config.request_timeout_s,
            session=session,
        )

    # -------------------------
    # Operations
    # -------------------------

    def fetch_all(self) -> list[LyricRecord]:
        # GET /api/lyrics -> [LyricRecord]
        r = self._request("GET", self.base_url, action="fetch lyrics")
        data = self._json(r, action="fetch lyrics")
        if not isinstance(data, list):
            logger.warning("Lyrics list response is not an array (%s); treating as empty", type(data).__name__)
            return []

        out: list[LyricRecord] = []
        for item in data:
            try:
                out.append(LyricRecord.from_json(item))
            except ValueError as e:
                logger.warning("Skipping malformed lyric record: %s", e)
        return out

    def fetch_by_id(self, lyric_id: int) -> LyricRecord:
        action = f"fetch lyric {lyric_id}"
        r = self._request("GET", f"{self.base_url}/{int(lyric_id)}", action=action)
        return self._record(r, action=action)

    def create(self, request: NewLyricRequest) -> LyricRecord:
        r = self._request(
            "POST",
            self.base_url,
            action="add lyric",
            json=request.to_payload(),
            headers={"Content-Type": "application/json"},
        )
        return self._record(r, action="add lyric")

    def download(self, lyric_id: int) -> DownloadedFile:
        # GET /api/lyrics/download/{id} -> PDF bytes
        action = f"download lyric {lyric_id}"
        r = self._request("GET", f"{self.base_url}/download/{int(lyric_id)}", action=action)
        return DownloadedFile(
            filename=filename_from_disposition(r.headers.get("Content-Disposition"), int(lyric_id)),
            content=r.content,
            content_type=r.headers.get("Content-Type"),
        )

    # -------------------------
    # Helpers
    # -------------------------

    def _request(self, method: str, url: str, *, action: str, **kwargs: Any) -> requests.Response:
        try:
            if method == "POST":
                r = self.session.post(url, timeout=self.timeout, **kwargs)
            else:
                r = self.session.get(url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.warning("Failed to %s: %s", action, e)
            raise NetworkError(f"Failed to {action}: {e}") from e

        if not r.ok:
            reason = r.reason or ""
            logger.warning("Failed to %s: HTTP %s %s", action, r.status_code, reason)
            raise TransportError(
                f"Failed to {action}: {r.status_code} {reason}".rstrip(),
                status=r.status_code,
                reason=reason,
            )
        return r

    def _json(self, r: requests.Response, *, action: str) -> Any:
        try:
            return r.json()
        except ValueError as e:
            logger.warning("Failed to %s: invalid JSON body", action)
            raise TransportError(f"Failed to {action}: malformed response body", status=r.status_code) from e

    def _record(self, r: requests.Response, *, action: str) -> LyricRecord:
        data = self._json(r, action=action)
        try:
            return LyricRecord.from_json(data)
        except ValueError as e:
            logger.warning("Failed to %s: %s", action, e)
            raise TransportError(f"Failed to {action}: malformed response body", status=r.status_code) from e
