"""Retrieval of schema text from a local checkout or over HTTP."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .logging import get_logger

logger = get_logger("source")

Opener = Callable[[Request, float], bytes]


class SourceUnavailableError(RuntimeError):
    """Raised when the schema text cannot be read from any configured location."""


@dataclass
class SchemaText:
    """Schema contents together with where they were read from."""

    text: str
    origin: str


class SchemaSource:
    """Reads the schema from a local file first, then from a URL."""

    def __init__(
        self,
        local_path: Path | None = None,
        url: str | None = None,
        *,
        timeout: float = 30.0,
        opener: Opener | None = None,
    ) -> None:
        self.local_path = local_path
        self.url = url
        self.timeout = timeout
        self._opener = opener or _urlopen_bytes

    def fetch(self) -> SchemaText:
        if self.local_path is not None and self.local_path.is_file():
            logger.info("Using local schema file: %s", self.local_path)
            try:
                text = self.local_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                raise SourceUnavailableError(
                    f"Unable to read schema file {self.local_path}: {exc}"
                ) from exc
            return SchemaText(text=text, origin=str(self.local_path))

        if not self.url:
            location = self.local_path or "(no local path)"
            raise SourceUnavailableError(
                f"Schema file not found at {location} and no URL is configured."
            )

        logger.info("Fetching schema from %s", self.url)
        return SchemaText(text=self._download(self.url), origin=self.url)

    def _download(self, url: str) -> str:
        request = Request(url, headers={"Accept": "text/plain"}, method="GET")
        try:
            raw = self._opener(request, self.timeout)
        except HTTPError as exc:
            raise SourceUnavailableError(
                f"Failed to fetch schema: HTTP {exc.code} from {url}"
            ) from exc
        except URLError as exc:
            raise SourceUnavailableError(f"Failed to fetch schema: {exc.reason}") from exc
        except TimeoutError as exc:
            raise SourceUnavailableError(
                f"Timed out after {self.timeout}s fetching schema from {url}"
            ) from exc

        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise SourceUnavailableError(f"Schema at {url} is not valid UTF-8") from exc


def _urlopen_bytes(request: Request, timeout: float) -> bytes:
    with urlopen(request, timeout=timeout) as response:  # type: ignore[arg-type]
        return response.read()


__all__ = ["SchemaSource", "SchemaText", "SourceUnavailableError"]
