"""Resolve ruleset sources into PSL text."""
import logging
from pathlib import Path
from typing import Optional, Sequence
from urllib.parse import urlparse

import httpx

from pslsplit.config import settings
from pslsplit.errors import SuffixListError
from pslsplit.models import (
    LocalSource,
    RemoteSource,
    RulesetSource,
    SnapshotSource,
    TextSource,
)

logger = logging.getLogger(__name__)

PUBLIC_SUFFIX_LIST_URLS = (
    "https://publicsuffix.org/list/public_suffix_list.dat",
    "https://raw.githubusercontent.com/publicsuffix/list/master/public_suffix_list.dat",
)

SNAPSHOT_PATH = Path(__file__).resolve().parent.parent / "data" / "public_suffix_list.dat"


def parse_source_uri(uri: str) -> RulesetSource:
    """
    Map a configuration string onto a ruleset source.

    - "snapshot" -> bundled snapshot
    - "remote" -> remote fetch using the fallback URL list
    - http(s) URL -> remote fetch of that URL
    - existing file path -> local file

    Raises:
        SuffixListError: If the string is a path that does not exist
    """
    value = uri.strip()
    if value == "snapshot":
        return SnapshotSource()
    if value == "remote":
        return RemoteSource()

    parsed = urlparse(value)
    if parsed.scheme in ("http", "https") and parsed.netloc:
        return RemoteSource(url=value)

    path = Path(value).expanduser()
    if path.is_file():
        return LocalSource(path=path)

    raise SuffixListError(f"file does not exist: {value}")


class SourceLoader:
    """Turns a RulesetSource into ruleset text."""

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
        fallback_urls: Sequence[str] = PUBLIC_SUFFIX_LIST_URLS,
    ):
        self.timeout = settings.fetch_timeout_seconds if timeout is None else timeout
        self.transport = transport
        self.fallback_urls = tuple(fallback_urls)

    def load(self, source: RulesetSource) -> str:
        """
        Read the ruleset text for a source.

        Raises:
            SuffixListError: If no text could be obtained
        """
        if isinstance(source, TextSource):
            return source.text
        if isinstance(source, SnapshotSource):
            return self._read_file(SNAPSHOT_PATH)
        if isinstance(source, LocalSource):
            return self._read_file(Path(source.path))
        if isinstance(source, RemoteSource):
            if source.url:
                return self._fetch(source.url)
            return self._fetch_with_fallback()
        raise SuffixListError(f"unsupported source: {source!r}")

    def _read_file(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise SuffixListError(f"cannot read {path}: {e}") from e

    def _fetch(self, url: str) -> str:
        logger.info(f"Fetching public suffix list from {url}")
        try:
            with httpx.Client(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = client.get(url)
                response.raise_for_status()
                return response.text
        except httpx.HTTPError as e:
            raise SuffixListError(f"cannot fetch {url}: {e}") from e

    def _fetch_with_fallback(self) -> str:
        last_error = SuffixListError("no suffix list URLs configured")
        for url in self.fallback_urls:
            try:
                text = self._fetch(url.strip())
            except SuffixListError as e:
                logger.warning(f"Suffix list fetch failed, trying next URL: {e}")
                last_error = e
                continue
            if text.strip():
                return text
            last_error = SuffixListError(f"empty suffix list from {url}")
        raise last_error
