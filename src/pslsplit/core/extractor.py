"""Split domain names into subdomain, domain, suffix and registered domain.

Usage:
    extractor = Extractor(SuffixListConfig(primary=SnapshotSource()))
    extractor.extract("mirrors.tuna.tsinghua.edu.cn")
    # ExtractResult(subdomain='mirrors.tuna', domain='tsinghua',
    #               suffix='edu.cn', registered_domain='tsinghua.edu.cn')

The compiled trie and the config it came from are published together as
one immutable snapshot. Queries read the snapshot once, so a concurrent
refresh can never expose a half-built trie. A refresh compiles into a
copy of the config and only replaces the snapshot when compiling worked.
"""
import logging
import re
import threading
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

import idna

from pslsplit.config import Settings, settings as default_settings
from pslsplit.core.compiler import RulesetCompiler
from pslsplit.core.staleness import StalenessTracker
from pslsplit.core.trie import SuffixTrie
from pslsplit.errors import DomainError, TLDExtractError
from pslsplit.models import SuffixListConfig
from pslsplit.schemas import ExtractResult
from pslsplit.sources.loader import SourceLoader, parse_source_uri
from pslsplit.utils.idn import domain_to_ascii, domain_to_unicode

logger = logging.getLogger(__name__)

_TRIM_PATTERN = re.compile(r"^[\s\x00-\x20\x7f-\x9f]+|[\s\x00-\x20\x7f-\x9f]+$")
_ALLOWED_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789.-")


@dataclass(frozen=True)
class _Snapshot:
    trie: SuffixTrie
    config: SuffixListConfig


def trim_domain(value: str) -> str:
    """Strip surrounding whitespace and control characters."""
    return _TRIM_PATTERN.sub("", value)


def validate_domain(domain: str) -> None:
    """
    Check an ASCII domain for characters outside [A-Za-z0-9.-].

    Raises:
        DomainError: Naming the first offending character
    """
    if not domain:
        raise DomainError("empty domain")
    last = len(domain) - 1
    for index, ch in enumerate(domain):
        if ch not in _ALLOWED_CHARS or (ch == "-" and index in (0, last)):
            raise DomainError(f"char:{ch}")


class Extractor:
    """Public suffix aware domain splitter.

    Construction compiles the configured ruleset and raises
    SuffixListError when that fails. Afterwards the extractor always
    has a usable trie: failed refreshes keep the previous one.
    """

    def __init__(
        self,
        config: Optional[SuffixListConfig] = None,
        unicode_output: bool = True,
        compiler: Optional[RulesetCompiler] = None,
    ):
        self.unicode_output = unicode_output
        self._compiler = compiler or RulesetCompiler()
        self._refresh_lock = threading.Lock()

        candidate = (config or SuffixListConfig()).copy()
        trie = self._compiler.compile(candidate)
        self._snapshot = _Snapshot(trie, candidate)

    @classmethod
    def from_settings(cls, settings: Settings = default_settings) -> "Extractor":
        """Build an extractor from application settings."""
        extra = parse_source_uri(settings.extra_source_uri) if settings.extra_source_uri else None
        expire = timedelta(seconds=settings.expire_seconds) if settings.expire_seconds else None
        config = SuffixListConfig(
            primary=parse_source_uri(settings.source_uri),
            extra=extra,
            disable_private_domains=settings.disable_private_domains,
            tracker=StalenessTracker(expire=expire),
        )
        loader = SourceLoader(timeout=settings.fetch_timeout_seconds)
        return cls(config, unicode_output=settings.unicode_output, compiler=RulesetCompiler(loader))

    @property
    def config(self) -> SuffixListConfig:
        return self._snapshot.config

    @property
    def trie(self) -> SuffixTrie:
        return self._snapshot.trie

    @property
    def refreshing(self) -> bool:
        return self._refresh_lock.locked()

    def refresh(self, config: Optional[SuffixListConfig] = None) -> bool:
        """
        Recompile the ruleset and swap it in.

        A new config replaces the current one only if it compiles.
        Compile failures are logged, never raised.

        Returns:
            True if a new trie was published
        """
        with self._refresh_lock:
            return self._rebuild(config)

    def _refresh_if_stale(self) -> None:
        if not self._snapshot.config.is_expired():
            return
        # Another thread is already rebuilding; serve from the current trie.
        if not self._refresh_lock.acquire(blocking=False):
            return
        try:
            if self._snapshot.config.is_expired():
                logger.info("Suffix list expired, refreshing")
                self._rebuild(None)
        finally:
            self._refresh_lock.release()

    def _rebuild(self, config: Optional[SuffixListConfig]) -> bool:
        candidate = (config or self._snapshot.config).copy()
        try:
            trie = self._compiler.compile(candidate)
        except TLDExtractError as e:
            logger.warning(f"Suffix list refresh failed, keeping previous ruleset: {e}")
            return False
        self._snapshot = _Snapshot(trie, candidate)
        return True

    def extract(self, target: str) -> ExtractResult:
        """
        Split a domain name using the compiled suffix list.

        Raises:
            DomainError: If the input is malformed or cannot be normalized
        """
        self._refresh_if_stale()
        trie = self._snapshot.trie

        try:
            host = domain_to_ascii(trim_domain(target))
        except (idna.IDNAError, UnicodeError) as e:
            raise DomainError(str(e)) from e
        host = trim_domain(host)
        validate_domain(host)

        labels = host.split(".")
        suffix_len = trie.suffix_length(labels[::-1])

        suffix = ".".join(labels[len(labels) - suffix_len:]) if suffix_len else None
        if suffix_len == len(labels):
            return self._result(suffix=suffix)

        index = len(labels) - suffix_len - 1
        return self._result(
            subdomain=".".join(labels[:index]),
            domain=labels[index],
            suffix=suffix,
            registered_domain=".".join(labels[index:]) if suffix_len else None,
        )

    __call__ = extract

    def _result(self, **fields: Optional[str]) -> ExtractResult:
        values = {}
        for name, value in fields.items():
            if not value:
                continue
            values[name] = domain_to_unicode(value) if self.unicode_output else value
        return ExtractResult(**values)
