"""Compile PSL-formatted text into a SuffixTrie."""
import logging
from typing import Iterable, Optional

import idna

from pslsplit.core.trie import SuffixTrie
from pslsplit.models import RulesetSource, SuffixListConfig
from pslsplit.sources.loader import SourceLoader
from pslsplit.utils.idn import rule_to_ascii

logger = logging.getLogger(__name__)

PUBLIC_PRIVATE_SUFFIX_SEPARATOR = "// ===BEGIN PRIVATE DOMAINS==="
COMMENT_MARKER = "//"


class RulesetCompiler:
    """Parses ruleset text into suffix sets and builds the trie from them."""

    def __init__(self, loader: Optional[SourceLoader] = None):
        self.loader = loader or SourceLoader()

    def compile(self, config: SuffixListConfig) -> SuffixTrie:
        """
        Fill the config's suffix sets and build a frozen trie from them.

        The config is mutated: its sets are replaced and the tracker is
        marked built. Callers that need rollback compile into a copy.

        Raises:
            SuffixListError: If a source cannot be read or fetched
        """
        config.reset()
        self.parse_source(config, config.primary)
        if config.extra is not None:
            self.parse_source(config, config.extra)

        trie = build_trie(config)
        config.tracker.mark_built()

        logger.info(
            f"Compiled suffix list: {len(config.public_suffixes)} public, "
            f"{len(config.private_suffixes)} private rules, "
            f"{trie.node_count()} trie nodes"
        )
        return trie

    def parse_source(self, config: SuffixListConfig, source: RulesetSource) -> None:
        text = self.loader.load(source)
        self.parse_lines(config, text.splitlines())

    def parse_lines(self, config: SuffixListConfig, lines: Iterable[str]) -> None:
        """Classify rule lines into the config's public and private sets."""
        is_private = False
        for raw_line in lines:
            if is_private and config.disable_private_domains:
                continue

            line = raw_line.rstrip()
            if not is_private and line == PUBLIC_PRIVATE_SUFFIX_SEPARATOR:
                is_private = True
            if not line or line.startswith(COMMENT_MARKER):
                continue

            try:
                suffix = rule_to_ascii(line)
            except (idna.IDNAError, UnicodeError) as e:
                logger.debug(f"Skipping unencodable rule {line!r}: {e}")
                continue

            target = config.private_suffixes if is_private else config.public_suffixes
            target.add(suffix)
            if suffix != line:
                target.add(line)


def build_trie(config: SuffixListConfig) -> SuffixTrie:
    """Insert every enabled rule, reversed into TLD-first order."""
    rules = set(config.public_suffixes)
    if not config.disable_private_domains:
        rules |= config.private_suffixes

    trie = SuffixTrie()
    for rule in rules:
        trie.insert(list(reversed(rule.split("."))))
    trie.freeze()
    return trie


def compile_ruleset(config: SuffixListConfig, loader: Optional[SourceLoader] = None) -> SuffixTrie:
    """Compile a config's sources into a trie."""
    return RulesetCompiler(loader).compile(config)
