"""Label trie over reversed PSL rules.

Rules are split on "." and reversed before insertion so that the TLD
comes first: "*.kawasaki.jp" becomes ["jp", "kawasaki", "*"]. Nodes live
in a flat list and children map a label to the index of the child node,
so a whole trie can be rebuilt and swapped in one assignment.

Wildcards ("*") are stored as regular children. Exception rules ("!")
walk the same path as any other rule but never mark their final node
terminal, which lets boundary resolution fall back to the parent that
the sibling wildcard rule already marked.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, Sequence

WILDCARD = "*"
EXCEPTION_MARKER = "!"

ROOT = 0


@dataclass
class TrieNode:
    """A node in the suffix trie.

    children maps a label (or "*") to the index of the next node.
    terminal is set when the path to this node is a suffix boundary.
    """
    children: dict[str, int] = field(default_factory=dict)
    terminal: bool = False


class SuffixMatch(NamedTuple):
    label: str
    terminal: bool


class SuffixTrie:
    """Trie of public suffix rules with wildcard and exception semantics.

    Built once by the compiler, frozen, then only searched. A refresh
    builds a new trie instead of touching this one.
    """

    def __init__(self) -> None:
        self._nodes: list[TrieNode] = [TrieNode()]
        self._rule_count = 0
        self._frozen = False

    def __len__(self) -> int:
        return self._rule_count

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """End the build phase. Further inserts raise RuntimeError."""
        self._frozen = True

    def insert(self, labels: Sequence[str]) -> None:
        """Insert one rule given as labels, most significant first."""
        if self._frozen:
            raise RuntimeError("Cannot insert into a frozen SuffixTrie")
        if not labels:
            return

        labels = list(labels)
        last = len(labels) - 1
        is_exception = labels[last].startswith(EXCEPTION_MARKER)
        if is_exception:
            labels[last] = labels[last][len(EXCEPTION_MARKER):]

        node = ROOT
        for index, label in enumerate(labels):
            child = self._nodes[node].children.get(label)
            if child is None:
                child = len(self._nodes)
                self._nodes.append(TrieNode())
                self._nodes[node].children[label] = child

            if index == last and not is_exception:
                self._nodes[child].terminal = True
            elif (
                label != WILDCARD
                and index == last - 1
                and labels[last] == WILDCARD
            ):
                # Parent of a wildcard leaf is a boundary for shorter inputs.
                self._nodes[child].terminal = True

            node = child

        self._rule_count += 1

    def search(self, labels: Sequence[str]) -> list[SuffixMatch]:
        """Walk the trie and return the matched prefix of labels.

        An exact child is always preferred. A "*" child consumes one
        label and ends the walk, as does a label with no child at all.
        """
        matches: list[SuffixMatch] = []
        node = ROOT
        for label in labels:
            children = self._nodes[node].children
            child = children.get(label)
            if child is not None:
                matches.append(SuffixMatch(label, self._nodes[child].terminal))
                node = child
                continue

            wild = children.get(WILDCARD)
            if wild is not None:
                matches.append(SuffixMatch(label, self._nodes[wild].terminal))
            break
        return matches

    def suffix_length(self, labels: Sequence[str]) -> int:
        """Number of labels (from the TLD inward) that form the public suffix.

        Scans the search result from the most specific match back toward
        the TLD and stops at the first terminal entry. Zero means no suffix.
        """
        matches = self.search(labels)
        for index in range(len(matches) - 1, -1, -1):
            if matches[index].terminal:
                return index + 1
        return 0

    def node_count(self) -> int:
        """Count total nodes in the trie (root included)."""
        return len(self._nodes)
