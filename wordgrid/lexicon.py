from __future__ import annotations

import logging
import string
from typing import Iterable

logger = logging.getLogger("wordgrid")

LETTERS = frozenset(string.ascii_lowercase)


class TrieNode:
    __slots__ = ("children", "is_word")

    def __init__(self):
        self.children: dict[str, TrieNode] = {}
        self.is_word: bool = False


class Lexicon:
    """Prefix tree over lowercase a-z.

    Built once with :meth:`build` and never mutated afterwards, so a single
    instance can be shared by any number of solves.
    """

    def __init__(self):
        self.root = TrieNode()
        self._size = 0

    @classmethod
    def build(cls, words: Iterable[str]) -> Lexicon:
        lexicon = cls()
        skipped = 0
        for raw in words:
            if not lexicon._insert(raw):
                skipped += 1
        if skipped:
            logger.debug("Skipped %d malformed dictionary entries", skipped)
        if lexicon.is_empty:
            logger.warning("Lexicon built with no usable words")
        else:
            logger.info("Lexicon built: %d words", lexicon._size)
        return lexicon

    def _insert(self, raw) -> bool:
        if not isinstance(raw, str):
            return False
        word = raw.strip().lower()
        if not word or not LETTERS.issuperset(word):
            return False

        node = self.root
        for ch in word:
            if ch not in node.children:
                node.children[ch] = TrieNode()
            node = node.children[ch]
        if not node.is_word:
            node.is_word = True
            self._size += 1
        return True

    def node(self, s: str) -> TrieNode | None:
        """Return the node reached by spelling ``s`` from the root, or None."""
        node = self.root
        for ch in s:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    def contains_prefix(self, s: str) -> bool:
        return self.node(s) is not None

    def contains_word(self, s: str) -> bool:
        node = self.node(s)
        return node is not None and node.is_word

    @property
    def is_empty(self) -> bool:
        return self._size == 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, s) -> bool:
        return isinstance(s, str) and self.contains_word(s)
