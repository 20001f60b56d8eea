"""Trie-backed word index for validating player selections."""

from typing import Dict, Iterable, Iterator, List, Optional


class _Node:
    __slots__ = ("children", "word")

    def __init__(self) -> None:
        self.children: Dict[str, "_Node"] = {}
        self.word: Optional[str] = None  # set on terminal nodes


class WordIndex:
    """
    Case-insensitive index over one puzzle's word list.

    Supports:
      - match(candidate) -> word or None, forwards or reversed, exact length
      - has_prefix(prefix) -> bool
      - words_with_prefix(prefix) -> list of words
    Lookups walk one trie node per letter, so cost depends on the
    candidate length and not on the number of indexed words.
    """

    __slots__ = ("_root", "_count", "_nodes")

    def __init__(self) -> None:
        self._root = _Node()
        self._count = 0
        self._nodes = 1

    @classmethod
    def build(cls, words: Iterable[str]) -> "WordIndex":
        """Build an index from the given words. Empty entries are skipped."""
        index = cls()
        for word in words:
            if word:
                index.insert(word)
        return index

    def insert(self, word: str) -> None:
        """Add a word (stored uppercase)."""
        word = word.upper()
        node = self._root
        for ch in word:
            nxt = node.children.get(ch)
            if nxt is None:
                nxt = node.children[ch] = _Node()
                self._nodes += 1
            node = nxt
        if node.word is None:
            node.word = word
            self._count += 1

    def match(self, candidate: str) -> Optional[str]:
        """
        Return the indexed word spelled by `candidate` forwards or backwards.

        Prefixes never match; the whole candidate must equal a word.
        """
        if not candidate:
            return None
        candidate = candidate.upper()
        return self._lookup(candidate) or self._lookup(candidate[::-1])

    def has_prefix(self, prefix: str) -> bool:
        """True if some indexed word starts with `prefix` (empty string always does)."""
        return self._walk(prefix.upper()) is not None

    def words_with_prefix(self, prefix: str) -> List[str]:
        """All indexed words starting with `prefix`, in sorted order."""
        node = self._walk(prefix.upper())
        if node is None:
            return []
        return sorted(self._collect(node))

    @property
    def word_count(self) -> int:
        return self._count

    @property
    def node_count(self) -> int:
        """Number of trie nodes, root included."""
        return self._nodes

    def __len__(self) -> int:
        return self._count

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self._lookup(word.upper()) is not None

    # ---------- Internals ----------
    def _walk(self, s: str) -> Optional[_Node]:
        node = self._root
        for ch in s:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    def _lookup(self, s: str) -> Optional[str]:
        node = self._walk(s)
        return node.word if node is not None else None

    def _collect(self, node: _Node) -> Iterator[str]:
        if node.word is not None:
            yield node.word
        for child in node.children.values():
            yield from self._collect(child)
