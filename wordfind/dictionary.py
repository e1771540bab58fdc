from __future__ import annotations

import logging

logger = logging.getLogger("wordfind")


class TrieNode:
    __slots__ = ("children", "is_word")

    def __init__(self):
        self.children: dict[str, TrieNode] = {}
        self.is_word: bool = False


class Trie:
    def __init__(self):
        self.root = TrieNode()

    def insert(self, word: str):
        node = self.root
        for ch in word:
            if ch not in node.children:
                node.children[ch] = TrieNode()
            node = node.children[ch]
        node.is_word = True

    def _walk(self, key: str) -> TrieNode | None:
        node = self.root
        for ch in key:
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    def lookup(self, word: str) -> bool:
        node = self._walk(word)
        return node is not None and node.is_word

    def has_prefix(self, prefix: str) -> bool:
        return self._walk(prefix) is not None


class Dictionary:
    """Authoritative word list plus a trie for validating typed words.

    Only ``words`` is handed to the batch finder; ``lookup`` is what a
    submitted word must pass.
    """

    def __init__(self, words):
        seen = set()
        ordered = []
        for word in words:
            if word and word not in seen:
                seen.add(word)
                ordered.append(word)
        self.words: tuple[str, ...] = tuple(ordered)
        self.trie = Trie()
        for word in self.words:
            self.trie.insert(word)

    def lookup(self, word: str) -> bool:
        return self.trie.lookup(word)

    def has_prefix(self, prefix: str) -> bool:
        return self.trie.has_prefix(prefix)

    def __contains__(self, word: str) -> bool:
        return self.lookup(word)

    def __len__(self) -> int:
        return len(self.words)


def load_dictionary(path: str, min_length: int = 3) -> Dictionary:
    words = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            word = line.strip().lower()
            if len(word) >= min_length and word.isalpha():
                words.append(word)
    dictionary = Dictionary(words)
    logger.info("Loaded %d words from %s (min_length=%d)", len(dictionary), path, min_length)
    return dictionary
