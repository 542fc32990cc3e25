"""
huffdict/builder.py

Builds a Huffman code table (symbol -> bit string) from a corpus of strings.

Two passes:
  1) count_occurrences(): one Occurrence per distinct symbol
        Occurrence(count=<occurrences>, depth=0, data={symbol: ""})
  2) build(): greedy merge of the two lowest ranked occurrences until one is
     left. Ranking is (count asc, depth asc) with ties kept in first-seen
     order, so equally frequent but shallower groups merge first and two runs
     over the same corpus always give identical tables.

Symbols come from either mode:
    max_length == 0 : whole corpus entries
    max_length == k : every full-width substring of width k..1
"""

import bisect
import logging
from typing import Dict, Iterable, List, Optional

from huffdict import profkit
from huffdict.settings import BIT_LEFT, BIT_RIGHT, DEFAULT_MAX_LENGTH, MAX_LENGTH_WHOLE_WORDS
from huffdict.stablesort import usort

logger = logging.getLogger(__name__)


class Occurrence:
    """
    Weight of one subtree during the merge loop.

        count: total occurrences of every symbol in `data`
        depth: number of merges below this record (0 for a leaf)
        data:  symbol -> code suffix built so far, in merge order
    """
    __slots__ = ("count", "depth", "data")

    def __init__(self, count: int = 0, depth: int = 0, data: Optional[Dict[str, str]] = None):
        self.count = count
        self.depth = depth
        self.data = dict(data) if data else {}

    @classmethod
    def leaf(cls, symbol: str) -> "Occurrence":
        return cls(count=0, depth=0, data={symbol: ""})

    @property
    def key(self):
        return (self.count, self.depth)

    def prefixed(self, bit: str) -> Dict[str, str]:
        return {symbol: bit + code for symbol, code in self.data.items()}

    def __eq__(self, other):
        if not isinstance(other, Occurrence):
            return NotImplemented
        return (self.count == other.count and
                self.depth == other.depth and
                self.data == other.data)

    def __repr__(self):
        return f"Occurrence(count={self.count}, depth={self.depth}, symbols={len(self.data)})"


def compare_occurrences(left: Occurrence, right: Occurrence) -> int:
    if left.count != right.count:
        return -1 if left.count < right.count else 1
    return (left.depth > right.depth) - (left.depth < right.depth)


def merge(row1: Occurrence, row2: Occurrence) -> Occurrence:
    data = row1.prefixed(BIT_LEFT)
    data.update(row2.prefixed(BIT_RIGHT))
    return Occurrence(
        count=row1.count + row2.count,
        depth=max(row1.depth, row2.depth) + 1,
        data=data,
    )


class CodeTableBuilder:
    """
    One-shot builder. Each instance owns its occurrence table; build separate
    tables with separate builders.

    resort=True re-sorts the whole remaining sequence after every merge.
    The default inserts the merged record at the position that stable re-sort
    would give it (after every record with a key <= its own), which yields the
    same merge order without the quadratic cost.
    """

    def __init__(self, corpus: Iterable[str], max_length: int = DEFAULT_MAX_LENGTH, resort: bool = False):
        if isinstance(max_length, bool) or not isinstance(max_length, int):
            raise ValueError(f"max_length must be an int, got {type(max_length).__name__}")
        if max_length < MAX_LENGTH_WHOLE_WORDS:
            raise ValueError(f"max_length must be >= {MAX_LENGTH_WHOLE_WORDS}, got {max_length}")

        self.corpus = corpus
        self.max_length = max_length
        self.resort = resort
        self.occurrences: Dict[str, Occurrence] = {}
        self.merges = 0

    def _observe(self, symbol: str):
        row = self.occurrences.get(symbol)
        if row is None:
            row = self.occurrences[symbol] = Occurrence.leaf(symbol)
        row.count += 1

    def count_occurrences(self) -> Dict[str, Occurrence]:
        """
        Count every symbol instance in the corpus.
        Returns symbol -> Occurrence in first-seen order.
        """
        self.occurrences = {}
        entries = 0

        for value in self.corpus:
            entries += 1
            if self.max_length == MAX_LENGTH_WHOLE_WORDS:
                self._observe(value)

            n = len(value)
            for width in range(self.max_length, 0, -1):
                for i in range(n - width + 1):
                    self._observe(value[i:i + width])

        logger.debug("counted %d distinct symbols in %d entries (max_length=%d)",
                     len(self.occurrences), entries, self.max_length)
        return self.occurrences

    def build(self) -> Dict[str, str]:
        """
        Run both passes and return symbol -> code.
        An empty corpus gives {}, a single distinct symbol gives {symbol: ""}.
        """
        with profkit.timeit("build.count"):
            rows = list(self.count_occurrences().values())

        with profkit.timeit("build.merge"):
            root = self._merge_all(rows)

        codes = dict(root.data) if root is not None else {}
        logger.info("built code table: %d symbols, %d merges", len(codes), self.merges)
        return codes

    def _merge_all(self, rows: List[Occurrence]) -> Optional[Occurrence]:
        self.merges = 0
        usort(rows, compare_occurrences)
        keys = [row.key for row in rows]

        while len(rows) > 1:
            row1 = rows.pop(0)
            row2 = rows.pop(0)
            del keys[:2]

            merged = merge(row1, row2)
            self.merges += 1
            profkit.tick("build.merges")

            if self.resort:
                rows.append(merged)
                usort(rows, compare_occurrences)
                keys = [row.key for row in rows]
            else:
                pos = bisect.bisect_right(keys, merged.key)
                keys.insert(pos, merged.key)
                rows.insert(pos, merged)

        return rows[0] if rows else None


def build_codes(corpus: Iterable[str], max_length: int = DEFAULT_MAX_LENGTH) -> Dict[str, str]:
    return CodeTableBuilder(corpus, max_length).build()
