"""
huffdict/dictionary.py

Dictionary maps each symbol to its Huffman code and back.

Besides the two direct indexes it keeps two partitioned views for encoders
and decoders:

    by first character  "t" -> {"the": "0110", "to": "010", "t": "11", ...}
                        symbols starting with that character, longest code first
    by code prefix      "01" -> {"to": "010", "the": "0110", ...}
                        codes starting with the first `min_code_length` bits,
                        shortest code first

Typical usage:
    d = Dictionary(["hello", "help", "shell"], max_length=2)
    bits = d.code_of("el")
    d.symbol_of(bits)                      # -> "el"
    d.view_by_code_prefix(bits[:d.min_code_length])

The table is read-only once built. Assigning `values` swaps in a new
symbol -> code mapping and rebuilds every view together.
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

from huffdict.builder import CodeTableBuilder
from huffdict.settings import DEFAULT_MAX_LENGTH, MAX_LENGTH_WHOLE_WORDS
from huffdict.tokenizer import CorpusParser

logger = logging.getLogger(__name__)

_EMPTY = MappingProxyType({})


class Dictionary:
    MAX_LENGTH_WHOLE_WORDS = MAX_LENGTH_WHOLE_WORDS

    def __init__(self, corpus: Iterable[str] = (), max_length: int = DEFAULT_MAX_LENGTH, resort: bool = False):
        builder = CodeTableBuilder(corpus, max_length, resort=resort)
        self._max_length = max_length
        self._values = _EMPTY
        self._reverse_by_code = _EMPTY
        self._values_ascending = _EMPTY
        self._by_first_character = _EMPTY
        self._by_code_prefix = _EMPTY
        self._min_code_length = 0

        codes = builder.build()
        self.occurrences = MappingProxyType({s: row.count for s, row in builder.occurrences.items()})
        self._rebuild(codes)

    @classmethod
    def from_values(cls, values: Mapping[str, str], max_length: int = DEFAULT_MAX_LENGTH) -> "Dictionary":
        """Wrap an existing symbol -> code mapping without corpus statistics."""
        table = cls((), max_length)
        table.values = values
        return table

    @classmethod
    def from_text(cls, text: str, max_length: int = MAX_LENGTH_WHOLE_WORDS,
                  parser: Optional[CorpusParser] = None) -> "Dictionary":
        """Tokenize raw text and build from its words (whole-word mode by default)."""
        parser = parser or CorpusParser()
        return cls(parser.tokenize(text), max_length)

    # -------------------------------
    # lookups
    # -------------------------------

    def code_of(self, symbol: str) -> Optional[str]:
        return self._values.get(symbol)

    def symbol_of(self, code: str) -> Optional[str]:
        return self._reverse_by_code.get(code)

    def view_by_first_character(self, character: Optional[str] = None) -> Mapping[str, str]:
        """
        Symbols starting with `character`, longest code first.
        Falls back to the full symbol -> code mapping when there is no such group.
        """
        if character is None:
            return self._values
        return self._by_first_character.get(character, self._values)

    def view_by_code_prefix(self, prefix: Optional[str] = None) -> Mapping[str, str]:
        """
        Symbols whose code starts with `prefix` (min_code_length bits), shortest code first.
        Falls back to the full shortest-code-first mapping when no group matches.
        """
        if prefix is None:
            return self._values_ascending
        return self._by_code_prefix.get(prefix, self._values_ascending)

    # -------------------------------
    # metadata
    # -------------------------------

    @property
    def values(self) -> Mapping[str, str]:
        return self._values

    @values.setter
    def values(self, values: Mapping[str, str]):
        self._rebuild(values)

    @property
    def reverse_by_code(self) -> Mapping[str, str]:
        return self._reverse_by_code

    @property
    def max_length(self) -> int:
        return self._max_length

    @property
    def min_code_length(self) -> int:
        return self._min_code_length

    def __len__(self):
        return len(self._values)

    def __contains__(self, symbol):
        return symbol in self._values

    def __repr__(self):
        return (f"Dictionary(symbols={len(self._values)}, max_length={self._max_length}, "
                f"min_code_length={self._min_code_length})")

    # -------------------------------
    # derived views
    # -------------------------------

    def _rebuild(self, values: Mapping[str, str]):
        forward = dict(values)

        reverse: Dict[str, str] = {}
        for symbol, code in forward.items():
            if code in reverse:
                raise ValueError(f"Code {code!r} assigned to both {reverse[code]!r} and {symbol!r}")
            reverse[code] = symbol

        min_code_length = min((len(code) for code in forward.values()), default=0)

        # sorted() is stable with reverse=True too; equal lengths keep forward order
        by_first_character: Dict[str, Dict[str, str]] = {}
        for symbol, code in sorted(forward.items(), key=lambda kv: len(kv[1]), reverse=True):
            by_first_character.setdefault(symbol[:1], {})[symbol] = code

        ascending = dict(sorted(forward.items(), key=lambda kv: len(kv[1])))
        by_code_prefix: Dict[str, Dict[str, str]] = {}
        for symbol, code in ascending.items():
            by_code_prefix.setdefault(code[:min_code_length], {})[symbol] = code

        # swap every view in together
        self._values = MappingProxyType(forward)
        self._reverse_by_code = MappingProxyType(reverse)
        self._values_ascending = MappingProxyType(ascending)
        self._by_first_character = MappingProxyType(
            {ch: MappingProxyType(group) for ch, group in by_first_character.items()})
        self._by_code_prefix = MappingProxyType(
            {prefix: MappingProxyType(group) for prefix, group in by_code_prefix.items()})
        self._min_code_length = min_code_length

        logger.debug("dictionary views rebuilt: %d symbols, %d first-character groups, "
                     "%d code-prefix groups, min_code_length=%d",
                     len(forward), len(by_first_character), len(by_code_prefix), min_code_length)


# -------------------------------
# Optional manual smoke run
# -------------------------------
if __name__ == "__main__":
    import sys

    text = " ".join(sys.argv[1:]) or "the quick brown fox jumps over the lazy dog the end"
    d = Dictionary.from_text(text)
    print(d)
    for symbol, code in d.view_by_code_prefix().items():
        print(f"  {symbol!r:<12} {code}")
