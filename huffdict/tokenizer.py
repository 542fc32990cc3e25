import re
import html
from typing import Iterable, Iterator, List

from ftfy import fix_text

TOKEN_PATTERN = re.compile(r"[a-z0-9]+(?:[.-][a-z0-9]+)*")  # keep u.s, 3.14, covid-19 whole


class CorpusParser:
    """
    Turns raw text into whole-word corpus entries.
    Uses ftfy + html to clean malformed text before tokenizing.

    What it does:
    - Turns html entities like &amp; into regular chars
    - Funny looking chars like Ã¢\x80\x93 into regular chars
    - Lowercases, then splits on anything that is not a word character
    - U.S. -> u.s    3-14 -> 3-14

    Methods:
        tokenize(text: str) -> list[str]
        iter_entries(lines, limit=None) -> yields list[str] per non-empty line
    """

    def tokenize(self, text: str) -> List[str]:
        """
        Clean and tokenize a raw text string.
        Returns [] if nothing remains after tokenization.
        """
        text = fix_text(html.unescape(text))
        return TOKEN_PATTERN.findall(text.lower())

    def iter_entries(self, lines: Iterable[str], limit: int | None = None) -> Iterator[List[str]]:
        """
        Stream token lists from an iterable of lines.
        Lines that tokenize to nothing are skipped and do not count towards `limit`.
        """
        emitted = 0
        for line in lines:
            if limit is not None and emitted >= limit:
                break
            tokens = self.tokenize(line)
            if not tokens:
                continue
            emitted += 1
            yield tokens
