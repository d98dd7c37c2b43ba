"""
sudoview Highlighter
Splits a log line into styled spans marking the "sudo" keyword and the
names of privileged users.

The scan is a single left-to-right pass. A candidate substring grows one
character at a time while it can still become the keyword or a privileged
username; it is closed as soon as it equals one of them, and restarted at the
current character once it cannot. Matching is case-sensitive and ignores
word boundaries, so "sudoers" highlights its leading "sudo".
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from rich.text import Text


ESCALATION_KEYWORD = "sudo"


class SpanRole(Enum):
    """Semantic role of a span of text."""
    PLAIN = "plain"
    KEYWORD = "keyword"
    USERNAME = "username"


@dataclass(frozen=True)
class StyledSpan:
    """A run of characters tagged with its role."""
    text: str
    role: SpanRole = SpanRole.PLAIN


# Rich styles used by the terminal views
SPAN_STYLES = {
    SpanRole.PLAIN: "grey50",
    SpanRole.KEYWORD: "bold bright_red",
    SpanRole.USERNAME: "bold white",
}


def _proper_prefixes(word: str) -> set[str]:
    return {word[:k] for k in range(1, len(word))}


class Highlighter:
    """
    Tokenizer bound to one keyword and one privileged username set.

    Prefix tables are built once so each character costs a set lookup.
    """

    def __init__(self, usernames: Iterable[str] = (), keyword: str = ESCALATION_KEYWORD):
        if not keyword:
            raise ValueError("Keyword must not be empty")
        self.keyword = keyword
        self.usernames = frozenset(name for name in usernames if name)
        self._keyword_prefixes = _proper_prefixes(keyword)
        self._username_prefixes: set[str] = set()
        for name in self.usernames:
            self._username_prefixes.update(_proper_prefixes(name))

    def _classify(self, candidate: str) -> SpanRole | None:
        """Return a role if candidate is complete, PLAIN if it may still grow, None if dead."""
        if candidate == self.keyword:
            return SpanRole.KEYWORD
        if candidate in self._keyword_prefixes:
            return SpanRole.PLAIN
        if candidate in self.usernames:
            return SpanRole.USERNAME
        if candidate in self._username_prefixes:
            return SpanRole.PLAIN
        return None

    def tokenize(self, line: str) -> list[StyledSpan]:
        """
        Split line into spans whose texts concatenate back to line.

        Lines without the keyword are returned as a single plain span.
        """
        if self.keyword not in line:
            return [StyledSpan(line)]

        spans: list[StyledSpan] = []
        flushed = 0  # start of text not yet emitted
        start = 0    # start of the current candidate
        i = 0

        while i < len(line):
            candidate = line[start:i + 1]
            role = self._classify(candidate)

            if role is None:
                # dead candidate: retry from the current character
                if start < i:
                    start = i
                else:
                    start = i = i + 1
                continue

            if role is not SpanRole.PLAIN:
                if flushed < start:
                    spans.append(StyledSpan(line[flushed:start]))
                spans.append(StyledSpan(candidate, role))
                flushed = start = i + 1

            i += 1

        if flushed < len(line):
            spans.append(StyledSpan(line[flushed:]))

        return spans


def tokenize(
    line: str,
    privileged_usernames: Iterable[str],
    keyword: str = ESCALATION_KEYWORD,
) -> list[StyledSpan]:
    """Tokenize a single line. Prefer a Highlighter instance for many lines."""
    return Highlighter(privileged_usernames, keyword).tokenize(line)


def spans_to_text(spans: Sequence[StyledSpan], no_wrap: bool = True) -> Text:
    """Convert spans to a Rich Text line."""
    text = Text(no_wrap=no_wrap, overflow="ellipsis")
    for span in spans:
        text.append(span.text, style=SPAN_STYLES[span.role])
    return text
