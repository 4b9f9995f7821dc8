"""
Tokenizer for the markup renderer

This module scans text against the combined alternation of all atomic
matchers and breaks it into literal text and delimiter matches, consuming
backslash escapes on the way.
"""

import logging
import re
from typing import Generic, List, Optional, Sequence

from .config import DEFAULT_SAFETY_LIMIT
from .exceptions import PatternCompilationError
from .types import AtomicMatcher, LiteralPart, MatchPart, Part, T

logger = logging.getLogger(__name__)


def isEscaped(textBefore: str) -> bool:
    """Check if text preceding a delimiter ends with an unescaped backslash."""
    backslashCount = len(textBefore) - len(textBefore.rstrip("\\"))
    return backslashCount % 2 == 1


class Tokenizer(Generic[T]):
    """
    Tokenizer that converts text into a list of parts.

    The combined regex is compiled once and shared by every ``tokenize`` call;
    scanning state lives in a per-call ``finditer`` iterator, so a single
    instance can serve concurrent calls.
    """

    def __init__(
        self,
        matchers: Sequence[AtomicMatcher[T]],
        flags: int = 0,
        safetyLimit: int = DEFAULT_SAFETY_LIMIT,
        mergeAdjacentText: bool = True,
    ):
        self.matchers = tuple(matchers)
        self.safetyLimit = safetyLimit
        self.mergeAdjacentText = mergeAdjacentText
        self.pattern = self._compilePattern(flags)

    def _compilePattern(self, flags: int) -> Optional[re.Pattern[str]]:
        """Compile all matcher fragments into one alternation, each in its own group."""
        if not self.matchers:
            return None

        source = "|".join(f"({matcher.pattern})" for matcher in self.matchers)
        try:
            pattern = re.compile(source, flags)
        except re.error as e:
            raise PatternCompilationError(
                f"Unable to combine renderer patterns into {source!r}: {e}",
                pattern=source,
                originalError=e,
            ) from e

        logger.debug(f"Compiled combined pattern with {pattern.groups} groups: {source!r}")
        return pattern

    def tokenize(self, text: str) -> List[Part]:
        """
        Split text into literal and delimiter parts.

        Args:
            text: Text to scan

        Returns:
            Parts in text order. Escaped delimiters come out as literal text.
        """
        parts: List[Part] = []
        lastIndex = 0

        if self.pattern is not None:
            processed = 0
            for match in self.pattern.finditer(text):
                if processed >= self.safetyLimit:
                    logger.error(
                        f"Tokenizer hit the safety limit of {self.safetyLimit} matches, "
                        f"breaking early to avoid potential infinite loop"
                    )
                    break
                processed += 1

                textBefore = text[lastIndex : match.start()]
                lastIndex = match.end()

                if isEscaped(textBefore):
                    self._appendText(parts, textBefore[:-1])
                    self._appendText(parts, match.group(0)[:1])
                    continue

                self._appendText(parts, textBefore)
                parts.append(self._createMatchPart(match))

        self._appendText(parts, text[lastIndex:])
        return parts

    def _createMatchPart(self, match: re.Match[str]) -> MatchPart[T]:
        """Attribute a match to the first matcher owning a participating group."""
        for matcher in self.matchers:
            if any(match.group(index) is not None for index in matcher.groupIndexes):
                # Skip the wrapping group, keep only captures that participated
                captures = [
                    match.group(index) for index in matcher.groupIndexes[1:] if match.group(index) is not None
                ]
                return MatchPart(captures=captures, matcher=matcher)

        raise RuntimeError(f"No matcher owns match {match.group(0)!r} at {match.start()}")

    def _appendText(self, parts: List[Part], text: str) -> None:
        if not text:
            return
        if self.mergeAdjacentText and parts and isinstance(parts[-1], LiteralPart):
            parts[-1] = LiteralPart(parts[-1].text + text)
        else:
            parts.append(LiteralPart(text))
