"""
Renderer normalization for the markup renderer.

Expands every renderer declaration into one (toggle) or two (start and end)
atomic matchers and reserves a non-overlapping range of group numbers for
each of them in the combined alternation regex.
"""

import logging
import re
from typing import List, Mapping, Sequence, Tuple

from .exceptions import PatternCompilationError
from .types import AtomicMatcher, DelimiterPair, MatcherRole, Renderer

logger = logging.getLogger(__name__)


def countGroups(pattern: str, flags: int = 0, rendererIndex: int | None = None) -> int:
    """
    Count groups a fragment occupies once wrapped into the combined regex.

    The fragment is compiled inside its wrapping group with a trailing empty
    alternative, the same shape it takes in the combined regex, so the result
    includes the wrapping group itself.

    Args:
        pattern: Regex fragment as declared by the caller
        flags: ``re`` flags the combined regex is compiled with
        rendererIndex: Position of the renderer, used in error reporting

    Returns:
        Number of capturing groups, always at least 1

    Raises:
        PatternCompilationError: If the fragment is not a valid regex
    """
    try:
        return re.compile(f"({pattern})|", flags).groups
    except re.error as e:
        raise PatternCompilationError(
            f"Invalid pattern {pattern!r} in renderer #{rendererIndex}: {e}",
            pattern=pattern,
            rendererIndex=rendererIndex,
            originalError=e,
        ) from e


def _splitMatch(match, rendererIndex: int) -> Tuple[str, str] | None:
    """Return (start, end) for paired declarations, None for toggles."""
    if isinstance(match, str):
        return None
    if isinstance(match, DelimiterPair):
        return match.start, match.end
    if isinstance(match, Mapping) and isinstance(match.get("start"), str) and isinstance(match.get("end"), str):
        return match["start"], match["end"]
    raise PatternCompilationError(
        f"Renderer #{rendererIndex} must match a pattern string or a start/end pair, got {match!r}",
        rendererIndex=rendererIndex,
    )


def normalizeRenderers(renderers: Sequence[Renderer], flags: int = 0) -> List[AtomicMatcher]:
    """
    Expand renderer declarations into atomic matchers.

    Declaration order is kept: it decides which matcher owns a token when
    several fragments could match at the same position.

    Args:
        renderers: Ordered renderer declarations
        flags: ``re`` flags the combined regex is compiled with

    Returns:
        Atomic matchers with back to back group ranges starting at group 1

    Raises:
        PatternCompilationError: If a fragment is invalid or a declaration is malformed
    """
    matchers: List[AtomicMatcher] = []
    lastGroupIndex = 0

    def allocate(pattern: str, rendererId: int, role: MatcherRole, renderer: Renderer) -> None:
        nonlocal lastGroupIndex
        groupCount = countGroups(pattern, flags, rendererId)
        groupIndexes = tuple(range(lastGroupIndex + 1, lastGroupIndex + 1 + groupCount))
        lastGroupIndex += groupCount
        matchers.append(
            AtomicMatcher(
                pattern=pattern,
                groupIndexes=groupIndexes,
                rendererId=rendererId,
                role=role,
                renderer=renderer,
            )
        )

    for rendererId, renderer in enumerate(renderers):
        pair = _splitMatch(renderer.match, rendererId)
        if pair is None:
            allocate(renderer.match, rendererId, MatcherRole.TOGGLE, renderer)
        else:
            start, end = pair
            allocate(start, rendererId, MatcherRole.START, renderer)
            allocate(end, rendererId, MatcherRole.END, renderer)

    logger.debug(f"Normalized {len(renderers)} renderers into {len(matchers)} matchers, {lastGroupIndex} groups")
    return matchers
