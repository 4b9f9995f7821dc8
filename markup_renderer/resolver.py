"""
Resolver for the markup renderer

This module folds the tokenizer output into the final sequence of strings
and rendered elements by pairing delimiters of the same renderer.

Algorithm:
    1. Move the finished head of the list (literals, resolved elements) to the output
    2. Drop the delimiter under the cursor if no other delimiter of its renderer exists
    3. If the next delimiter belongs to another renderer, move the cursor there
       so that the inner pair is resolved first
    4. Otherwise render the pair and splice it out of the list: straight to the
       output when it starts at the head, as a pending child element otherwise
    5. Restart from the head after every change to the list
"""

import logging
from typing import Generic, List, Optional, Sequence, Union

from .config import DEFAULT_SAFETY_LIMIT
from .exceptions import UnresolvableTextError
from .types import LiteralPart, MatchPart, Part, RenderData, RenderMatchProps, ResolvedPart, T

logger = logging.getLogger(__name__)


def mergeAdjacentText(items: Sequence[Union[str, T]]) -> List[Union[str, T]]:
    """Concatenate neighbouring strings, leaving other elements in place."""
    merged: List[Union[str, T]] = []
    for item in items:
        if isinstance(item, str) and merged and isinstance(merged[-1], str):
            merged[-1] = merged[-1] + item
        else:
            merged.append(item)
    return merged


def _unwrap(part: Part) -> Union[str, T]:
    if isinstance(part, LiteralPart):
        return part.text
    if isinstance(part, ResolvedPart):
        return part.element
    raise TypeError(f"Cannot unwrap unresolved {part!r}")


class Resolver(Generic[T]):
    """
    Pairs delimiter parts and invokes render callbacks.

    Pairing is nearest-enclosing and left to right: an opener pairs with the
    first following delimiter of the same renderer, and a different delimiter
    found in between is resolved first. Delimiters without any partner in the
    text are dropped.
    """

    def __init__(self, safetyLimit: int = DEFAULT_SAFETY_LIMIT, mergeAdjacentText: bool = True):
        self.safetyLimit = safetyLimit
        self.mergeAdjacentText = mergeAdjacentText

    def resolve(self, parts: List[Part], text: str, data: Optional[RenderData] = None) -> List[Union[str, T]]:
        """
        Fold parts into the output sequence.

        The list is consumed in place.

        Args:
            parts: Tokenizer output, owned by this call
            text: Original text, used in diagnostics
            data: Auxiliary data passed through to render callbacks

        Returns:
            Literal strings interleaved with rendered elements

        Raises:
            UnresolvableTextError: If a delimiter with a partner has no delimiter after it
        """
        output: List[Union[str, T]] = []
        # Number of items moved to the output so far, part of generated keys
        emitted = 0
        currentIndex = 0
        iterations = 0

        while parts:
            if iterations >= self.safetyLimit:
                logger.error(
                    f"Resolver hit the safety limit of {self.safetyLimit} iterations on {text!r}, "
                    f"breaking early to avoid potential infinite loop"
                )
                break
            iterations += 1

            if currentIndex == 0 and not isinstance(parts[0], MatchPart):
                headLength = 1
                while headLength < len(parts) and not isinstance(parts[headLength], MatchPart):
                    headLength += 1
                for part in parts[:headLength]:
                    self._emit(output, _unwrap(part))
                    emitted += 1
                del parts[:headLength]
                continue

            current = parts[currentIndex]
            if not isinstance(current, MatchPart):
                raise UnresolvableTextError(
                    text, f'No delimiter at position {currentIndex} while rendering text: "{text}"'
                )

            hasPartner = any(
                isinstance(part, MatchPart) and part is not current and part.rendererId == current.rendererId
                for part in parts
            )
            if not hasPartner:
                logger.debug(f"Dropping orphan delimiter {current.matcher.pattern!r} at {currentIndex}")
                del parts[currentIndex]
                currentIndex = 0
                continue

            nextIndex = next(
                (index for index in range(currentIndex + 1, len(parts)) if isinstance(parts[index], MatchPart)),
                None,
            )
            if nextIndex is None:
                raise UnresolvableTextError(text)
            nextPart = parts[nextIndex]
            assert isinstance(nextPart, MatchPart)

            if nextPart.rendererId != current.rendererId:
                currentIndex = nextIndex
                continue

            children = [_unwrap(part) for part in parts[currentIndex + 1 : nextIndex]]
            if self.mergeAdjacentText:
                children = mergeAdjacentText(children)

            element = current.matcher.renderer.renderMatch(
                RenderMatchProps(
                    key=f"{emitted}:{currentIndex}:{nextIndex}",
                    children=children,
                    data=data,
                    startMatches=list(current.captures),
                    endMatches=list(nextPart.captures),
                )
            )

            if currentIndex == 0:
                del parts[: nextIndex + 1]
                self._emit(output, element)
                emitted += 1
            else:
                parts[currentIndex : nextIndex + 1] = [ResolvedPart(element)]

            currentIndex = 0

        return output

    def _emit(self, output: List[Union[str, T]], item: Union[str, T]) -> None:
        if self.mergeAdjacentText and isinstance(item, str) and output and isinstance(output[-1], str):
            output[-1] = output[-1] + item
        else:
            output.append(item)
