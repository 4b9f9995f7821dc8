"""
Type definitions for the markup renderer library, dood!

This module holds the public data model shared by the normalizer, tokenizer
and resolver: renderer declarations, the props handed to render callbacks,
normalized atomic matchers and the parts of the working sequence.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, List, Mapping, Optional, Tuple, TypeVar, Union

if sys.version_info >= (3, 14):
    from typing import TypedDict
else:
    from typing_extensions import TypedDict

# Element type produced by render callbacks, opaque to the library
T = TypeVar("T")

RenderData = Mapping[str, Union[str, int, float]]


@dataclass(frozen=True)
class DelimiterPair:
    """
    Distinct start and end patterns of a paired delimiter.

    Attributes:
        start: Regex fragment matching the opening delimiter
        end: Regex fragment matching the closing delimiter, may contain extra
            capturing groups (e.g. the URL of a link)
    """

    start: str
    end: str


@dataclass(frozen=True)
class RenderMatchProps(Generic[T]):
    """
    Arguments passed to ``Renderer.renderMatch`` for every resolved pair.

    Attributes:
        key: Unique key of the element within a single render call
        children: Literal strings and already rendered elements between the delimiters
        data: Auxiliary data given to the render call, if any
        startMatches: Capturing groups of the opening delimiter
        endMatches: Capturing groups of the closing delimiter
    """

    key: str
    children: List[Union[str, T]]
    data: Optional[RenderData]
    startMatches: List[str]
    endMatches: List[str]


@dataclass(frozen=True)
class Renderer(Generic[T]):
    """
    Caller supplied rule mapping a delimiter pattern to an element factory.

    ``match`` is either a single regex fragment (toggle delimiter, the same
    pattern opens and closes) or a start/end pair given as ``DelimiterPair``
    or as a mapping with ``start`` and ``end`` keys. Literal delimiter
    characters must be regex-escaped by the caller.

    Example:
        >>> bold = Renderer(match=r"\\*", renderMatch=lambda props: ("b", props.children))
        >>> link = Renderer(
        ...     match=DelimiterPair(start=r"\\[", end=r"\\](?:\\(([^)]+?)\\))?"),
        ...     renderMatch=lambda props: ("a", props.endMatches, props.children),
        ... )
    """

    match: Union[str, DelimiterPair, Mapping[str, str]]
    renderMatch: Callable[[RenderMatchProps[T]], T]


class MatcherRole(Enum):
    """Role of an atomic matcher within its renderer."""

    TOGGLE = "toggle"
    START = "start"
    END = "end"


@dataclass(frozen=True)
class AtomicMatcher(Generic[T]):
    """
    One normalized regex fragment of a renderer.

    Attributes:
        pattern: Regex fragment as declared by the caller
        groupIndexes: Group numbers owned in the combined regex, the first one
            is the group wrapping the whole fragment
        rendererId: Index of the owning renderer in the declaration list,
            used as the renderer identity for pairing
        role: Whether the fragment toggles, opens or closes
        renderer: Owning renderer declaration
    """

    pattern: str
    groupIndexes: Tuple[int, ...]
    rendererId: int
    role: MatcherRole
    renderer: Renderer[T]


@dataclass
class LiteralPart:
    """Plain text between delimiters."""

    text: str


@dataclass
class MatchPart(Generic[T]):
    """Delimiter occurrence waiting to be paired."""

    captures: List[str]
    matcher: AtomicMatcher[T]

    @property
    def rendererId(self) -> int:
        return self.matcher.rendererId


@dataclass
class ResolvedPart(Generic[T]):
    """Rendered element that is still a pending child of an outer pair."""

    element: T


Part = Union[LiteralPart, MatchPart, ResolvedPart]


# Kebab-case keys can only be declared with the functional syntax
RendererOptionsConfig = TypedDict(
    "RendererOptionsConfig",
    {
        "tokenizer-safety-limit": int,
        "resolver-safety-limit": int,
        "multiline": bool,
        "ignore-case": bool,
        "merge-adjacent-text": bool,
    },
    total=False,
)
"""Dictionary form of ``RendererOptions``, as found in TOML config files."""
