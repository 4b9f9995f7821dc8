"""
Renderer factory for the markup renderer.
"""

import logging
from typing import Generic, List, Optional, Sequence, Tuple, Union

from .config import RendererOptions
from .normalizer import normalizeRenderers
from .resolver import Resolver
from .tokenizer import Tokenizer
from .types import AtomicMatcher, RenderData, Renderer, T

logger = logging.getLogger(__name__)


class MarkupRenderer(Generic[T]):
    """
    Callable turning marked up text into strings and rendered elements.

    Renderer declarations are normalized and compiled once, in the
    constructor; each call works on its own part list, so an instance can be
    shared between threads.

    Example:
        >>> render = MarkupRenderer([
        ...     Renderer(match="_", renderMatch=lambda props: ("i", props.children)),
        ...     Renderer(match=r"\\*", renderMatch=lambda props: ("b", props.children)),
        ... ])
        >>> render("Hi *_dude_*")
        ['Hi ', ('b', [('i', ['dude'])])]
    """

    def __init__(self, renderers: Sequence[Renderer[T]], options: Optional[RendererOptions] = None):
        """
        Initialize the renderer.

        Args:
            renderers: Ordered renderer declarations, earlier ones win ties
            options: Safety limits, regex flags and text merging

        Raises:
            PatternCompilationError: If any pattern is invalid
        """
        self.options = options or RendererOptions()
        self.renderers: Tuple[Renderer[T], ...] = tuple(renderers)
        self._matchers = tuple(normalizeRenderers(self.renderers, self.options.regexFlags))
        self._tokenizer: Tokenizer[T] = Tokenizer(
            self._matchers,
            flags=self.options.regexFlags,
            safetyLimit=self.options.tokenizerSafetyLimit,
            mergeAdjacentText=self.options.mergeAdjacentText,
        )
        self._resolver: Resolver[T] = Resolver(
            safetyLimit=self.options.resolverSafetyLimit,
            mergeAdjacentText=self.options.mergeAdjacentText,
        )
        logger.debug(f"MarkupRenderer created with {len(self.renderers)} renderers, dood!")

    @property
    def matchers(self) -> Tuple[AtomicMatcher[T], ...]:
        """Normalized atomic matchers, in declaration order."""
        return self._matchers

    def render(self, text: str, data: Optional[RenderData] = None) -> List[Union[str, T]]:
        """
        Render marked up text.

        Args:
            text: Text to render
            data: Auxiliary values passed to every render callback

        Returns:
            Literal strings interleaved with elements built by render callbacks

        Raises:
            TypeError: If text is not a string
            UnresolvableTextError: If the delimiters of the text cannot be paired
        """
        if not isinstance(text, str):
            raise TypeError(f"Expected text to be str, got {type(text).__name__}")

        parts = self._tokenizer.tokenize(text)
        return self._resolver.resolve(parts, text, data)

    def __call__(self, text: str, data: Optional[RenderData] = None) -> List[Union[str, T]]:
        return self.render(text, data)


def createRenderer(
    renderers: Sequence[Renderer[T]], options: Optional[RendererOptions] = None
) -> MarkupRenderer[T]:
    """
    Create a render function for the given renderer declarations.

    Args:
        renderers: Ordered renderer declarations
        options: Renderer options, defaults when omitted

    Returns:
        Callable ``render(text, data=None)``

    Raises:
        PatternCompilationError: If any pattern is invalid
    """
    return MarkupRenderer(renderers, options)
