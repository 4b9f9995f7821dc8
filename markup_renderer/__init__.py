"""
markup_renderer - inline markup to elements, dood!

Turns inline text markup (``*bold*``, ``_italic_``, ``[text](url)``,
``{placeholder}`` …) into an ordered sequence of literal strings and elements
built by caller supplied callbacks. What an element is (HTML node, UI
component, plain data) is up to the caller: the library only owns parsing
and nesting.

This module provides:
- Renderer normalization into atomic regex matchers
- Tokenization against one combined alternation regex with backslash escapes
- Resolution of nested, same-kind and orphaned delimiters

Usage:
    from markup_renderer import DelimiterPair, Renderer, createRenderer

    render = createRenderer([
        Renderer(match="_", renderMatch=lambda props: ("i", props.children)),
        Renderer(match=r"\\*", renderMatch=lambda props: ("b", props.children)),
        Renderer(
            match=DelimiterPair(start=r"\\[", end=r"\\](?:\\(([^)]+?)\\))?"),
            renderMatch=lambda props: ("a", props.endMatches, props.children),
        ),
    ])

    render("Hi *_dude_*")  # ['Hi ', ('b', [('i', ['dude'])])]
    render(r"a \\*b\\* c")  # ['a *b* c']
"""

from .config import RendererOptions, loadRendererOptions
from .exceptions import MarkupRendererError, PatternCompilationError, UnresolvableTextError
from .normalizer import normalizeRenderers
from .renderer import MarkupRenderer, createRenderer
from .resolver import Resolver
from .tokenizer import Tokenizer
from .types import (
    AtomicMatcher,
    DelimiterPair,
    LiteralPart,
    MatcherRole,
    MatchPart,
    Part,
    RenderData,
    Renderer,
    RendererOptionsConfig,
    RenderMatchProps,
    ResolvedPart,
)

__version__ = "1.0.0"

__all__ = [
    # Factory
    "createRenderer",
    "MarkupRenderer",
    # Declarations
    "Renderer",
    "DelimiterPair",
    "RenderMatchProps",
    "RenderData",
    # Configuration
    "RendererOptions",
    "RendererOptionsConfig",
    "loadRendererOptions",
    # Pipeline
    "normalizeRenderers",
    "Tokenizer",
    "Resolver",
    "AtomicMatcher",
    "MatcherRole",
    "Part",
    "LiteralPart",
    "MatchPart",
    "ResolvedPart",
    # Errors
    "MarkupRendererError",
    "PatternCompilationError",
    "UnresolvableTextError",
]
