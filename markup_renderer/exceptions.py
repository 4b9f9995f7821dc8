"""
Markup renderer exceptions

This module defines the exception hierarchy for the markup renderer.
All renderer errors inherit from MarkupRendererError base class.
"""

from typing import Optional


class MarkupRendererError(Exception):
    """
    Base exception for all markup renderer errors.

    Catch this to handle any renderer error generically.
    """

    pass


class PatternCompilationError(MarkupRendererError):
    """
    Exception raised when a renderer pattern cannot be compiled.

    Raised by the renderer factory, before any text is processed, when:
    - A match fragment is not a valid regular expression
    - The combined alternation of all fragments fails to compile
    - A renderer declares neither a pattern string nor a start/end pair

    Args:
        message: Description of the failure
        pattern: The offending regex fragment, if known
        rendererIndex: Position of the offending renderer in the declaration list
        originalError: The ``re.error`` that caused this error (optional)
    """

    def __init__(
        self,
        message: str,
        pattern: Optional[str] = None,
        rendererIndex: Optional[int] = None,
        originalError: Exception | None = None,
    ):
        super().__init__(message)
        self.pattern = pattern
        self.rendererIndex = rendererIndex
        self.originalError = originalError


class UnresolvableTextError(MarkupRendererError):
    """
    Exception raised when the delimiters of a text cannot be folded.

    Happens when a pending opener has a partner somewhere in the text but no
    delimiter follows it, e.g. crossing markup like ``*a_b*c_``.

    Args:
        text: The text that was being rendered
    """

    def __init__(self, text: str, message: Optional[str] = None):
        super().__init__(message or f'Unable to render text: "{text}"')
        self.text = text
