"""
Tests for renderer normalization.

Covers group counting, group range allocation for toggle and paired
renderers, declaration order and pattern validation errors.
"""

import re
import unittest

from .exceptions import PatternCompilationError
from .normalizer import countGroups, normalizeRenderers
from .types import DelimiterPair, MatcherRole, Renderer

LINK_END = r"\](?:\(([^)]+?)\))?"


def _noop(props):
    return None


class TestCountGroups(unittest.TestCase):
    """Test cases for countGroups."""

    def testPlainPatternCountsWrapperGroup(self):
        """Test a fragment without groups still reserves its wrapping group."""
        self.assertEqual(countGroups(r"\*"), 1)

    def testPatternWithGroups(self):
        """Test every capturing group of the fragment is counted."""
        self.assertEqual(countGroups(r"a(b)(c)"), 3)
        self.assertEqual(countGroups(LINK_END), 2)

    def testNonCapturingGroupsIgnored(self):
        """Test non-capturing groups do not reserve indexes."""
        self.assertEqual(countGroups(r"(?:ab)+"), 1)

    def testInvalidPattern(self):
        """Test invalid fragments raise PatternCompilationError."""
        with self.assertRaises(PatternCompilationError) as context:
            countGroups("(", rendererIndex=3)

        self.assertEqual(context.exception.pattern, "(")
        self.assertEqual(context.exception.rendererIndex, 3)
        self.assertIsInstance(context.exception.originalError, re.error)
        self.assertIn("renderer #3", str(context.exception))


class TestNormalizeRenderers(unittest.TestCase):
    """Test cases for normalizeRenderers."""

    def testEmptyRendererList(self):
        """Test no renderers yield no matchers."""
        self.assertEqual(normalizeRenderers([]), [])

    def testToggleRenderer(self):
        """Test a single pattern yields one toggle matcher."""
        bold = Renderer(match=r"\*", renderMatch=_noop)
        matchers = normalizeRenderers([bold])

        self.assertEqual(len(matchers), 1)
        self.assertEqual(matchers[0].pattern, r"\*")
        self.assertEqual(matchers[0].groupIndexes, (1,))
        self.assertEqual(matchers[0].role, MatcherRole.TOGGLE)
        self.assertEqual(matchers[0].rendererId, 0)
        self.assertIs(matchers[0].renderer, bold)

    def testPairedRenderer(self):
        """Test a start/end pair yields start then end with back to back ranges."""
        link = Renderer(match=DelimiterPair(start=r"\[", end=LINK_END), renderMatch=_noop)
        matchers = normalizeRenderers([link])

        self.assertEqual([m.role for m in matchers], [MatcherRole.START, MatcherRole.END])
        self.assertEqual(matchers[0].groupIndexes, (1,))
        self.assertEqual(matchers[1].groupIndexes, (2, 3))
        self.assertEqual({m.rendererId for m in matchers}, {0})

    def testMappingPair(self):
        """Test a mapping with start and end keys is accepted as a pair."""
        placeholder = Renderer(match={"start": r"\{", "end": r"\}"}, renderMatch=_noop)
        matchers = normalizeRenderers([placeholder])

        self.assertEqual([m.pattern for m in matchers], [r"\{", r"\}"])
        self.assertEqual([m.role for m in matchers], [MatcherRole.START, MatcherRole.END])

    def testDeclarationOrderAndRanges(self):
        """Test matchers keep declaration order and ranges never overlap."""
        renderers = [
            Renderer(match="_", renderMatch=_noop),
            Renderer(match=DelimiterPair(start=r"\[", end=LINK_END), renderMatch=_noop),
            Renderer(match=r"(\*)(\*)?", renderMatch=_noop),
        ]
        matchers = normalizeRenderers(renderers)

        self.assertEqual([m.pattern for m in matchers], ["_", r"\[", LINK_END, r"(\*)(\*)?"])
        self.assertEqual([m.rendererId for m in matchers], [0, 1, 1, 2])
        self.assertEqual(
            [m.groupIndexes for m in matchers],
            [(1,), (2,), (3, 4), (5, 6, 7)],
        )

    def testSameCallbackDifferentRenderers(self):
        """Test renderer identity does not depend on the callback."""
        matchers = normalizeRenderers(
            [
                Renderer(match="_", renderMatch=_noop),
                Renderer(match="~", renderMatch=_noop),
            ]
        )
        self.assertNotEqual(matchers[0].rendererId, matchers[1].rendererId)

    def testInvalidPatternReportsRenderer(self):
        """Test an invalid fragment fails before any text is processed."""
        renderers = [
            Renderer(match="_", renderMatch=_noop),
            Renderer(match=DelimiterPair(start=r"\[", end=r"\]("), renderMatch=_noop),
        ]
        with self.assertRaises(PatternCompilationError) as context:
            normalizeRenderers(renderers)

        self.assertEqual(context.exception.rendererIndex, 1)
        self.assertEqual(context.exception.pattern, r"\](")

    def testMalformedMatch(self):
        """Test declarations without a pattern or a full pair are rejected."""
        for match in (42, {"start": r"\["}, {"start": r"\[", "end": None}):
            with self.subTest(match=match):
                with self.assertRaises(PatternCompilationError):
                    normalizeRenderers([Renderer(match=match, renderMatch=_noop)])
