"""Unit tests for DirectiveDetector."""

from __future__ import annotations

from cssforge.rebuild.directives import DirectiveDetector
from cssforge.stylesheet import parse_css


def _detect(css: str):
    return DirectiveDetector().detect(parse_css(css))


def test_plain_stylesheet_has_no_directives():
    flags = _detect("body { color: black; }\n@media (min-width: 10px) { a { color: red; } }")
    assert not flags.has_apply
    assert not flags.has_tailwind
    assert not flags.any


def test_tailwind_sets_both_flags():
    flags = _detect("@tailwind utilities;")
    assert flags.has_tailwind
    assert flags.has_apply
    assert flags.any


def test_nested_apply_in_rule_block():
    flags = _detect(".btn { color: red; @apply p-4 flex; }")
    assert flags.has_apply
    assert not flags.has_tailwind


def test_apply_inside_media_block():
    flags = _detect("@media (min-width: 640px) { .card { @apply m-2; } }")
    assert flags.has_apply
    assert not flags.has_tailwind


def test_directive_names_are_matched_exactly():
    assert not _detect("@TAILWIND utilities;").any
    assert not _detect(".a { @Apply flex; }").any
    assert _detect("@tailwind utilities;").has_tailwind
    assert _detect(".a { @apply flex; }").has_apply


def test_other_at_rules_are_ignored():
    flags = _detect('@import "theme.css";\n@layer base { h1 { font-size: 2rem; } }')
    assert not flags.any


def test_flags_are_fresh_for_every_call():
    detector = DirectiveDetector()
    assert detector.detect(parse_css("@tailwind utilities;")).has_tailwind
    assert not detector.detect(parse_css("a { color: red; }")).any
