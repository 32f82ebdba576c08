"""Tests for the extraction pattern library."""

import re

from manuscript_graph.extract.patterns import (
    OBJECT_RULES,
    RELATIONSHIP_RULES,
    canonical_key,
    is_proper_noun,
    is_valid_entity_name,
    normalize_entity_name,
    rule,
)
from manuscript_graph.models import RelationshipType


class TestNameHelpers:
    """Tests for name normalization and validation."""

    def test_normalize_strips_possessive(self):
        assert normalize_entity_name("Sarah's") == "Sarah"
        assert normalize_entity_name("Marcus’s") == "Marcus"

    def test_normalize_collapses_whitespace_and_punctuation(self):
        assert normalize_entity_name("  Dark   Lord. ") == "Dark Lord"

    def test_canonical_key_is_case_folded(self):
        assert canonical_key("SARAH's") == "sarah"
        assert canonical_key("Sarah") == canonical_key("sarah")

    def test_lexicon_words_rejected(self):
        assert not is_valid_entity_name("The")
        assert not is_valid_entity_name("Monday")
        assert not is_valid_entity_name("Chapter")

    def test_length_bounds(self):
        assert not is_valid_entity_name("X")
        assert not is_valid_entity_name("A" * 31)
        assert is_valid_entity_name("Al")

    def test_numbers_rejected(self):
        assert not is_valid_entity_name("42")

    def test_proper_noun(self):
        assert is_proper_noun("Sarah")
        assert not is_proper_noun("sarah")
        assert not is_proper_noun("SARAH")


class TestPatternRule:
    """Tests for typed rule records."""

    def test_groups_normalized(self):
        assert rule("x", r"(a)").groups == ((1,),)
        assert rule("x", r"(a)|(b)", (1, 2)).groups == ((1, 2),)
        assert rule("x", r"(a) (b)", 1, 2).groups == ((1,), (2,))

    def test_first_participating_alternative_wins(self):
        """The "crown of X" alternative fills the same logical capture."""
        crown = next(r for r in OBJECT_RULES if r.category == "crown")
        text = "She wore the crown of Marcus."

        matches = list(crown.matcher(text))

        assert len(matches) == 1
        assert matches[0].capture(0) == ("Marcus", 22)
        assert matches[0].start == 9

    def test_missing_capture_is_none(self):
        compiled = rule("x", r"(a)(b)?", 1, 2)
        match = next(compiled.matcher("a"))
        assert match.capture(0) == ("a", 0)
        assert match.capture(1) is None
        assert match.capture(5) is None

    def test_relationship_rules_ignore_case(self):
        conflict = next(r for r in RELATIONSHIP_RULES if r.rule.category == "conflict")
        match = next(conflict.rule.matcher("sarah ATTACKED marcus"))
        assert conflict.type is RelationshipType.OPPOSES
        assert (match.capture(0)[0], match.capture(1)[0]) == ("sarah", "marcus")

    def test_rules_are_compiled(self):
        assert all(isinstance(r.rule.pattern, re.Pattern) for r in RELATIONSHIP_RULES)
