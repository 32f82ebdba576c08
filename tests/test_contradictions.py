"""Tests for contradiction detection."""

import pytest

from manuscript_graph.config import Settings
from manuscript_graph.errors import InputTooLargeError
from manuscript_graph.lore import (
    ContradictionDetector,
    are_values_compatible,
    contradictions_for_entity,
    detect_attribute_contradictions,
    detect_contradictions,
    detect_timeline_contradictions,
    extract_attributes,
    find_deaths,
    group_contradictions_by_type,
    high_severity_contradictions,
)
from manuscript_graph.models import ContradictionType, EntityGraph, Timeline, TimelineEvent


class TestAttributeExtraction:
    """Tests for physical description extraction."""

    def test_eye_color(self):
        attrs = extract_attributes("Sarah's blue eyes sparkled.")
        assert [(a.entity_name, a.category, a.value, a.offset) for a in attrs] == [
            ("Sarah", "eye_color", "blue", 0)
        ]

    def test_context_window(self):
        text = "It was very late indeed when Sarah's Blue eyes opened at last."
        attr = extract_attributes(text)[0]
        assert attr.value == "blue"
        assert attr.context == text[attr.offset - 20 : attr.offset + len("Sarah's Blue eyes") + 20]

    def test_age_both_forms(self):
        attrs = extract_attributes("Marcus was 30 years old. The 35-year-old Marcus frowned.")
        assert [(a.entity_name, a.value) for a in attrs] == [("Marcus", "30"), ("Marcus", "35")]

    def test_unnamed_description_skipped(self):
        assert extract_attributes("Her eyes were blue. Her eyes were green.") == []

    def test_height_and_build(self):
        attrs = extract_attributes("Marcus was tall. Marcus's muscular frame filled the door.")
        assert {(a.category, a.value) for a in attrs} == {("height", "tall"), ("build", "muscular")}


class TestValueCompatibility:
    """Tests for attribute value comparison."""

    def test_equal_values(self):
        assert are_values_compatible("height", "tall", "tall")

    def test_color_variations(self):
        assert are_values_compatible("eye_color", "blue", "azure")
        assert are_values_compatible("hair_color", "golden", "blonde")
        assert not are_values_compatible("eye_color", "blue", "green")

    def test_age_tolerance(self):
        assert are_values_compatible("age", "30", "32")
        assert not are_values_compatible("age", "30", "33")


class TestAttributeContradictions:
    """Tests for attribute contradictions."""

    def test_eye_color_changes(self, extract):
        """Blue then green eyes for the same character is one contradiction."""
        text = "Sarah's blue eyes sparkled. Later, Sarah's green eyes glimmered."
        graph = extract(text)

        found = detect_contradictions(text, graph)

        assert len(found) == 1
        contradiction = found[0]
        assert contradiction.type is ContradictionType.ATTRIBUTE
        assert contradiction.entity_name == "Sarah"
        assert contradiction.entity_id == graph.find_by_name("Sarah").id
        assert contradiction.severity == 0.8
        assert (contradiction.claim1.value, contradiction.claim2.value) == ("blue", "green")
        assert contradiction.suggestion == (
            'Sarah\'s eye color is described as both "blue" and "green". '
            "Consider making these consistent."
        )

    def test_no_matching_node(self):
        text = "Sarah's blue eyes sparkled. Sarah's green eyes glimmered."
        found = detect_attribute_contradictions(text, EntityGraph())
        assert len(found) == 1
        assert found[0].entity_id == ""

    def test_compatible_descriptions(self):
        text = "Sarah's blue eyes sparkled. Sarah's azure eyes glimmered."
        assert detect_attribute_contradictions(text, EntityGraph()) == []

    def test_every_pair_compared(self):
        text = "Sarah's blue eyes. Sarah's green eyes. Sarah's brown eyes."
        assert len(detect_attribute_contradictions(text, EntityGraph())) == 3


class TestTimelineContradictions:
    """Tests for dead characters acting."""

    def test_dead_character_acts(self, extract):
        text = "Marcus died in the battle. Marcus smiled and walked to the door."
        graph = extract(text)

        found = detect_contradictions(text, graph)

        assert len(found) == 1
        contradiction = found[0]
        assert contradiction.type is ContradictionType.TIMELINE
        assert contradiction.entity_name == "Marcus"
        assert contradiction.severity == 0.95
        assert contradiction.claim1.value == "death"
        assert contradiction.claim1.offset == 0
        assert contradiction.claim2.offset == 27
        assert contradiction.claim2.value == "action after death"
        assert contradiction.claim2.text == "Marcus smiled and walked to the door."

    def test_one_contradiction_per_character(self, make_node, mentions_of):
        text = "Marcus died. Marcus said no. Marcus smiled."
        graph = EntityGraph(nodes=[make_node("Marcus", offsets=mentions_of("Marcus", text))])
        assert len(detect_timeline_contradictions(text, graph)) == 1

    def test_dying_mention_excluded(self, make_node):
        """A mention inside the death phrase is not an action after death."""
        text = "Sarah killed Marcus as he smiled."
        graph = EntityGraph(nodes=[make_node("Marcus", offsets=(13,))])
        assert detect_timeline_contradictions(text, graph) == []

    def test_action_verbs_are_whole_words(self, make_node):
        text = "Marcus died. Marcus ranked first in memory."
        graph = EntityGraph(nodes=[make_node("Marcus", offsets=(0, 13))])
        assert detect_timeline_contradictions(text, graph) == []

    def test_earliest_death_kept(self):
        text = "The guard killed Marcus. Later, Marcus died again."
        deaths = find_deaths(text)
        assert deaths["marcus"].offset == 10

    def test_death_from_timeline_event(self, make_node):
        text = "The bells rang out. Later, Marcus smiled at the crowd."
        graph = EntityGraph(nodes=[make_node("Marcus", offsets=(27,))])
        timeline = Timeline(events=[TimelineEvent(offset=0, description="Marcus died")])

        found = detect_timeline_contradictions(text, graph, timeline)

        assert len(found) == 1
        assert found[0].claim1.text == "Marcus died"
        assert found[0].claim1.offset == 0

    def test_timeline_event_excludes_its_own_death_phrase(self, make_node, mentions_of):
        """The dying mention inside an event's description is not an action after death."""
        text = "Marcus nodded to the guard. Then Marcus died. Sarah walked away."
        graph = EntityGraph(nodes=[make_node("Marcus", offsets=mentions_of("Marcus", text))])
        timeline = Timeline(events=[TimelineEvent(offset=0, description=text[:45])])

        assert find_deaths(text, timeline)["marcus"].end == 44
        assert detect_timeline_contradictions(text, graph, timeline) == []

    def test_unknown_character_ignored(self):
        text = "Marcus died. Marcus smiled."
        assert detect_timeline_contradictions(text, EntityGraph()) == []


class TestContradictionDetector:
    """Tests for the combined checker and its helpers."""

    @pytest.fixture
    def mixed(self, make_node, mentions_of):
        text = "Marcus died. Marcus's blue eyes shone. Marcus's green eyes narrowed. Marcus smiled."
        graph = EntityGraph(nodes=[make_node("Marcus", offsets=mentions_of("Marcus", text))])
        return text, graph

    def test_sorted_by_severity(self, mixed):
        text, graph = mixed
        found = detect_contradictions(text, graph)

        assert [c.type for c in found] == [ContradictionType.TIMELINE, ContradictionType.ATTRIBUTE]
        severities = [c.severity for c in found]
        assert severities == sorted(severities, reverse=True)

    def test_chapter_id_stamped(self, mixed):
        text, graph = mixed
        found = detect_contradictions(text, graph, chapter_id="c7")
        assert all(c.claim1.chapter_id == "c7" and c.claim2.chapter_id == "c7" for c in found)

    def test_chapter_id_absent_by_default(self, mixed):
        text, graph = mixed
        assert all(c.claim1.chapter_id is None for c in detect_contradictions(text, graph))

    def test_empty_text(self):
        assert detect_contradictions("", EntityGraph()) == []

    def test_input_too_large(self):
        detector = ContradictionDetector(Settings(max_text_length=5))
        with pytest.raises(InputTooLargeError):
            detector.check("Marcus died.", EntityGraph())

    def test_filters(self, mixed):
        text, graph = mixed
        found = detect_contradictions(text, graph)
        marcus = graph.nodes[0]

        assert len(contradictions_for_entity(found, marcus.id)) == 2
        assert contradictions_for_entity(found, "nobody") == []
        assert [c.type for c in high_severity_contradictions(found, 0.9)] == [ContradictionType.TIMELINE]
        assert len(high_severity_contradictions(found)) == 2

    def test_group_by_type(self, mixed):
        text, graph = mixed
        grouped = group_contradictions_by_type(detect_contradictions(text, graph))
        assert list(grouped) == [ContradictionType.TIMELINE, ContradictionType.ATTRIBUTE]
        assert all(len(items) == 1 for items in grouped.values())

    def test_serialized_with_camel_case(self, mixed):
        text, graph = mixed
        data = detect_contradictions(text, graph, chapter_id="c1")[0].to_dict()
        assert data["type"] == "timeline"
        assert "entityName" in data
        assert data["claim1"]["chapterId"] == "c1"
