"""Tests for settings and models."""

from manuscript_graph.config import Settings
from manuscript_graph.models import EntityGraph, EntityNode, EntityType


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self):
        settings = Settings()
        assert settings.max_text_length == 2_000_000
        assert settings.evidence_limit == 10
        assert settings.snippet_length == 100

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("MSG_EVIDENCE_LIMIT", "3")
        assert Settings().evidence_limit == 3


class TestModels:
    """Tests for model helpers and serialization."""

    def test_add_alias_case_insensitive(self):
        node = EntityNode(name="Marcus", type=EntityType.CHARACTER, first_mention=0)
        assert node.add_alias("Shadow")
        assert not node.add_alias("shadow")
        assert not node.add_alias("MARCUS")
        assert node.aliases == ["Shadow"]

    def test_graph_round_trip_uses_camel_case(self):
        node = EntityNode(name="Marcus", type=EntityType.CHARACTER, first_mention=4)
        node.add_mention(4, "c1")
        data = EntityGraph(nodes=[node]).to_dict()

        assert data["nodes"][0]["firstMention"] == 4
        assert data["nodes"][0]["mentionCount"] == 1
        assert "processedAt" in data

        restored = EntityGraph.model_validate(data)
        assert restored.nodes[0].mentions[0].chapter_id == "c1"
