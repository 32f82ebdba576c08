"""Queries over entity graphs."""

from manuscript_graph.graph.queries import entities_in_range, find_entity, related_entities

__all__ = ["entities_in_range", "find_entity", "related_entities"]
