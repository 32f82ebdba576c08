"""Text ingestion and processing."""

from manuscript_graph.ingest.loader import load_text
from manuscript_graph.ingest.splitter import paragraph_spans, split_into_chapters, split_into_sentences

__all__ = ["load_text", "paragraph_spans", "split_into_chapters", "split_into_sentences"]
