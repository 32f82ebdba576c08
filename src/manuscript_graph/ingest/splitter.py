"""Split manuscript text into chapters and paragraph spans."""

import re

from ..models.passage import ClassifiedParagraph

_PARAGRAPH_BREAK = re.compile(r"\n[ \t]*\n\s*")
_QUOTE_CHARS = ('"', "“", "”")


def split_into_chapters(text: str) -> list[tuple[str, str]]:
    """
    Split text into chapters.

    Returns list of (chapter_title, chapter_text) tuples.
    """
    # Common chapter patterns
    chapter_patterns = [
        r"^(Chapter[ \t]+[IVXLC\d]+[:\.]?[ \t]*.*)$",  # Chapter I, Chapter 1, etc.
        r"^(\d+\.[ \t]+.+)$",  # 1. Title
        r"^(Part[ \t]+[IVXLC\d]+[:\.]?[ \t]*.*)$",  # Part I
    ]

    combined_pattern = "|".join(f"(?:{p})" for p in chapter_patterns)
    splits = list(re.finditer(combined_pattern, text, re.MULTILINE | re.IGNORECASE))

    if not splits:
        # No chapters detected, treat whole text as one chapter
        return [("Chapter 1", text)]

    chapters: list[tuple[str, str]] = []

    for i, match in enumerate(splits):
        title = match.group(0).strip()
        start = match.end()
        end = splits[i + 1].start() if i + 1 < len(splits) else len(text)

        chapter_text = text[start:end].strip()
        if chapter_text:  # Skip empty chapters
            chapters.append((title, chapter_text))

    # Keep a substantial preamble before the first marker
    if splits[0].start() > 0:
        preamble = text[: splits[0].start()].strip()
        if len(preamble) > 100:
            chapters.insert(0, ("Prologue", preamble))

    return chapters if chapters else [("Chapter 1", text)]


def split_into_sentences(text: str) -> list[str]:
    """
    Split text into sentences.

    Handles common abbreviations so "Dr. Watson" stays in one sentence.
    """
    text = " ".join(text.split())

    abbreviations = {"Mr", "Mrs", "Ms", "Dr", "Prof", "Sr", "Jr", "vs", "etc", "St", "Mt"}
    for abbr in abbreviations:
        text = re.sub(rf"\b{abbr}\.", f"{abbr}<<<DOT>>>", text, flags=re.IGNORECASE)

    sentences = re.split(r'(?<=[.!?])\s+(?=[A-Z"“])', text)
    sentences = [s.replace("<<<DOT>>>", ".").strip() for s in sentences]
    return [s for s in sentences if s]


def classify_paragraph(paragraph: str) -> str:
    """Coarse paragraph type: quoted speech is dialogue, the rest exposition."""
    return "dialogue" if any(q in paragraph for q in _QUOTE_CHARS) else "exposition"


def paragraph_spans(text: str) -> list[ClassifiedParagraph]:
    """
    Split text on blank lines into paragraph spans.

    Each span's offset and length index into ``text`` itself, with
    surrounding whitespace excluded.
    """
    spans: list[ClassifiedParagraph] = []

    def emit(start: int, end: int) -> None:
        chunk = text[start:end]
        stripped = chunk.strip()
        if not stripped:
            return
        offset = start + len(chunk) - len(chunk.lstrip())
        sentences = split_into_sentences(stripped)
        word_count = sum(len(s.split()) for s in sentences)
        spans.append(
            ClassifiedParagraph(
                offset=offset,
                length=len(stripped),
                type=classify_paragraph(stripped),
                sentence_count=len(sentences),
                avg_sentence_length=word_count / len(sentences) if sentences else 0.0,
            )
        )

    start = 0
    for brk in _PARAGRAPH_BREAK.finditer(text):
        emit(start, brk.start())
        start = brk.end()
    emit(start, len(text))

    return spans
