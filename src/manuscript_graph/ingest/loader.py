"""Load manuscripts from disk."""

from pathlib import Path

SUPPORTED_SUFFIXES = (".txt", ".md")


def load_text(path: Path) -> str:
    """
    Load a manuscript file and return its text unchanged.

    Supports plain text and Markdown files. Offsets produced downstream index
    into exactly the string returned here.
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError(f"Unsupported file format: {suffix}")

    # Try common encodings
    for encoding in ["utf-8", "utf-8-sig", "cp1252"]:
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue

    raise ValueError(f"Could not decode {path} with any common encoding")
