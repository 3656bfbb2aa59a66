from __future__ import annotations

import random
from pathlib import Path

from reply_advisor.utils.logging import get_logger

logger = get_logger(__name__)

MANUAL_FILENAME = "manual.txt"
MAX_CORPUS_CHARS = 150_000
CHUNK_BYTES = 4_000


def manual_section(name: str, content: str) -> str:
    return f"\n--- Manual: {name} ---\n{content}\n"


def excerpt_section(name: str, content: str) -> str:
    return f"\n--- Chat log: {name} (excerpt) ---\n{content}\n"


def read_tail(path: Path, chunk_bytes: int) -> str:
    """Read a whole file, or only its last `chunk_bytes` bytes when it is larger.

    The tail window may start inside a multi-byte character; such bytes are
    decoded with the replacement character.
    """
    size = path.stat().st_size
    if size <= chunk_bytes:
        return path.read_bytes().decode("utf-8", errors="replace")
    with path.open("rb") as fh:
        fh.seek(size - chunk_bytes)
        return fh.read(chunk_bytes).decode("utf-8", errors="replace")


def list_reference_files(directory: Path, manual_filename: str) -> list[Path]:
    """Return the non-manual `.txt` files of the corpus directory, sorted by name."""
    return sorted(
        (
            p for p in directory.iterdir()
            if p.suffix == ".txt" and p.name != manual_filename and p.is_file()
        ),
        key=lambda p: p.name,
    )


def load_corpus(
    directory: Path,
    *,
    manual_filename: str = MANUAL_FILENAME,
    max_chars: int = MAX_CORPUS_CHARS,
    chunk_bytes: int = CHUNK_BYTES,
    rng: random.Random | None = None,
) -> str:
    """Assemble the reference text injected into the reply prompt.

    The manual file is included in full first. The remaining `.txt` files are
    visited in a random order, each contributing at most the tail
    `chunk_bytes` of its content, until the blob reaches `max_chars`.

    Never raises: unreadable files are skipped and an unreadable directory
    yields an empty string.
    """
    rng = rng or random.Random()
    blob = ""

    try:
        if not directory.is_dir():
            logger.warning("Corpus directory not found: %s", directory)
            return ""

        manual_path = directory / manual_filename
        if manual_path.is_file():
            try:
                content = manual_path.read_bytes().decode("utf-8", errors="replace")
                blob += manual_section(manual_filename, content)
            except OSError as err:
                logger.error("Failed to read manual %s: %s", manual_filename, err)

        files = list_reference_files(directory, manual_filename)
        rng.shuffle(files)

        for path in files:
            if len(blob) >= max_chars:
                break
            # The section header counts against the budget too
            remaining = max_chars - len(blob) - len(excerpt_section(path.name, ""))
            if remaining <= 0:
                break
            try:
                content = read_tail(path, chunk_bytes)
            except OSError as err:
                logger.error("Failed to read corpus file %s: %s", path.name, err)
                continue

            if len(content) > remaining:
                content = content[:remaining]
            blob += excerpt_section(path.name, content)
    except OSError as err:
        logger.error("Failed to read corpus directory %s: %s", directory, err)
        return ""

    logger.debug("Loaded corpus", extra={"chars": len(blob), "directory": str(directory)})
    return blob
