from __future__ import annotations

import re

from reply_advisor.core.schemas.suggestion import (
    ParsedReply,
    PlainText,
    StructuredSuggestions,
    Suggestion,
)

# A block runs from its marker to the next marker or the end of the text.
CANDIDATE_PATTERN = re.compile(
    r"\[candidate\s*(\d+)\](.*?)(?=\[candidate\s*\d+\]|\Z)",
    re.IGNORECASE | re.DOTALL,
)


def extract_suggestions(text: str) -> list[Suggestion]:
    """Return every candidate block in order of appearance.

    Duplicate marker numbers are kept as separate entries.
    """
    results: list[Suggestion] = []
    for match in CANDIDATE_PATTERN.finditer(text or ""):
        lines = [line.strip() for line in match.group(2).splitlines() if line.strip()]
        results.append(
            Suggestion(
                index=int(match.group(1)),
                text=lines[0] if lines else "",
                explanation=" ".join(lines[1:]),
            )
        )
    return results


def parse_reply(text: str) -> ParsedReply:
    """Classify raw model output as a suggestion list or a plain message."""
    items = extract_suggestions(text)
    if items:
        return StructuredSuggestions(items=items)
    return PlainText(text=text)
