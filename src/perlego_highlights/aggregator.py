"""Turn packaged highlight responses into Markdown list lines."""
from __future__ import annotations

from typing import List

from .models import AggregatedHighlights, HighlightResponse

BULLET = "- "


def aggregate(response: HighlightResponse) -> AggregatedHighlights:
    """Return the highlight and note lines for a book, in response order.

    Every record yields exactly one highlight line. Notes are flattened
    across records and notes that are blank once stripped are dropped.
    """

    highlights: List[str] = [BULLET + record.highlighted_text for record in response.results]
    notes: List[str] = [
        BULLET + note
        for record in response.results
        for note in record.notes
        if note.strip()
    ]
    return AggregatedHighlights(highlights=highlights, notes=notes)
