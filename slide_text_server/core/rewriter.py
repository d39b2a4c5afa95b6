"""
Rewriting of a paragraph's run sequence around replaced match spans.
"""
import logging
from typing import List, Sequence, Tuple

from slide_text_server.core.flatten import OffsetMap
from slide_text_server.core.matcher import MatchSpan
from slide_text_server.core.model import Run

logger = logging.getLogger(__name__)


def split_run_at(runs: List[Run], run_index: int, split_index: int) -> int:
    """
    Make sure a run boundary exists at a character position.

    Args:
        runs: Run list, modified in place
        run_index: Run holding the position
        split_index: Character index inside that run (0-based)

    Returns:
        List index of the first run after the boundary
    """
    if run_index >= len(runs):
        return len(runs)
    run = runs[run_index]
    if split_index <= 0:
        return run_index
    if split_index >= len(run.text):
        return run_index + 1

    # Both halves keep the original formatting
    runs[run_index:run_index + 1] = [
        run.with_text(run.text[:split_index]),
        run.with_text(run.text[split_index:]),
    ]
    return run_index + 1


def rewrite_span(runs: List[Run], offset_map: OffsetMap, span: MatchSpan, new_text: str) -> None:
    """
    Replace the characters of one match span inside a run list.

    ``offset_map`` describes the runs before any edit. It stays valid for
    this span as long as every span handled earlier starts at or after
    ``span.end``.
    """
    # End boundary first: splitting there never moves the start position
    end_run, end_offset = offset_map.locate(span.end)
    stop = split_run_at(runs, end_run, end_offset)

    start_run, start_offset = offset_map.locate(span.start)
    count_before = len(runs)
    start = split_run_at(runs, start_run, start_offset)
    if len(runs) > count_before:
        stop += 1

    # Untouched empty runs sitting on the end boundary stay where they are
    while stop > start and not runs[stop - 1].text:
        stop -= 1

    # The match belongs to the run holding its first character
    if start < len(runs):
        template = runs[start]
    elif runs:
        template = runs[-1]
    else:
        template = Run("")

    runs[start:stop] = [template.with_text(new_text)] if new_text else []


def apply_replacements(paragraph, replacements: Sequence[Tuple[MatchSpan, str]]):
    """
    Replace match spans in a paragraph while keeping surrounding formatting.

    Matches are applied from the rightmost to the leftmost so that offsets
    of pending matches stay valid. Each replaced span becomes a single run
    formatted like the run in which the match starts; an empty replacement
    just removes the span.

    Args:
        paragraph: Object exposing ``runs()`` and ``set_runs()``
        replacements: ``(span, replacement_text)`` pairs with non-overlapping spans

    Returns:
        The paragraph, rewritten in place
    """
    if not replacements:
        return paragraph

    runs = paragraph.runs()
    offset_map = OffsetMap(runs)

    ordered = sorted(replacements, key=lambda item: (item[0].start, item[0].end), reverse=True)
    for span, _ in ordered:
        if not 0 <= span.start <= span.end <= len(offset_map):
            raise ValueError(f"Match span {tuple(span)} outside paragraph of length {len(offset_map)}")
    for (later, _), (earlier, _) in zip(ordered, ordered[1:]):
        if earlier.end > later.start:
            raise ValueError(f"Overlapping match spans {tuple(earlier)} and {tuple(later)}")

    for span, new_text in ordered:
        rewrite_span(runs, offset_map, span, new_text)

    logger.debug("rewrote %d span(s): %d run(s) -> %d run(s)",
                 len(ordered), offset_map.run_count, len(runs))
    paragraph.set_runs(runs)
    return paragraph
