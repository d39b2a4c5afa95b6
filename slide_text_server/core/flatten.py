"""
Flattening of a paragraph's runs into one searchable string.
"""
from bisect import bisect_right
from typing import List, Sequence, Tuple

from slide_text_server.core.model import Run


class OffsetMap:
    """
    Maps flattened character offsets back to ``(run_index, local_offset)``.

    Only run start boundaries are stored; lookups bisect them. Empty runs
    share their start with the next run and never own a character.
    """

    def __init__(self, runs: Sequence[Run]):
        self.starts: List[int] = []
        self.lengths: List[int] = []
        position = 0
        for run in runs:
            self.starts.append(position)
            self.lengths.append(len(run.text))
            position += len(run.text)
        self.total = position

    def __len__(self):
        return self.total

    def __getitem__(self, offset: int) -> Tuple[int, int]:
        if not 0 <= offset < self.total:
            raise IndexError(f"offset {offset} outside flattened text of length {self.total}")
        return self.locate(offset)

    @property
    def run_count(self) -> int:
        return len(self.starts)

    def locate(self, offset: int) -> Tuple[int, int]:
        """
        Find the run holding the character at ``offset``.

        An offset on a run boundary belongs to the following run.
        ``offset == len(text)`` is accepted and maps to ``(run_count, 0)``.
        """
        if offset == self.total:
            return self.run_count, 0
        if not 0 <= offset < self.total:
            raise IndexError(f"offset {offset} outside flattened text of length {self.total}")
        run_index = bisect_right(self.starts, offset) - 1
        return run_index, offset - self.starts[run_index]

    def run_span(self, run_index: int) -> Tuple[int, int]:
        """Flattened ``(start, end)`` covered by one run."""
        start = self.starts[run_index]
        return start, start + self.lengths[run_index]


def flatten_runs(runs: Sequence[Run]) -> Tuple[str, OffsetMap]:
    return "".join(run.text for run in runs), OffsetMap(runs)


def flatten(paragraph) -> Tuple[str, OffsetMap]:
    """
    Concatenate a paragraph's run texts and build the matching offset map.

    The paragraph is only read.

    Args:
        paragraph: Any object exposing ``runs()``

    Returns:
        Tuple of (full_text, offset_map)
    """
    return flatten_runs(paragraph.runs())
