"""
In-memory slide/paragraph/run model.

The engine only talks to documents through a handful of accessors
(``document.slides``, ``document.cursor``, ``slide.paragraphs()``,
``paragraph.runs()`` and ``paragraph.set_runs()``). The classes here
implement them for plain Python data; ``slide_text_server.utils.pptx_utils``
implements them on top of python-pptx.
"""
import copy
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence


@dataclass(frozen=True)
class Run:
    """A piece of text sharing one formatting value.

    ``formatting`` is never inspected by the engine. Every fragment produced
    when the run is split gets its own shallow copy of it.
    """
    text: str
    formatting: Any = None

    def with_text(self, text: str) -> "Run":
        return Run(text, copy.copy(self.formatting))


class Paragraph:
    """An ordered sequence of runs."""

    def __init__(self, runs: Optional[Sequence[Run]] = None):
        self._runs: List[Run] = list(runs or [])

    def runs(self) -> List[Run]:
        return list(self._runs)

    def set_runs(self, runs: Sequence[Run]) -> None:
        self._runs = list(runs)

    @property
    def text(self) -> str:
        return "".join(run.text for run in self._runs)

    def __repr__(self):
        return f"Paragraph({self._runs!r})"


@dataclass
class Slide:
    """A slide holding its paragraphs in shape-then-paragraph order."""
    paragraph_list: List[Paragraph] = field(default_factory=list)

    def paragraphs(self) -> List[Paragraph]:
        return list(self.paragraph_list)


@dataclass
class Document:
    """A deck of slides with a 1-based ``cursor`` on the current slide."""
    slides: List[Slide] = field(default_factory=list)
    cursor: Optional[int] = None

    def add_slide(self, slide: Optional[Slide] = None) -> Slide:
        """Append a slide and move the cursor onto it."""
        slide = slide if slide is not None else Slide()
        self.slides.append(slide)
        self.cursor = len(self.slides)
        return slide
