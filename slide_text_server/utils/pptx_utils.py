"""
python-pptx adapter for the replacement engine.

Presentations are exposed through the small accessor set the engine uses
(``slides``, ``cursor``, ``paragraphs()``, ``runs()``, ``set_runs()``).
A python-pptx paragraph is cut into segments at every child that is not a
text run (line breaks, fields); each segment is searched on its own.
"""
import copy
from typing import Any, Dict, Iterator, List, Optional

from pptx import Presentation
from pptx.oxml.ns import qn
from pptx.oxml.xmlchemy import OxmlElement
from pptx.shapes.group import GroupShape

from slide_text_server.core.model import Run


def clone_run_with_text(source_r, text: str):
    """
    Clone a run element with all its formatting but replace the text content.

    Args:
        source_r: The ``a:r`` element to clone formatting from
        text: New text content for the cloned run

    Returns:
        New ``a:r`` element with the same ``a:rPr`` as the source
    """
    cloned_r = copy.deepcopy(source_r)

    t_elements = list(cloned_r.iter(qn('a:t')))
    if not t_elements:
        t_elem = OxmlElement('a:t')
        cloned_r.append(t_elem)
        t_elements = [t_elem]

    t_elements[0].text = text
    for t_elem in t_elements[1:]:
        t_elem.text = ""

    return cloned_r


def new_run_element(text: str):
    """Create a bare ``a:r`` element carrying only text."""
    r = OxmlElement('a:r')
    t_elem = OxmlElement('a:t')
    t_elem.text = text
    r.append(t_elem)
    return r


def run_element_text(r) -> str:
    return "".join(t_elem.text or "" for t_elem in r.iter(qn('a:t')))


class PptxParagraph:
    """
    A stretch of consecutive ``a:r`` elements inside one ``a:p``.

    The formatting of each engine run is its source ``a:r`` element, used as
    a clone template when runs are written back.
    """

    def __init__(self, p, r_elements, anchor=None):
        self._p = p
        self._r_elements = list(r_elements)
        # Non-run sibling right before the segment (None: start of a:p)
        self._anchor = anchor

    def runs(self) -> List[Run]:
        return [Run(run_element_text(r), r) for r in self._r_elements]

    def set_runs(self, runs) -> None:
        new_elements = []
        for run in runs:
            if run.formatting is None:
                new_elements.append(new_run_element(run.text))
            else:
                new_elements.append(clone_run_with_text(run.formatting, run.text))

        for r in self._r_elements:
            self._p.remove(r)

        previous = self._anchor
        for r in new_elements:
            if previous is None:
                self._p.insert(0, r)
            else:
                previous.addnext(r)
            previous = r
        self._r_elements = new_elements

    @property
    def text(self) -> str:
        return "".join(run_element_text(r) for r in self._r_elements)


def split_paragraph_segments(paragraph) -> List[PptxParagraph]:
    """
    Cut a python-pptx paragraph into run segments.

    Args:
        paragraph: ``pptx.text.text._Paragraph``

    Returns:
        Segments in document order; paragraphs without runs yield none
    """
    p = paragraph._p
    segments = []
    current = []
    anchor = None
    segment_anchor = None

    for child in p:
        if child.tag == qn('a:r'):
            if not current:
                segment_anchor = anchor
            current.append(child)
            continue
        if current:
            segments.append(PptxParagraph(p, current, segment_anchor))
            current = []
        anchor = child

    if current:
        segments.append(PptxParagraph(p, current, segment_anchor))
    return segments


def iter_text_frames(shapes) -> Iterator[Any]:
    """Yield text frames of shapes in z-order, descending into groups and tables."""
    for shape in shapes:
        if isinstance(shape, GroupShape):
            yield from iter_text_frames(shape.shapes)
        elif shape.has_table:
            for row in shape.table.rows:
                for cell in row.cells:
                    yield cell.text_frame
        elif shape.has_text_frame:
            yield shape.text_frame


class PptxSlide:
    """One slide of a python-pptx presentation."""

    def __init__(self, slide):
        self.slide = slide

    def paragraphs(self) -> List[PptxParagraph]:
        segments = []
        for text_frame in iter_text_frames(self.slide.shapes):
            for paragraph in text_frame.paragraphs:
                segments.extend(split_paragraph_segments(paragraph))
        return segments


class PptxDocument:
    """
    A python-pptx presentation with a current-slide cursor.

    The cursor starts on the last slide, like a deck that has just been
    opened; it is None for a deck without slides.
    """

    def __init__(self, presentation, cursor: Optional[int] = None):
        self.presentation = presentation
        self.slides = [PptxSlide(slide) for slide in presentation.slides]
        self.cursor = cursor if cursor is not None else (len(self.slides) or None)

    def save(self, filename: str) -> None:
        self.presentation.save(filename)


def load_presentation(filename: str, cursor: Optional[int] = None) -> PptxDocument:
    return PptxDocument(Presentation(filename), cursor=cursor)


def paragraph_text_summary(slide) -> List[Dict[str, Any]]:
    """
    Describe the run layout of every paragraph on a slide.

    Args:
        slide: python-pptx slide

    Returns:
        List of paragraph dicts with their runs and basic font attributes
    """
    summary = []
    index = 0
    for text_frame in iter_text_frames(slide.shapes):
        for paragraph in text_frame.paragraphs:
            runs = []
            for run in paragraph.runs:
                font = run.font
                runs.append({
                    "text": run.text,
                    "bold": font.bold,
                    "italic": font.italic,
                    "size": font.size.pt if font.size is not None else None,
                })
            summary.append({
                "index": index,
                "text": paragraph.text,
                "runs": runs,
            })
            index += 1
    return summary
