"""
Scope resolution and replacement passes over slides.
"""
import logging
import re
import warnings
from typing import Any, Dict, List, Optional, Sequence, Union

from slide_text_server.core.errors import (
    InvalidArgumentError,
    NoCurrentSlideError,
    NoMatchWarning,
    SlideIndexOutOfRangeError,
)
from slide_text_server.core.flatten import flatten
from slide_text_server.core.matcher import MatchOptions, compile_pattern, find_matches
from slide_text_server.core.rewriter import apply_replacements

logger = logging.getLogger(__name__)


def resolve_scope(document, slide_index: Optional[int] = None) -> List[Any]:
    """
    Resolve a slide reference into that slide's paragraphs.

    Args:
        document: Object exposing ``slides`` and ``cursor``
        slide_index: 1-based slide index, or None for the current slide

    Returns:
        Paragraphs of the slide in shape-then-paragraph order

    Raises:
        NoCurrentSlideError: If slide_index is None and the cursor is unset
        SlideIndexOutOfRangeError: If slide_index is outside 1..slide_count
    """
    slide_count = len(document.slides)
    if slide_index is None:
        slide_index = document.cursor
        if slide_index is None:
            raise NoCurrentSlideError("No slide index given and the document has no current slide")
    if not 1 <= slide_index <= slide_count:
        raise SlideIndexOutOfRangeError(slide_index, slide_count)
    return list(document.slides[slide_index - 1].paragraphs())


def resolve_document_scope(document) -> List[Any]:
    """All paragraphs of every slide, in slide order."""
    paragraphs = []
    for slide in document.slides:
        paragraphs.extend(slide.paragraphs())
    return paragraphs


def replace_in_scope(paragraphs: Sequence[Any], old_value: Union[str, re.Pattern], new_value: str,
                     match_options: Union[MatchOptions, Dict[str, bool], None] = None) -> int:
    """
    Replace every match of a pattern in a sequence of paragraphs.

    ``new_value`` is inserted literally, even in regex mode (no group
    references). Paragraphs without a match are left untouched.

    Args:
        paragraphs: Paragraphs exposing ``runs()`` and ``set_runs()``
        old_value: Pattern to search for, or a pattern compiled with compile_pattern
        new_value: Replacement text
        match_options: MatchOptions or a dict of its fields

    Returns:
        Number of replacements made
    """
    if isinstance(old_value, re.Pattern):
        pattern = old_value
    else:
        pattern = compile_pattern(old_value, _coerce_options(match_options))

    count = 0
    for index, para in enumerate(paragraphs):
        text, _ = flatten(para)
        spans = find_matches(text, pattern)
        if not spans:
            continue
        apply_replacements(para, [(span, new_value) for span in spans])
        logger.debug("paragraph %d: %d replacement(s)", index, len(spans))
        count += len(spans)

    logger.debug("Total replacements: %d", count)
    return count


def find_in_scope(paragraphs: Sequence[Any], old_value: str,
                  match_options: Union[MatchOptions, Dict[str, bool], None] = None) -> List[Dict[str, Any]]:
    """
    List the matches of a pattern without modifying anything.

    Returns:
        One dict per match with ``paragraph_index``, ``start``, ``end`` and ``text``
    """
    options = _coerce_options(match_options)
    pattern = compile_pattern(old_value, options)

    found = []
    for index, para in enumerate(paragraphs):
        text, _ = flatten(para)
        for span in find_matches(text, pattern):
            found.append({
                "paragraph_index": index,
                "start": span.start,
                "end": span.end,
                "text": text[span.start:span.end],
            })
    return found


def replace_text(document, old_value: str, new_value: str, slide_index: Optional[int] = None,
                 warn: bool = True, whole_document: bool = False, **match_options) -> int:
    """
    Replace all occurrences of ``old_value`` on one slide or in the whole deck.

    Arguments are checked and the pattern is compiled before the document
    is touched.

    Args:
        document: Document exposing ``slides`` and ``cursor``
        old_value: Pattern to replace (a regex unless ``literal=True``)
        new_value: Replacement text, always used literally
        slide_index: 1-based slide index; None means the current slide
        warn: Emit NoMatchWarning when nothing was replaced
        whole_document: Search every slide instead of a single one
        **match_options: literal, ignore_case, multiline, dotall, verbose, ascii

    Returns:
        Number of replacements made
    """
    options = _validate_call(old_value, new_value, warn, match_options)
    if slide_index is not None and (isinstance(slide_index, bool) or not isinstance(slide_index, int)):
        raise InvalidArgumentError(f"slide_index must be an integer or None, got {type(slide_index).__name__}")

    pattern = compile_pattern(old_value, options)
    if whole_document:
        paragraphs = resolve_document_scope(document)
    else:
        paragraphs = resolve_scope(document, slide_index)

    count = replace_in_scope(paragraphs, pattern, new_value, options)
    if count == 0 and warn:
        warnings.warn(f"Could not find any matches for {old_value!r}", NoMatchWarning, stacklevel=3)
    return count


def replace_text_on_slide(document, old_value: str, new_value: str,
                          slide_index: Optional[int] = None, warn: bool = True,
                          **match_options):
    """
    Replace all occurrences of ``old_value`` on one slide.

    Matching runs against each paragraph's full text, so words split over
    several runs are still found. Text around a match keeps its formatting;
    the replacement takes the formatting of the run where the match starts.

    Returns:
        The same document, modified in place
    """
    replace_text(document, old_value, new_value, slide_index=slide_index, warn=warn, **match_options)
    return document


def replace_all_text(document, old_value: str, new_value: str, warn: bool = True, **match_options):
    """Document-wide variant of :func:`replace_text_on_slide`."""
    replace_text(document, old_value, new_value, warn=warn, whole_document=True, **match_options)
    return document


def _validate_call(old_value, new_value, warn, match_options: Dict[str, Any]) -> MatchOptions:
    if not isinstance(old_value, str):
        raise InvalidArgumentError(f"old_value must be a string, got {type(old_value).__name__}")
    if not isinstance(new_value, str):
        raise InvalidArgumentError(f"new_value must be a string, got {type(new_value).__name__}")
    if not isinstance(warn, bool):
        raise InvalidArgumentError(f"warn must be a boolean, got {type(warn).__name__}")
    return MatchOptions.from_kwargs(**match_options)


def _coerce_options(match_options) -> MatchOptions:
    if match_options is None:
        return MatchOptions()
    if isinstance(match_options, MatchOptions):
        return match_options
    return MatchOptions.from_kwargs(**match_options)
