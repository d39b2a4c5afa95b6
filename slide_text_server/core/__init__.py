"""
Core search-and-replace engine for Slide Text Server.
"""
from slide_text_server.core.errors import (
    InvalidArgumentError,
    NoCurrentSlideError,
    NoMatchWarning,
    PatternError,
    SlideIndexOutOfRangeError,
    SlideTextError,
)
from slide_text_server.core.matcher import MatchOptions, MatchSpan, find_matches
from slide_text_server.core.model import Document, Paragraph, Run, Slide
from slide_text_server.core.replace import (
    replace_all_text,
    replace_in_scope,
    replace_text,
    replace_text_on_slide,
    resolve_document_scope,
    resolve_scope,
)
