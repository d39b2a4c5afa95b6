"""
Exceptions and warnings raised by the replacement engine.
"""


class SlideTextError(Exception):
    """Base class for all engine errors."""


class InvalidArgumentError(SlideTextError, TypeError):
    """A replacement call was made with malformed arguments."""


class SlideIndexOutOfRangeError(SlideTextError, IndexError):
    """The requested slide index is outside 1..slide_count."""

    def __init__(self, slide_index, slide_count):
        self.slide_index = slide_index
        self.slide_count = slide_count
        super().__init__(
            f"Slide index {slide_index} is out of range (document has {slide_count} slide(s))"
        )


class NoCurrentSlideError(SlideTextError, LookupError):
    """No slide index was given and the document has no current slide."""


class PatternError(SlideTextError, ValueError):
    """The search pattern is not a valid regular expression."""

    def __init__(self, pattern, reason):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")


class NoMatchWarning(UserWarning):
    """Advisory: a replacement pass found nothing to replace."""
