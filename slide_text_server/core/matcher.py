"""
Pattern matching over flattened paragraph text.
"""
import logging
import re
from dataclasses import dataclass, fields
from typing import List, NamedTuple, Union

from slide_text_server.core.errors import InvalidArgumentError, PatternError

logger = logging.getLogger(__name__)


class MatchSpan(NamedTuple):
    """Half-open ``[start, end)`` range over flattened paragraph offsets."""
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class MatchOptions:
    """
    Matching switches.

    Args:
        literal: Treat the pattern as plain text (regex metacharacters escaped)
        ignore_case: Case-insensitive matching
        multiline: ``^``/``$`` match at line boundaries (``re.MULTILINE``)
        dotall: ``.`` also matches newlines (``re.DOTALL``)
        verbose: Extended pattern syntax (``re.VERBOSE``)
        ascii: ASCII-only ``\\w``, ``\\b`` and friends (``re.ASCII``)
    """
    literal: bool = False
    ignore_case: bool = False
    multiline: bool = False
    dotall: bool = False
    verbose: bool = False
    ascii: bool = False

    @classmethod
    def from_kwargs(cls, **kwargs) -> "MatchOptions":
        """Build options from keyword arguments, rejecting unknown or non-boolean ones."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise InvalidArgumentError(f"Unknown match option(s): {', '.join(unknown)}")
        for name, value in kwargs.items():
            if not isinstance(value, bool):
                raise InvalidArgumentError(f"Match option '{name}' must be a boolean, got {type(value).__name__}")
        return cls(**kwargs)

    def flags(self) -> int:
        flags = 0
        if self.ignore_case:
            flags |= re.IGNORECASE
        if self.multiline:
            flags |= re.MULTILINE
        if self.dotall:
            flags |= re.DOTALL
        if self.ascii:
            flags |= re.ASCII
        if self.verbose:
            flags |= re.VERBOSE
        return flags


def compile_pattern(pattern: str, options: MatchOptions = MatchOptions()) -> re.Pattern:
    """
    Compile a search pattern once for a whole replacement pass.

    Args:
        pattern: Regular expression, or plain text when ``options.literal`` is set
        options: Matching switches

    Returns:
        Compiled pattern

    Raises:
        PatternError: If the pattern is not a valid regular expression
    """
    source = re.escape(pattern) if options.literal else pattern
    try:
        return re.compile(source, options.flags())
    except re.error as e:
        raise PatternError(pattern, str(e)) from e


def find_matches(text: str, pattern: Union[str, re.Pattern],
                 options: MatchOptions = MatchOptions()) -> List[MatchSpan]:
    """
    Find all non-overlapping matches of a pattern in a flattened paragraph.

    Zero-length matches are reported; the search resumes one character
    after them.

    Args:
        text: Flattened paragraph text
        pattern: Pattern string or an already compiled pattern
        options: Matching switches (ignored for compiled patterns)

    Returns:
        Match spans ordered by start offset (empty when nothing matches)
    """
    if not isinstance(pattern, re.Pattern):
        pattern = compile_pattern(pattern, options)

    spans = [MatchSpan(m.start(), m.end()) for m in pattern.finditer(text)]
    logger.debug("pattern %r: %d match(es) in %d chars", pattern.pattern, len(spans), len(text))
    return spans
