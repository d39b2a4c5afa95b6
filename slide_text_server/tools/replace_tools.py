"""
Text replacement tools for Slide Text Server.

These tools provide high-level interfaces for finding and replacing text
in PowerPoint presentations through the MCP protocol.
"""
import os
import json
import logging
import warnings
from typing import Optional

from slide_text_server.core.errors import NoMatchWarning, SlideTextError
from slide_text_server.core.replace import find_in_scope, replace_text, resolve_scope
from slide_text_server.utils.file_utils import check_file_writeable, ensure_pptx_extension
from slide_text_server.utils.pptx_utils import load_presentation, paragraph_text_summary

logger = logging.getLogger(__name__)


def _error(message: str) -> str:
    return json.dumps({
        'success': False,
        'error': message
    }, indent=2)


async def _replace(filename: str, old_value: str, new_value: str, slide_index: Optional[int],
                   warn: bool, whole_document: bool, output_filename: Optional[str],
                   **match_options) -> str:
    filename = ensure_pptx_extension(filename)

    if not os.path.exists(filename):
        return _error(f'Presentation {filename} does not exist')

    target = ensure_pptx_extension(output_filename) if output_filename else filename
    is_writeable, error_message = check_file_writeable(target)
    if not is_writeable:
        return _error(f'Cannot modify presentation: {error_message}. Consider creating a copy first.')

    try:
        doc = load_presentation(filename)
    except Exception as e:
        return _error(f'Failed to open presentation: {str(e)}')

    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always', NoMatchWarning)
            count = replace_text(doc, old_value, new_value, slide_index=slide_index, warn=warn,
                                 whole_document=whole_document, **match_options)
    except SlideTextError as e:
        return _error(str(e))
    except Exception as e:
        return _error(f'Failed to replace text: {str(e)}')

    no_match = [str(w.message) for w in caught if issubclass(w.category, NoMatchWarning)]

    # In-place files are only rewritten when something changed
    if count or target != filename:
        try:
            doc.save(target)
        except Exception as e:
            return _error(f'Failed to save presentation: {str(e)}')
        logger.info("Replaced %d occurrence(s) of %r in %s", count, old_value, target)

    return json.dumps({
        'success': True,
        'filename': target,
        'scope': 'document' if whole_document else f'slide {slide_index if slide_index is not None else doc.cursor}',
        'replacements': count,
        'warning': no_match[0] if no_match else None
    }, indent=2)


async def replace_text_on_slide(filename: str, old_value: str, new_value: str,
                                slide_index: Optional[int] = None, warn: bool = True,
                                literal: bool = False, ignore_case: bool = False,
                                multiline: bool = False, dotall: bool = False,
                                output_filename: Optional[str] = None) -> str:
    """
    Replace text on one slide of a presentation, even when it is split across runs.

    Args:
        filename: Path to the PowerPoint presentation
        old_value: Text or regular expression to replace
        new_value: Replacement text (inserted literally)
        slide_index: 1-based slide index; defaults to the last slide
        warn: Report a warning when nothing matched
        literal: Treat old_value as plain text instead of a regular expression
        ignore_case: Case-insensitive matching
        multiline: ^ and $ match at line boundaries
        dotall: . also matches newlines
        output_filename: Optional path to save to instead of overwriting the source

    Returns:
        JSON string with the number of replacements made
    """
    return await _replace(filename, old_value, new_value, slide_index, warn, False, output_filename,
                          literal=literal, ignore_case=ignore_case,
                          multiline=multiline, dotall=dotall)


async def replace_text_in_presentation(filename: str, old_value: str, new_value: str,
                                       warn: bool = True, literal: bool = False,
                                       ignore_case: bool = False, multiline: bool = False,
                                       dotall: bool = False,
                                       output_filename: Optional[str] = None) -> str:
    """
    Replace text on every slide of a presentation.

    Args:
        filename: Path to the PowerPoint presentation
        old_value: Text or regular expression to replace
        new_value: Replacement text (inserted literally)
        warn: Report a warning when nothing matched
        literal: Treat old_value as plain text instead of a regular expression
        ignore_case: Case-insensitive matching
        multiline: ^ and $ match at line boundaries
        dotall: . also matches newlines
        output_filename: Optional path to save to instead of overwriting the source

    Returns:
        JSON string with the number of replacements made
    """
    return await _replace(filename, old_value, new_value, None, warn, True, output_filename,
                          literal=literal, ignore_case=ignore_case,
                          multiline=multiline, dotall=dotall)


async def find_text_in_presentation(filename: str, pattern: str, slide_index: Optional[int] = None,
                                    literal: bool = False, ignore_case: bool = False) -> str:
    """
    Find text in a presentation without modifying it.

    Args:
        filename: Path to the PowerPoint presentation
        pattern: Text or regular expression to look for
        slide_index: 1-based slide index; searches all slides when omitted
        literal: Treat pattern as plain text instead of a regular expression
        ignore_case: Case-insensitive matching

    Returns:
        JSON string with the matches found on each slide
    """
    filename = ensure_pptx_extension(filename)

    if not os.path.exists(filename):
        return _error(f'Presentation {filename} does not exist')

    try:
        doc = load_presentation(filename)
    except Exception as e:
        return _error(f'Failed to open presentation: {str(e)}')

    options = {'literal': literal, 'ignore_case': ignore_case}
    try:
        if slide_index is None:
            slide_numbers = list(range(1, len(doc.slides) + 1))
        else:
            # Validates the index before searching
            resolve_scope(doc, slide_index)
            slide_numbers = [slide_index]

        matches = []
        for number in slide_numbers:
            for found in find_in_scope(resolve_scope(doc, number), pattern, options):
                found['slide_index'] = number
                matches.append(found)
    except SlideTextError as e:
        return _error(str(e))

    return json.dumps({
        'success': True,
        'pattern': pattern,
        'matches': matches,
        'total_matches': len(matches)
    }, indent=2)


async def get_slide_runs(filename: str, slide_index: int) -> str:
    """
    Show how the text of a slide is split into runs.

    Useful to understand why a search did or did not match.

    Args:
        filename: Path to the PowerPoint presentation
        slide_index: 1-based slide index

    Returns:
        JSON string listing every paragraph and its runs
    """
    filename = ensure_pptx_extension(filename)

    if not os.path.exists(filename):
        return _error(f'Presentation {filename} does not exist')

    try:
        doc = load_presentation(filename)
        resolve_scope(doc, slide_index)
    except SlideTextError as e:
        return _error(str(e))
    except Exception as e:
        return _error(f'Failed to open presentation: {str(e)}')

    paragraphs = paragraph_text_summary(doc.slides[slide_index - 1].slide)
    return json.dumps({
        'success': True,
        'slide_index': slide_index,
        'paragraphs': paragraphs,
        'total_paragraphs': len(paragraphs)
    }, indent=2)
