"""
MCP tool implementations for Slide Text Server.
"""
from slide_text_server.tools.replace_tools import (
    find_text_in_presentation,
    get_slide_runs,
    replace_text_in_presentation,
    replace_text_on_slide,
)
