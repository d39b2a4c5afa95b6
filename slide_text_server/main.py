"""
Main entry point for Slide Text Server.

Exposes the chunk-aware replacement tools over the Model Context Protocol.
"""
import logging
import sys
from typing import Optional

from mcp.server.fastmcp import FastMCP

from slide_text_server.config import ServerConfig, load_config
from slide_text_server.tools import replace_tools

logger = logging.getLogger(__name__)

mcp = FastMCP(
    name="slide-text",
    instructions=(
        "Find and replace text in PowerPoint (.pptx) presentations. "
        "Matches are found across runs, so text split by formatting changes "
        "or editing history is still replaced, and surrounding formatting is kept."
    ),
)


def setup_logging(config: ServerConfig) -> None:
    """Send logs to stderr so the stdio transport stays clean."""
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if config.debug_replace:
        logging.getLogger("slide_text_server.core").setLevel(logging.DEBUG)


def register_tools() -> None:
    """Register all tools with the MCP server."""

    @mcp.tool()
    async def replace_text_on_slide(filename: str, old_value: str, new_value: str,
                                    slide_index: Optional[int] = None, warn: bool = True,
                                    literal: bool = False, ignore_case: bool = False,
                                    multiline: bool = False, dotall: bool = False,
                                    output_filename: Optional[str] = None):
        """Replace text on one slide (1-based slide_index, default last slide), across runs, keeping formatting."""
        return await replace_tools.replace_text_on_slide(
            filename, old_value, new_value, slide_index, warn,
            literal, ignore_case, multiline, dotall, output_filename)

    @mcp.tool()
    async def replace_text_in_presentation(filename: str, old_value: str, new_value: str,
                                           warn: bool = True, literal: bool = False,
                                           ignore_case: bool = False, multiline: bool = False,
                                           dotall: bool = False,
                                           output_filename: Optional[str] = None):
        """Replace text on every slide of a presentation, across runs, keeping formatting."""
        return await replace_tools.replace_text_in_presentation(
            filename, old_value, new_value, warn, literal, ignore_case,
            multiline, dotall, output_filename)

    @mcp.tool()
    async def find_text_in_presentation(filename: str, pattern: str, slide_index: Optional[int] = None,
                                        literal: bool = False, ignore_case: bool = False):
        """Find text or a regular expression in a presentation without modifying it."""
        return await replace_tools.find_text_in_presentation(
            filename, pattern, slide_index, literal, ignore_case)

    @mcp.tool()
    async def get_slide_runs(filename: str, slide_index: int):
        """Show how each paragraph of a slide is split into formatted runs."""
        return await replace_tools.get_slide_runs(filename, slide_index)


def run_server():
    """Run the Slide Text MCP Server with the configured transport."""
    config = load_config()
    setup_logging(config)
    register_tools()

    if config.transport == "stdio":
        logger.info("Starting Slide Text Server on stdio")
        mcp.run(transport="stdio")
    else:
        mcp.settings.host = config.host
        mcp.settings.port = config.port
        if config.path:
            if config.transport == "sse":
                mcp.settings.sse_path = config.path
            else:
                mcp.settings.streamable_http_path = config.path
        logger.info("Starting Slide Text Server on %s://%s:%d", config.transport, config.host, config.port)
        mcp.run(transport=config.transport)
    return mcp


def main():
    """Main entry point for the server."""
    run_server()


if __name__ == "__main__":
    main()
