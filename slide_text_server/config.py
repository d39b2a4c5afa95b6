"""
Runtime configuration for Slide Text Server, read from environment variables.
"""
import os
from dataclasses import dataclass
from typing import Optional

VALID_TRANSPORTS = ("stdio", "sse", "streamable-http")


@dataclass(frozen=True)
class ServerConfig:
    transport: str = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000
    path: Optional[str] = None
    log_level: str = "INFO"
    debug_replace: bool = False


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def load_config() -> ServerConfig:
    """
    Build the server configuration.

    Environment variables:
        MCP_TRANSPORT: stdio (default), sse or streamable-http
        MCP_HOST / MCP_PORT / MCP_PATH: network settings for non-stdio transports
        SLIDE_TEXT_LOG_LEVEL: root level for the server's loggers (default INFO)
        SLIDE_TEXT_DEBUG_REPLACE: set to 1 to log every match and rewrite

    Raises:
        ValueError: On an unknown transport or a non-numeric port
    """
    transport = os.getenv("MCP_TRANSPORT", "stdio").strip().lower()
    if transport not in VALID_TRANSPORTS:
        raise ValueError(f"Invalid MCP_TRANSPORT '{transport}', expected one of {', '.join(VALID_TRANSPORTS)}")

    port_value = os.getenv("MCP_PORT", "8000")
    try:
        port = int(port_value)
    except ValueError:
        raise ValueError(f"Invalid MCP_PORT '{port_value}'") from None

    return ServerConfig(
        transport=transport,
        host=os.getenv("MCP_HOST", "127.0.0.1"),
        port=port,
        path=os.getenv("MCP_PATH") or None,
        log_level=os.getenv("SLIDE_TEXT_LOG_LEVEL", "INFO").upper(),
        debug_replace=_env_flag("SLIDE_TEXT_DEBUG_REPLACE"),
    )
