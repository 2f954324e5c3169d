"""
Configuration Management for the markdown renderer.

All settings come from environment variables with sensible defaults, so the
CLI, the MCP server and the tests share one source of truth.
"""

import os
from dataclasses import replace

from core.errors import ServiceConfigurationError
from mdrender.styles import (
    BLOCKQUOTE_INDENT_PT,
    CODE_FONT_FAMILY,
    DEFAULT_THEME,
    LIST_INDENT_PT,
    RenderTheme,
)

APP_NAME = "GWS Markdown Render"
DEFAULT_CONFIG_DIR = "~/.config/gws-markdown-render"
VALID_TRANSPORTS = ("stdio", "streamable-http")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ServiceConfigurationError(f"{name} must be a number, got {raw!r}") from e
    if value < 0:
        raise ServiceConfigurationError(f"{name} cannot be negative, got {value}")
    return value


class RenderConfig:
    """
    Centralized configuration for rendering, the Docs service and the MCP server.
    """

    def __init__(self):
        # Logging
        self.log_level = os.getenv("MDRENDER_LOG_LEVEL", "INFO").upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ServiceConfigurationError(
                f"MDRENDER_LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}, got {self.log_level!r}"
            )

        # Styling overrides
        self.code_font_family = os.getenv("MDRENDER_CODE_FONT", CODE_FONT_FAMILY) or CODE_FONT_FAMILY
        self.list_indent_pt = _float_env("MDRENDER_LIST_INDENT_PT", LIST_INDENT_PT)
        self.blockquote_indent_pt = _float_env("MDRENDER_QUOTE_INDENT_PT", BLOCKQUOTE_INDENT_PT)

        # Google Docs service credentials (authorized-user JSON written by an external login flow)
        config_dir = os.path.expanduser(os.getenv("MDRENDER_CONFIG_DIR", DEFAULT_CONFIG_DIR))
        self.config_dir = config_dir
        self.token_file = os.path.expanduser(
            os.getenv("GOOGLE_DOCS_TOKEN_FILE", os.path.join(config_dir, "token.json"))
        )

        # MCP server
        self.transport = os.getenv("MDRENDER_MCP_TRANSPORT", "stdio")
        if self.transport not in VALID_TRANSPORTS:
            raise ServiceConfigurationError(
                f"MDRENDER_MCP_TRANSPORT must be one of {', '.join(VALID_TRANSPORTS)}, got {self.transport!r}"
            )
        self.port = int(os.getenv("PORT", os.getenv("MDRENDER_MCP_PORT", "9876")))

    def theme(self) -> RenderTheme:
        """Build the render theme with any configured overrides applied."""
        return replace(
            DEFAULT_THEME,
            code_font_family=self.code_font_family,
            list_indent_pt=self.list_indent_pt,
            blockquote_indent_pt=self.blockquote_indent_pt,
        )


# Global configuration instance
_config: RenderConfig | None = None


def get_config() -> RenderConfig:
    """
    Get the global configuration instance, creating it on first use.

    Returns:
        The global configuration instance
    """
    global _config
    if _config is None:
        _config = RenderConfig()
    return _config


def reload_config() -> RenderConfig:
    """
    Reload the configuration from environment variables.

    This is useful for testing or when environment variables change.

    Returns:
        The reloaded configuration instance
    """
    global _config
    _config = RenderConfig()
    return _config
