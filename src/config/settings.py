"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use HIGHLIGHT_PARAM_ prefix (e.g., HIGHLIGHT_PARAM_HIGHLIGHTER=none).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use HIGHLIGHT_PARAM_ prefix.

    Examples:
        HIGHLIGHT_PARAM_TAG_NAME=code_block
        HIGHLIGHT_PARAM_HIGHLIGHTER=rouge
        HIGHLIGHT_PARAM_PYGMENTS_STYLE=monokai
    """

    model_config = SettingsConfigDict(
        env_prefix="HIGHLIGHT_PARAM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Tag configuration
    tag_name: str = Field(
        default="highlight_param",
        description="Name of the block tag registered with the template engine",
    )

    highlighter: str = Field(
        default="rouge",
        description="Highlighter backend used when the site config does not name one",
    )

    # Site configuration
    config_file: str = Field(
        default="_config.yml",
        description="Site configuration file name (relative to inputdir)",
    )

    # Stylesheet configuration
    pygments_style: str = Field(
        default="default",
        description="Pygments style used when writing the highlight stylesheet",
    )

    css_file: str = Field(
        default="highlight.css",
        description="File name of the generated highlight stylesheet",
    )

    debug_mode: bool = Field(
        default=False,
        description="Enable debug output during rendering",
    )

    def endTag_make(self, tag_name: str | None = None) -> str:
        """
        Generate the closing tag name for a block tag.

        Args:
            tag_name: Opening tag name (defaults to the configured tag_name)

        Returns:
            Closing tag name (e.g., "endhighlight_param")

        Example:
            >>> settings = AppSettings()
            >>> settings.endTag_make()
            'endhighlight_param'
        """
        return f"end{tag_name or self.tag_name}"


# Singleton instance - import this in your code
appsettings = AppSettings()
