"""
Configuration for cxmlbuilder.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


class CXMLSettings(BaseSettings):
    """Rendering and logging settings, read from CXML_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="CXML_")

    # Rendering
    indent: str = Field(default="  ", description="Indent emitted per nesting level")
    declaration: str = Field(
        default=XML_DECLARATION, description="Declaration line emitted before the root"
    )

    # Logging
    log_level: str = Field(default="WARNING", description="Minimum level for log events")
    log_json: bool = Field(default=False, description="Render log events as JSON")


@lru_cache()
def get_settings() -> CXMLSettings:
    """Get cached settings instance."""
    return CXMLSettings()
