from __future__ import annotations

import codecs

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from nini.common import AppInfo, LoggingConfig
from nini.constants import ENV_PREFIX


class XmlSettings(BaseModel):
    """Rendering options for saved XML documents."""

    model_config = ConfigDict(extra="forbid")

    encoding: str = Field(default="utf-8")
    indent: str = Field(default="  ")
    xml_declaration: bool = Field(default=True)

    @field_validator("encoding")
    @classmethod
    def _validate_byte_encoding(cls, value: str) -> str:
        if value.lower() == "unicode":
            raise ValueError("Encoding must be a byte codec such as 'utf-8', not 'unicode'")
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"Unknown encoding: {value}") from exc
        return value


class Settings(BaseSettings):
    app: AppInfo = AppInfo()
    xml: XmlSettings = XmlSettings()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        nested_model_default_partial_update=True,
    )


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


# Private singleton instance
_settings: Settings | None = None


__all__ = [
    "Settings",
    "XmlSettings",
    "get_settings",
]
