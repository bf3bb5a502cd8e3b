"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, dthread.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from dthread.domain.types import DEFAULT_DOMAIN_ORDER, DisplayMode

# --- dthread.toml sections ---


class ThreadConfig(BaseModel):
    """[thread] section: seed for the persisted domain policy."""

    model_config = {"frozen": True}

    domain_order: list[str] = Field(default_factory=lambda: list(DEFAULT_DOMAIN_ORDER))
    allow_only_adjacent_connections: bool = True


class LayoutConfig(BaseModel):
    """[layout] section."""

    model_config = {"frozen": True}

    item_height: int = 60
    padding: int = 20
    title_band_height: int = 30
    container_width: int = 300
    column_gap: int = 100
    indent: int = 20
    display_mode: DisplayMode = DisplayMode.TITLE_ONLY


class LinksConfig(BaseModel):
    """[links] section."""

    model_config = {"frozen": True}

    allow_backward: bool = False


class GenerateConfig(BaseModel):
    """[generate] section."""

    model_config = {"frozen": True}

    default_count: int = 10
    min_subs: int = 4
    max_subs: int = 8


class ApiConfig(BaseModel):
    """[api] section."""

    model_config = {"frozen": True}

    host: str = "127.0.0.1"
    port: int = 3001
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class DThreadConfig(BaseModel):
    """The file schema: every section optional, unknown sections rejected."""

    model_config = {"frozen": True, "extra": "forbid"}

    thread: ThreadConfig = Field(default_factory=ThreadConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    links: LinksConfig = Field(default_factory=LinksConfig)
    generate: GenerateConfig = Field(default_factory=GenerateConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
