"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, invctl.toml only contains overrides.
An empty invctl.toml is a valid warehouse.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- invctl.toml sections ---


class StorageConfig(BaseModel):
    """[storage] section."""

    model_config = {"frozen": True}

    directory: str = "data"
    indent: int = Field(default=2, ge=0)


class StockConfig(BaseModel):
    """[stock] section."""

    model_config = {"frozen": True}

    low_stock_threshold: int = Field(default=5, ge=0)
    expiry_warning_days: int = Field(default=7, ge=0)