"""Application configuration and settings management."""

from pathlib import Path
from typing import Annotated, Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="TREASURE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Treasure Route Optimizer API"
    api_prefix: str = "/api"
    region_catalog_file: Optional[Path] = Field(
        default=None,
        description="JSON file mapping region names to map ids. Built-in catalog is used when unset.",
    )
    map_order_policy: Literal["region", "centroid"] = Field(
        default="region",
        description="Policy used to decide the order in which maps are visited.",
    )
    use_map_grouping: bool = Field(default=True)
    use_2opt: bool = Field(default=False)
    two_opt_max_iterations: int = Field(default=50, ge=0)
    empty_map_centroid: Annotated[tuple[float, float], NoDecode] = Field(
        default=(20.0, 20.0),
        description="Centroid assumed for a map bucket without waypoints.",
    )
    frontend_allowed_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("region_catalog_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Optional[Path]:
        if value is None or value == "":
            return None
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @field_validator("empty_map_centroid", mode="before")
    @classmethod
    def _parse_point_from_env(cls, value: Any) -> Any:
        """Accept "x,y" or a JSON array for the fallback centroid."""
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
            except (json.JSONDecodeError, TypeError):
                parsed = [item.strip() for item in value.split(",") if item.strip()]
            if isinstance(parsed, list):
                return tuple(float(item) for item in parsed)
        return value


settings = Settings()
