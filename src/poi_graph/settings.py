from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PoiGraphSettings(BaseSettings):
    """Runtime configuration.

    Environment variables are prefixed with POI_GRAPH_.
    """

    model_config = SettingsConfigDict(env_prefix="POI_GRAPH_", extra="ignore")

    # --- Core ---
    log_level: str = Field(default="INFO", description="Python logging level")

    # --- Overpass ---
    overpass_url: str = Field(default="https://overpass-api.de/api/interpreter")
    # Midtown Manhattan: 34th St to 59th St, 8th Ave to Lexington Ave
    bbox: str = Field(default="40.7484,-73.9967,40.7688,-73.9710", description="south,west,north,east")
    overpass_timeout_s: int = Field(default=30, description="Server-side [timeout:] of the query")

    # --- Ontology ---
    transit_access_m: float = 300.0
    walkable_to_m: float = 500.0
    earth_radius_m: float = 6_371_000.0
    result_cap: int = 5
    # JSON, e.g. POI_GRAPH_MODE_WEIGHTS='{"transit": [4, 1]}'; merged over the defaults
    mode_weights: dict[str, tuple[int, int]] | None = None
    gated_modes: list[str] | None = None

    # --- HTTP ---
    bind_host: str = "0.0.0.0"
    bind_port: int = 8090


settings = PoiGraphSettings()
