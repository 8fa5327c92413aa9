"""
Configuration management for WorldWater

Loads settings from:
1. config/config.yaml
2. Environment variables (.env, WWL_ prefix)
3. Default values
"""

from pathlib import Path
from typing import Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Load environment variables
load_dotenv()

_DEFAULT_YAML = Path(__file__).parent.parent / "config" / "config.yaml"


class Config(BaseSettings):
    """WorldWater configuration settings"""

    model_config = SettingsConfigDict(
        env_prefix="WWL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Monte Carlo
    iterations: int = Field(default=5000, gt=0, description="Iterations per simulation run")
    base_seed: int = Field(default=1337, ge=0, le=0xFFFFFFFF, description="Base seed for seed derivation")

    # Flood display
    flood_metric: Literal["median", "p95"] = "p95"
    edge_softness: float = Field(default=0.35, gt=0, description="Flood edge band (meters)")
    target_alpha: float = Field(default=0.55, ge=0, le=1)
    alpha_rate: float = Field(default=0.08, gt=0, le=1, description="Per-frame alpha approach rate")
    frame_interval: float = Field(default=1 / 60, gt=0, description="Seconds per animation frame")
    comparison_opacity: float = Field(default=0.5, ge=0, le=1)
    clear_policy: Literal["immediate", "after_fade"] = "immediate"

    # Geoid
    geoid_source: Optional[str] = Field(default=None, description="Path or URL of WW15MGH.DAC")
    geoid_timeout: float = Field(default=30.0, gt=0)

    # Histogram
    histogram_bins: int = Field(default=30, gt=0)

    # API
    api_key: str = Field(default="")
    demo_mode: bool = False
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    simulation_rate_limit: int = Field(default=30, gt=0, description="Simulation runs per key per window")
    default_rate_limit: int = Field(default=60, gt=0, description="Other requests per key per window")
    flood_points_rate_limit: int = Field(default=50_000, gt=0, description="Flood points evaluated per key per window")
    rate_limit_window: int = Field(default=60, gt=0, description="Rate limit window (seconds)")

    # Logging
    log_level: str = Field(default="INFO")
    log_file: Optional[Path] = Field(default=None, description="Log file path (optional)")

    @classmethod
    def from_yaml(cls, yaml_path: str | Path = _DEFAULT_YAML) -> "Config":
        """Load configuration from YAML file"""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            return cls()

        with open(yaml_path) as f:
            config_data = yaml.safe_load(f) or {}

        return cls(**config_data)


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create global configuration instance"""
    global _config
    if _config is None:
        _config = Config.from_yaml()
    return _config


def reload_config(yaml_path: Optional[str | Path] = None) -> Config:
    """Reload configuration from file"""
    global _config
    _config = Config.from_yaml(yaml_path) if yaml_path else Config.from_yaml()
    return _config
