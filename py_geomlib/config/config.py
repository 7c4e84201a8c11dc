from pathlib import Path
from typing import Literal

from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings

import os

# Load .env for local/dev environments only if values are missing from the environment
BASE_DIR = Path(__file__).resolve().parent.parent.parent
env_file = BASE_DIR / ".env"

if env_file.exists():
    file_env = dotenv_values(env_file)
    missing_keys = {k: v for k, v in file_env.items() if k not in os.environ and v is not None}
    for k, v in missing_keys.items():
        os.environ[k] = v


class Settings(BaseSettings):
    """Library settings pulled from GEOMLIB_* environment variables."""

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "console"] = Field(default="json", description="Logging format")

    # Cycle Extraction Configuration
    vertex_sort: Literal["none", "descending_degree", "ascending_degree"] = Field(
        default="descending_degree",
        description="Vertex visitation order before building the spanning forest",
    )
    weighted_cycles: bool = Field(
        default=False, description="Build a minimum-weight spanning forest for cycle extraction"
    )

    # Region Reconstruction Configuration
    key_precision: int = Field(default=4, ge=0, description="Decimal places kept when snapping coordinates to vertex keys")
    min_region_area: float = Field(default=0.0, ge=0.0, description="Regions with smaller absolute area are dropped")

    class Config:
        env_prefix = "GEOMLIB_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Instantiate singleton settings object
settings = Settings()
