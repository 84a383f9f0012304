"""
Central configuration for the Sales Operations Dashboard backend.
All tunable parameters are exposed here with sensible defaults.
"""

from pathlib import Path
from typing import Optional, List
from pydantic_settings import BaseSettings
from pydantic import Field


class ExportConfig(BaseSettings):
    """Configuration for spreadsheet exports."""

    column_width: int = Field(
        default=20,
        description="Fixed column width (character units) for XLSX exports"
    )

    # Filename suffix appended by the per-entity adapters
    date_format: str = "%Y-%m-%d"

    class Config:
        env_prefix = "DASHBOARD_EXPORT_"


class CollectionsConfig(BaseSettings):
    """Configuration for collections reconciliation."""

    # Free-text token in order notes marking both collections as done
    completion_marker: str = "COLLECTION_COMPLETED"

    cache_key: str = "completedCollections"
    cache_path: Path = Field(
        default_factory=lambda: Path(__file__).parent.parent / "data" / "completed_collections.json"
    )

    currency: str = "LKR"

    privileged_roles: List[str] = Field(default=["Admin", "Manager"])

    class Config:
        env_prefix = "DASHBOARD_COLLECTIONS_"


class StoreConfig(BaseSettings):
    """Configuration for the hosted database service."""

    url: Optional[str] = Field(
        default=None,
        description="Base URL of the REST database service; in-memory store when unset"
    )
    api_key: str = ""
    timeout_seconds: float = 30.0

    class Config:
        env_prefix = "DASHBOARD_STORE_"


class AppConfig(BaseSettings):
    """Main application configuration."""

    # Paths
    base_dir: Path = Path(__file__).parent.parent
    output_dir: Path = Field(default_factory=lambda: Path(__file__).parent.parent / "output")
    data_dir: Path = Field(default_factory=lambda: Path(__file__).parent.parent / "data")

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"

    def ensure_directories(self):
        """Create necessary directories if they don't exist."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    class Config:
        env_prefix = "DASHBOARD_APP_"


# Global configuration instances
export_config = ExportConfig()
collections_config = CollectionsConfig()
store_config = StoreConfig()
app_config = AppConfig()
