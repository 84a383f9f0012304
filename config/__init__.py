"""Configuration module for the Sales Operations Dashboard."""

from .settings import (
    ExportConfig,
    CollectionsConfig,
    StoreConfig,
    AppConfig,
    export_config,
    collections_config,
    store_config,
    app_config,
)

__all__ = [
    "ExportConfig",
    "CollectionsConfig",
    "StoreConfig",
    "AppConfig",
    "export_config",
    "collections_config",
    "store_config",
    "app_config",
]
