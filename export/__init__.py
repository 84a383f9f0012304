"""Export module for dashboard data."""

from .exporter import (
    TabularExporter,
    ExportArtifact,
    ExportFormat,
    ExportError,
    EmptyExportError,
    build_table,
    export_data,
    save_artifact,
    CSV_MEDIA_TYPE,
    XLSX_MEDIA_TYPE,
)
from .adapters import (
    ADAPTERS,
    dated_filename,
    export_entities,
    export_orders,
    export_products,
    export_customers,
    export_driver_allocations,
    export_driver_sales,
    export_users,
    export_suppliers,
)

__all__ = [
    "TabularExporter",
    "ExportArtifact",
    "ExportFormat",
    "ExportError",
    "EmptyExportError",
    "build_table",
    "export_data",
    "save_artifact",
    "CSV_MEDIA_TYPE",
    "XLSX_MEDIA_TYPE",
    "ADAPTERS",
    "dated_filename",
    "export_entities",
    "export_orders",
    "export_products",
    "export_customers",
    "export_driver_allocations",
    "export_driver_sales",
    "export_users",
    "export_suppliers",
]
