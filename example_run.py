#!/usr/bin/env python3
"""
Example script to run the dashboard exports and collections worklist on
sample data held in an in-memory store.

Usage:
    python example_run.py
"""

import sys
import tempfile
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from config import app_config
from export import ADAPTERS, ExportFormat, export_entities, save_artifact
from store import InMemoryStore, fetch_entities
from reconciliation import CollectionsService, CompletionCache, format_currency


SAMPLE_TABLES = {
    "users": [
        {"id": "u1", "name": "Nimal Perera", "email": "nimal@example.com", "role": "Admin"},
        {"id": "u2", "name": "Kamala Silva", "email": "kamala@example.com", "role": "Sales Rep"},
    ],
    "customers": [
        {"id": "c1", "name": "Lanka Traders", "email": "info@lankatraders.lk", "outstandingbalance": 175000},
        {"id": "c2", "name": "Hill Country Stores", "outstandingbalance": 25000},
    ],
    "orders": [
        {"id": "o1", "customerid": "c1", "date": "2025-10-07", "total": 250000, "status": "Delivered",
         "assigneduserid": "u2", "creditbalance": 150000, "chequebalance": 25000},
        {"id": "o2", "customerid": "c2", "date": "2025-10-09", "total": 40000, "status": "Delivered",
         "creditbalance": 25000},
    ],
    "products": [
        {"id": "p1", "name": "Tea 400g", "category": "Beverages", "price": 1250, "stock": 320,
         "sku": "TEA-400", "supplier": "Dilmah"},
    ],
    "suppliers": [
        {"id": "s1", "name": "Dilmah", "contactperson": "R. Fernando", "email": "sales@dilmah.lk"},
    ],
}


def main():
    print("=" * 60)
    print("Sales Operations Dashboard - Example Run")
    print("=" * 60)
    print()

    store = InMemoryStore(SAMPLE_TABLES)

    print("Exporting tables...")
    print("-" * 60)
    for entity in ADAPTERS:
        items = fetch_entities(store, entity)
        if not items:
            print(f"  - {entity}: no data to export")
            continue

        for fmt in ExportFormat:
            artifact = export_entities(entity, items, fmt)
            path = save_artifact(artifact, app_config.output_dir)
            print(f"  ✓ {path}")
    print()

    admin = fetch_entities(store, "users")[0]
    with tempfile.TemporaryDirectory() as temp:
        service = CollectionsService(store, CompletionCache(Path(temp) / "completed.json"))
        service.refresh(admin)

        print("Collections")
        print("-" * 60)
        for record in service.list():
            print(
                f"  {record.id:<12} {record.customer_name:<22} "
                f"{format_currency(record.amount):>14}  {record.status.value}"
            )

        stats = service.stats()
        print()
        print(f"Pending:   {format_currency(stats.total_pending_amount)}")
        print(f"  Credit:  {format_currency(stats.pending_credit)}")
        print(f"  Cheque:  {format_currency(stats.pending_cheque)}")
        print()

        record = service.recognize("o1-credit", admin, "Cash received at depot")
        print(f"Recognized {record.id}; {len(service.list('pending'))} collections still pending")

    print()
    print("Done.")


if __name__ == "__main__":
    main()
