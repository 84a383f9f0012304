"""
Per-entity export adapters.
Each adapter flattens domain entities into fixed-label rows and delegates
to the generic exporter with a dated filename.
"""

import json
from datetime import date
from typing import List, Dict, Any, Optional

from config import export_config
from models import (
    Order,
    Product,
    Customer,
    DriverAllocation,
    DriverSale,
    User,
    Supplier,
)
from .exporter import ExportArtifact, ExportFormat, export_data


def dated_filename(prefix: str, today: Optional[date] = None) -> str:
    """Return ``{prefix}_{YYYY-MM-DD}`` for the invocation date."""
    today = today or date.today()
    return f"{prefix}_{today.strftime(export_config.date_format)}"


def order_rows(orders: List[Order]) -> List[Dict[str, Any]]:
    return [
        {
            "Order ID": order.id,
            "Customer": order.customer_name or "",
            "Date": order.order_date.isoformat() if order.order_date else "",
            "Total Amount": order.total,
            "Status": order.status,
            "Payment Method": order.payment_method or "",
            "Items Count": len(order.order_items or []),
            "Assigned User": order.assigned_user_id or "",
            "Cheque Balance": order.cheque_balance or 0,
            "Credit Balance": order.credit_balance or 0,
            "Notes": order.notes or "",
        }
        for order in orders
    ]


def product_rows(products: List[Product]) -> List[Dict[str, Any]]:
    return [
        {
            "Product ID": product.id,
            "Name": product.name,
            "Category": product.category or "",
            "Price": product.price,
            "Stock": product.stock,
            "SKU": product.sku or "",
            "Supplier": product.supplier or "",
            "Image URL": product.image_url or "",
        }
        for product in products
    ]


def customer_rows(customers: List[Customer]) -> List[Dict[str, Any]]:
    return [
        {
            "Customer ID": customer.id,
            "Name": customer.name,
            "Email": customer.email or "",
            "Phone": customer.phone or "",
            "Location": customer.location or "",
            "Join Date": customer.join_date or "",
            "Total Spent": customer.total_spent or 0,
            "Outstanding Balance": customer.outstanding_balance or 0,
        }
        for customer in customers
    ]


def driver_allocation_rows(allocations: List[DriverAllocation]) -> List[Dict[str, Any]]:
    return [
        {
            "Allocation ID": allocation.id,
            "Driver ID": allocation.driver_id or "",
            "Driver Name": allocation.driver_name or "",
            "Date": allocation.date or "",
            "Allocated Items": json.dumps(allocation.allocated_items),
            "Returned Items": json.dumps(allocation.returned_items or []),
            "Sales Total": allocation.sales_total,
            "Status": allocation.status,
        }
        for allocation in allocations
    ]


def driver_sale_rows(sales: List[DriverSale]) -> List[Dict[str, Any]]:
    return [
        {
            "Sale ID": sale.id,
            "Driver ID": sale.driver_id or "",
            "Allocation ID": sale.allocation_id or "",
            "Date": sale.date or "",
            "Customer Name": sale.customer_name or "",
            "Customer ID": sale.customer_id or "",
            "Total": sale.total,
            "Amount Paid": sale.amount_paid,
            "Credit Amount": sale.credit_amount,
            "Payment Method": sale.payment_method or "",
            "Payment Reference": sale.payment_reference or "",
            "Notes": sale.notes or "",
            "Sold Items": json.dumps(sale.sold_items),
        }
        for sale in sales
    ]


def user_rows(users: List[User]) -> List[Dict[str, Any]]:
    return [
        {
            "User ID": user.id,
            "Name": user.name,
            "Email": user.email,
            "Phone": user.phone or "",
            "Role": user.role.value,
            "Status": user.status or "",
            "Last Login": user.last_login or "",
            "Assigned Suppliers": ", ".join(user.assigned_supplier_names)
            if isinstance(user.assigned_supplier_names, list) else "",
        }
        for user in users
    ]


def supplier_rows(suppliers: List[Supplier]) -> List[Dict[str, Any]]:
    return [
        {
            "Supplier ID": supplier.id,
            "Name": supplier.name,
            "Contact Person": supplier.contact_person or "",
            "Email": supplier.email or "",
            "Phone": supplier.phone or "",
            "Address": supplier.address or "",
            "Join Date": supplier.join_date or "",
        }
        for supplier in suppliers
    ]


# entity name -> (row builder, filename prefix, sheet name)
ADAPTERS = {
    "orders": (order_rows, "orders", "Orders"),
    "products": (product_rows, "products", "Products"),
    "customers": (customer_rows, "customers", "Customers"),
    "driver_allocations": (driver_allocation_rows, "driver_allocations", "Driver Allocations"),
    "driver_sales": (driver_sale_rows, "driver_sales", "Driver Sales"),
    "users": (user_rows, "users", "Users"),
    "suppliers": (supplier_rows, "suppliers", "Suppliers"),
}


def export_entities(
    entity: str,
    items: list,
    fmt: ExportFormat = ExportFormat.XLSX,
    today: Optional[date] = None,
) -> ExportArtifact:
    """Export a list of domain entities using the adapter registered for ``entity``."""
    if entity not in ADAPTERS:
        raise KeyError(f"Unknown export entity: {entity}")

    to_rows, prefix, sheet_name = ADAPTERS[entity]
    return export_data(to_rows(items), dated_filename(prefix, today), fmt, sheet_name)


def export_orders(orders: List[Order], fmt: ExportFormat = ExportFormat.XLSX, today: Optional[date] = None) -> ExportArtifact:
    return export_entities("orders", orders, fmt, today)


def export_products(products: List[Product], fmt: ExportFormat = ExportFormat.XLSX, today: Optional[date] = None) -> ExportArtifact:
    return export_entities("products", products, fmt, today)


def export_customers(customers: List[Customer], fmt: ExportFormat = ExportFormat.XLSX, today: Optional[date] = None) -> ExportArtifact:
    return export_entities("customers", customers, fmt, today)


def export_driver_allocations(
    allocations: List[DriverAllocation], fmt: ExportFormat = ExportFormat.XLSX, today: Optional[date] = None
) -> ExportArtifact:
    return export_entities("driver_allocations", allocations, fmt, today)


def export_driver_sales(sales: List[DriverSale], fmt: ExportFormat = ExportFormat.XLSX, today: Optional[date] = None) -> ExportArtifact:
    return export_entities("driver_sales", sales, fmt, today)


def export_users(users: List[User], fmt: ExportFormat = ExportFormat.XLSX, today: Optional[date] = None) -> ExportArtifact:
    return export_entities("users", users, fmt, today)


def export_suppliers(suppliers: List[Supplier], fmt: ExportFormat = ExportFormat.XLSX, today: Optional[date] = None) -> ExportArtifact:
    return export_entities("suppliers", suppliers, fmt, today)
