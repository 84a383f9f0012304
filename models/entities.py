"""
Domain entities owned by the hosted database.
Field aliases match the lower-cased column names of the database tables.
"""

from datetime import date, datetime
from typing import Optional, List, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from enum import Enum


class UserRole(str, Enum):
    """Dashboard user roles."""
    ADMIN = "Admin"
    MANAGER = "Manager"
    SALES_REP = "Sales Rep"
    DRIVER = "Driver"


def _parse_date(v):
    if v is None or v == "":
        return None
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, date):
        return v
    if isinstance(v, str):
        try:
            return date.fromisoformat(v[:10])
        except ValueError:
            return None
    return v


class Entity(BaseModel):
    """Base for rows loaded from the database."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data):
        # NULL columns fall back to the field defaults
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return str(v) if v is not None else v


class Order(Entity):
    customer_id: Optional[str] = Field(default=None, alias="customerid")
    customer_name: Optional[str] = Field(default=None, alias="customername")
    order_date: Optional[date] = Field(default=None, alias="date")
    total: float = 0.0
    status: str = ""
    payment_method: Optional[str] = Field(default=None, alias="paymentmethod")
    order_items: List[Any] = Field(default_factory=list, alias="orderitems")
    assigned_user_id: Optional[str] = Field(default=None, alias="assigneduserid")
    cheque_balance: Optional[float] = Field(default=None, alias="chequebalance")
    credit_balance: Optional[float] = Field(default=None, alias="creditbalance")
    notes: Optional[str] = None

    @field_validator("order_date", mode="before")
    @classmethod
    def parse_date(cls, v):
        return _parse_date(v)

    @field_validator("customer_id", "assigned_user_id", mode="before")
    @classmethod
    def coerce_refs(cls, v):
        return str(v) if v is not None else v

    @field_validator("order_items", mode="before")
    @classmethod
    def default_items(cls, v):
        return v or []


class Customer(Entity):
    name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    join_date: Optional[str] = Field(default=None, alias="joindate")
    total_spent: Optional[float] = Field(default=None, alias="totalspent")
    outstanding_balance: Optional[float] = Field(default=None, alias="outstandingbalance")


class User(Entity):
    name: str
    email: str
    phone: Optional[str] = None
    role: UserRole
    status: Optional[str] = None
    last_login: Optional[str] = Field(default=None, alias="lastlogin")
    assigned_supplier_names: Optional[List[str]] = Field(default=None, alias="assignedsuppliernames")


class Product(Entity):
    name: str = ""
    category: Optional[str] = None
    price: float = 0.0
    stock: int = 0
    sku: Optional[str] = None
    supplier: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageurl")


class Supplier(Entity):
    name: str = ""
    contact_person: Optional[str] = Field(default=None, alias="contactperson")
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    join_date: Optional[str] = Field(default=None, alias="joindate")


class DriverAllocation(Entity):
    driver_id: Optional[str] = Field(default=None, alias="driverid")
    driver_name: Optional[str] = Field(default=None, alias="drivername")
    date: Optional[str] = None
    allocated_items: List[Any] = Field(default_factory=list, alias="allocateditems")
    returned_items: Optional[List[Any]] = Field(default=None, alias="returneditems")
    sales_total: float = Field(default=0.0, alias="salestotal")
    status: str = ""


class DriverSale(Entity):
    driver_id: Optional[str] = Field(default=None, alias="driverid")
    allocation_id: Optional[str] = Field(default=None, alias="allocationid")
    date: Optional[str] = None
    customer_name: Optional[str] = Field(default=None, alias="customername")
    customer_id: Optional[str] = Field(default=None, alias="customerid")
    total: float = 0.0
    amount_paid: float = Field(default=0.0, alias="amountpaid")
    credit_amount: float = Field(default=0.0, alias="creditamount")
    payment_method: Optional[str] = Field(default=None, alias="paymentmethod")
    payment_reference: Optional[str] = Field(default=None, alias="paymentreference")
    notes: Optional[str] = None
    sold_items: List[Any] = Field(default_factory=list, alias="solditems")
