# restobill/db/schema.py

from sqlalchemy import (
    MetaData, Table, Column, Integer, String, Boolean,
    Numeric, Date, DateTime, ForeignKey, CheckConstraint, Text
)

metadata = MetaData()

items = Table(
    "items",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name_local", Text, nullable=False),
    Column("name_common", Text, nullable=False),
    Column("price", Numeric(18, 2), nullable=False),
    Column("category", String, nullable=False, server_default="Others"),
    Column("image_ref", Text, nullable=True),
    Column("is_active", Boolean, nullable=False, server_default="1"),
    CheckConstraint("price >= 0", name="ck_items_price_nonneg"),
)

# Header rows are written once by the billing engine and never deleted.
bills = Table(
    "bills",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("created_at", DateTime, nullable=False, index=True),
    Column("total_amount", Numeric(18, 2), nullable=False),
    CheckConstraint("total_amount >= 0", name="ck_bills_total_nonneg"),
)

bill_items = Table(
    "bill_items",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "bill_id",
        Integer,
        ForeignKey("bills.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("item_id", Integer, ForeignKey("items.id"), nullable=False),
    Column("quantity", Integer, nullable=False),
    # price copied at sale time, not a live reference to items.price
    Column("rate", Numeric(18, 2), nullable=False),
    CheckConstraint("quantity >= 1", name="ck_bill_items_quantity_pos"),
    CheckConstraint("rate >= 0", name="ck_bill_items_rate_nonneg"),
)

expenses = Table(
    "expenses",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("expense_date", Date, nullable=False, index=True),
    Column("description", Text, nullable=False),
    Column("amount", Numeric(18, 2), nullable=False),
    CheckConstraint("amount >= 0", name="ck_expenses_amount_nonneg"),
    CheckConstraint("length(description) > 0", name="ck_expenses_description_nonempty"),
)

credit_customers = Table(
    "credit_customers",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", Text, nullable=False),
    Column("phone", String, nullable=True),
    CheckConstraint("length(name) > 0", name="ck_credit_customers_name_nonempty"),
)

# bill_id as primary key: a bill links to at most one customer.
# No row means the bill is a cash sale.
credit_bills = Table(
    "credit_bills",
    metadata,
    Column("bill_id", Integer, ForeignKey("bills.id", ondelete="CASCADE"), primary_key=True),
    Column("customer_id", Integer, ForeignKey("credit_customers.id"), nullable=False, index=True),
)

credit_payments = Table(
    "credit_payments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("customer_id", Integer, ForeignKey("credit_customers.id"), nullable=False, index=True),
    Column("date", Date, nullable=False),
    Column("amount", Numeric(18, 2), nullable=False),
    CheckConstraint("amount >= 0", name="ck_credit_payments_amount_nonneg"),
)
