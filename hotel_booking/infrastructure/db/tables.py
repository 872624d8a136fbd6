from sqlalchemy import Boolean, Column, Date, DateTime, Integer, MetaData, Numeric, String, Table

metadata = MetaData()

rooms = Table(
    "rooms",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("room_number", String(10), nullable=False, unique=True),
    Column("room_type", String(16), nullable=False),
    Column("base_rate", Numeric(12, 2), nullable=False),
    Column("status", String(32), nullable=False),
    Column("is_clean", Boolean, nullable=False, default=True),
    Column("lock_version", Integer, nullable=False, default=0),
    Column("created_at", DateTime),
    Column("updated_at", DateTime),
)

guests = Table(
    "guests",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("national_id", String(20), nullable=False, unique=True),
    Column("phone", String(50), nullable=False),
    Column("email", String(255)),
    Column("address", String(500)),
    Column("created_at", DateTime),
)

reservations = Table(
    "reservations",
    metadata,
    Column("id", String(20), primary_key=True),
    Column("kind", String(16), nullable=False),
    Column("guest_id", Integer, nullable=False),
    Column("room_id", Integer, nullable=False, index=True),
    Column("check_in_date", Date, nullable=False),
    Column("check_out_date", Date, nullable=False),
    Column("total_amount", Numeric(12, 2), nullable=False),
    Column("currency_code", String(3), nullable=False),
    Column("pricing_strategy", String(32)),
    Column("status", String(32), nullable=False),
    Column("payment_method", String(32), nullable=False),
    Column("payment_transaction_id", String(64)),
    Column("email_sent", Boolean, nullable=False, default=False),
    Column("receipt_printed", Boolean, nullable=False, default=False),
    Column("lock_version", Integer, nullable=False, default=0),
    Column("created_at", DateTime),
    Column("updated_at", DateTime),
)
