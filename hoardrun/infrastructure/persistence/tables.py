"""
Table definitions.

SQLAlchemy Core tables for every persisted aggregate. Money columns are
Numeric(14, 2); enum columns store the enum value string.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)

metadata = MetaData()

MONEY = Numeric(14, 2)

users = Table(
    "users",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("email", String(255), unique=True, nullable=False),
    Column("name", String(255), nullable=False),
    Column("password_hash", String(255), nullable=False),
    Column("email_verified", Boolean, nullable=False, default=False),
    Column("phone_number", String(32)),
    Column("balance", MONEY, nullable=False, default=0),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

verification_tokens = Table(
    "verification_tokens",
    metadata,
    Column("token_hash", String(64), primary_key=True),
    Column("email", String(255), nullable=False, index=True),
    Column("purpose", String(32), nullable=False),
    Column("expires_at", DateTime(timezone=True), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

accounts = Table(
    "accounts",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(36), ForeignKey("users.id"), nullable=False, index=True),
    Column("type", String(20), nullable=False),
    Column("number", String(10), unique=True, nullable=False),
    Column("currency", String(3), nullable=False),
    Column("balance", MONEY, nullable=False, default=0),
    Column("is_active", Boolean, nullable=False, default=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

transactions = Table(
    "transactions",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(36), ForeignKey("users.id"), nullable=False),
    Column("account_id", String(36), ForeignKey("accounts.id")),
    Column("type", String(20), nullable=False),
    Column("amount", MONEY, nullable=False),
    Column("fee", MONEY, nullable=False, default=0),
    Column("status", String(20), nullable=False),
    Column("description", String(500)),
    Column("category", String(100)),
    Column("provider", String(20)),
    Column("reference_id", String(64), unique=True),
    Column("created_at", DateTime(timezone=True), nullable=False),
    Index("ix_transactions_user_created", "user_id", "created_at"),
)

savings_goals = Table(
    "savings_goals",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(36), ForeignKey("users.id"), nullable=False, index=True),
    Column("name", String(100), nullable=False),
    Column("target_amount", MONEY, nullable=False),
    Column("current_amount", MONEY, nullable=False, default=0),
    Column("monthly_contribution", MONEY, nullable=False),
    Column("category", String(50), nullable=False),
    Column("deadline", Date, nullable=False),
    Column("is_auto_save", Boolean, nullable=False, default=True),
    Column("status", String(20), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

savings_contributions = Table(
    "savings_contributions",
    metadata,
    Column("id", String(36), primary_key=True),
    Column(
        "goal_id",
        String(36),
        ForeignKey("savings_goals.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("amount", MONEY, nullable=False),
    Column("type", String(20), nullable=False),
    Column("description", String(500)),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

transaction_alerts = Table(
    "transaction_alerts",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("type", String(32), nullable=False),
    Column("severity", String(10), nullable=False),
    Column("message", Text, nullable=False),
    Column("user_id", String(36), nullable=False),
    Column("transaction_id", String(36), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

audit_logs = Table(
    "audit_logs",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(36), nullable=False, index=True),
    Column("action", String(64), nullable=False),
    Column("details", JSON, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)
