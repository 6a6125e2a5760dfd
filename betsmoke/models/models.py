from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, Boolean, ForeignKey, DateTime, Text, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
import uuid
from datetime import datetime
from betsmoke.core.db import Base


class User(Base):
    __tablename__ = "user"
    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email: Mapped[str | None] = mapped_column(Text, unique=True, nullable=True)
    name: Mapped[str | None] = mapped_column(Text, nullable=True)
    password_hash: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, server_default="false")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class SportsMonksType(Base):
    """Local copy of a SportsMonks `core/types` record.

    Rows are only ever written by the types sync, which clears the table and
    re-inserts roots before children.
    """

    __tablename__ = "sportsmonks_types"
    __table_args__ = (
        Index("sportsmonks_types_model_type_idx", "model_type"),
        Index("sportsmonks_types_code_idx", "code"),
        Index("sportsmonks_types_developer_name_idx", "developer_name"),
    )
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    parent_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("sportsmonks_types.id", ondelete="SET NULL", onupdate="CASCADE"), nullable=True
    )
    name: Mapped[str] = mapped_column(Text, default="")
    code: Mapped[str] = mapped_column(Text, default="")
    developer_name: Mapped[str] = mapped_column(Text, default="")
    model_type: Mapped[str] = mapped_column(Text, default="")
    group: Mapped[str | None] = mapped_column(Text, nullable=True)
    stat_group: Mapped[str | None] = mapped_column(Text, nullable=True)
    last_synced_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
