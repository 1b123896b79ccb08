"""System settings model (typed key/value configuration store)."""

from datetime import datetime

from sqlalchemy import (
    DateTime,
    Index,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import UUIDPrimaryKeyMixin, Base, enum_column
from app.models.enums import SettingValueType


class SystemSetting(UUIDPrimaryKeyMixin, Base):
    __tablename__ = "system_setting"

    category: Mapped[str] = mapped_column(String(100), nullable=False)
    key: Mapped[str] = mapped_column(String(200), nullable=False)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    value_type: Mapped[SettingValueType] = mapped_column(
        enum_column(SettingValueType, 10), nullable=False
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("category", "key", name="uq_setting_category_key"),
        Index("ix_setting_category", "category"),
    )
