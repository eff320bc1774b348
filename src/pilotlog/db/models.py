"""SQLAlchemy ORM models for all persistent tables."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class UserRow(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    provider: Mapped[str] = mapped_column(String(32), default="local")
    provider_sub: Mapped[str] = mapped_column(String(256), default="")
    email: Mapped[str] = mapped_column(String(256), default="")
    display_name: Mapped[str] = mapped_column(String(256), default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )

    flights: Mapped[list[FlightRow]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )


class AirportRow(Base):
    """Reference airport data, maintained outside the application."""

    __tablename__ = "airports"

    icao: Mapped[str] = mapped_column(String(4), primary_key=True)
    iata: Mapped[str | None] = mapped_column(String(3), nullable=True)
    name: Mapped[str] = mapped_column(String(256))
    lat: Mapped[float | None] = mapped_column(Float, nullable=True)
    lon: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )


class FlightRow(Base):
    __tablename__ = "flights"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    flight_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    aircraft_reg: Mapped[str] = mapped_column(String(32))
    aircraft_type: Mapped[str] = mapped_column(String(64))
    dep_airport: Mapped[str] = mapped_column(String(4), index=True)
    arr_airport: Mapped[str] = mapped_column(String(4), index=True)
    block_off: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    takeoff: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    landing: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    block_on: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    duration_block: Mapped[int | None] = mapped_column(Integer, nullable=True)
    duration_flight: Mapped[int | None] = mapped_column(Integer, nullable=True)
    day_landings: Mapped[int] = mapped_column(Integer, default=0)
    night_landings: Mapped[int] = mapped_column(Integer, default=0)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )

    user: Mapped[UserRow] = relationship(back_populates="flights")
