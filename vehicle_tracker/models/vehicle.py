"""Modele Vehicule suivi / Tracked vehicle model.

Position courante + historique borne des positions.
Current position plus a bounded log of past positions.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.types import TypeDecorator

from vehicle_tracker.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Horodatage toujours en UTC / Timestamp always returned as aware UTC.

    SQLite ne conserve pas le fuseau: il est rattache a la lecture.
    SQLite does not keep the zone, so it is reattached on load.
    """
    impl = DateTime
    cache_ok = True

    def __init__(self):
        super().__init__(timezone=True)

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class Vehicle(Base):
    """Vehicule suivi / Tracked vehicle."""
    __tablename__ = "vehicles"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    lat: Mapped[float] = mapped_column(Float, nullable=False)
    lng: Mapped[float] = mapped_column(Float, nullable=False)
    last_updated: Mapped[datetime] = mapped_column(UTCDateTime(), default=utcnow, nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime(), default=utcnow, onupdate=utcnow)

    # Relations
    location_history: Mapped[list["VehicleLocation"]] = relationship(
        back_populates="vehicle",
        cascade="all, delete-orphan",
        order_by="VehicleLocation.id",
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint("name", name="uq_vehicles_name"),
        Index("ix_vehicles_last_updated", "last_updated"),
    )

    def __repr__(self) -> str:
        return f"<Vehicle {self.name} ({self.lat}, {self.lng})>"


class VehicleLocation(Base):
    """Entree d'historique de position / Location history entry."""
    __tablename__ = "vehicle_location_history"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    vehicle_id: Mapped[int] = mapped_column(ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False)
    lat: Mapped[float] = mapped_column(Float, nullable=False)
    lng: Mapped[float] = mapped_column(Float, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(UTCDateTime(), default=utcnow, nullable=False)

    # Relations
    vehicle: Mapped["Vehicle"] = relationship(back_populates="location_history")

    __table_args__ = (
        Index("ix_vehicle_location_history_vehicle", "vehicle_id", "id"),
    )

    def __repr__(self) -> str:
        return f"<VehicleLocation {self.lat}, {self.lng} @ {self.timestamp}>"
