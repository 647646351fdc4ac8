from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from .database import Base

CLIENT_STATUSES = ("REGULAR", "VIP", "RISK")
SERVICE_CATEGORIES = ("TATTOO", "PIERCING", "BEAUTY", "CONSULTATION", "OTHER")
APPOINTMENT_STATUSES = ("PENDING", "APPROVED", "COMPLETED", "CANCELLED", "NO_SHOW")
INVENTORY_CATEGORIES = ("CONSUMABLE", "JEWELRY", "AFTERCARE", "EQUIPMENT", "OTHER")
MOVEMENT_TYPES = ("IN", "OUT", "ADJUST")


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    email = Column(String(255), nullable=True)
    birth_date = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)
    is_blocked = Column(Boolean, default=False, nullable=False)
    no_show_count = Column(Integer, default=0, nullable=False)  # Incremented outside the API
    status = Column(String(20), default="REGULAR", nullable=False)  # REGULAR, VIP, RISK
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    appointments = relationship(
        "Appointment", back_populates="client", order_by="Appointment.starts_at"
    )


class Master(Base):
    __tablename__ = "masters"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(255), nullable=False)
    specialization = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    bio = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    working_days = relationship(
        "MasterWorkingDay",
        back_populates="master",
        cascade="all, delete-orphan",
        order_by="MasterWorkingDay.weekday",
    )
    day_availability = relationship(
        "MasterDayAvailability",
        back_populates="master",
        cascade="all, delete-orphan",
        order_by="MasterDayAvailability.date",
    )
    appointments = relationship("Appointment", back_populates="master")


class MasterWorkingDay(Base):
    """Recurring weekly template row. weekday: 0 = Sunday ... 6 = Saturday"""

    __tablename__ = "master_working_days"

    id = Column(Integer, primary_key=True, index=True)
    master_id = Column(Integer, ForeignKey("masters.id"), nullable=False, index=True)
    weekday = Column(Integer, nullable=False)
    start_time = Column(String(5), nullable=False, default="")  # HH:MM
    end_time = Column(String(5), nullable=False, default="")  # HH:MM
    is_day_off = Column(Boolean, default=False, nullable=False)

    master = relationship("Master", back_populates="working_days")


class MasterDayAvailability(Base):
    """Per-date override of the weekly template"""

    __tablename__ = "master_day_availability"
    __table_args__ = (UniqueConstraint("master_id", "date", name="uq_master_day"),)

    id = Column(Integer, primary_key=True, index=True)
    master_id = Column(Integer, ForeignKey("masters.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=False, default="")
    end_time = Column(String(5), nullable=False, default="")
    is_day_off = Column(Boolean, default=False, nullable=False)

    master = relationship("Master", back_populates="day_availability")


class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    category = Column(String(20), default="OTHER", nullable=False)
    base_price = Column(Float, nullable=True)
    default_duration_minutes = Column(Integer, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)  # Soft delete flag
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False, index=True)
    master_id = Column(Integer, ForeignKey("masters.id"), nullable=False, index=True)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=True)
    # Snapshot of the service name at booking time, kept even if service_id is unset
    service_name = Column(String(255), nullable=False)
    # Charged amount, independent of Service.base_price
    price = Column(Float, default=0, nullable=False)
    starts_at = Column(DateTime, nullable=False, index=True)
    ends_at = Column(DateTime, nullable=False)
    # No transition rules: any status may be set from any status
    status = Column(String(20), default="PENDING", nullable=False, index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    client = relationship("Client", back_populates="appointments")
    master = relationship("Master", back_populates="appointments")
    service = relationship("Service")


class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    unit = Column(String(50), nullable=False)
    sku = Column(String(100), nullable=True)
    quantity = Column(Integer, default=0, nullable=False)  # Never negative
    min_quantity = Column(Integer, default=0, nullable=False)  # Reorder threshold
    price_per_unit = Column(Float, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    notes = Column(Text, nullable=True)
    category = Column(String(20), default="OTHER", nullable=False)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    movements = relationship("InventoryMovement", back_populates="item")


class InventoryMovement(Base):
    """Append-only stock ledger. IN adds, OUT subtracts, ADJUST sets the absolute value"""

    __tablename__ = "inventory_movements"

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("inventory_items.id"), nullable=False, index=True)
    type = Column(String(10), nullable=False)
    quantity = Column(Integer, nullable=False)
    reason = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False, index=True)

    item = relationship("InventoryItem", back_populates="movements")
