"""Hunter wallets and the append-only reward history"""
import uuid
from typing import Optional
from datetime import datetime
from sqlalchemy import Column, String, Float, DateTime
from ..db import Base


def generate_uuid():
    return str(uuid.uuid4())


VEHICLE_MOTO = "moto"
VEHICLE_CAR = "car"


def normalize_vehicle_type(vehicle_type: Optional[str]) -> str:
    """Anything that is not a car is paid into the moto balance."""
    return VEHICLE_CAR if vehicle_type == VEHICLE_CAR else VEHICLE_MOTO


def balance_column_for(vehicle_type: Optional[str]) -> str:
    """Wallet column holding the balance for a vehicle category."""
    return f"balance_{normalize_vehicle_type(vehicle_type)}"


class WalletBalance(Base):
    """Per-user balances, one per vehicle category"""
    __tablename__ = "wallets"

    user_id = Column(String, primary_key=True)
    balance_moto = Column(Float, nullable=False, default=0)
    balance_car = Column(Float, nullable=False, default=0)
    lifetime_points = Column(Float, nullable=False, default=0)
    goal = Column(Float, nullable=False, default=500)
    status = Column(String, nullable=False, default="active")  # active, pending, frozen
    level_name = Column(String, nullable=False, default="Novato")

    def balance_for(self, vehicle_type: str) -> float:
        return getattr(self, balance_column_for(vehicle_type)) or 0


class RewardTransaction(Base):
    """Point-earning event. Never updated once written."""
    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String, nullable=False, index=True)
    vehicle_type = Column(String, nullable=True)  # moto, car
    type = Column(String, nullable=False, default="earning")
    amount = Column(Float, nullable=False)
    description = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
