"""
Schemas for wallets, redemption and reward history
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, AliasChoices


class WalletOut(BaseModel):
    user_id: str
    balance_moto: float
    balance_car: float
    lifetime_points: float
    goal: float
    status: str  # active, pending, frozen
    level_name: str

    class Config:
        from_attributes = True


class RedeemRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    vehicle_type: str = Field(..., min_length=1)  # moto, car


class RedeemResponse(BaseModel):
    message: str
    new_status: str


class TransactionOut(BaseModel):
    id: str
    user_id: str
    vehicle_type: Optional[str] = None
    type: str
    points: float = Field(validation_alias=AliasChoices("points", "amount"))
    description: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True
