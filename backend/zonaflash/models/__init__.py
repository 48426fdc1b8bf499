"""
Models package - organized by domain
"""
from .offer import Offer
from .hunt import CapturedPoint, ALLOWED_CATEGORIES, STATION_CATEGORIES
from .wallet import WalletBalance, RewardTransaction, VEHICLE_MOTO, VEHICLE_CAR

__all__ = [
    "Offer",
    "CapturedPoint",
    "ALLOWED_CATEGORIES",
    "STATION_CATEGORIES",
    "WalletBalance",
    "RewardTransaction",
    "VEHICLE_MOTO",
    "VEHICLE_CAR",
]
