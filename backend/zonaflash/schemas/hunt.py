"""
Schemas for hunt submissions
"""
from pydantic import BaseModel

from .wallet import WalletOut


class HuntSubmitResponse(BaseModel):
    message: str
    points: float
    wallet: WalletOut
