"""
Wallet Router
Hunter wallet reads, redemption requests and reward history
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.wallet import RedeemRequest, RedeemResponse, TransactionOut, WalletOut
from ..services.reward_ledger import RewardLedger

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["wallet"])


@router.get("/wallet/{user_id}", response_model=WalletOut)
async def get_wallet(user_id: str, db: Session = Depends(get_db)):
    """Get the hunter's wallet, creating an empty one on first access"""
    return RewardLedger(db).get_or_create_wallet(user_id)


@router.post("/wallet/redeem", response_model=RedeemResponse)
async def request_redeem(request: RedeemRequest, db: Session = Depends(get_db)):
    """Request payout of a vehicle balance once it reaches the goal"""
    wallet = RewardLedger(db).request_redemption(request.user_id, request.vehicle_type)
    return RedeemResponse(message="Solicitud recibida", new_status=wallet.status)


@router.get("/transactions/{user_id}", response_model=List[TransactionOut])
async def get_transactions(
    user_id: str,
    vehicle_type: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """Reward history, newest first"""
    return RewardLedger(db).list_transactions(user_id, vehicle_type)
