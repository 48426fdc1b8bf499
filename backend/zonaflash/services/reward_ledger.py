"""
Reward Ledger - hunter wallets, reward history and redemption requests.

Balances are kept per vehicle category (moto, car) plus a lifetime total.
Every reward writes one RewardTransaction and one wallet increment; the
increment is a single INSERT ... ON CONFLICT statement so concurrent
rewards for the same user can never lose an update.
"""
import logging
from typing import List, Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.errors import Forbidden, InsufficientBalance, StoreUnavailable, WalletNotFound
from ..models.wallet import (
    RewardTransaction,
    WalletBalance,
    balance_column_for,
    normalize_vehicle_type,
)

logger = logging.getLogger(__name__)


class RewardLedger:
    """Wallet reads/writes and reward history on one DB session"""

    def __init__(self, db: Session):
        self.db = db

    def get_wallet(self, user_id: str) -> Optional[WalletBalance]:
        try:
            return self.db.query(WalletBalance).filter(WalletBalance.user_id == user_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to read wallet for {user_id}: {e}", exc_info=True)
            raise StoreUnavailable("Could not read wallet") from e

    def get_or_create_wallet(self, user_id: str) -> WalletBalance:
        """
        Return the user's wallet, creating an empty one on first read.
        """
        wallet = self.get_wallet(user_id)
        if wallet:
            return wallet

        wallet = WalletBalance(
            user_id=user_id,
            balance_moto=0,
            balance_car=0,
            lifetime_points=0,
            goal=settings.WALLET_DEFAULT_GOAL,
            status="active",
            level_name=settings.WALLET_DEFAULT_LEVEL,
        )
        try:
            self.db.add(wallet)
            self.db.commit()
        except IntegrityError:
            # Created concurrently by a reward or another read
            self.db.rollback()
            return self.get_wallet(user_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create wallet for {user_id}: {e}", exc_info=True)
            raise StoreUnavailable("Could not create wallet") from e

        logger.info(f"Created wallet for user {user_id}")
        self.db.refresh(wallet)
        return wallet

    def record_reward(
        self,
        user_id: str,
        vehicle_type: str,
        amount: float,
        description: str,
    ) -> RewardTransaction:
        """Stage a reward transaction. The caller owns the commit."""
        transaction = RewardTransaction(
            user_id=user_id,
            vehicle_type=normalize_vehicle_type(vehicle_type),
            type="earning",
            amount=amount,
            description=description,
        )
        self.db.add(transaction)
        self.db.flush()
        return transaction

    def credit_wallet(self, user_id: str, vehicle_type: str, amount: float) -> None:
        """
        Add amount to the vehicle balance and lifetime points, creating the
        wallet if needed. Single atomic statement; the caller owns the commit.
        """
        balance_col = balance_column_for(vehicle_type)
        balance_moto_init = amount if balance_col == "balance_moto" else 0.0
        balance_car_init = amount if balance_col == "balance_car" else 0.0

        # balance_col comes from a fixed two-value mapping
        self.db.execute(
            text(f"""
                INSERT INTO wallets (user_id, balance_moto, balance_car, lifetime_points, goal, status, level_name)
                VALUES (:user_id, :balance_moto, :balance_car, :amount, :goal, 'active', :level_name)
                ON CONFLICT (user_id)
                DO UPDATE SET {balance_col} = wallets.{balance_col} + :amount,
                              lifetime_points = wallets.lifetime_points + :amount
            """),
            {
                "user_id": user_id,
                "balance_moto": balance_moto_init,
                "balance_car": balance_car_init,
                "amount": amount,
                "goal": settings.WALLET_DEFAULT_GOAL,
                "level_name": settings.WALLET_DEFAULT_LEVEL,
            },
        )

    def request_redemption(self, user_id: str, vehicle_type: str) -> WalletBalance:
        """
        Flag the wallet for payout when the category balance reaches the goal.

        Repeating the request while pending leaves it pending. Balances are
        not debited here.
        """
        wallet = self.get_wallet(user_id)
        if not wallet:
            raise WalletNotFound("Wallet no encontrada")
        if wallet.status == "frozen":
            raise Forbidden("Wallet is frozen")

        current_balance = wallet.balance_for(vehicle_type)
        if current_balance < wallet.goal:
            raise InsufficientBalance("Saldo insuficiente en el modo seleccionado")

        wallet.status = "pending"
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to save redemption for {user_id}: {e}", exc_info=True)
            raise StoreUnavailable("Could not save redemption request") from e

        logger.info(
            f"Redemption requested by {user_id} ({normalize_vehicle_type(vehicle_type)}): "
            f"balance {current_balance} >= goal {wallet.goal}"
        )
        self.db.refresh(wallet)
        return wallet

    def list_transactions(self, user_id: str, vehicle_type: Optional[str] = None) -> List[RewardTransaction]:
        """Reward history, newest first, optionally for one vehicle category."""
        try:
            query = self.db.query(RewardTransaction).filter(RewardTransaction.user_id == user_id)
            if vehicle_type:
                query = query.filter(RewardTransaction.vehicle_type == normalize_vehicle_type(vehicle_type))
            return query.order_by(RewardTransaction.created_at.desc()).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list transactions for {user_id}: {e}", exc_info=True)
            raise StoreUnavailable("Error consultando transacciones") from e

