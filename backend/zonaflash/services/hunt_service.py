"""
Hunt Service - accepts a captured business and pays the hunter.

A submission moves through these states, stopping at ABORTED on the first
failed check:

    RECEIVED -> AUTHORIZED -> CATEGORY_VALIDATED -> DUPLICATE_CHECKED
    -> MEDIA_RESOLVED -> PERSISTED -> LEDGER_RECORDED -> COMMITTED

All checks run before anything is written. The location row, its
geometry, the reward transaction and the wallet increment are committed
together or not at all. Photo upload failures never abort a submission.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.errors import (
    Conflict,
    Forbidden,
    InvalidCategory,
    InvalidQuery,
    MediaUploadFailure,
    ZonaFlashError,
)
from ..models.hunt import ALLOWED_CATEGORIES, CapturedPoint
from ..models.wallet import WalletBalance, normalize_vehicle_type
from .duplicate_guard import DuplicateGuard
from .geo import is_valid_coordinate
from .media_uploader import MediaUploader
from .reward_ledger import RewardLedger
from .spatial_store import GeoPoint, SpatialStore

logger = logging.getLogger(__name__)


class HuntState(str, Enum):
    RECEIVED = "RECEIVED"
    AUTHORIZED = "AUTHORIZED"
    CATEGORY_VALIDATED = "CATEGORY_VALIDATED"
    DUPLICATE_CHECKED = "DUPLICATE_CHECKED"
    MEDIA_RESOLVED = "MEDIA_RESOLVED"
    PERSISTED = "PERSISTED"
    LEDGER_RECORDED = "LEDGER_RECORDED"
    COMMITTED = "COMMITTED"
    ABORTED = "ABORTED"


@dataclass
class HuntSubmission:
    user_id: str
    shop_name: str
    category: str
    vehicle_type: str
    latitude: Optional[float]
    longitude: Optional[float]
    is_shadow: bool = False
    activation_status: str = ""
    asset_type: str = ""
    photo: Optional[bytes] = None
    photo_content_type: Optional[str] = None


@dataclass
class HuntResult:
    location_id: str
    transaction_id: str
    points: float
    photo_url: str
    wallet: WalletBalance
    states: List[HuntState] = field(default_factory=list)


class HuntService:
    """Runs one submission at a time on the given DB session"""

    def __init__(
        self,
        db: Session,
        *,
        uploader: Optional[MediaUploader] = None,
        allowed_uids: Optional[Iterable[str]] = None,
        reward_points: Optional[float] = None,
        duplicate_radius_m: Optional[float] = None,
    ):
        self.store = SpatialStore(db)
        self.ledger = RewardLedger(db)
        self.guard = DuplicateGuard(self.store, radius_m=duplicate_radius_m)
        self.uploader = uploader
        self.allowed_uids = frozenset(allowed_uids if allowed_uids is not None else settings.hunter_allowed_uids)
        self.reward_points = reward_points if reward_points is not None else settings.HUNT_REWARD_POINTS

    def submit(self, submission: HuntSubmission) -> HuntResult:
        states = [HuntState.RECEIVED]
        try:
            return self._run(submission, states)
        except ZonaFlashError as e:
            logger.info(
                f"Hunt by {submission.user_id} aborted after {states[-1].value}: {e.code} ({e.message})"
            )
            states.append(HuntState.ABORTED)
            raise

    def _run(self, submission: HuntSubmission, states: List[HuntState]) -> HuntResult:
        vehicle_type = normalize_vehicle_type(submission.vehicle_type)

        if submission.user_id not in self.allowed_uids:
            raise Forbidden("Acceso denegado: ID de usuario no autorizado para capturas oficiales")
        states.append(HuntState.AUTHORIZED)

        if submission.category not in ALLOWED_CATEGORIES:
            raise InvalidCategory(f"Categoría no permitida: {submission.category}")
        states.append(HuntState.CATEGORY_VALIDATED)

        if submission.latitude is None or submission.longitude is None:
            raise InvalidQuery("Faltan latitude/longitude")
        if not is_valid_coordinate(submission.latitude, submission.longitude):
            raise InvalidQuery("latitude/longitude out of range")
        point = GeoPoint(lat=submission.latitude, lng=submission.longitude)

        if self.guard.exists(submission.category, point):
            raise Conflict("Este punto ya ha sido capturado recientemente")
        states.append(HuntState.DUPLICATE_CHECKED)

        # Checks only read; end that transaction before the upload
        self.store.db.rollback()

        photo_url = self._resolve_media(submission)
        states.append(HuntState.MEDIA_RESOLVED)

        with self.store.transaction():
            # Re-check under the category lock so concurrent captures of the
            # same spot cannot both commit (authoritative on Postgres).
            self.store.lock_category(submission.category)
            if self.guard.exists(submission.category, point):
                raise Conflict("Este punto ya ha sido capturado recientemente")

            location = CapturedPoint(
                user_id=submission.user_id,
                vehicle_type=vehicle_type,
                shop_name=submission.shop_name,
                category=submission.category,
                photo_url=photo_url,
                latitude=submission.latitude,
                longitude=submission.longitude,
                status="pending",
                is_shadow=submission.is_shadow,
                activation_status=submission.activation_status,
                asset_type=submission.asset_type,
            )
            location_id = self.store.insert(location)
            self.store.set_geometry(location_id, point)
            states.append(HuntState.PERSISTED)

            transaction = self.ledger.record_reward(
                submission.user_id,
                vehicle_type,
                self.reward_points,
                f"Captura de negocio: {submission.shop_name}",
            )
            transaction_id = transaction.id
            self.ledger.credit_wallet(submission.user_id, vehicle_type, self.reward_points)
            states.append(HuntState.LEDGER_RECORDED)
        states.append(HuntState.COMMITTED)

        logger.info(
            f"Hunt committed for user {submission.user_id}: location {location_id}, "
            f"+{self.reward_points} {vehicle_type}"
        )

        wallet = self.ledger.get_wallet(submission.user_id)
        return HuntResult(
            location_id=location_id,
            transaction_id=transaction_id,
            points=self.reward_points,
            photo_url=photo_url,
            wallet=wallet,
            states=states,
        )

    def _resolve_media(self, submission: HuntSubmission) -> str:
        """Upload the photo if there is one; any failure leaves the URL empty."""
        if not submission.photo or self.uploader is None:
            return ""
        try:
            return self.uploader.upload(submission.photo, submission.photo_content_type, submission.user_id)
        except MediaUploadFailure as e:
            logger.warning(f"Photo upload failed for {submission.user_id}, continuing without photo: {e.message}")
            return ""
