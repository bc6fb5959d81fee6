"""
Device position acquisition with a high-accuracy attempt and one low-accuracy retry.

The provider is any coroutine function taking PositionOptions and returning a
Position (a device GPS bridge, a browser relay, a fixed test double). Each
attempt is raced against a hard timeout; only a failure of both attempts is
reported to the caller.
"""
import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from app.core.config import settings

logger = logging.getLogger(__name__)


class GeolocationErrorCode(str, enum.Enum):
    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"


USER_MESSAGES = {
    GeolocationErrorCode.PERMISSION_DENIED:
        "Location permission denied. Please enable location access in your browser settings.",
    GeolocationErrorCode.POSITION_UNAVAILABLE:
        "Location unavailable. Please check your device's location services and ensure GPS/Wi-Fi is enabled.",
    GeolocationErrorCode.TIMEOUT:
        "Location request timed out. Please ensure your device's location services are enabled and try again.",
}


def user_message(code) -> str:
    """User-facing message for a geolocation failure code."""
    return USER_MESSAGES[GeolocationErrorCode(code)]


class GeolocationError(Exception):
    def __init__(self, code: GeolocationErrorCode, message: Optional[str] = None):
        self.code = GeolocationErrorCode(code)
        super().__init__(message or user_message(self.code))


@dataclass(frozen=True)
class PositionOptions:
    enable_high_accuracy: bool
    timeout_ms: int
    maximum_age_ms: int


@dataclass(frozen=True)
class Position:
    latitude: float
    longitude: float
    accuracy: Optional[float] = None


PositionProvider = Callable[[PositionOptions], Awaitable[Position]]


def high_accuracy_options() -> PositionOptions:
    return PositionOptions(
        enable_high_accuracy=True,
        timeout_ms=settings.GEO_HIGH_ACCURACY_TIMEOUT_MS,
        maximum_age_ms=settings.GEO_HIGH_ACCURACY_MAX_AGE_MS,
    )


def low_accuracy_options() -> PositionOptions:
    return PositionOptions(
        enable_high_accuracy=False,
        timeout_ms=settings.GEO_LOW_ACCURACY_TIMEOUT_MS,
        maximum_age_ms=settings.GEO_LOW_ACCURACY_MAX_AGE_MS,
    )


async def _attempt(provider: PositionProvider, options: PositionOptions, hard_timeout_s: float) -> Position:
    try:
        return await asyncio.wait_for(provider(options), timeout=hard_timeout_s)
    except asyncio.TimeoutError:
        raise GeolocationError(GeolocationErrorCode.TIMEOUT, "Location request timed out")


async def acquire_position(provider: PositionProvider, hard_timeout_s: Optional[float] = None) -> Position:
    """
    Get the device position: high accuracy first, then one low-accuracy retry
    that accepts an older cached fix.

    Raises:
        GeolocationError: when both attempts fail; carries the code of the last failure
    """
    if hard_timeout_s is None:
        hard_timeout_s = settings.GEO_HARD_TIMEOUT_MS / 1000

    try:
        return await _attempt(provider, high_accuracy_options(), hard_timeout_s)
    except GeolocationError as first_error:
        logger.info("High accuracy location failed (%s), trying with lower accuracy", first_error.code.value)

    try:
        return await _attempt(provider, low_accuracy_options(), hard_timeout_s)
    except GeolocationError as second_error:
        logger.warning("Location acquisition failed: %s", second_error.code.value)
        raise
