"""Health-check payload for the API."""

from backend.config import Settings
from backend.core.locale import STRINGS
from backend.schemas.ping import PingResponse


def get_ping_response(settings: Settings) -> PingResponse:
    """Report liveness along with the defaults new calculations will use."""
    return PingResponse(
        message="pong",
        languages=sorted(STRINGS),
        defaultAnchorDay=settings.default_anchor_day,
        defaultVatRate=settings.default_vat_rate,
    )
