"""Static pages required by the Messenger platform."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["pages"])

PRIVACY_POLICY = (
    "CardFetcher does not request any personal logins or data and therefore "
    "does not guarantee the safety of any user data."
)


@router.get("/privacy-policy", response_class=PlainTextResponse)
async def privacy_policy() -> str:
    """Privacy policy linked from the Messenger app settings."""
    return PRIVACY_POLICY
