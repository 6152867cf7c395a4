"""
Webhook signature verification.

Messenger signs every webhook POST with the app secret:

    X-Hub-Signature: sha1=<hex HMAC-SHA1 of the raw request body>

verify_signature runs as a route dependency, so unsigned or forged
requests are rejected before any event reaches the query pipeline.
"""

import hashlib
import hmac
import logging
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status

from cardfetcher.api.dependencies import get_settings
from cardfetcher.config import Settings

logger = logging.getLogger(__name__)

SIGNATURE_METHOD = "sha1"


def compute_signature(secret: str, body: bytes) -> str:
    """Hex HMAC-SHA1 digest of `body` keyed with `secret`."""
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha1).hexdigest()


def is_valid_signature(secret: str, body: bytes, signature: str) -> bool:
    """Check an X-Hub-Signature header value against the body."""
    method, _, signature_hash = signature.partition("=")
    if method != SIGNATURE_METHOD or not signature_hash:
        return False
    return hmac.compare_digest(signature_hash, compute_signature(secret, body))


async def verify_signature(
    request: Request,
    config: Annotated[Settings, Depends(get_settings)],
    x_hub_signature: Annotated[str | None, Header()] = None,
) -> None:
    """
    Reject webhook requests whose signature is missing or wrong.

    Raises:
        HTTPException: 403 if the signature does not validate
    """
    if not x_hub_signature:
        logger.error("Couldn't validate the signature: header missing")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Missing request signature",
        )

    body = await request.body()
    if not is_valid_signature(config.app_secret, body, x_hub_signature):
        logger.error("Couldn't validate the request signature")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid request signature",
        )
