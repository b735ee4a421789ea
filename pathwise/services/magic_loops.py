# pathwise/services/magic_loops.py
import logging
from typing import Optional

import httpx

from pathwise.core.config import settings
from pathwise.core.errors import UpstreamServiceError

logger = logging.getLogger(__name__)

EMPTY_REPLY = "I wasn't able to generate a proper response. Please try again with a different question."


async def get_response(user_message: str, career_interest: Optional[str] = None, education_level: Optional[str] = None) -> str:
    """Ask the Magic Loops assistant; raises UpstreamServiceError on any failure."""
    payload = {"user_message": user_message}
    # optional fields are only sent when set
    if career_interest:
        payload["career_interest"] = career_interest
    if education_level:
        payload["education_level"] = education_level

    logger.info("Magic Loops request, message length %d", len(user_message))
    try:
        async with httpx.AsyncClient(timeout=settings.MAGIC_LOOPS_TIMEOUT_SEC) as client:
            resp = await client.post(str(settings.MAGIC_LOOPS_URL), json=payload)
            resp.raise_for_status()
            data = resp.json()
    except httpx.HTTPStatusError as exc:
        raise UpstreamServiceError("magic_loops", f"returned {exc.response.status_code}") from exc
    except (httpx.HTTPError, ValueError) as exc:
        raise UpstreamServiceError("magic_loops", str(exc)) from exc

    reply = data.get("response") if isinstance(data, dict) else None
    return reply or EMPTY_REPLY
