"""Token usage API routes.

This module exposes the calling client's usage ledger:
- GET /usage: Running token totals and estimated cost
- POST /usage/reset: Zero the totals
"""

import logging
from fastapi import APIRouter, Depends

from api.dependencies import get_client_id, get_usage_ledger
from api.models import UsageResponse
from domain.model.token_usage import UsageSnapshot
from services.usage_ledger import UsageLedger

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/usage", tags=["usage"])


def _to_response(snapshot: UsageSnapshot) -> UsageResponse:
    return UsageResponse(
        prompt_tokens=snapshot.prompt_tokens,
        completion_tokens=snapshot.completion_tokens,
        total_tokens=snapshot.total_tokens,
        estimated_usd=snapshot.estimated_cost_usd,
    )


@router.get("", response_model=UsageResponse)
async def get_usage(ledger: UsageLedger = Depends(get_usage_ledger)):
    """Get the caller's token usage totals.

    Returns:
        UsageResponse with prompt/completion/total tokens and the cost
        estimate derived from the configured per-million prices
    """
    return _to_response(ledger.read())


@router.post("/reset", response_model=UsageResponse)
async def reset_usage(
    ledger: UsageLedger = Depends(get_usage_ledger),
    client_id: str = Depends(get_client_id),
):
    """Reset the caller's token usage totals to zero."""
    snapshot = ledger.reset()
    logger.info("Token usage reset", extra={"clientId": client_id})
    return _to_response(snapshot)
