"""Paragraph generation route.

- GET /generate?difficulty&profession&style&lang

Always answers 200: provider problems come back as the fallback paragraph
with isFallback/errorMessage set. Responses must never be cached.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from api.dependencies import enforce_rate_limit, get_paragraph_service, get_usage_ledger
from api.models import ParagraphResponse, TokenUsage
from domain.model.language import DEFAULT_PARAGRAPH_LANGUAGE, resolve_language
from domain.model.paragraph import ParagraphRequest
from services.paragraph_service import ParagraphService
from services.usage_ledger import UsageLedger

logger = logging.getLogger(__name__)

router = APIRouter(tags=["reader"])

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate",
    "Pragma": "no-cache",
}


@router.get(
    "/generate",
    response_model=ParagraphResponse,
    response_model_exclude_none=True,
    response_model_by_alias=True,
    dependencies=[Depends(enforce_rate_limit)],
)
async def generate_paragraph(
    response: Response,
    difficulty: Optional[str] = Query(None, description="1 (elementary) – 10 (very advanced)"),
    profession: Optional[str] = Query(None, max_length=200),
    style: Optional[str] = Query(None, max_length=200),
    lang: Optional[str] = Query(None, description="Language of the paragraph"),
    service: ParagraphService = Depends(get_paragraph_service),
    ledger: UsageLedger = Depends(get_usage_ledger),
):
    """Generate a reading paragraph (or the fixed fallback)."""
    response.headers.update(NO_CACHE_HEADERS)

    params = ParagraphRequest.build(
        difficulty,
        profession=profession,
        style=style,
        target_lang=resolve_language(lang, DEFAULT_PARAGRAPH_LANGUAGE),
    )
    paragraph = await service.generate(
        params.difficulty_level,
        profession=params.profession,
        style=params.style,
        target_lang=params.target_lang,
    )
    ledger.record(paragraph.usage)

    return ParagraphResponse(
        id=paragraph.id,
        created_at=paragraph.created_at,
        content=paragraph.content,
        is_fallback=True if paragraph.is_fallback else None,
        error_message=paragraph.error_message,
        usage=TokenUsage.from_domain(paragraph.usage),
    )
