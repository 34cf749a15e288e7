"""Saved word list routes.

- GET /words: Saved words, newest first
- POST /words: Save a word (no-op when already saved)
- DELETE /words/{word}: Remove a word (case-insensitive)
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status

from api.models import SavedWordResponse, SaveWordRequest
from api.dependencies import get_word_list_service
from domain.model.saved_word import SavedWord
from services.word_list_service import WordListService
from utils.normalizer import normalize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/words", tags=["words"])


def _to_response(words: list[SavedWord]) -> list[SavedWordResponse]:
    return [
        SavedWordResponse(word=w.word, meaning=w.meaning, date_added=w.date_added)
        for w in words
    ]


@router.get("", response_model=list[SavedWordResponse], response_model_by_alias=True)
async def list_words(service: WordListService = Depends(get_word_list_service)):
    """Get the caller's saved words, newest first."""
    return _to_response(service.list_words())


@router.post("", response_model=list[SavedWordResponse], response_model_by_alias=True)
async def save_word(
    request: SaveWordRequest,
    service: WordListService = Depends(get_word_list_service),
):
    """Save a word with its first meaning.

    Raises:
        HTTPException: 400 if the word has no letters left after normalization
    """
    word = normalize(request.word)
    if not word:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid word")
    return _to_response(service.save(word, request.meaning))


@router.delete("/{word}", response_model=list[SavedWordResponse], response_model_by_alias=True)
async def remove_word(
    word: str,
    service: WordListService = Depends(get_word_list_service),
):
    """Remove a saved word; removing an unknown word is not an error."""
    return _to_response(service.remove(word))
