"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from domain.model.token_usage import TokenUsage as DomainTokenUsage


class TokenUsage(BaseModel):
    """Provider-reported token counts for one call."""
    prompt_tokens: int = Field(..., ge=0)
    completion_tokens: int = Field(..., ge=0)
    total_tokens: int = Field(..., ge=0)

    @classmethod
    def from_domain(cls, usage: DomainTokenUsage | None) -> Optional["TokenUsage"]:
        if usage is None:
            return None
        return cls(**usage.to_dict())


class DefineResponse(BaseModel):
    """Response model for GET /define."""
    word: str
    meanings: list[str] = Field(..., description="1–2 short definitions, or the sentinel")
    usage: Optional[TokenUsage] = None


class ParagraphResponse(BaseModel):
    """Response model for GET /generate (camelCase on the wire)."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Paragraph ID, or 'fallback'")
    created_at: datetime = Field(..., alias="createdAt")
    content: str
    is_fallback: Optional[bool] = Field(None, alias="isFallback")
    error_message: Optional[str] = Field(None, alias="errorMessage")
    usage: Optional[TokenUsage] = None


class TranslateRequest(BaseModel):
    """Request body for POST /translate. Fields are validated by the service."""
    text: Optional[str] = None
    lang: Optional[str] = None


class TranslateResponse(BaseModel):
    translation: Optional[str]
    usage: Optional[TokenUsage] = None
    error: Optional[str] = None


class UsageResponse(BaseModel):
    """Running token totals for the calling client."""
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    estimated_usd: float = Field(..., description="Derived cost estimate, not stored")


class SavedWordResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    word: str
    meaning: str
    date_added: str = Field(..., alias="dateAdded")


class SaveWordRequest(BaseModel):
    word: str = Field(..., min_length=1, max_length=100)
    meaning: str = Field("", max_length=2000)


class PreferencesModel(BaseModel):
    """Reader preferences; on PUT, omitted fields are left unchanged."""
    model_config = ConfigDict(populate_by_name=True)

    definition_language: Optional[str] = Field(None, alias="definitionLanguage")
    paragraph_language: Optional[str] = Field(None, alias="paragraphLanguage")
    sentence_style: Optional[str] = Field(None, alias="sentenceStyle", max_length=200)


class RateLimitResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    detail: str
    retry_after_seconds: int = Field(..., alias="retryAfterSeconds")
