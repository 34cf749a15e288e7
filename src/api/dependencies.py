"""FastAPI dependency providers.

Settings, the storage backend and the rate limiter are process-wide
singletons created on first use; everything client-scoped is built per
request on top of them. Tests replace any of these through
app.dependency_overrides.
"""

import logging
from functools import lru_cache

from fastapi import Depends, Request

from adapter.external.free_dictionary import FreeDictionaryAdapter
from adapter.external.litellm import LiteLLMAdapter
from adapter.fake.storage import InMemoryStorage
from adapter.rate_limit.sliding_window import SlidingWindowRateLimiter
from adapter.storage.file_storage import FileStorage
from adapter.storage.redis_storage import RedisStorage
from adapter.storage.scoped import ScopedStorage
from domain.model.errors import RateLimitExceededError
from port.dictionary import DictionaryPort
from port.llm import LLMPort
from port.rate_limiter import RateLimiterPort
from port.storage import KeyValueStorage
from services.definition_service import DefinitionService
from services.paragraph_service import ParagraphService
from services.preferences_service import PreferencesService
from services.translation_service import TranslationService
from services.usage_ledger import UsageLedger
from services.word_list_service import WordListService
from utils.config import Settings, load_settings

logger = logging.getLogger(__name__)

CLIENT_ID_HEADER = "x-client-id"
MAX_CLIENT_ID_LENGTH = 128


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


@lru_cache(maxsize=1)
def _storage_singleton() -> KeyValueStorage:
    settings = get_settings()
    if settings.storage_backend == "redis":
        return RedisStorage(settings.redis_url)
    if settings.storage_backend == "memory":
        return InMemoryStorage()
    return FileStorage(settings.storage_path)


@lru_cache(maxsize=1)
def _rate_limiter_singleton() -> SlidingWindowRateLimiter:
    settings = get_settings()
    return SlidingWindowRateLimiter(
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )


def get_storage() -> KeyValueStorage:
    return _storage_singleton()


def get_rate_limiter() -> RateLimiterPort:
    return _rate_limiter_singleton()


def get_llm_port(settings: Settings = Depends(get_settings)) -> LLMPort | None:
    """Provider adapter, or None when no key is configured."""
    if not settings.has_provider_key:
        return None
    return LiteLLMAdapter(api_key=settings.openai_api_key, model=settings.model)


def get_dictionary_port() -> DictionaryPort:
    return FreeDictionaryAdapter()


# ── Client identity ──────────────────────────────────────────


def get_client_address(request: Request, trusted_proxy_hops: int = 0) -> str:
    """Client address for rate limiting.

    X-Forwarded-For is client-controlled, so it is read only when
    trusted_proxy_hops proxies sit in front of the app. The entry that many
    hops from the right is the address the outermost trusted proxy saw;
    anything left of it was supplied by the client.
    """
    if trusted_proxy_hops > 0:
        hops = [hop.strip() for hop in (request.headers.get("x-forwarded-for") or "").split(",")]
        if len(hops) >= trusted_proxy_hops and hops[-trusted_proxy_hops]:
            return hops[-trusted_proxy_hops]
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def get_client_id(request: Request, settings: Settings = Depends(get_settings)) -> str:
    """Key under which a client's word list, ledger and preferences live."""
    client_id = (request.headers.get(CLIENT_ID_HEADER) or "").strip()
    if client_id:
        return client_id[:MAX_CLIENT_ID_LENGTH]
    return get_client_address(request, settings.trusted_proxy_hops)


def get_client_storage(
    client_id: str = Depends(get_client_id),
    storage: KeyValueStorage = Depends(get_storage),
) -> KeyValueStorage:
    return ScopedStorage(storage, client_id)


# ── Admission control ────────────────────────────────────────


def enforce_rate_limit(
    request: Request,
    limiter: RateLimiterPort = Depends(get_rate_limiter),
    settings: Settings = Depends(get_settings),
) -> None:
    """Raise RateLimitExceededError (rendered as 429) when the caller is over its window."""
    decision = limiter.check(get_client_address(request, settings.trusted_proxy_hops))
    if not decision.allowed:
        raise RateLimitExceededError(decision.retry_after_seconds or 1)


# ── Services ─────────────────────────────────────────────────


def get_definition_service(
    llm: LLMPort | None = Depends(get_llm_port),
    dictionary: DictionaryPort = Depends(get_dictionary_port),
) -> DefinitionService:
    return DefinitionService(llm=llm, dictionary=dictionary)


def get_paragraph_service(llm: LLMPort | None = Depends(get_llm_port)) -> ParagraphService:
    return ParagraphService(llm=llm)


def get_translation_service(llm: LLMPort | None = Depends(get_llm_port)) -> TranslationService:
    return TranslationService(llm=llm)


def get_usage_ledger(
    storage: KeyValueStorage = Depends(get_client_storage),
    settings: Settings = Depends(get_settings),
) -> UsageLedger:
    return UsageLedger(
        storage,
        price_in_per_million=settings.price_in_per_million,
        price_out_per_million=settings.price_out_per_million,
    )


def get_word_list_service(storage: KeyValueStorage = Depends(get_client_storage)) -> WordListService:
    return WordListService(storage)


def get_preferences_service(storage: KeyValueStorage = Depends(get_client_storage)) -> PreferencesService:
    return PreferencesService(storage)
