"""Tests for the reader API routes: /define, /generate, /translate."""

import unittest
from fastapi.testclient import TestClient

from api.main import app
from api.dependencies import (
    get_dictionary_port,
    get_llm_port,
    get_rate_limiter,
    get_settings,
    get_storage,
)
from adapter.fake.dictionary import FakeDictionaryAdapter
from adapter.fake.llm import FakeLLMAdapter
from adapter.fake.storage import InMemoryStorage
from adapter.rate_limit.sliding_window import SlidingWindowRateLimiter
from domain.model.definition import DEFINITION_SENTINEL
from domain.model.paragraph import FALLBACK_PARAGRAPH
from port.llm import LLMEmptyResponseError, LLMError, LLMRateLimitError
from utils.config import Settings


class ReaderRouteTestCase(unittest.TestCase):
    """Wires fakes for the provider, dictionary, storage and limiter."""

    def setUp(self):
        self.client = TestClient(app)
        self.storage = InMemoryStorage()
        self.dictionary = FakeDictionaryAdapter()
        self.limiter = SlidingWindowRateLimiter(max_requests=15, window_seconds=60)
        self.settings = Settings()
        self.use_llm(None)
        app.dependency_overrides[get_dictionary_port] = lambda: self.dictionary
        app.dependency_overrides[get_storage] = lambda: self.storage
        app.dependency_overrides[get_rate_limiter] = lambda: self.limiter
        app.dependency_overrides[get_settings] = lambda: self.settings

    def tearDown(self):
        app.dependency_overrides.clear()

    def use_llm(self, llm):
        self.llm = llm
        app.dependency_overrides[get_llm_port] = lambda: self.llm

    def usage(self, client_id: str = "reader-1") -> dict:
        return self.client.get("/usage", headers={"X-Client-Id": client_id}).json()


class TestDefineRoute(ReaderRouteTestCase):

    def test_define_with_provider(self):
        self.use_llm(FakeLLMAdapter(response="회복력 있는\n탄력 있는"))

        response = self.client.get("/define", params={"word": "Resilient!"}, headers={"X-Client-Id": "reader-1"})

        assert response.status_code == 200
        data = response.json()
        assert data["word"] == "resilient"
        assert data["meanings"] == ["회복력 있는", "탄력 있는"]
        assert data["usage"] == {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15}
        assert "in Korean" in self.llm.last_prompt
        assert self.usage()["total_tokens"] == 15

    def test_define_passes_languages(self):
        self.use_llm(FakeLLMAdapter(response="school"))

        self.client.get("/define", params={"word": "école", "lang": "en", "fromLang": "fr"})

        assert 'French word "école"' in self.llm.last_prompt
        assert "in English" in self.llm.last_prompt

    def test_define_without_provider_english_uses_dictionary(self):
        self.dictionary.definitions = ["To move swiftly on foot.", "To flee."]

        response = self.client.get("/define", params={"word": "run", "lang": "en"})

        assert response.status_code == 200
        data = response.json()
        assert data["meanings"] == ["To move swiftly on foot.", "To flee."]
        assert "usage" not in data

    def test_define_without_provider_other_language_sentinel(self):
        self.dictionary.definitions = ["unused"]

        response = self.client.get("/define", params={"word": "run"})

        assert response.status_code == 200
        assert response.json()["meanings"] == [DEFINITION_SENTINEL]
        assert self.dictionary.lookups == []

    def test_define_provider_error_is_not_an_http_error(self):
        self.use_llm(FakeLLMAdapter(error=LLMRateLimitError("429")))

        response = self.client.get("/define", params={"word": "run", "lang": "ko"})

        assert response.status_code == 200
        assert response.json()["meanings"] == [DEFINITION_SENTINEL]

    def test_define_missing_word(self):
        for params in ({}, {"word": ""}, {"word": "123!"}):
            response = self.client.get("/define", params=params)
            assert response.status_code == 400
            assert response.json() == {"word": "", "meanings": [DEFINITION_SENTINEL]}


class TestGenerateRoute(ReaderRouteTestCase):

    def test_generate_with_provider(self):
        self.use_llm(FakeLLMAdapter(response="A short paragraph."))

        response = self.client.get("/generate", params={"difficulty": "3", "lang": "fr"}, headers={"X-Client-Id": "reader-1"})

        assert response.status_code == 200
        data = response.json()
        assert data["content"] == "A short paragraph."
        assert data["id"] != "fallback"
        assert "createdAt" in data
        assert "isFallback" not in data
        assert "French paragraph" in self.llm.last_prompt
        assert self.usage()["total_tokens"] == 15

    def test_generate_is_never_cached(self):
        response = self.client.get("/generate")

        assert response.headers["cache-control"] == "no-store, no-cache, must-revalidate"
        assert response.headers["pragma"] == "no-cache"

    def test_generate_without_provider(self):
        response = self.client.get("/generate", params={"difficulty": "banana"})

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "fallback"
        assert data["content"] == FALLBACK_PARAGRAPH
        assert data["isFallback"] is True
        assert "errorMessage" not in data

    def test_generate_provider_error_reports_message(self):
        self.use_llm(FakeLLMAdapter(error=LLMError("Rate limit reached for gpt-4o-mini")))

        response = self.client.get("/generate", params={"difficulty": 7})

        assert response.status_code == 200
        data = response.json()
        assert data["isFallback"] is True
        assert data["errorMessage"] == "Rate limit reached for gpt-4o-mini"

    def test_generate_profession_and_style(self):
        self.use_llm(FakeLLMAdapter(response="text"))

        self.client.get("/generate", params={"difficulty": 99, "profession": "nurse", "style": "cheerful"})

        assert "Very advanced (C2)" in self.llm.last_prompt
        assert '"nurse"' in self.llm.last_prompt
        assert '"cheerful"' in self.llm.last_prompt

    def test_generate_decimal_difficulty_truncated(self):
        self.use_llm(FakeLLMAdapter(response="text"))

        self.client.get("/generate", params={"difficulty": "7.5"})

        assert "Advanced (C1)" in self.llm.last_prompt


class TestTranslateRoute(ReaderRouteTestCase):

    def test_translate_success(self):
        self.use_llm(FakeLLMAdapter(response="Bonjour."))

        response = self.client.post("/translate", json={"text": "Hello.", "lang": "fr"}, headers={"X-Client-Id": "reader-1"})

        assert response.status_code == 200
        data = response.json()
        assert data["translation"] == "Bonjour."
        assert data["usage"]["total_tokens"] == 15
        assert "into French" in self.llm.last_prompt
        assert self.usage()["total_tokens"] == 15

    def test_translate_defaults_to_korean(self):
        self.use_llm(FakeLLMAdapter(response="안녕"))

        self.client.post("/translate", json={"text": "Hi"})

        assert "into Korean" in self.llm.last_prompt

    def test_translate_without_provider(self):
        response = self.client.post("/translate", json={"text": "Hello."})

        assert response.status_code == 503
        assert response.json() == {"translation": None, "error": "OPENAI_API_KEY is not set"}

    def test_translate_without_provider_checked_before_body(self):
        response = self.client.post("/translate", content=b"not json", headers={"Content-Type": "application/json"})

        assert response.status_code == 503

    def test_translate_missing_text(self):
        self.use_llm(FakeLLMAdapter(response="x"))

        for body in ({}, {"text": "   "}, {"text": 5}):
            response = self.client.post("/translate", json=body)
            assert response.status_code == 400
            assert response.json() == {"translation": None, "error": "Missing text"}

    def test_translate_invalid_json(self):
        self.use_llm(FakeLLMAdapter(response="x"))

        response = self.client.post("/translate", content=b"{oops", headers={"Content-Type": "application/json"})

        assert response.status_code == 400

    def test_translate_provider_error(self):
        self.use_llm(FakeLLMAdapter(error=LLMError("upstream exploded")))

        response = self.client.post("/translate", json={"text": "Hello."})

        assert response.status_code == 500
        assert response.json() == {"translation": None, "error": "upstream exploded"}

    def test_translate_empty_provider_output_is_an_error(self):
        self.use_llm(FakeLLMAdapter(error=LLMEmptyResponseError("Empty response from LLM")))

        response = self.client.post("/translate", json={"text": "Hello."}, headers={"X-Client-Id": "reader-1"})

        assert response.status_code == 500
        assert response.json() == {"translation": None, "error": "Empty response from LLM"}
        assert self.usage()["total_tokens"] == 0


class TestRateLimiting(ReaderRouteTestCase):

    def test_sixteenth_request_is_rejected(self):
        for _ in range(15):
            assert self.client.get("/define", params={"word": "run"}).status_code == 200

        response = self.client.get("/define", params={"word": "run"})

        assert response.status_code == 429
        data = response.json()
        assert data["detail"] == "Too many requests"
        assert data["retryAfterSeconds"] >= 1
        assert response.headers["retry-after"] == str(data["retryAfterSeconds"])

    def test_limit_shared_across_reader_routes(self):
        for _ in range(5):
            self.client.get("/define", params={"word": "run"})
            self.client.get("/generate")
            self.client.post("/translate", json={"text": "x"})

        assert self.client.get("/generate").status_code == 429

    def test_rotating_forwarded_header_does_not_reset_window(self):
        self.limiter = SlidingWindowRateLimiter(max_requests=2, window_seconds=60)

        codes = [
            self.client.get("/generate", headers={"X-Forwarded-For": f"10.0.0.{i}"}).status_code
            for i in range(10)
        ]

        assert codes[:2] == [200, 200]
        assert set(codes[2:]) == {429}

    def test_limit_keyed_by_trusted_proxy_hop(self):
        self.settings = Settings(trusted_proxy_hops=1)
        for _ in range(15):
            self.client.get("/generate", headers={"X-Forwarded-For": "6.6.6.6, 10.0.0.1"})

        assert self.client.get("/generate", headers={"X-Forwarded-For": "7.7.7.7, 10.0.0.1"}).status_code == 429
        assert self.client.get("/generate", headers={"X-Forwarded-For": "10.0.0.1, 10.0.0.2"}).status_code == 200

    def test_other_routes_not_limited(self):
        for _ in range(15):
            self.client.get("/generate")

        assert self.client.get("/usage").status_code == 200
        assert self.client.get("/words").status_code == 200


if __name__ == '__main__':
    unittest.main()
