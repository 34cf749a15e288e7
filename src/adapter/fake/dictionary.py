"""In-memory implementation of DictionaryPort for testing."""


class FakeDictionaryAdapter:
    """Fake dictionary adapter that returns preconfigured definitions."""

    def __init__(self, definitions: list[str] | None = None):
        self.definitions = definitions or []
        self.lookups: list[str] = []

    async def lookup(self, word: str, limit: int = 2) -> list[str]:
        self.lookups.append(word)
        return self.definitions[:limit]
