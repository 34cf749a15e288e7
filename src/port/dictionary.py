"""Dictionary port — outbound interface for the public definition lookup."""

from typing import Protocol


class DictionaryPort(Protocol):
    """Port for fetching English definitions by exact spelling.

    lookup() never raises: any failure (not found, bad payload, network)
    yields an empty list.
    """

    async def lookup(self, word: str, limit: int = 2) -> list[str]: ...
