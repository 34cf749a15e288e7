"""Token usage ledger: running per-client totals and cost estimate.

Totals are stored as JSON under one key. The read-add-store in record() is
not atomic across concurrent requests for the same client; the ledger is a
best-effort estimate, not a billing record.
"""

import json
import logging

from domain.model.token_usage import TokenUsage, UsageSnapshot
from port.storage import KeyValueStorage, StorageError
from utils.config import DEFAULT_PRICE_IN_PER_MILLION, DEFAULT_PRICE_OUT_PER_MILLION

logger = logging.getLogger(__name__)

USAGE_STORAGE_KEY = "usage_ledger_v1"


def estimate_cost(
    prompt_tokens: int,
    completion_tokens: int,
    price_in_per_million: float = DEFAULT_PRICE_IN_PER_MILLION,
    price_out_per_million: float = DEFAULT_PRICE_OUT_PER_MILLION,
) -> float:
    """Estimated USD cost for the given token counts."""
    return (prompt_tokens * price_in_per_million + completion_tokens * price_out_per_million) / 1_000_000


class UsageLedger:
    def __init__(
        self,
        storage: KeyValueStorage,
        price_in_per_million: float = DEFAULT_PRICE_IN_PER_MILLION,
        price_out_per_million: float = DEFAULT_PRICE_OUT_PER_MILLION,
    ):
        self.storage = storage
        self.price_in_per_million = price_in_per_million
        self.price_out_per_million = price_out_per_million

    def _totals(self) -> TokenUsage:
        raw = self.storage.get(USAGE_STORAGE_KEY)
        if not raw:
            return TokenUsage()
        try:
            return TokenUsage.from_dict(json.loads(raw))
        except ValueError:
            logger.warning("Stored usage ledger is corrupt, reading as zero")
            return TokenUsage()

    def read(self) -> UsageSnapshot:
        totals = self._totals()
        return UsageSnapshot(
            prompt_tokens=totals.prompt_tokens,
            completion_tokens=totals.completion_tokens,
            total_tokens=totals.total_tokens,
            estimated_cost_usd=estimate_cost(
                totals.prompt_tokens,
                totals.completion_tokens,
                self.price_in_per_million,
                self.price_out_per_million,
            ),
        )

    def record(self, usage: TokenUsage | None) -> UsageSnapshot:
        """Add usage field-wise to the stored totals."""
        if usage is None:
            return self.read()
        updated = self._totals() + usage
        try:
            self.storage.set(USAGE_STORAGE_KEY, json.dumps(updated.to_dict()))
        except StorageError as e:
            logger.warning("Failed to persist usage (non-fatal)", extra={"error": str(e)})
        return self.read()

    def reset(self) -> UsageSnapshot:
        try:
            self.storage.remove(USAGE_STORAGE_KEY)
        except StorageError as e:
            logger.warning("Failed to reset usage (non-fatal)", extra={"error": str(e)})
        return self.read()
