"""Tests for UsageLedger."""

import json
import unittest
from unittest.mock import MagicMock

from adapter.fake.storage import InMemoryStorage
from domain.model.token_usage import TokenUsage
from port.storage import StorageError
from services.usage_ledger import USAGE_STORAGE_KEY, UsageLedger, estimate_cost


class TestEstimateCost(unittest.TestCase):

    def test_default_prices(self):
        # 1M prompt at $0.15 + 1M completion at $0.60
        self.assertAlmostEqual(estimate_cost(1_000_000, 1_000_000), 0.75)

    def test_custom_prices(self):
        self.assertAlmostEqual(estimate_cost(2000, 1000, 1.0, 2.0), 0.004)

    def test_zero(self):
        self.assertEqual(estimate_cost(0, 0), 0.0)


class TestUsageLedger(unittest.TestCase):

    def setUp(self):
        self.storage = InMemoryStorage()
        self.ledger = UsageLedger(self.storage)

    def test_empty_ledger_reads_zero(self):
        snapshot = self.ledger.read()
        self.assertEqual(snapshot.total_tokens, 0)
        self.assertEqual(snapshot.estimated_cost_usd, 0.0)

    def test_record_adds_fieldwise(self):
        self.ledger.record(TokenUsage(10, 5, 15))
        snapshot = self.ledger.record(TokenUsage(3, 2, 5))

        self.assertEqual(
            (snapshot.prompt_tokens, snapshot.completion_tokens, snapshot.total_tokens),
            (13, 7, 20),
        )
        self.assertAlmostEqual(snapshot.estimated_cost_usd, (13 * 0.15 + 7 * 0.60) / 1_000_000)

    def test_record_none_is_noop(self):
        self.ledger.record(TokenUsage(1, 1, 2))
        snapshot = self.ledger.record(None)
        self.assertEqual(snapshot.total_tokens, 2)

    def test_persisted_as_json(self):
        self.ledger.record(TokenUsage(1, 2, 3))
        self.assertEqual(
            json.loads(self.storage.store[USAGE_STORAGE_KEY]),
            {"prompt_tokens": 1, "completion_tokens": 2, "total_tokens": 3},
        )

    def test_reset(self):
        self.ledger.record(TokenUsage(10, 5, 15))
        snapshot = self.ledger.reset()
        self.assertEqual(snapshot.total_tokens, 0)
        self.assertNotIn(USAGE_STORAGE_KEY, self.storage.store)

    def test_corrupt_state_reads_zero(self):
        self.storage.set(USAGE_STORAGE_KEY, "{not json")
        self.assertEqual(self.ledger.read().total_tokens, 0)

        snapshot = self.ledger.record(TokenUsage(1, 1, 2))
        self.assertEqual(snapshot.total_tokens, 2)

    def test_partial_state_fields_read_zero(self):
        self.storage.set(USAGE_STORAGE_KEY, json.dumps({"prompt_tokens": 4, "total_tokens": "x"}))
        snapshot = self.ledger.read()
        self.assertEqual((snapshot.prompt_tokens, snapshot.completion_tokens, snapshot.total_tokens), (4, 0, 0))

    def test_custom_prices(self):
        ledger = UsageLedger(self.storage, price_in_per_million=1.0, price_out_per_million=2.0)
        snapshot = ledger.record(TokenUsage(1_000_000, 500_000, 1_500_000))
        self.assertAlmostEqual(snapshot.estimated_cost_usd, 2.0)

    def test_storage_failure_is_not_fatal(self):
        storage = MagicMock()
        storage.get.return_value = None
        storage.set.side_effect = StorageError("disk full")
        ledger = UsageLedger(storage)

        snapshot = ledger.record(TokenUsage(1, 1, 2))

        self.assertEqual(snapshot.total_tokens, 0)


if __name__ == '__main__':
    unittest.main()
