import asyncio
import unittest

from parcel_tracker.services.data_store import DataStore
from parcel_tracker.services.status_normalizer import StatusNormalizer
from parcel_tracker.services.tracking_resolver import (
    OutcomeKind,
    TrackingResolver,
    TrackingResult,
    outcome_to_dict,
)
from parcel_tracker.utils.constants import Messages
from parcel_tracker.utils.diagnostics import (
    BATCH_MISSING,
    DATE_MISSING,
    LOAD_FAILED,
    UNRECOGNIZED_STATUS,
)
from parcel_tracker.tests.fakes import (
    BATCHES_CSV,
    BATCHES_URL,
    ORDERS_CSV,
    ORDERS_URL,
    GatedCsvSource,
    default_source,
    settle,
)


class TestTrackingResolver(unittest.IsolatedAsyncioTestCase):
    def build(self, **docs):
        self.source = default_source(**docs)
        self.events = []
        store = DataStore(self.source.fetch, ORDERS_URL, BATCHES_URL)
        self.resolver = TrackingResolver(store, on_diagnostic=self.events.append)
        return self.resolver

    def event_names(self):
        return [e.name for e in self.events]

    async def test_found_case_insensitive(self):
        outcome = await self.build().track("abc123")
        self.assertIs(outcome.kind, OutcomeKind.FOUND)
        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.result, TrackingResult(
            tracking_number="abc123",
            status="Отправлен из Китая",
            date="2024-01-01",
            batch_id="B1",
        ))
        self.assertEqual(self.events, [])

    async def test_not_found(self):
        outcome = await self.build().track("ZZZ999")
        self.assertIs(outcome.kind, OutcomeKind.NOT_FOUND)
        self.assertIsNone(outcome.result)
        self.assertEqual(outcome.message, Messages.NOT_FOUND)

    async def test_missing_batch_is_integrity_error(self):
        resolver = self.build(batches="batch_id,date,status\nB2,2024-01-01,Готов к выдаче\n")
        outcome = await resolver.track("ABC123")
        self.assertIs(outcome.kind, OutcomeKind.ERROR)
        self.assertEqual(outcome.message, Messages.BATCH_MISSING)
        self.assertEqual(self.event_names(), [BATCH_MISSING])
        self.assertEqual(self.events[0].context["batch_id"], "B1")

    async def test_unknown_status_degrades(self):
        resolver = self.build(batches="batch_id,date,status\nB1,2024-01-01,Some Unknown Text\n")
        outcome = await resolver.track("ABC123")
        self.assertIs(outcome.kind, OutcomeKind.FOUND)
        self.assertEqual(outcome.result.status, "")
        self.assertEqual(outcome.result.date, "2024-01-01")
        self.assertEqual(self.event_names(), [UNRECOGNIZED_STATUS])

    async def test_empty_input_is_invalid(self):
        resolver = self.build()
        for value in ("", "   ", None):
            outcome = await resolver.track(value)
            self.assertIs(outcome.kind, OutcomeKind.INVALID)
            self.assertEqual(outcome.message, Messages.EMPTY_INPUT)
        self.assertEqual(self.source.calls, [])

    async def test_every_lookup_reloads_both_sheets(self):
        resolver = self.build()
        await resolver.track("ABC123")
        await resolver.track("ABC123")
        self.assertEqual(self.source.count(ORDERS_URL), 2)
        self.assertEqual(self.source.count(BATCHES_URL), 2)

    async def test_lookup_waits_for_both_downloads(self):
        source = GatedCsvSource({ORDERS_URL: ORDERS_CSV, BATCHES_URL: BATCHES_CSV})
        store = DataStore(source.fetch, ORDERS_URL, BATCHES_URL)
        resolver = TrackingResolver(store, on_diagnostic=lambda event: None)
        lookups = []
        find_order = store.find_order_by_tracking

        async def recording_find_order(tracking_number):
            lookups.append((store.orders is not None, store.batches is not None))
            return await find_order(tracking_number)

        store.find_order_by_tracking = recording_find_order
        task = asyncio.ensure_future(resolver.track("ABC123"))
        await settle()
        self.assertCountEqual(source.calls, [ORDERS_URL, BATCHES_URL])

        source.release(ORDERS_URL)
        await settle()
        self.assertEqual(lookups, [])
        self.assertFalse(task.done())

        source.release(BATCHES_URL)
        outcome = await task
        self.assertIs(outcome.kind, OutcomeKind.FOUND)
        self.assertEqual(lookups, [(True, True)])
        self.assertEqual(len(source.calls), 2)

    async def test_empty_orders_sheet_downloaded_once_per_lookup(self):
        resolver = self.build(orders="tracking_number,batch_id\n")
        outcome = await resolver.track("ABC123")
        self.assertIs(outcome.kind, OutcomeKind.NOT_FOUND)
        self.assertEqual(self.source.count(ORDERS_URL), 1)
        self.assertEqual(self.source.count(BATCHES_URL), 1)

    async def test_empty_batch_id_does_not_match_filler_rows(self):
        resolver = self.build(
            orders="tracking_number,batch_id\nABC123,\n",
            batches="batch_id,date,status\n,,\nB1,2024-01-01,Отправлен из Китая\n",
        )
        outcome = await resolver.track("ABC123")
        self.assertIs(outcome.kind, OutcomeKind.ERROR)
        self.assertIsNone(outcome.result)
        self.assertEqual(outcome.message, Messages.BATCH_MISSING)
        self.assertEqual(self.event_names(), [BATCH_MISSING])
        self.assertEqual(self.events[0].context["batch_id"], "")

    async def test_lookup_sees_sheet_edits(self):
        resolver = self.build()
        await resolver.track("ABC123")
        self.source.documents[BATCHES_URL] = "batch_id,date,status\nB1,2024-01-05,Готов к выдаче\n"
        outcome = await resolver.track("ABC123")
        self.assertEqual(outcome.result.status, "Готов к выдаче")
        self.assertEqual(outcome.result.progress.percent, 100.0)

    async def test_transport_failure_is_generic_error(self):
        resolver = self.build()
        self.source.failing.add(BATCHES_URL)
        outcome = await resolver.track("ABC123")
        self.assertIs(outcome.kind, OutcomeKind.ERROR)
        self.assertEqual(outcome.message, Messages.LOAD_FAILED)
        self.assertEqual(self.event_names(), [LOAD_FAILED])
        self.assertEqual(self.events[0].context["status_code"], 500)

    async def test_unexpected_failure_is_caught(self):
        resolver = self.build()

        async def broken(url):
            raise RuntimeError("boom")

        resolver.store._fetch_csv = broken
        with self.assertLogs(level="ERROR"):
            outcome = await resolver.track("ABC123")
        self.assertIs(outcome.kind, OutcomeKind.ERROR)
        self.assertEqual(outcome.message, Messages.LOAD_FAILED)

    async def test_date_and_status_under_other_headers(self):
        resolver = self.build(
            orders="Трек номер,Партия\nRU-1,П1\n",
            batches="Партия,Дата отправки (план),Статус партии\nП1,12.03.2024,в пути по россии\n",
        )
        outcome = await resolver.track("ru-1")
        self.assertEqual(outcome.result.batch_id, "П1")
        self.assertEqual(outcome.result.date, "12.03.2024")
        self.assertEqual(outcome.result.status, "В пути по России")

    async def test_missing_date_emits_diagnostic(self):
        resolver = self.build(batches="batch_id,status\nB1,Готов к выдаче\n")
        outcome = await resolver.track("ABC123")
        self.assertIs(outcome.kind, OutcomeKind.FOUND)
        self.assertEqual(outcome.result.date, "")
        self.assertEqual(self.event_names(), [DATE_MISSING])
        self.assertEqual(self.events[0].context["fields"], ["batch_id", "status"])

    async def test_overlapping_lookups_mark_older_superseded(self):
        resolver = self.build()
        first, second = await asyncio.gather(resolver.track("ABC123"), resolver.track("abc123"))
        self.assertIs(first.kind, OutcomeKind.SUPERSEDED)
        self.assertIsNotNone(first.result)
        self.assertIs(second.kind, OutcomeKind.FOUND)
        self.assertLess(first.sequence, second.sequence)
        self.assertFalse(resolver.is_latest(first))
        self.assertTrue(resolver.is_latest(second))
        self.assertEqual(resolver.latest_sequence, second.sequence)

    async def test_custom_normalizer_used(self):
        source = default_source(batches="batch_id,date,status\nB1,2024-01-01,shipped\n")
        resolver = TrackingResolver(
            DataStore(source.fetch, ORDERS_URL, BATCHES_URL),
            normalizer=StatusNormalizer(scale=["Packed", "Shipped"]),
        )
        outcome = await resolver.track("ABC123")
        self.assertEqual(outcome.result.status, "Shipped")

    async def test_outcome_to_dict(self):
        outcome = await self.build().track("ABC123")
        data = outcome_to_dict(outcome)
        self.assertEqual(data["kind"], "found")
        self.assertEqual(data["result"]["batch_id"], "B1")
        self.assertAlmostEqual(data["result"]["progress_percent"], 20.0)

    async def test_outcome_to_dict_uses_given_scale(self):
        source = default_source(batches="batch_id,date,status\nB1,2024-01-01,shipped\n")
        normalizer = StatusNormalizer(scale=["Packed", "Shipped"])
        resolver = TrackingResolver(
            DataStore(source.fetch, ORDERS_URL, BATCHES_URL), normalizer=normalizer)
        outcome = await resolver.track("ABC123")
        data = outcome_to_dict(outcome, normalizer)
        self.assertEqual(data["result"]["status"], "Shipped")
        self.assertAlmostEqual(data["result"]["progress_percent"], 100.0)


if __name__ == '__main__':
    unittest.main()
