from __future__ import annotations

import unittest
from datetime import datetime
from unittest.mock import MagicMock, patch

from psycopg import OperationalError

from api.helpers.seizure_helpers import insert_reviewed_seizure
from api.repositories.seizures import SOURCE_IMPORT
from api.schemas import DurationIn, SeizureIn
from ingestion.commit_batch import commit_records, describe_record
from ingestion.normalize_event import NormalizationError
from ingestion.records import Duration, SeizureRecord


def _record(minute: int, description: str = "") -> SeizureRecord:
    return SeizureRecord(
        date_time=datetime(2024, 6, 16, 21, minute),
        duration=Duration(1, minute),
        trigger="Stress",
        description=description or f"entry {minute}",
    )


class CommitRecordsTest(unittest.TestCase):
    def test_one_failure_does_not_stop_the_batch(self) -> None:
        insert = MagicMock(side_effect=["id-1", "id-2", OperationalError("connection lost"), "id-4", "id-5"])
        records = [_record(minute) for minute in range(5)]

        outcome = commit_records(records, insert)

        self.assertEqual(insert.call_count, 5)
        self.assertEqual(outcome.succeeded, 4)
        self.assertEqual(outcome.failed, 1)
        self.assertEqual(outcome.errors, [("entry 2", "connection lost")])

    def test_insert_receives_record_fields_in_order(self) -> None:
        insert = MagicMock(return_value="id-1")
        commit_records([_record(7, "woke up suddenly")], insert)
        insert.assert_called_once_with(datetime(2024, 6, 16, 21, 7), 1, 7, "Stress", "woke up suddenly")

    def test_empty_batch(self) -> None:
        insert = MagicMock()
        outcome = commit_records([], insert)
        insert.assert_not_called()
        self.assertEqual(outcome.to_dict(), {"succeeded": 0, "failed": 0, "errors": []})

    def test_error_entries_are_in_input_order(self) -> None:
        insert = MagicMock(side_effect=[RuntimeError("first"), "ok", RuntimeError("third")])
        outcome = commit_records([_record(0, "a"), _record(1, "b"), _record(2, "c")], insert)
        self.assertEqual(outcome.to_dict()["errors"], [{"record": "a", "error": "first"}, {"record": "c", "error": "third"}])

    def test_describe_record_truncates_long_descriptions(self) -> None:
        record = _record(0, "x" * 80)
        self.assertEqual(describe_record(record), "x" * 50 + "...")
        self.assertEqual(describe_record(_record(0, "short")), "short")


class InsertReviewedSeizureTest(unittest.TestCase):
    def test_normalizes_before_insert(self) -> None:
        with patch("api.helpers.seizure_helpers.insert_seizure", return_value="new-id") as insert_mock:
            created_id = insert_reviewed_seizure("2024-06-16T21:00", 0, 90, "  ", "")
        self.assertEqual(created_id, "new-id")
        insert_mock.assert_called_once_with(datetime(2024, 6, 16, 21, 0), 1, 30, "Unknown", "", source=SOURCE_IMPORT)

    def test_missing_date_never_reaches_storage(self) -> None:
        with patch("api.helpers.seizure_helpers.insert_seizure") as insert_mock:
            with self.assertRaises(NormalizationError):
                insert_reviewed_seizure(None, 1, 0, "Heat", "")
        insert_mock.assert_not_called()

    def test_reviewer_edits_that_fail_validation_count_as_failures(self) -> None:
        records = [
            SeizureIn(date_time="2024-06-16T21:00", duration=DurationIn(minutes=2), description="good"),
            SeizureIn(date_time="", description="cleared the date"),
            SeizureIn(date_time="2024-06-18T12:00", duration=DurationIn(seconds=-5), description="negative"),
            SeizureIn(date_time="2024-06-19T12:00", duration=DurationIn(minutes=""), description="cleared minutes"),
            SeizureIn(date_time="2024-06-20T12:00", duration=DurationIn(minutes="3"), description="typed minutes"),
        ]
        with patch("api.helpers.seizure_helpers.insert_seizure", return_value="id") as insert_mock:
            outcome = commit_records(records, insert_reviewed_seizure)
        self.assertEqual(insert_mock.call_count, 2)
        self.assertEqual(insert_mock.call_args.args[1], 3)
        self.assertEqual(outcome.succeeded, 2)
        self.assertEqual(outcome.failed, 3)
        self.assertEqual(outcome.errors[0], ("cleared the date", "date_time is required"))
        self.assertEqual(outcome.errors[1], ("negative", "duration cannot be negative"))
        self.assertEqual(outcome.errors[2], ("cleared minutes", "duration minutes must be a whole number"))


if __name__ == "__main__":
    unittest.main()
