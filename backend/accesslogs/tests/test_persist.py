from datetime import timedelta
from unittest.mock import patch

from django.db import DatabaseError
from django.db.models.query import QuerySet
from django.test import TestCase

from accesslogs.errors import InsertionFailed
from accesslogs.models import AccessLog
from accesslogs.persist import Persister
from accesslogs.tests.fixtures import FAIL_LINE, SKIP_LINE, SUCCESS_LINE, nginx_line


class PersisterTests(TestCase):
    def test_bad_line_is_dropped_good_line_stored(self):
        with self.assertLogs("accesslogs.persist", level="INFO") as logs:
            report = Persister().persist([FAIL_LINE, SUCCESS_LINE])

        self.assertEqual(report.attempted, 2)
        self.assertEqual(report.succeeded, 1)
        self.assertTrue(report.ok)
        self.assertIsInstance(report.duration, timedelta)
        self.assertEqual(AccessLog.objects.count(), 1)
        self.assertIn("Parsing error: Text did not match regex `Cats are alright`", logs.output[0])
        self.assertIn("Parsing and inserting 1 out of 2 records took", logs.output[1])

    def test_stored_row_matches_record(self):
        Persister().persist([SUCCESS_LINE + "\n"])

        row = AccessLog.objects.get()
        self.assertEqual(row.epoch, 1509818735)
        self.assertEqual(row.remote_addr, "127.0.0.1")
        self.assertEqual(row.remote_user, "-")
        self.assertEqual(row.status, 200)
        self.assertEqual(row.method, "GET")
        self.assertEqual(row.path, "/js/embed.min.js")
        self.assertEqual(row.version, "2.0")
        self.assertEqual(row.body_bytes_sent, 20480)
        self.assertEqual(row.host, "comments.nbsoftsolutions.com")

    def test_filtered_ip_counts_as_attempted_only(self):
        report = Persister(ip_filter={"127.0.0.2"}).persist([SKIP_LINE])

        self.assertEqual(report.attempted, 1)
        self.assertEqual(report.succeeded, 0)
        self.assertFalse(AccessLog.objects.exists())

    def test_nothing_to_write_skips_transaction(self):
        with patch("accesslogs.persist.transaction.atomic") as mock_atomic:
            report = Persister().persist([FAIL_LINE])

        mock_atomic.assert_not_called()
        self.assertEqual(report.succeeded, 0)
        self.assertTrue(report.ok)

    def test_null_numeric_fields_stored(self):
        Persister().persist([nginx_line(status="-", body_bytes_sent="-")])

        row = AccessLog.objects.get()
        self.assertIsNone(row.status)
        self.assertIsNone(row.body_bytes_sent)

    def test_oversized_numbers_do_not_abort_batch(self):
        report = Persister().persist([nginx_line(status="99999999999999999999"), SUCCESS_LINE])

        self.assertTrue(report.ok)
        self.assertEqual(report.succeeded, 2)
        self.assertEqual(AccessLog.objects.filter(status__isnull=True).count(), 1)
        self.assertEqual(AccessLog.objects.count(), 2)

    def test_failed_transaction_rolls_back_whole_batch(self):
        def _insert_then_fail(queryset, objs, *args, **kwargs):
            AccessLog.objects.create(**{"epoch": 1, "host": "partial.example.com"})
            raise DatabaseError("database is locked")

        with patch.object(QuerySet, "bulk_create", autospec=True, side_effect=_insert_then_fail):
            with self.assertLogs("accesslogs.persist", level="ERROR") as logs:
                report = Persister().persist([SUCCESS_LINE, nginx_line()])

        self.assertEqual(report.attempted, 2)
        self.assertEqual(report.succeeded, 0)
        self.assertFalse(report.ok)
        self.assertEqual(report.error, InsertionFailed("database is locked"))
        self.assertFalse(AccessLog.objects.exists())
        self.assertIn("Insertion error: database is locked", logs.output[0])

    def test_next_batch_succeeds_after_failure(self):
        with patch.object(QuerySet, "bulk_create", side_effect=DatabaseError("boom")):
            failed = Persister().persist([SUCCESS_LINE])

        report = Persister().persist([nginx_line()])

        self.assertFalse(failed.ok)
        self.assertTrue(report.ok)
        self.assertEqual(AccessLog.objects.count(), 1)
