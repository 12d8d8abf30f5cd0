import io

from django.test import TestCase

from accesslogs.models import AccessLog
from accesslogs.pipeline import dry_run, persist_logs
from accesslogs.tests.fixtures import FAIL_LINE, SKIP_LINE, SUCCESS_LINE


class PersistLogsTests(TestCase):
    def test_end_to_end_one_line_batches(self):
        lines = [FAIL_LINE + "\n", SUCCESS_LINE + "\n", SKIP_LINE + "\n"]

        with self.assertLogs("accesslogs", level="INFO") as logs:
            summary = persist_logs(iter(lines), 1, {"127.0.0.2", "127.0.0.3"})

        self.assertEqual(AccessLog.objects.count(), 1)
        self.assertEqual(AccessLog.objects.get().remote_addr, "127.0.0.1")
        self.assertEqual(summary.batches, 3)
        self.assertEqual(summary.attempted, 3)
        self.assertEqual(summary.succeeded, 1)
        self.assertEqual(summary.failed_batches, 0)

        self.assertEqual(len(logs.output), 4)
        self.assertIn("Text did not match regex `Cats are alright`", logs.output[0])
        self.assertIn("inserting 0 out of 1 records", logs.output[1])
        self.assertIn("inserting 1 out of 1 records", logs.output[2])
        self.assertIn("inserting 0 out of 1 records", logs.output[3])

    def test_trailing_partial_batch_is_persisted(self):
        lines = [SUCCESS_LINE] * 5

        summary = persist_logs(lines, 2)

        self.assertEqual(summary.batches, 3)
        self.assertEqual(summary.succeeded, 5)
        self.assertEqual(AccessLog.objects.count(), 5)


class DryRunTests(TestCase):
    def test_prints_successes_and_failures(self):
        out = io.StringIO()

        ok, failed = dry_run([FAIL_LINE + "\n", SUCCESS_LINE + "\n"], out)

        self.assertEqual((ok, failed), (1, 1))
        lines = out.getvalue().splitlines()
        self.assertEqual(lines[0], "error: Text did not match regex `Cats are alright`")
        self.assertTrue(lines[1].startswith("line: epoch=1509818735"))
        self.assertFalse(AccessLog.objects.exists())

    def test_stops_on_broken_pipe(self):
        class ClosedPipe(io.StringIO):
            def write(self, text):
                raise BrokenPipeError()

        self.assertEqual(dry_run([SUCCESS_LINE, SUCCESS_LINE], ClosedPipe()), (1, 0))

    def test_empty_input(self):
        out = io.StringIO()
        self.assertEqual(dry_run([], out), (0, 0))
        self.assertEqual(out.getvalue(), "")
