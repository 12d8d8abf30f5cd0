import io
import sys

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db import DatabaseError, connections

from accesslogs.models import AccessLog
from accesslogs.pipeline import dry_run, persist_logs


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise ValueError(value)
    return number


def _utf8_stream(stream):
    # Invalid bytes in a live tail must not abort the stream
    if hasattr(stream, "buffer"):
        return io.TextIOWrapper(stream.buffer, encoding="utf-8", errors="replace")
    return stream


class Command(BaseCommand):
    help = "Ingest nginx access logs from stdin (or a file) and persist them to the database."
    stealth_options = ("stdin",)

    def add_arguments(self, parser):
        accesslog_settings = getattr(settings, "ACCESSLOG", {}) or {}
        parser.add_argument(
            "-d",
            "--dry-run",
            action="store_true",
            help="Print the parsed logs to stdout instead of persisting to the db",
        )
        parser.add_argument(
            "--filter-ip",
            dest="filter_ips",
            action="append",
            default=[],
            help="Do not store given ip address in the db (repeatable)",
        )
        parser.add_argument(
            "-b",
            "--buffer",
            type=_positive_int,
            default=accesslog_settings.get("buffer") or 10,
            help="Number of log lines to buffer before inserting into db",
        )
        parser.add_argument(
            "--input",
            default="-",
            help="Path to read log lines from ('-' for stdin)",
        )
        parser.add_argument(
            "--database",
            default="default",
            help="Database alias to write to",
        )

    def handle(self, *args, **options):
        if options["input"] == "-":
            self._run(_utf8_stream(options.get("stdin") or sys.stdin), options)
            return

        try:
            handle = open(options["input"], "r", encoding="utf-8", errors="replace")
        except OSError as exc:
            raise CommandError(f"Unable to open {options['input']}: {exc}") from exc
        with handle:
            self._run(handle, options)

    def _run(self, lines, options):
        if options["dry_run"]:
            dry_run(lines, self.stdout)
            return

        using = options["database"]
        self._check_storage(using)

        accesslog_settings = getattr(settings, "ACCESSLOG", {}) or {}
        ip_filter = set(accesslog_settings.get("filter_ips") or []) | set(options["filter_ips"])
        summary = persist_logs(lines, options["buffer"], ip_filter, using=using)
        if options["verbosity"] > 1:
            self.stderr.write(
                f"batches={summary.batches} attempted={summary.attempted} "
                f"succeeded={summary.succeeded} failed_batches={summary.failed_batches}"
            )

    @staticmethod
    def _check_storage(using: str) -> None:
        if using not in connections:
            raise CommandError(f"Unknown database alias: {using}")
        connection = connections[using]
        try:
            connection.ensure_connection()
            tables = connection.introspection.table_names()
        except DatabaseError as exc:
            raise CommandError(f"Unable to connect to database {using}: {exc}") from exc
        if AccessLog._meta.db_table not in tables:
            raise CommandError(
                f"Table {AccessLog._meta.db_table!r} missing from database {using}; run migrate first"
            )
