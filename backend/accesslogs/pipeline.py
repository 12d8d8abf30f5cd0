from dataclasses import dataclass
from typing import Iterable, TextIO, Tuple

from accesslogs.buffer import IngestionBuffer
from accesslogs.errors import is_parse_error
from accesslogs.parsers.nginx import parse_line
from accesslogs.persist import PersistReport, Persister


@dataclass
class PipelineSummary:
    batches: int = 0
    attempted: int = 0
    succeeded: int = 0
    failed_batches: int = 0

    def add(self, report: PersistReport) -> None:
        self.batches += 1
        self.attempted += report.attempted
        self.succeeded += report.succeeded
        if not report.ok:
            self.failed_batches += 1


def persist_logs(
    lines: Iterable[str],
    threshold: int,
    ip_filter: Iterable[str] = (),
    using: str = "default",
) -> PipelineSummary:
    """Read ``lines`` until exhausted, persisting them in batches of ``threshold``."""
    persister = Persister(ip_filter=ip_filter, using=using)
    summary = PipelineSummary()

    def _on_batch(batch):
        summary.add(persister.persist(batch))

    IngestionBuffer(threshold, _on_batch).feed(lines)
    return summary


def dry_run(lines: Iterable[str], out: TextIO) -> Tuple[int, int]:
    """
    Print the parse result of every line without touching storage.

    Stops early, without error, once ``out`` is closed by the reader
    (e.g. output piped to ``head``).
    """
    ok = failed = 0
    for line in lines:
        result = parse_line(line)
        try:
            if is_parse_error(result):
                failed += 1
                out.write(f"error: {result}\n")
            else:
                ok += 1
                out.write(f"line: {result}\n")
            out.flush()
        except BrokenPipeError:
            break
    return ok, failed
