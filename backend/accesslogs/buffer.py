from typing import Callable, Iterable, List

BatchSink = Callable[[List[str]], object]


class IngestionBuffer:
    """
    Accumulates raw lines and hands them to ``on_batch`` in groups of
    ``threshold``.

    The same list is handed over every time and cleared once the sink
    returns, so memory stays bounded by ``threshold`` lines however long
    the input stream runs. Sinks must not keep a reference to the batch.
    """

    def __init__(self, threshold: int, on_batch: BatchSink) -> None:
        if threshold < 1:
            raise ValueError(f"threshold must be >= 1, got {threshold}")
        self.threshold = threshold
        self.on_batch = on_batch
        self._lines: List[str] = []

    @property
    def pending(self) -> int:
        return len(self._lines)

    def push(self, line: str) -> bool:
        """Add one line; returns True when it completed a batch."""
        self._lines.append(line)
        if len(self._lines) >= self.threshold:
            self._drain()
            return True
        return False

    def flush(self) -> bool:
        """Hand over a trailing partial batch, if any."""
        if not self._lines:
            return False
        self._drain()
        return True

    def feed(self, lines: Iterable[str]) -> int:
        batches = 0
        for line in lines:
            if self.push(line):
                batches += 1
        if self.flush():
            batches += 1
        return batches

    def _drain(self) -> None:
        try:
            self.on_batch(self._lines)
        finally:
            self._lines.clear()
