from typing import Iterable, List, Tuple

import pandas as pd

from accesslogs.queries import Range


def bucket_index(rng: Range, interval: int) -> pd.RangeIndex:
    """Millisecond start of every ``interval`` bucket overlapping ``rng``."""
    step = interval * 1000
    start, end = rng.start_epoch, rng.end_epoch
    if end <= start:
        return pd.RangeIndex(0, 0, step)
    first = start // interval
    last = (end - 1) // interval
    return pd.RangeIndex(first * step, (last + 1) * step, step)


def fill_datapoints(
    points: Iterable[Tuple[int, int]], rng: Range, interval: int
) -> List[List[int]]:
    """
    Turn ``(ep_ms, value)`` pairs into Grafana ``[value, ep_ms]``
    datapoints, with a zero for every empty bucket in the range.
    """
    series = pd.Series(dict(points), dtype="int64")
    index = bucket_index(rng, interval).union(series.index)
    filled = series.reindex(index, fill_value=0).sort_index()
    return [[int(value), int(ep)] for ep, value in filled.items()]
