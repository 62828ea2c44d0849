from typing import Iterable

from .types import NightlyBodyRecord, OutputMode, Tier


def is_reportable(record: NightlyBodyRecord, mode: OutputMode) -> bool:
    if mode == OutputMode.VERBOSE:
        return True
    return record.best_tier.rank <= Tier.FAIR.rank


def filter_records(
    records: Iterable[NightlyBodyRecord], mode: OutputMode
) -> list[NightlyBodyRecord]:
    return [r for r in records if is_reportable(r, mode)]
