"""Grouping of split-fill export rows and synthetic transaction identity"""
import hashlib
from datetime import datetime
from typing import Callable, Iterable, List, Sequence, TypeVar

T = TypeVar('T')

def group_by_time(records: Iterable[T],
                  timestamp_of: Callable[[T], datetime],
                  tolerance_seconds: float = 5) -> List[List[T]]:
    """
    Cluster records that were reported within a few seconds of each other.

    Records are sorted by timestamp and walked once; a record joins the current
    group when its gap to the group's last-added record is at most the
    tolerance. A chain of small gaps can therefore span longer than the
    tolerance from the group's first record.
    """
    groups: List[List[T]] = []
    current: List[T] = []

    for record in sorted(records, key=timestamp_of):
        if not current:
            current.append(record)
            continue

        gap = abs((timestamp_of(record) - timestamp_of(current[-1])).total_seconds())
        if gap <= tolerance_seconds:
            current.append(record)
        else:
            groups.append(current)
            current = [record]

    if current:
        groups.append(current)

    return groups

def group_hash(native_ids: Sequence[str]) -> str:
    """Stable hash of the sorted member ids, independent of input order"""
    digest = hashlib.sha256('\n'.join(sorted(native_ids)).encode('utf-8')).hexdigest()
    return digest[:16]

def grouped_provider_id(provider: str, native_ids: Sequence[str]) -> str:
    """
    "{provider}_{id}" for a single row, "{provider}_group_{hash}" for a group
    """
    if len(native_ids) == 1:
        return f"{provider}_{native_ids[0]}"
    return f"{provider}_group_{group_hash(native_ids)}"

def fingerprint_provider_id(provider: str, timestamp: datetime, amount_sats: int) -> str:
    """
    "{provider}_{unix}_{sats}" for exports without per-row ids.
    Two distinct same-second, same-amount transactions collide by construction.
    """
    return f"{provider}_{int(timestamp.timestamp())}_{amount_sats}"
