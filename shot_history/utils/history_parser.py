"""Default parser for raw shot records.

A raw record is ``{"id": "000042", "history": "<text>"}`` where the text is a
header line ``version,profile,timestamp`` followed by one comma separated
sample per line.
"""

import logging
from typing import Any, List, Optional

from shot_history.core.models import HistoryItem, ShotSample

logger = logging.getLogger("ShotHistory.HistoryParser")

SAMPLE_FIELD_COUNT = 11


def _parse_sample(line: str) -> Optional[ShotSample]:
    parts = line.split(",")
    if len(parts) < SAMPLE_FIELD_COUNT:
        return None
    try:
        values = [float(p) for p in parts[:SAMPLE_FIELD_COUNT]]
    except ValueError:
        return None
    return ShotSample(int(values[0]), *values[1:])


def _parse_header(line: str):
    # Profile labels may contain commas; version is first, timestamp last.
    parts = line.split(",")
    if len(parts) < 3:
        return None
    version = parts[0].strip()
    profile = ",".join(parts[1:-1]).strip()
    try:
        timestamp = int(parts[-1].strip())
    except ValueError:
        return None
    if not version:
        return None
    return version, profile, timestamp


def parse_history_data(raw: Any) -> Optional[HistoryItem]:
    """Turn one raw record into a HistoryItem.

    Returns None for anything that does not look like a shot record.
    """
    if not isinstance(raw, dict):
        return None

    item_id = raw.get("id")
    if item_id is None or isinstance(item_id, bool) or str(item_id).strip() == "":
        return None

    text = raw.get("history")
    if not isinstance(text, str) or not text.strip():
        return None

    lines = text.strip().splitlines()
    header = _parse_header(lines[0])
    if header is None:
        logger.debug(f"Dropping record {item_id}: bad header {lines[0]!r}")
        return None

    samples: List[ShotSample] = []
    for line in lines[1:]:
        if not line.strip():
            continue
        sample = _parse_sample(line)
        if sample is not None:
            samples.append(sample)

    version, profile, timestamp = header
    return HistoryItem(
        id=str(item_id).strip(),
        version=version,
        profile=profile,
        timestamp=timestamp,
        samples=tuple(samples),
    )
