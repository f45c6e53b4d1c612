"""Read daily price files into ``PricePoint`` series.

Accepted columns: ``timestamp`` (epoch milliseconds) or ``date`` (ISO date),
and ``price`` or ``close``. Rows with missing or non-positive prices are
dropped; the result is sorted and de-duplicated by timestamp.
"""

from __future__ import annotations

import csv
import math
from datetime import date
from pathlib import Path
from typing import Optional

from riskdca.errors import PriceDataError
from riskdca.logging import get_logger
from riskdca.risk.models import PricePoint, timestamp_for

logger = get_logger(__name__)

_PRICE_COLUMNS = ("price", "close", "adjclose")


def load_price_series(path: str | Path) -> list[PricePoint]:
    path = Path(path)
    if not path.exists():
        raise PriceDataError(f"Price file not found: {path}", path=str(path))

    with path.open(newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        fields = [name.strip().lower() for name in reader.fieldnames or []]
        price_column = next((name for name in _PRICE_COLUMNS if name in fields), None)
        if price_column is None or ("timestamp" not in fields and "date" not in fields):
            raise PriceDataError(
                "Price file needs a timestamp or date column and a price or close column",
                path=str(path),
                context={"columns": fields},
            )

        by_timestamp: dict[int, PricePoint] = {}
        dropped = 0
        for row in reader:
            normalized = {key.strip().lower(): (value or "").strip() for key, value in row.items() if key}
            point = _parse_row(normalized, price_column)
            if point is None:
                dropped += 1
                continue
            by_timestamp[point.timestamp] = point

    if dropped:
        logger.warning("price_rows_dropped", path=str(path), dropped=dropped)
    series = [by_timestamp[key] for key in sorted(by_timestamp)]
    logger.info("price_series_loaded", path=str(path), points=len(series))
    return series


def _parse_row(row: dict[str, str], price_column: str) -> Optional[PricePoint]:
    try:
        price = float(row.get(price_column, ""))
    except ValueError:
        return None
    if not math.isfinite(price) or price <= 0:
        return None

    raw_timestamp = row.get("timestamp")
    try:
        if raw_timestamp:
            timestamp = int(float(raw_timestamp))
        else:
            timestamp = timestamp_for(date.fromisoformat(row.get("date", "")[:10]))
    except ValueError:
        return None
    return PricePoint(timestamp=timestamp, price=price)
