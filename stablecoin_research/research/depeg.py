"""Depeg detection over a daily price series."""
from __future__ import annotations

from typing import Sequence, Tuple

from stablecoin_research.catalog.explanations import HISTORICAL_DEPEGS
from stablecoin_research.research.models import DepegEvent, PricePoint

DEPEG_THRESHOLD_PERCENT = 1.0


def detect_depeg_events(
    points: Sequence[PricePoint],
    peg: float = 1.0,
    threshold_percent: float = DEPEG_THRESHOLD_PERCENT,
) -> Tuple[DepegEvent, ...]:
    """Days whose price strays more than `threshold_percent` from `peg`."""
    events = []
    for point in points:
        deviation = abs(point.price - peg) / peg * 100
        if deviation > threshold_percent:
            events.append(DepegEvent(
                timestamp=point.date,
                deviation_percent=round(deviation, 2),
                price=point.price,
            ))
    return tuple(events)


def historical_depeg_events(symbol: str) -> Tuple[DepegEvent, ...]:
    return tuple(
        DepegEvent(
            timestamp=event.date,
            deviation_percent=round(abs(event.low_price - 1.0) * 100, 2),
            price=event.low_price,
            cause=event.cause,
        )
        for event in HISTORICAL_DEPEGS.get(symbol.upper(), ())
    )
