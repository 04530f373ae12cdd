"""Data models for BeeClear API responses.

Most device responses are passed through as plain dictionaries. The short
form meter reading is derived locally and modeled here.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class MeterReadingsShort(BaseModel):
    """Compact summary of the power and gas meters.

    Power fields are None when the raw reading had no usable power counters,
    gas fields are None when no gas meter is reported. Timestamps are kept
    exactly as the device sent them.

    Example:
        ```python
        readings = await client.get_meter_readings(short=True)
        print(f"Actual power: {readings.pwr} W, gas: {readings.gas} m³")
        ```
    """

    pwr: int | float | None = None  # actual power, consumption - production (W)
    net: float | None = None  # net meter total (kWh), 4 decimals
    p1: float | None = None  # consumption counter low tariff (kWh)
    p2: float | None = None  # consumption counter high tariff (kWh)
    n1: float | None = None  # production counter low tariff (kWh)
    n2: float | None = None  # production counter high tariff (kWh)
    tm: Any = None  # time of the power reading, as reported by the device
    gas: float | None = None  # gas meter counter (m³)
    gtm: Any = None  # time of the last gas measurement, as reported

    def as_dict(self) -> dict[str, Any]:
        """Return only the fields present in this reading."""
        return self.model_dump(exclude_none=True)


__all__ = [
    "MeterReadingsShort",
]
