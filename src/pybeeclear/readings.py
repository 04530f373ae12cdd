"""Short form projection of raw BeeClear meter readings.

The raw ``/bc_current`` payload looks like::

    {
        "d": 1600798993, "ed": 1600798989, "tariefStatus": 2,
        "ul": 12637314, "uh": 8553028, "gl": 4288455, "gh": 10048153,
        "verbruik0": 814, "leveren0": 0, ...,
        "u": 812, "g": 0,
        "gas": [{"slot": 0, "val": 6399475, "time": 1600797600}],
    }

Power counters are in Wh and gas counters in litre; the short form reports
kWh and m³. Power and gas are extracted independently: a payload without
power counters still yields gas fields, and vice versa.
"""

from __future__ import annotations

import logging
from typing import Any

from pybeeclear.constants import METER_SCALE, NET_ROUNDING_DIGITS
from pybeeclear.exceptions import MeterReadingError
from pybeeclear.models import MeterReadingsShort

_LOGGER = logging.getLogger(__name__)

# Raw keys needed for the power summary
_POWER_KEYS = ("u", "g", "ul", "uh", "gl", "gh")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def extract_power(raw: Any) -> dict[str, Any] | None:
    """Derive the power fields of a short form reading.

    The timestamp ``tm`` is taken from ``d`` whenever it is present, even when
    the counters are incomplete.

    Returns:
        Dict with pwr, net, p1, p2, n1, n2 and tm, or None if the payload
        has neither usable power counters nor a timestamp
    """
    if not isinstance(raw, dict):
        return None

    fields: dict[str, Any] = {}
    if "d" in raw:
        fields["tm"] = raw["d"]
    if not all(_is_number(raw.get(key)) for key in _POWER_KEYS):
        return fields or None

    offpeak = raw["ul"] / METER_SCALE
    peak = raw["uh"] / METER_SCALE
    offpeak_produced = raw["gl"] / METER_SCALE
    peak_produced = raw["gh"] / METER_SCALE

    fields.update(
        pwr=raw["u"] - raw["g"],
        net=round(peak + offpeak - peak_produced - offpeak_produced, NET_ROUNDING_DIGITS),
        p1=offpeak,
        p2=peak,
        n1=offpeak_produced,
        n2=peak_produced,
    )
    return fields


def extract_gas(raw: Any) -> dict[str, Any] | None:
    """Derive the gas fields of a short form reading from the first gas slot.

    Returns:
        Dict with gas and gtm, or None if no gas meter is reported
    """
    if not isinstance(raw, dict):
        return None
    slots = raw.get("gas")
    if not isinstance(slots, list) or not slots:
        return None
    first = slots[0]
    if not isinstance(first, dict) or not _is_number(first.get("val")):
        return None

    return {
        "gas": first["val"] / METER_SCALE,
        "gtm": first.get("time"),
    }


def to_short_readings(raw: Any) -> MeterReadingsShort:
    """Reduce a raw meter reading to its short form.

    Raises:
        MeterReadingError: If neither a power nor a gas timestamp was found
    """
    fields: dict[str, Any] = {}

    power = extract_power(raw)
    if power is None:
        _LOGGER.debug("No power readings available in meter payload")
    else:
        fields.update(power)

    gas = extract_gas(raw)
    if gas is None:
        _LOGGER.debug("No gas readings available in meter payload")
    else:
        fields.update(gas)

    if not fields.get("tm") and not fields.get("gtm"):
        raise MeterReadingError("Error parsing meter info")

    return MeterReadingsShort(**fields)


__all__ = [
    "extract_gas",
    "extract_power",
    "to_short_readings",
]
