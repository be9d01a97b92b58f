"""Parse and check the numbers typed into the scale forms."""

from __future__ import annotations

from typing import Literal, NamedTuple

from ..errors import ScaleValidationError

MAX_INT32 = 2**31 - 1

Mode = Literal["Manual", "Automatic"]


class ServiceScale(NamedTuple):
    min_count: int
    max_count: int
    manual: int


def _parse(value: str, what: str) -> int:
    try:
        number = int(value.strip())
    except ValueError:
        raise ScaleValidationError(f"invalid {what}") from None
    if number < 0 or number > MAX_INT32:
        raise ScaleValidationError(f"invalid {what}")
    return number


def validate_service_scale(mode: Mode, manual: str, min_count: str, max_count: str) -> ServiceScale:
    if mode == "Manual":
        return ServiceScale(0, 0, _parse(manual, "manual instance count"))
    low = _parse(min_count, "min instance count")
    high = _parse(max_count, "max instance count") if max_count.strip() else 0
    if high and low > high:
        raise ScaleValidationError("min instances cannot be greater than max instances")
    return ServiceScale(low, high, 0)


def validate_workerpool_scale(count: str) -> int:
    return _parse(count, "instance count")
