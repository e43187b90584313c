"""Time tool - current wall-clock time at a fixed UTC offset."""
from datetime import datetime, timedelta, timezone
import re

from pydantic import Field

from ...handler_wrappers import HandlerError
from ...schemas import Params
from ...tool_decorator import Tool

TIMEZONE_PATTERN = r"^UTC[+-]\d+$"
_TIMEZONE_RE = re.compile(r"^UTC([+-])(\d+)$")

UTC = timezone.utc


class TimeParams(Params):
    timezone: str = Field(
        description="시간대 (예: UTC+9, UTC+0, UTC-5)",
        pattern=TIMEZONE_PATTERN,
    )


def parse_offset(tz: str) -> timedelta:
    """Parse "UTC+9" / "UTC-5" into a timedelta.

    Raises:
        HandlerError: If ``tz`` is not in UTC+N / UTC-N form
    """
    match = _TIMEZONE_RE.fullmatch(tz)
    if not match:
        raise HandlerError(
            "잘못된 시간대 형식입니다. UTC+숫자 또는 UTC-숫자 형식을 사용해주세요.",
            timezone=tz,
        )
    sign = 1 if match.group(1) == "+" else -1
    return timedelta(hours=sign * int(match.group(2)))


@Tool(
    "time",
    "시간대를 입력받아 해당 시간대의 현재 시각을 반환합니다.",
    params=TimeParams,
)
def current_time(timezone: str) -> str:
    try:
        target = datetime.now(UTC) + parse_offset(timezone)
    except OverflowError:
        raise HandlerError("시간대 오프셋이 너무 큽니다.", timezone=timezone) from None
    return f"{timezone} 시간대의 현재 시각: {target.strftime('%Y-%m-%d %H:%M:%S')}"
