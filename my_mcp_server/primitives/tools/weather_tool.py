"""Weather tool - current conditions and daily forecast from Open-Meteo."""
from datetime import date
from typing import Any, Optional
import logging

from pydantic import Field, field_validator

from ...handler_wrappers import HandlerError
from ...http_client import get_json
from ...schemas import Params
from ...tool_decorator import Tool
from ._format_helpers import format_number

logger = logging.getLogger(__name__)

OPEN_METEO_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"

# WMO weather interpretation codes used by Open-Meteo
WEATHER_CODES: dict[int, str] = {
    0: "맑음",
    1: "대체로 맑음",
    2: "부분적으로 흐림",
    3: "흐림",
    45: "안개",
    48: "서리 안개",
    51: "약한 이슬비",
    53: "중간 이슬비",
    55: "강한 이슬비",
    56: "약한 동결 이슬비",
    57: "강한 동결 이슬비",
    61: "약한 비",
    63: "중간 비",
    65: "강한 비",
    66: "약한 동결 비",
    67: "강한 동결 비",
    71: "약한 눈",
    73: "중간 눈",
    75: "강한 눈",
    77: "눈알",
    80: "약한 소나기",
    81: "중간 소나기",
    82: "강한 소나기",
    85: "약한 눈 소나기",
    86: "강한 눈 소나기",
    95: "뇌우",
    96: "우박을 동반한 뇌우",
    99: "강한 우박을 동반한 뇌우",
}


class WeatherParams(Params):
    latitude: float = Field(ge=-90, le=90, description="위도 (latitude, -90 ~ 90)")
    longitude: float = Field(ge=-180, le=180, description="경도 (longitude, -180 ~ 180)")
    forecast_days: int = Field(
        default=7,
        ge=1,
        le=16,
        alias="forecastDays",
        description="예보 기간 (일 단위, 1~16일, 기본값: 7일)",
    )

    @field_validator("forecast_days", mode="before")
    @classmethod
    def _integral_float_days(cls, value: Any) -> Any:
        # JSON clients may send 7.0 for 7
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value


def describe_weather_code(code: Any) -> str:
    """Human-readable description for a WMO weather code."""
    if isinstance(code, float) and code.is_integer():
        code = int(code)
    if isinstance(code, int) and not isinstance(code, bool) and code in WEATHER_CODES:
        return WEATHER_CODES[code]
    return f"날씨 코드: {format_number(code)}"


def _at(values: Optional[list], index: int) -> Any:
    if not values or index >= len(values):
        return None
    return values[index]


def _short_date(value: str) -> str:
    try:
        day = date.fromisoformat(value)
    except (TypeError, ValueError):
        return str(value)
    return f"{day.month}/{day.day}"


def format_weather(data: dict[str, Any], forecast_days: int) -> str:
    """Render an Open-Meteo forecast response as text."""
    current = data["current_weather"]
    lines = [
        "=== 현재 날씨 ===",
        f"온도: {format_number(current.get('temperature'))}°C",
        f"날씨: {describe_weather_code(current.get('weathercode'))}",
        f"풍속: {format_number(current.get('windspeed'))} km/h",
        f"풍향: {format_number(current.get('winddirection'))}°",
        "",
    ]
    text = "\n".join(lines) + "\n"

    daily = data.get("daily") or {}
    times = daily.get("time")
    if times:
        text += f"=== {forecast_days}일 예보 ===\n"
        max_temps = daily.get("temperature_2m_max") or []
        min_temps = daily.get("temperature_2m_min") or []
        precipitations = daily.get("precipitation_sum") or []
        codes = daily.get("weathercode") or []

        for i in range(min(len(times), forecast_days)):
            text += f"\n{_short_date(times[i])} ({times[i]})\n"
            text += f"  날씨: {describe_weather_code(_at(codes, i))}\n"
            text += (
                f"  최고: {format_number(_at(max_temps, i))}°C"
                f" / 최저: {format_number(_at(min_temps, i))}°C\n"
            )
            precipitation = _at(precipitations, i)
            if isinstance(precipitation, (int, float)) and precipitation > 0:
                text += f"  강수량: {format_number(precipitation)} mm\n"

    return text


@Tool(
    "get-weather",
    "위도와 경도 좌표, 예보 기간을 입력받아서 해당 위치의 현재 날씨와 예보 정보를 제공합니다.",
    params=WeatherParams,
)
async def get_weather(latitude: float, longitude: float, forecast_days: int = 7) -> str:
    data = await get_json(
        OPEN_METEO_FORECAST_URL,
        params={
            "latitude": latitude,
            "longitude": longitude,
            "current_weather": "true",
            "hourly": "temperature_2m,precipitation,weathercode",
            "daily": "temperature_2m_max,temperature_2m_min,precipitation_sum,weathercode",
            "forecast_days": forecast_days,
            "timezone": "auto",
        },
    )

    if not isinstance(data, dict) or not data.get("current_weather"):
        raise HandlerError("날씨 데이터를 가져올 수 없습니다.")

    logger.debug("Weather for %s,%s: %d forecast days", latitude, longitude, forecast_days)
    return format_weather(data, forecast_days)
