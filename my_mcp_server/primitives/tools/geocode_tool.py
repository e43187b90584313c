"""Geocode tool - resolve a place name or address to coordinates via Nominatim."""
import logging

from pydantic import Field

from ...handler_wrappers import HandlerError
from ...http_client import get_json
from ...schemas import Params
from ...tool_decorator import Tool
from ._format_helpers import format_number

logger = logging.getLogger(__name__)

NOMINATIM_SEARCH_URL = "https://nominatim.openstreetmap.org/search"


class GeocodeParams(Params):
    query: str = Field(description='검색할 도시 이름이나 주소 (예: "서울", "New York", "서울시 강남구")')


def _coordinate(value: object) -> float:
    # Nominatim returns coordinates as strings
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise HandlerError("좌표 정보를 해석할 수 없습니다.", value=value) from None


@Tool(
    "geocode",
    "도시 이름이나 주소를 입력받아서 위도와 경도 좌표를 반환합니다.",
    params=GeocodeParams,
)
async def geocode(query: str) -> str:
    data = await get_json(
        NOMINATIM_SEARCH_URL,
        params={"q": query, "format": "jsonv2", "limit": 1, "addressdetails": 1},
    )

    if not isinstance(data, list) or not data:
        logger.info("No geocoding result for %r", query)
        return f'"{query}"에 대한 검색 결과를 찾을 수 없습니다.'

    result = data[0]
    lat = _coordinate(result.get("lat"))
    lon = _coordinate(result.get("lon"))
    display_name = result.get("display_name") or query

    return f"위치: {display_name}\n위도: {format_number(lat)}\n경도: {format_number(lon)}"
