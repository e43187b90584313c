# primitives/resources/server_info_resource.py
"""Server info resource - server metadata plus a manifest of the registered tools."""

from datetime import datetime, timezone
from typing import Any
import json
import time

from ...config import get_config
from ...handler_registry import TOOL, list_capabilities
from ...resource_decorator import Resource
from ...schemas import describe_model

SERVER_INFO_URI = "server://info"

# Measured from first import, which happens during startup registration
_STARTED_AT = time.monotonic()


def uptime_seconds() -> float:
    return round(time.monotonic() - _STARTED_AT, 3)


def iso_timestamp(now: datetime) -> str:
    """UTC timestamp with millisecond precision and a trailing Z."""
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def tool_manifest() -> list[dict[str, Any]]:
    """Describe each registered tool: name, description and input fields."""
    return [
        {
            "name": capability.name,
            "description": capability.description,
            "input": describe_model(capability.params),
        }
        for capability in list_capabilities(TOOL)
    ]


@Resource(
    SERVER_INFO_URI,
    "현재 서버 정보와 사용 가능한 도구 목록",
    name="server-info",
    mime_type="application/json",
)
def server_info() -> str:
    """Get server information and the tool manifest.

    Recomputed on every read, so ``uptime`` and ``timestamp`` always reflect
    the moment of the request.

    Returns:
        JSON document (indent 2) containing:
            - server.name (str): Server name
            - server.version (str): Server version
            - server.uptime (float): Seconds since startup
            - server.timestamp (str): Current UTC time, ISO 8601
            - tools (list): One entry per registered tool with name,
              description and input (field -> description)
    """
    config = get_config()
    info = {
        "server": {
            "name": config.server_name,
            "version": config.server_version,
            "uptime": uptime_seconds(),
            "timestamp": iso_timestamp(datetime.now(timezone.utc)),
        },
        "tools": tool_manifest(),
    }
    return json.dumps(info, indent=2, ensure_ascii=False)
