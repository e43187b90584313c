"""
Shared Pydantic schemas for capability inputs.

Every tool and prompt declares its input shape as a subclass of ``Params``.
These models serve three purposes:
1. Runtime validation of raw wire arguments (done once, in the dispatcher)
2. The JSON schema advertised to MCP clients (``inputSchema``)
3. Human-readable field descriptions for the server-info manifest

Usage:
    class GreetParams(Params):
        name: str = Field(description="인사할 사람의 이름")
        language: Literal["ko", "en"] = Field("en", description="인사 언어")
"""

import json
import types
from typing import Any, Literal, Optional, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict
from pydantic.fields import FieldInfo


class Params(BaseModel):
    """Base class for capability input models.

    Strict mode: "5" is not a number and 1 is not a string, matching the
    types a JSON client sends. Unknown keys are dropped. Fields with an alias
    (e.g. ``forecastDays``) accept either spelling.
    """

    model_config = ConfigDict(strict=True, extra="ignore", populate_by_name=True)


class NoParams(Params):
    """Input model for capabilities that take no arguments."""


def input_schema(model: type[BaseModel]) -> dict[str, Any]:
    """JSON schema for a params model, using wire (alias) names."""
    schema = model.model_json_schema(by_alias=True)
    schema.setdefault("type", "object")
    schema.setdefault("properties", {})
    return schema


def wire_name(name: str, info: FieldInfo) -> str:
    return info.alias or name


def _type_tag(annotation: Any) -> str:
    origin = get_origin(annotation)
    if origin is Literal:
        return "enum[" + ", ".join(json.dumps(v, ensure_ascii=False) for v in get_args(annotation)) + "]"
    if origin is Union or (hasattr(types, "UnionType") and isinstance(annotation, types.UnionType)):
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return _type_tag(args[0])
        return " | ".join(_type_tag(a) for a in args)
    if annotation in (int, float):
        return "number"
    if annotation is str:
        return "string"
    if annotation is bool:
        return "boolean"
    return getattr(annotation, "__name__", str(annotation))


def _range(info: FieldInfo) -> Optional[str]:
    low = high = None
    # Constraints are stored as annotated_types Ge / Gt / Le / Lt markers
    for meta in info.metadata:
        low = getattr(meta, "ge", getattr(meta, "gt", low))
        high = getattr(meta, "le", getattr(meta, "lt", high))
    if low is None and high is None:
        return None
    return f"{'' if low is None else low} ~ {'' if high is None else high}".strip()


def describe_field(info: FieldInfo) -> str:
    """One-line description of a field for the server-info manifest.

    Examples:
        ``string - 인사할 사람의 이름``
        ``enum["ko", "en"] (optional, default: "en") - 인사 언어``
        ``number (-90 ~ 90) - 위도``
    """
    parts = [_type_tag(info.annotation)]
    qualifiers = []
    bounds = _range(info)
    if bounds:
        qualifiers.append(bounds)
    if not info.is_required():
        default = info.get_default(call_default_factory=True)
        if default is None:
            qualifiers.append("optional")
        else:
            qualifiers.append(f"optional, default: {json.dumps(default, ensure_ascii=False)}")
    if qualifiers:
        parts.append(f"({', '.join(qualifiers)})")
    text = " ".join(parts)
    if info.description:
        text += f" - {info.description}"
    return text


def describe_model(model: type[BaseModel]) -> dict[str, str]:
    """Map each wire field name of ``model`` to its manifest description."""
    return {
        wire_name(name, info): describe_field(info)
        for name, info in model.model_fields.items()
    }
