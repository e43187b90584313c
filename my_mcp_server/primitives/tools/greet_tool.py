"""Greet tool - returns a greeting in Korean or English."""
from typing import Literal

from pydantic import Field

from ...schemas import Params
from ...tool_decorator import Tool


class GreetParams(Params):
    name: str = Field(description="인사할 사람의 이름")
    language: Literal["ko", "en"] = Field(default="en", description="인사 언어")


@Tool(
    "greet",
    "이름과 언어를 입력하면 인사말을 반환합니다.",
    params=GreetParams,
)
def greet(name: str, language: str = "en") -> str:
    if language == "ko":
        return f"안녕하세요, {name}님!"
    return f"Hey there, {name}! 👋 Nice to meet you!"
