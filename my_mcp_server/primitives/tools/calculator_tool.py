"""Calculator tool - the four basic arithmetic operations on two numbers."""
from typing import Callable, Literal
import operator as _operator

from pydantic import Field

from ...handler_wrappers import HandlerError
from ...schemas import Params
from ...tool_decorator import Tool
from ._format_helpers import format_number

# operator -> (display symbol, function)
_OPERATIONS: dict[str, tuple[str, Callable[[float, float], float]]] = {
    "+": ("+", _operator.add),
    "-": ("-", _operator.sub),
    "*": ("×", _operator.mul),
    "/": ("÷", _operator.truediv),
}


class CalculatorParams(Params):
    num1: float = Field(description="첫 번째 숫자")
    num2: float = Field(description="두 번째 숫자")
    operator: Literal["+", "-", "*", "/"] = Field(description="연산자 (+, -, *, /)")


@Tool(
    "calculator",
    "두 개의 숫자와 연산자를 입력받아 사칙연산 결과를 반환합니다.",
    params=CalculatorParams,
)
def calculator(num1: float, num2: float, operator: str) -> str:
    if operator not in _OPERATIONS:
        raise HandlerError("지원하지 않는 연산자입니다.", operator=operator)
    if operator == "/" and num2 == 0:
        raise HandlerError("0으로 나눌 수 없습니다.")

    symbol, operation = _OPERATIONS[operator]
    result = operation(num1, num2)
    return f"{format_number(num1)} {symbol} {format_number(num2)} = {format_number(result)}"
