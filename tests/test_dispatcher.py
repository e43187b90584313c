"""Tests for argument validation, invocation and result shaping."""
from __future__ import annotations

import asyncio
from typing import Optional

import pytest
from pydantic import Field

from my_mcp_server import dispatcher
from my_mcp_server.handler_registry import (
    PROMPT,
    RESOURCE,
    TOOL,
    InvalidArgumentError,
    UnknownCapabilityError,
)
from my_mcp_server.handler_wrappers import HandlerError
from my_mcp_server.invocation import (
    InvocationRequest,
    PromptMessage,
    PromptResult,
    ResourceResult,
    TextBlock,
    ToolResult,
)
from my_mcp_server.prompt_decorator import Prompt
from my_mcp_server.resource_decorator import Resource
from my_mcp_server.schemas import Params
from my_mcp_server.tool_decorator import Tool


class RepeatParams(Params):
    text: str = Field(description="Text to repeat")
    times: int = Field(default=1, ge=1, le=5, alias="repeatCount", description="Repetitions")


class TopicParams(Params):
    topic: str = Field(description="Topic")
    tone: Optional[str] = Field(default=None, description="Tone")


@pytest.fixture
def calls(isolated_registry):
    """Register sample capabilities and record handler calls."""
    seen: list[dict] = []

    @Tool("repeat", "Repeat text", params=RepeatParams)
    def repeat(text: str, times: int = 1) -> str:
        seen.append({"text": text, "times": times})
        return " ".join([text] * times)

    @Tool("lines", "Two blocks")
    def lines() -> list[str]:
        return ["first", "second"]

    @Tool("fail", "Always fails")
    def fail() -> str:
        raise HandlerError("upstream down", hint="try later", status=503)

    @Tool("crash", "Unexpected failure")
    async def crash() -> str:
        raise RuntimeError("boom")

    @Tool("silent-crash", "Failure without a message")
    def silent_crash() -> str:
        raise ValueError()

    @Tool("bad-return", "Returns a number")
    def bad_return() -> int:
        return 42

    @Tool("slow", "Awaits before answering", params=RepeatParams)
    async def slow(text: str, times: int = 1) -> str:
        await asyncio.sleep(0.01 * times)
        return text

    @Resource("test://doc", "A JSON document", name="doc", mime_type="application/json")
    def doc() -> str:
        return '{"ok": true}'

    @Resource("test://broken", "A broken JSON document", name="broken", mime_type="application/json")
    def broken() -> str:
        raise HandlerError("not available")

    @Resource("test://quoted", "JSON that happens to start like an error", name="quoted", mime_type="application/json")
    def quoted() -> str:
        return '오류: {"ok": true}'

    @Prompt("explain", "Explain a topic", params=TopicParams)
    def explain(topic: str, tone: Optional[str] = None) -> str:
        return f"Explain {topic}" + (f" in a {tone} tone" if tone else "")

    return seen


class TestToolInvocation:
    """Tests for successful tool calls."""

    @pytest.mark.asyncio
    async def test_returns_text_and_structured_mirror(self, calls):
        """Content and structured content carry the same text."""
        result = await dispatcher.invoke(TOOL, "repeat", {"text": "hi", "repeatCount": 2})

        assert isinstance(result, ToolResult)
        assert result.text == "hi hi"
        assert result.structured_content == {"content": [{"type": "text", "text": "hi hi"}]}

    @pytest.mark.asyncio
    async def test_defaults_are_applied(self, calls):
        await dispatcher.invoke(TOOL, "repeat", {"text": "hi"})
        assert calls == [{"text": "hi", "times": 1}]

    @pytest.mark.asyncio
    async def test_python_field_name_is_accepted(self, calls):
        """Aliased fields also accept their Python name."""
        await dispatcher.invoke(TOOL, "repeat", {"text": "hi", "times": 3})
        assert calls == [{"text": "hi", "times": 3}]

    @pytest.mark.asyncio
    async def test_unknown_keys_are_ignored(self, calls):
        result = await dispatcher.invoke(TOOL, "repeat", {"text": "hi", "extra": True})
        assert result.text == "hi"

    @pytest.mark.asyncio
    async def test_missing_arguments_treated_as_empty(self, calls):
        result = await dispatcher.invoke(TOOL, "lines", None)
        assert [block.text for block in result.content] == ["first", "second"]

    @pytest.mark.asyncio
    async def test_process_takes_request(self, calls):
        result = await dispatcher.process(
            InvocationRequest(category=TOOL, name="repeat", arguments={"text": "yo"})
        )
        assert result.text == "yo"

    @pytest.mark.asyncio
    async def test_concurrent_invocations_are_independent(self, calls):
        """Interleaved calls each get their own result."""
        results = await asyncio.gather(
            dispatcher.invoke(TOOL, "slow", {"text": "a", "times": 3}),
            dispatcher.invoke(TOOL, "slow", {"text": "b", "times": 1}),
            dispatcher.invoke(TOOL, "slow", {"text": "c", "times": 2}),
        )
        assert [r.text for r in results] == ["a", "b", "c"]


class TestProtocolErrors:
    """Unknown capabilities and invalid arguments raise instead of returning text."""

    @pytest.mark.asyncio
    async def test_unknown_tool(self, calls):
        with pytest.raises(UnknownCapabilityError):
            await dispatcher.invoke(TOOL, "missing", {})

    @pytest.mark.asyncio
    async def test_missing_required_field(self, calls):
        """Validation fails before the handler runs."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            await dispatcher.invoke(TOOL, "repeat", {})

        assert calls == []
        assert [v["field"] for v in exc_info.value.violations] == ["text"]
        assert "repeat" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_string_is_not_a_number(self, calls):
        """Strict validation: "2" does not coerce to 2."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            await dispatcher.invoke(TOOL, "repeat", {"text": "hi", "repeatCount": "2"})

        assert exc_info.value.violations[0]["field"] == "repeatCount"
        assert exc_info.value.violations[0]["value"] == "2"
        assert "(got '2')" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_out_of_range_value(self, calls):
        with pytest.raises(InvalidArgumentError):
            await dispatcher.invoke(TOOL, "repeat", {"text": "hi", "repeatCount": 9})
        assert calls == []


class TestDomainErrors:
    """Handler failures become ordinary "오류: ..." text."""

    @pytest.mark.asyncio
    async def test_handler_error_with_hint(self, calls):
        result = await dispatcher.invoke(TOOL, "fail")
        assert result.text == "오류: upstream down (try later)"
        assert result.structured_content == {"content": [{"type": "text", "text": result.text}]}

    @pytest.mark.asyncio
    async def test_unexpected_exception(self, calls):
        result = await dispatcher.invoke(TOOL, "crash")
        assert result.text == "오류: boom"

    @pytest.mark.asyncio
    async def test_exception_without_message(self, calls):
        result = await dispatcher.invoke(TOOL, "silent-crash")
        assert result.text == "오류: 알 수 없는 오류가 발생했습니다."

    @pytest.mark.asyncio
    async def test_unsupported_return_type(self, calls):
        result = await dispatcher.invoke(TOOL, "bad-return")
        assert result.text.startswith("오류: Handler returned unsupported type")

    @pytest.mark.asyncio
    async def test_error_blocks_are_flagged(self, calls):
        failed = await dispatcher.invoke(TOOL, "fail")
        ok = await dispatcher.invoke(TOOL, "repeat", {"text": "오류: hi"})

        assert [block.is_error for block in failed.content] == [True]
        assert [block.is_error for block in ok.content] == [False]

    def test_error_flag_is_not_serialized(self):
        block = TextBlock.error("오류: boom")

        assert block.is_error
        assert block.model_dump() == {"type": "text", "text": "오류: boom"}
        assert "is_error" not in TextBlock.model_json_schema()["properties"]


class TestResourceInvocation:
    """Tests for resource reads."""

    @pytest.mark.asyncio
    async def test_read_returns_uri_and_mime_type(self, calls):
        result = await dispatcher.invoke(RESOURCE, "test://doc")

        assert isinstance(result, ResourceResult)
        contents = result.contents[0]
        assert contents.uri == "test://doc"
        assert contents.mime_type == "application/json"
        assert contents.text == '{"ok": true}'

    @pytest.mark.asyncio
    async def test_error_text_is_not_labelled_json(self, calls):
        result = await dispatcher.invoke(RESOURCE, "test://broken")

        contents = result.contents[0]
        assert contents.text == "오류: not available"
        assert contents.mime_type == "text/plain"

    @pytest.mark.asyncio
    async def test_successful_text_keeps_declared_mime_type(self, calls):
        """Only a failed read is relabelled, whatever the text looks like."""
        result = await dispatcher.invoke(RESOURCE, "test://quoted")

        contents = result.contents[0]
        assert contents.text == '오류: {"ok": true}'
        assert contents.mime_type == "application/json"

    @pytest.mark.asyncio
    async def test_unknown_uri(self, calls):
        with pytest.raises(UnknownCapabilityError):
            await dispatcher.invoke(RESOURCE, "test://missing")


class TestPromptInvocation:
    """Tests for prompt rendering."""

    @pytest.mark.asyncio
    async def test_single_user_message(self, calls):
        result = await dispatcher.invoke(PROMPT, "explain", {"topic": "asyncio", "tone": "casual"})

        assert isinstance(result, PromptResult)
        assert result.description == "Explain a topic"
        assert len(result.messages) == 1
        assert result.messages[0].role == "user"
        assert result.messages[0].content.text == "Explain asyncio in a casual tone"

    @pytest.mark.asyncio
    async def test_optional_argument_omitted(self, calls):
        result = await dispatcher.invoke(PROMPT, "explain", {"topic": "asyncio"})
        assert result.messages[0].content.text == "Explain asyncio"

    def test_describe_arguments(self, calls):
        from my_mcp_server.handler_registry import get_capability

        assert dispatcher.describe_arguments(get_capability(PROMPT, "explain")) == [
            {"name": "topic", "description": "Topic", "required": True},
            {"name": "tone", "description": "Tone", "required": False},
        ]

    @pytest.mark.asyncio
    async def test_role_tagged_messages(self, isolated_registry):
        """Prompts may return PromptMessage items mixed with plain strings."""
        @Prompt("dialogue", "A short exchange")
        def dialogue() -> list:
            return [
                PromptMessage(role="assistant", content=TextBlock(text="How can I help?")),
                "Review my code",
            ]

        result = await dispatcher.invoke(PROMPT, "dialogue")

        assert [(m.role, m.content.text) for m in result.messages] == [
            ("assistant", "How can I help?"),
            ("user", "Review my code"),
        ]
