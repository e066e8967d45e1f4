import pytest

from ollamakit.message import Message, MessageRole, ToolCall, ToolCallFunction
from ollamakit.streaming import ChatDoneResponseStream, ChatResponseStream


# ---------------------------------------------------------------------------
# Chunk builder helpers
# ---------------------------------------------------------------------------

def make_chunk(
    content: str | None = None,
    role: MessageRole | None = None,
    thinking: str | None = None,
    images: list[str] | None = None,
    tool_calls: list[ToolCall] | None = None,
    model: str = "mock-model",
) -> ChatResponseStream:
    """Fake streamed chunk carrying a message slice."""
    return ChatResponseStream(
        model=model,
        message=Message(
            role=role,
            content=content,
            thinking=thinking,
            images=images,
            tool_calls=tool_calls,
        ),
    )


def make_done_chunk(
    content: str = "",
    role: MessageRole | None = MessageRole.ASSISTANT,
    done_reason: str = "stop",
    prompt_eval_count: int | None = 12,
    eval_count: int | None = 34,
    model: str = "mock-model",
) -> ChatDoneResponseStream:
    """Fake final chunk with generation statistics."""
    return ChatDoneResponseStream(
        model=model,
        message=Message(role=role, content=content),
        done_reason=done_reason,
        total_duration=5_000_000,
        prompt_eval_count=prompt_eval_count,
        eval_count=eval_count,
    )


def make_tool_call(name: str, arguments: dict, index: int | None = None) -> ToolCall:
    return ToolCall(
        function=ToolCallFunction(index=index, name=name, arguments=arguments)
    )


async def async_chunks(chunks):
    """Yield *chunks* from an async generator, like an async HTTP stream."""
    for chunk in chunks:
        yield chunk


@pytest.fixture
def weather_call():
    return make_tool_call("get_weather", {"city": "Paris"}, index=0)


@pytest.fixture
def time_call():
    return make_tool_call("get_time", {"timezone": "Europe/Paris"}, index=1)


@pytest.fixture
def hello_chunks(weather_call):
    """The three-chunk "Hello!" exchange used across tests."""
    return [
        make_chunk("Hel", role=MessageRole.ASSISTANT),
        make_chunk("lo", images=["img1"]),
        make_chunk("!", tool_calls=[weather_call]),
    ]
