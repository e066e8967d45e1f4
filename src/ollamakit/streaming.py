"""Streaming primitives for chat responses.

The server streams a chat answer as a sequence of
:class:`ChatResponseStream` chunks, the last of which is a
:class:`ChatDoneResponseStream` carrying generation statistics.  The
:class:`MessageBuilder` reassembles the message slices spread across
those chunks into one complete :class:`~ollamakit.message.Message`.
"""

from __future__ import annotations

from pydantic import BaseModel

from ollamakit.message import Message, MessageRole, ToolCall


class ChatResponseStream(BaseModel):
    """A single chunk of a streamed chat response."""

    model: str | None = None
    created_at: str | None = None
    message: Message | None = None
    done: bool = False


class ChatDoneResponseStream(ChatResponseStream):
    """The final chunk of a streamed chat response.

    Durations are reported by the server in nanoseconds.
    """

    done: bool = True
    done_reason: str | None = None
    total_duration: int | None = None
    load_duration: int | None = None
    prompt_eval_count: int | None = None
    prompt_eval_duration: int | None = None
    eval_count: int | None = None
    eval_duration: int | None = None


class MessageBuilder:
    """Assembles a complete message from streamed chunks.

    Text and thinking deltas are concatenated in arrival order, images
    and tool calls are appended in arrival order, and the role follows
    the most recent chunk that specified one.  The builder never decides
    when a message is finished; that is up to whoever reads the stream.

    Example::

        builder = MessageBuilder()
        for chunk in chunks:
            builder.append(chunk)
        if builder.has_value:
            message = builder.to_message()
    """

    def __init__(self) -> None:
        self._content: list[str] = []
        self._thinking: list[str] = []
        self._role: MessageRole | None = None
        self._images: list[str] = []
        self._tool_calls: list[ToolCall] = []

    def append(self, chunk: ChatResponseStream | None) -> None:
        """Merge one chunk into the message under construction.

        Chunks without a message payload are ignored.
        """
        if chunk is None or chunk.message is None:
            return
        message = chunk.message

        self._content.append(message.content or "")
        self._thinking.append(message.thinking or "")
        if message.role is not None:
            self._role = message.role
        if message.images:
            self._images.extend(message.images)
        if message.tool_calls:
            self._tool_calls.extend(message.tool_calls)

    def to_message(self) -> Message:
        """Return a snapshot of everything appended so far."""
        return Message(
            role=self._role,
            content=self.content,
            thinking=self.thinking,
            images=list(self._images),
            tool_calls=list(self._tool_calls),
        )

    @property
    def content(self) -> str:
        return "".join(self._content)

    @property
    def thinking(self) -> str:
        return "".join(self._thinking)

    @property
    def role(self) -> MessageRole | None:
        return self._role

    @property
    def images(self) -> tuple[str, ...]:
        return tuple(self._images)

    @property
    def tool_calls(self) -> tuple[ToolCall, ...]:
        return tuple(self._tool_calls)

    @property
    def has_value(self) -> bool:
        """Whether any content, image or tool call has been accumulated.

        Thinking text alone does not count.
        """
        return any(self._content) or bool(self._images) or bool(self._tool_calls)
