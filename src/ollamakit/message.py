from enum import Enum
from pydantic import BaseModel, field_serializer


class MessageRole(Enum):
    SYSTEM = "system"
    ASSISTANT = "assistant"
    USER = "user"
    TOOL = "tool"


class ToolCallFunction(BaseModel):
    """The function invoked by a tool call.

    ``index`` is the position of the call inside a parallel batch, when
    the server reports one.
    """

    index: int | None = None
    name: str | None = None
    arguments: dict | None = None


class ToolCall(BaseModel):
    function: ToolCallFunction | None = None


class Message(BaseModel):
    """A chat message, or the payload of a single streamed chunk.

    Every field is optional: streamed chunks carry only the slices the
    server produced for that chunk.
    """

    role: MessageRole | None = None
    content: str | None = None
    thinking: str | None = None
    images: list[str] | None = None
    tool_calls: list[ToolCall] | None = None
    tool_name: str | None = None

    @field_serializer('role')
    def serialize_role(self, role: MessageRole | None, _info) -> str | None:
        if role is None:
            return None
        return role.value
