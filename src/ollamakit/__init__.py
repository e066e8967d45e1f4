from ollamakit.aggregate import astream_to_end, stream_to_end
from ollamakit.instrumentation import instrument, uninstrument
from ollamakit.message import Message, MessageRole, ToolCall, ToolCallFunction
from ollamakit.streaming import ChatDoneResponseStream, ChatResponseStream, MessageBuilder

__all__ = [
    "ChatDoneResponseStream",
    "ChatResponseStream",
    "Message",
    "MessageBuilder",
    "MessageRole",
    "ToolCall",
    "ToolCallFunction",
    "astream_to_end",
    "instrument",
    "stream_to_end",
    "uninstrument",
]
