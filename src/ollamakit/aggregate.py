import inspect
import logging
from collections.abc import AsyncIterable, Callable, Iterable
from typing import Any

from ollamakit.instrumentation import record_error, record_stream_result, stream_span
from ollamakit.streaming import ChatResponseStream, MessageBuilder

logger = logging.getLogger(__name__)

ItemCallback = Callable[[ChatResponseStream | None], Any]


def _finish(
    builder: MessageBuilder, last_item: ChatResponseStream | None,
) -> ChatResponseStream | None:
    if last_item is None:
        return None
    return last_item.model_copy(update={"message": builder.to_message()})


def stream_to_end(
    stream: Iterable[ChatResponseStream | None],
    item_callback: ItemCallback | None = None,
) -> ChatResponseStream | None:
    """Consume a chunk stream and return its final chunk with the full message.

    Every chunk is fed to a :class:`MessageBuilder`.  The returned chunk
    is a copy of the last non-``None`` chunk (usually a
    :class:`~ollamakit.streaming.ChatDoneResponseStream` with generation
    statistics) whose ``message`` is the aggregated message.  Returns
    ``None`` if the stream held no chunks.

    Args:
        stream: Decoded chunks in arrival order.
        item_callback: Called with every item as it arrives, ``None``
            items included, e.g. to print tokens while streaming.
    """
    builder = MessageBuilder()
    last_item: ChatResponseStream | None = None
    chunk_count = 0
    with stream_span() as span:
        try:
            for item in stream:
                if item is not None:
                    builder.append(item)
                    last_item = item
                    chunk_count += 1
                if item_callback is not None:
                    item_callback(item)
        except Exception as e:
            record_error(span, e)
            raise
        result = _finish(builder, last_item)
        record_stream_result(span, result, chunk_count)
    logger.debug(f"Stream finished after {chunk_count} chunks")
    return result


async def astream_to_end(
    stream: AsyncIterable[ChatResponseStream | None],
    item_callback: ItemCallback | None = None,
) -> ChatResponseStream | None:
    """Async variant of :func:`stream_to_end`.

    *item_callback* may be a plain function or a coroutine function;
    an awaitable it returns is awaited before the next chunk is read.
    """
    builder = MessageBuilder()
    last_item: ChatResponseStream | None = None
    chunk_count = 0
    with stream_span() as span:
        try:
            async for item in stream:
                if item is not None:
                    builder.append(item)
                    last_item = item
                    chunk_count += 1
                if item_callback is not None:
                    outcome = item_callback(item)
                    if inspect.isawaitable(outcome):
                        await outcome
        except Exception as e:
            record_error(span, e)
            raise
        result = _finish(builder, last_item)
        record_stream_result(span, result, chunk_count)
    logger.debug(f"Stream finished after {chunk_count} chunks")
    return result
