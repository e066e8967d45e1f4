"""Optional OpenTelemetry instrumentation for ollamakit.

Call ``ollamakit.instrument()`` once at startup to enable tracing.
Requires ``opentelemetry-api`` to be installed; the library
works identically without it.
"""

import importlib.util
import logging
from contextlib import contextmanager

logger = logging.getLogger(__name__)

_tracer = None


def instrument(*, tracer_name: str = "ollamakit") -> None:
    """Enable OpenTelemetry tracing for stream aggregation.

    Call once at startup, after configuring your TracerProvider.
    Requires ``opentelemetry-api``: ``pip install ollamakit[otel]``

    Example::

        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import (
            BatchSpanProcessor,
            ConsoleSpanExporter,
        )
        from opentelemetry import trace

        provider = TracerProvider()
        provider.add_span_processor(
            BatchSpanProcessor(ConsoleSpanExporter())
        )
        trace.set_tracer_provider(provider)

        import ollamakit
        ollamakit.instrument()

    See also:
        - `OTel Python SDK <https://opentelemetry.io/docs/languages/python/>`_
        - `GenAI Semantic Conventions <https://opentelemetry.io/docs/specs/semconv/gen-ai/>`_

    Args:
        tracer_name: Name passed to ``trace.get_tracer()``.

    Raises:
        ImportError: If ``opentelemetry-api`` is not installed.
    """
    global _tracer
    if importlib.util.find_spec("opentelemetry.trace") is None:
        raise ImportError(
            "opentelemetry-api is required for instrumentation. "
            "Install it with: pip install ollamakit[otel]"
        )
    from opentelemetry import trace
    _tracer = trace.get_tracer(tracer_name)
    if isinstance(_tracer, trace.NoOpTracer):
        logger.info(
            "No TracerProvider configured, spans will be "
            "discarded. Set up a TracerProvider to export "
            "traces."
        )
    else:
        logger.info("ollamakit instrumentation enabled")


def uninstrument() -> None:
    """Disable OpenTelemetry tracing.

    Subsequent stream aggregations will not emit spans.
    """
    global _tracer
    _tracer = None


@contextmanager
def stream_span(model: str | None = None):
    """Wrap the aggregation of one streamed response in a ``chat`` span.

    The model is usually only known once chunks arrive, in which case
    the span is named plain ``chat`` and the response model is set by
    :func:`record_stream_result`.
    """
    if _tracer is None:
        yield None
        return
    from opentelemetry.trace import SpanKind

    attributes = {"gen_ai.operation.name": "chat"}
    if model:
        attributes["gen_ai.request.model"] = model
    with _tracer.start_as_current_span(
        f"chat {model}" if model else "chat",
        kind=SpanKind.CLIENT,
        attributes=attributes,
    ) as span:
        yield span


def record_stream_result(span, result, chunk_count: int) -> None:
    """Set usage, response-model and chunk-count attributes on a span.

    *result* is the final chunk returned by the stream helpers, or
    ``None`` for an empty stream.
    """
    if span is None:
        return
    span.set_attribute("ollamakit.stream.chunk_count", chunk_count)
    if result is None:
        return
    if result.model:
        span.set_attribute("gen_ai.response.model", result.model)
    prompt_tokens = getattr(result, "prompt_eval_count", None)
    if prompt_tokens is not None:
        span.set_attribute("gen_ai.usage.input_tokens", prompt_tokens)
    completion_tokens = getattr(result, "eval_count", None)
    if completion_tokens is not None:
        span.set_attribute("gen_ai.usage.output_tokens", completion_tokens)
    done_reason = getattr(result, "done_reason", None)
    if done_reason:
        span.set_attribute(
            "gen_ai.response.finish_reasons", [done_reason]
        )


def record_error(span, exception: BaseException) -> None:
    """Record an exception and set ERROR status on a span.

    Sets ``error.type`` per GenAI semantic conventions.
    No-ops when *span* is ``None`` (tracing disabled).
    """
    if span is None:
        return
    from opentelemetry.trace import StatusCode

    span.set_status(StatusCode.ERROR, str(exception))
    span.record_exception(exception)
    span.set_attribute(
        "error.type", type(exception).__qualname__
    )
