import logging
import sys
from contextvars import ContextVar

# Set by RequestContextMiddleware for the lifetime of each request.
correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


class CorrelationIdFilter(logging.Filter):
    """Attach the current request's correlation id to every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_var.get() or "-"
        return True


def configure_logging(level: str | int = logging.INFO) -> None:
    """
    Configure the root logger with a single stdout handler.

    Safe to call more than once: existing root handlers are replaced so
    uvicorn reloads and test sessions don't duplicate output.
    """
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | cid=%(correlation_id)s | %(message)s"
        )
    )
    handler.addFilter(CorrelationIdFilter())

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
    root.setLevel(level)
