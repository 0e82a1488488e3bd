import os
import sys
from typing import Any, Literal, Optional, cast

import structlog

LogFormat = Literal["json", "plain", "auto"]

LOG_FORMATS = ("json", "plain", "auto")


def _should_use_json_format() -> bool:
    """Determine if JSON format should be used based on environment."""
    ci_vars = ["CI", "CONTINUOUS_INTEGRATION", "GITHUB_ACTIONS", "JENKINS_URL"]
    if any(os.environ.get(var) for var in ci_vars):
        return True

    # Redirected stderr means a machine is reading the log
    return bool(not sys.stderr.isatty())


def resolve_log_format(configured: str, override: Optional[str] = None) -> LogFormat:
    """Pick the CLI override if given, else the configured format.

    Unknown spellings fall back to "auto".
    """
    chosen = (override or configured or "auto").strip().lower()
    if chosen not in LOG_FORMATS:
        chosen = "auto"
    return cast(LogFormat, chosen)


def setup_logging(format_type: LogFormat = "auto") -> None:
    """
    Configure chattools logging.

    Events are key/value records (``chunk.plan``, ``chunk.written``,
    ``estimate.done``) written to stderr, so the chunk report on stdout can be
    piped on its own.

    Args:
        format_type: "json" for JSON lines, "plain" for the console renderer,
                "auto" for JSON under CI or when stderr is redirected.
    """
    use_json = format_type == "json" or (format_type == "auto" and _should_use_json_format())

    processors: list[Any] = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if use_json:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    # Each CLI invocation may swap stderr (e.g. under CliRunner), so bound
    # loggers are not cached.
    structlog.configure(
        processors=processors,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


log = structlog.get_logger()
