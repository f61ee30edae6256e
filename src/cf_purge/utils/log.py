import logging

from rich.logging import RichHandler

from cf_purge.models.settings import env


def setup_logging(level: str | None = None) -> None:
    """Route log records to a rich console handler."""
    logging.basicConfig(
        level=level or env.effective_log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=env.verbose, show_path=env.verbose)],
        force=True,
    )
    # httpx logs every request at info
    logging.getLogger("httpx").setLevel(logging.WARNING)
