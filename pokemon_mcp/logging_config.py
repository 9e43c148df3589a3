import logging


def setup_logging(level: str = "INFO") -> None:
    """
    Configure global logging for the server.
    The level normally comes from the LOG_LEVEL environment variable.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from the HTTP client stack
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
