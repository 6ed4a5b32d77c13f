import logging


def setup_logging(level: int = logging.INFO, stream=None) -> None:
    """
    Configures the root logger.

    Args:
        level: overall log level (INFO by default)
        stream: where records go; stderr when None
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=stream,
    )

    # Quieten noisy libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
