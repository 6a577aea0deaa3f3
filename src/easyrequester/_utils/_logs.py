import logging
import sys

logger: logging.Logger = logging.getLogger("easyrequester")


def setup_logging(should_debug: bool = False) -> None:
    """Configure stderr logging for the library.

    Args:
        should_debug: Log at DEBUG level when True, INFO otherwise.
    """
    level = logging.DEBUG if should_debug else logging.INFO
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.setLevel(level)
