import logging
import sys


def setup_logging(level: int = logging.INFO):
    logging.basicConfig(
        stream=sys.stdout,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
    )
