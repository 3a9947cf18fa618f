"""Log setup for serving.

The library never installs handlers on import. ``App.run()`` and
``tollgate run`` call ``configure_logging`` so the per-request access
line, startup messages and auth audit lines reach stderr.
"""

import logging
import sys

ROOT_LOGGER = "tollgate"


def configure_logging(level: str) -> None:
    """Send ``tollgate.*`` log records to stderr at *level*.

    ``basicConfig`` does nothing when the root logger already has
    handlers, so the level is also set on the ``tollgate`` logger.
    """
    logging.basicConfig(level=level.upper(), format="%(message)s", stream=sys.stderr)
    logging.getLogger(ROOT_LOGGER).setLevel(level.upper())
