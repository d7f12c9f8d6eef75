"""
Command-line entry point.

Runs the harvester with the built-in defaults. Exits non-zero only when the
workspace, the index or the aggregate output cannot be set up.
"""

import sys

from .core.controller import ChaosController, RunConfig
from .core.errors import ChaosGrabError
from .core.logger import initialize_logging


def main(config: RunConfig = None) -> int:
    config = config or RunConfig()
    logger = initialize_logging(config.log_dir)

    controller = ChaosController(config, logger=logger)
    try:
        controller.run()
    except ChaosGrabError as e:
        logger.critical(str(e))
        return 1
    finally:
        controller.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
