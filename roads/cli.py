# roads/cli.py

import sys

from loguru import logger

from roads import settings
from roads.app import run
from roads.logs import setup_logging
from roads.utils import log_timing


@log_timing
def main() -> int:
    """Run the interactive session; 0 on a clean quit, 1 on a fatal failure."""
    setup_logging()
    logger.info(f"roads {settings.VERSION} starting")

    try:
        code = run()
    except Exception as e:
        logger.exception(f"Terminal session failed: {e}")
        print(f"roads: {e}", file=sys.stderr)
        code = 1
    else:
        if code:
            logger.error(f"Terminal session exited with status {code}")
        else:
            logger.success("Bye")

    # A fetch may still be running on its daemon thread; drain the queued sink first
    logger.complete()
    return code


if __name__ == "__main__":
    sys.exit(main())
