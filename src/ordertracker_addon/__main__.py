"""Add-on 入口: python -m ordertracker_addon"""

import sys

from .config import EXIT_INVALID_OPTIONS
from .launcher import LaunchError, launch
from .options import OptionsError
from .runtime import bootstrap
from .telemetry import get_logger, setup_logging

logger = get_logger(__name__)


def main() -> int:
    """入口函数

    Returns:
        退出码（exec-replace 成功时不返回）
    """
    setup_logging()

    try:
        plan = bootstrap()
    except OptionsError as e:
        logger.error(str(e))
        return EXIT_INVALID_OPTIONS

    try:
        return launch(plan)
    except LaunchError as e:
        logger.error(str(e))
        return e.exit_code


if __name__ == "__main__":
    sys.exit(main())
