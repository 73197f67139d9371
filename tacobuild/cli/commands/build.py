"""
Build command implementation.
"""

import logging

from tacobuild.cli.utils import create_session, parse_platform_options

logger = logging.getLogger(__name__)


def run(args) -> int:
    options = parse_platform_options(args.platforms, args.options)
    session = create_session(args)
    session.build(args.platforms, options)
    logger.info(f"Build complete: {', '.join(args.platforms)}")
    return 0
