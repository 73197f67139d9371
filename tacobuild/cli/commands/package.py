"""
Package command implementation.
"""

import logging

from tacobuild.cli.utils import create_session, parse_platform_options

logger = logging.getLogger(__name__)


def run(args) -> int:
    options = parse_platform_options(args.platforms, args.options)
    session = create_session(args)
    packages = session.package(args.platforms, options)
    for path in packages:
        print(path)
    return 0
