"""
Setup command implementation.

Installs (if needed) and loads the project's Cordova version.
"""

import logging

from tacobuild.cli.utils import create_session

logger = logging.getLogger(__name__)


def run(args) -> int:
    session = create_session(args)
    handle = session.setup_toolchain()
    logger.info(f"Cordova {handle.version} ready for {session.config.project_root}")
    return 0
