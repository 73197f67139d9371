"""
Cache command implementation.

Lists Cordova versions with a completed install in the cache.
"""

import logging

from tacobuild.cli.utils import create_session

logger = logging.getLogger(__name__)


def run(args) -> int:
    session = create_session(args)
    cache = session.loader.cache
    versions = cache.list_installed()

    print(f"Cordova cache: {cache.cache_root}")
    if not versions:
        print("  (no versions installed)")
    for version in versions:
        print(f"  {version}")
    return 0
