"""
Cordova toolchain management: versioned cache, loading, and the handle
the build pipeline drives.
"""

from .cache import CacheEntry, ToolchainCache
from .handle import CallArgs, ToolchainHandle, NodeModuleToolchain
from .loader import SUPPORT_PLUGIN_ID, ToolchainLoader

__all__ = [
    "CacheEntry",
    "ToolchainCache",
    "CallArgs",
    "ToolchainHandle",
    "NodeModuleToolchain",
    "SUPPORT_PLUGIN_ID",
    "ToolchainLoader",
]
