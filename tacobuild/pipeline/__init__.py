"""
Build and package pipeline: strictly sequential, per-platform steps on top
of a loaded Cordova toolchain.
"""

from .sequence import Step, run_steps
from .call_args import normalize_platforms, get_call_args
from .build import BuildOrchestrator
from .package import PackageOrchestrator, create_ipa

__all__ = [
    "Step",
    "run_steps",
    "normalize_platforms",
    "get_call_args",
    "BuildOrchestrator",
    "PackageOrchestrator",
    "create_ipa",
]
