"""
Normalization of platform lists and per-platform options.

Callers may pass options as a flat list (applied to every platform) or as
a mapping from platform to its own option list::

    build(["android", "ios"], {"android": ["--release"], "ios": ["--device"]})
"""

from typing import Mapping, Optional, Sequence, Union, List

from tacobuild.toolchain.handle import CallArgs

PlatformsInput = Union[str, Sequence[str]]
ArgsInput = Optional[Union[Sequence[str], Mapping[str, Sequence[str]]]]


def normalize_platforms(platforms: PlatformsInput) -> List[str]:
    """Turn a single platform name into a list; order and duplicates are kept."""
    if isinstance(platforms, str):
        return [platforms]
    return list(platforms)


def get_call_args(platform: str, args: ArgsInput = None) -> CallArgs:
    """
    Build the toolchain call arguments for one platform.

    Args:
        platform: Platform name
        args: None, a list of options, or a mapping of platform to options

    Returns:
        CallArgs with the platform and its options (empty if none apply)
    """
    if args is None:
        options: Sequence[str] = []
    elif isinstance(args, Mapping):
        options = args.get(platform) or []
    else:
        options = args
    if isinstance(options, str):
        options = [options]
    return CallArgs(platforms=[platform], options=[str(opt) for opt in options])


__all__ = ["PlatformsInput", "ArgsInput", "normalize_platforms", "get_call_args"]
