"""
Strictly sequential step execution.

Cordova is not safe to run concurrently against one project, so every
multi-platform operation is expressed as an ordered list of steps run one
at a time. The first failing step stops the sequence and its exception
propagates unchanged.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Tuple

logger = logging.getLogger(__name__)


@dataclass
class Step:
    """One unit of work in a sequence."""

    description: str
    action: Callable[..., Any]
    args: Tuple[Any, ...] = field(default_factory=tuple)

    def run(self) -> Any:
        return self.action(*self.args)


def run_steps(steps: Iterable[Step]) -> List[Any]:
    """
    Run steps in order, each only after the previous one finished.

    Args:
        steps: Steps to run

    Returns:
        Results of the steps, in order

    Raises:
        Exception: Whatever the first failing step raised
    """
    results = []
    steps = list(steps)
    for index, step in enumerate(steps, start=1):
        logger.debug(f"Step {index}/{len(steps)}: {step.description}")
        try:
            results.append(step.run())
        except Exception:
            logger.error(f"Step failed: {step.description}")
            raise
    return results


__all__ = ["Step", "run_steps"]
