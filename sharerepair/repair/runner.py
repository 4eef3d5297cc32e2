"""Sequential runner for repair steps."""

from __future__ import annotations

import logging
from typing import Iterable, List, Protocol

from sharerepair.output import RepairOutput

logger = logging.getLogger(__name__)


class RepairStep(Protocol):
    name: str

    def run(self, output: RepairOutput) -> None:
        """Apply the repair. Errors propagate to the runner's caller."""


class Repair:
    """Runs repair steps one after another, stopping at the first failure."""

    def __init__(self, steps: Iterable[RepairStep] = ()) -> None:
        self._steps: List[RepairStep] = list(steps)

    def add_step(self, step: RepairStep) -> None:
        self._steps.append(step)

    def run(self, output: RepairOutput) -> None:
        for step in self._steps:
            output.info(f"Repair step: {step.name}")
            try:
                step.run(output)
            except Exception:
                logger.error("Repair step failed: %s", step.name)
                raise
