"""Sequential multi-step workflows with per-step compensation."""
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


Action = Callable[[], Awaitable[Any]]
Compensation = Callable[[Any], Awaitable[Any]]


@dataclass
class SagaStep:
    """
    One step of a saga.

    ``compensation`` receives the value the action returned. A step that is
    not ``critical`` only logs its failure and the saga carries on.
    """
    name: str
    action: Action
    compensation: Optional[Compensation] = None
    critical: bool = True


@dataclass
class SagaResult:
    """Outcome of a completed saga."""
    results: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)


class Saga:
    """Run steps in order; undo completed steps when a critical one fails."""

    def __init__(self, name: str):
        self.name = name
        self.steps: List[SagaStep] = []

    def step(
        self,
        name: str,
        action: Action,
        compensation: Optional[Compensation] = None,
        critical: bool = True
    ) -> "Saga":
        self.steps.append(SagaStep(name, action, compensation, critical))
        return self

    async def run(self) -> SagaResult:
        result = SagaResult()
        completed: List[tuple] = []

        for step in self.steps:
            try:
                value = await step.action()
            except Exception as e:
                if not step.critical:
                    logger.warning(f"Saga {self.name}: non-critical step {step.name} failed: {e}")
                    result.warnings.append(step.name)
                    continue
                logger.error(f"Saga {self.name}: step {step.name} failed: {e}")
                await self._compensate(completed)
                raise

            logger.info(f"Saga {self.name}: step {step.name} done")
            result.results[step.name] = value
            completed.append((step, value))

        return result

    async def _compensate(self, completed: List[tuple]) -> None:
        for step, value in reversed(completed):
            if step.compensation is None:
                continue
            try:
                await step.compensation(value)
                logger.info(f"Saga {self.name}: compensated {step.name}")
            except Exception as e:
                # Keep unwinding; the original failure is what gets raised
                logger.error(f"Saga {self.name}: compensation of {step.name} failed: {e}")
