"""Named, short-circuiting pipelines of Result-returning steps.

A ``Pipeline`` runs its steps in order, feeding each step the value of the
previous ``Success``. The first ``Failure`` stops the run: later steps are
never called and the failure is returned as the pipeline's result.

The pipeline enforces one invariant: every step returns a ``Success`` or a
``Failure``. A step returning anything else indicates a mis-composed
pipeline and raises ``InvariantViolationError`` naming the stage, unless the
pipeline was configured with ``strict=False``.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
import inspect
import logging
from time import perf_counter
from typing import TYPE_CHECKING, Any

from fallible.config import Config, resolve_config
from fallible.errors import InvariantViolationError
from fallible.result import Failure, Result, Success, is_result

if TYPE_CHECKING:
    from collections.abc import Iterable

log = logging.getLogger(__name__)

type StepFn = Callable[[Any], Result[Any, Any] | Awaitable[Result[Any, Any]]]


@dataclass(frozen=True, slots=True)
class Step:
    """A named pipeline stage."""

    name: str
    fn: StepFn

    @classmethod
    def of(cls, fn: Step | StepFn) -> Step:
        """Return ``fn`` as a Step, naming bare callables after ``__name__``."""
        if isinstance(fn, Step):
            return fn
        return cls(name=getattr(fn, "__name__", type(fn).__name__), fn=fn)


@dataclass(frozen=True)
class PipelineOutcome:
    """The result of one pipeline run plus what it took to get there."""

    result: Result[Any, Any]
    #: Stage names that returned a Success, in execution order.
    completed: tuple[str, ...] = ()
    failed_stage: str | None = None
    durations: dict[str, float] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return isinstance(self.result, Success)


class Pipeline:
    """Runs values through a sequence of Result-returning steps."""

    def __init__(
        self,
        steps: Iterable[Step | StepFn],
        *,
        config: Config | None = None,
    ) -> None:
        """Build a pipeline.

        Args:
            steps: Steps or bare callables, in execution order.
            config: Optional configuration; resolved from the environment
                when omitted.
        """
        self._steps: tuple[Step, ...] = tuple(Step.of(s) for s in steps)
        if not self._steps:
            raise ValueError("Pipeline may not be empty; provide at least one step.")
        seen: set[str] = set()
        for step in self._steps:
            if step.name in seen:
                raise ValueError(
                    f"Duplicate stage name {step.name!r}; stage names must be unique. "
                    'Wrap callables in Step("name", fn) to name them explicitly.'
                )
            seen.add(step.name)
        self.config = config if config is not None else resolve_config()

    @property
    def stage_names(self) -> tuple[str, ...]:
        """Return the stage names in execution order."""
        return tuple(s.name for s in self._steps)

    def run(self, value: Any) -> Result[Any, Any]:
        """Run synchronously and return only the final Result."""
        return self.execute(value).result

    async def run_async(self, value: Any) -> Result[Any, Any]:
        """Run, awaiting async steps, and return only the final Result."""
        return (await self.execute_async(value)).result

    def execute(self, value: Any) -> PipelineOutcome:
        """Run every step synchronously.

        Raises:
            InvariantViolationError: If a step returns an awaitable (use
                ``execute_async``) or, in strict mode, a non-Result.
        """
        run = _Run(self.config)
        current: Result[Any, Any] = Success(value)
        for step in self._steps:
            start = perf_counter()
            out = step.fn(current.value)
            if inspect.isawaitable(out):
                if inspect.iscoroutine(out):
                    out.close()
                raise InvariantViolationError(
                    "Step returned an awaitable in a synchronous run",
                    stage_name=step.name,
                    hint="Use run_async()/execute_async() for async steps",
                )
            current = run.record(step.name, out, perf_counter() - start)
            if isinstance(current, Failure):
                break
        return run.outcome(current)

    async def execute_async(self, value: Any) -> PipelineOutcome:
        """Run every step, awaiting those that return awaitables."""
        run = _Run(self.config)
        current: Result[Any, Any] = Success(value)
        for step in self._steps:
            start = perf_counter()
            out = step.fn(current.value)
            if inspect.isawaitable(out):
                out = await out
            current = run.record(step.name, out, perf_counter() - start)
            if isinstance(current, Failure):
                break
        return run.outcome(current)


class _Run:
    """Per-run bookkeeping shared by the sync and async paths."""

    __slots__ = ("completed", "config", "durations", "failed_stage")

    def __init__(self, config: Config) -> None:
        self.config = config
        self.completed: list[str] = []
        self.durations: dict[str, float] = {}
        self.failed_stage: str | None = None

    def record(self, name: str, out: Any, duration: float) -> Result[Any, Any]:
        if self.config.record_durations:
            self.durations[name] = duration

        # Guard: steps must return Success|Failure
        if not is_result(out):
            if self.config.strict:
                raise InvariantViolationError(
                    f"Step returned {type(out).__name__}; expected Success|Failure",
                    stage_name=name,
                    hint="Wrap plain values with success() or set strict=False",
                )
            out = Success(out)

        if isinstance(out, Failure):
            self.failed_stage = name
            log.log(
                self.config.failure_log_levelno,
                "Pipeline stopped at stage '%s': %r",
                name,
                out.error,
            )
        else:
            self.completed.append(name)
            log.debug("Stage '%s' completed in %.6fs", name, duration)
        return out

    def outcome(self, result: Result[Any, Any]) -> PipelineOutcome:
        return PipelineOutcome(
            result=result,
            completed=tuple(self.completed),
            failed_stage=self.failed_stage,
            durations=dict(self.durations),
        )


__all__ = ["Pipeline", "PipelineOutcome", "Step"]
