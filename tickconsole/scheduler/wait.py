#!/usr/bin/env python3
# tickconsole/scheduler/wait.py
from __future__ import annotations

"""
Wait-mode state machine.

Scripts pace themselves against the host's update loop by arming a wait from
a command callback; the scheduler is then polled exactly once per host tick.
Nothing here sleeps or blocks.

Mode codes:
    0  RUNNING  - no wait, the next queued line may run
    1  TICKS    - count `delay` ticks down, then resume
    2+          - host-registered wait conditions (see register_condition)

Tick countdown: a check with remaining == 0 resumes, otherwise it decrements.
So `set_wait_mode(1, 3)` holds the queue for three ticks (remaining 2, 1, 0)
and releases it on the fourth.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Union

logger = logging.getLogger(__name__)

RUNNING = 0
TICKS = 1


# ---------------- Typed views of the wait mode ----------------

@dataclass(frozen=True, slots=True)
class Running:
    pass


@dataclass(frozen=True, slots=True)
class WaitTicks:
    remaining: int


@dataclass(frozen=True, slots=True)
class WaitCondition:
    tag: str


WaitVariant = Union[Running, WaitTicks, WaitCondition]

# predicate(state) -> True once the condition holds
ConditionPredicate = Callable[["WaitState"], bool]


class WaitConditionError(RuntimeError):
    """A host wait-condition predicate raised while being checked."""

    def __init__(self, tag: str, cause: BaseException) -> None:
        super().__init__(
            f"Wait condition '{tag}' failed: {type(cause).__name__}: {cause}")
        self.tag = tag
        self.cause = cause


@dataclass(frozen=True, slots=True)
class WaitConditionSpec:
    code: int
    tag: str
    predicate: ConditionPredicate | None = None


@dataclass(slots=True)
class WaitState:
    """
    Current scheduler state.

    Attributes:
        mode: Mode code (0 = running).
        remaining: Ticks left for TICKS mode; free parameter for conditions.
        initial: Amount the wait was armed with.
        condition: Tag of the active wait condition, if any.
        faulted: The condition's predicate raised since the wait was armed;
            it is not evaluated again until the wait is re-armed or cleared.
    """
    mode: int = RUNNING
    remaining: int = 0
    initial: int = 0
    condition: str | None = None
    faulted: bool = False

    @property
    def running(self) -> bool:
        return self.mode == RUNNING

    @property
    def variant(self) -> WaitVariant:
        if self.mode == RUNNING:
            return Running()
        if self.mode == TICKS:
            return WaitTicks(self.remaining)
        return WaitCondition(self.condition or str(self.mode))

    def reset(self) -> None:
        self.mode = RUNNING
        self.remaining = 0
        self.initial = 0
        self.condition = None
        self.faulted = False


class WaitScheduler:
    """Gates the command queue on tick countdowns and host conditions."""

    def __init__(self) -> None:
        self.state = WaitState()
        self._conditions: dict[int, WaitConditionSpec] = {}
        self._tags: dict[str, int] = {}

    # ---------------- Condition registry ----------------

    def register_condition(
        self,
        code: int,
        tag: str,
        predicate: ConditionPredicate | None = None,
    ) -> WaitConditionSpec:
        """
        Register a host-specific wait mode.

        Without a predicate the wait lasts until `satisfy(tag)`, a re-arm, or
        a clear. With one, the predicate is evaluated on every check. A
        predicate that raises is reported once as WaitConditionError and the
        wait stays armed until re-armed, satisfied or cleared.
        """
        if code in (RUNNING, TICKS):
            raise ValueError(f"Wait mode {code} is reserved.")
        if code < 0:
            raise ValueError("Wait mode codes must be non-negative.")
        if code in self._conditions or tag.casefold() in self._tags:
            raise ValueError(f"Wait condition {code}/{tag!r} already registered.")
        spec = WaitConditionSpec(code=code, tag=tag, predicate=predicate)
        self._conditions[code] = spec
        self._tags[tag.casefold()] = code
        return spec

    def condition_code(self, tag: str) -> int:
        try:
            return self._tags[tag.casefold()]
        except KeyError:
            raise KeyError(f"Unknown wait condition: {tag}") from None

    def conditions(self) -> list[WaitConditionSpec]:
        return sorted(self._conditions.values(), key=lambda s: s.code)

    # ---------------- State transitions ----------------

    def set_wait_mode(self, mode: int, delay: int = 0) -> None:
        """Arm (or with mode 0, clear) the wait state."""
        if delay < 0:
            raise ValueError("delay must be >= 0")
        if mode == RUNNING:
            if not self.state.running:
                logger.debug("Wait cleared (was mode=%d remaining=%d)",
                             self.state.mode, self.state.remaining)
            self.state.reset()
            return

        if mode == TICKS:
            condition = None
        elif mode in self._conditions:
            condition = self._conditions[mode].tag
        else:
            raise ValueError(f"Unknown wait mode: {mode}")

        self.state.mode = mode
        self.state.remaining = delay
        self.state.initial = delay
        self.state.condition = condition
        self.state.faulted = False
        logger.debug("Wait armed: mode=%d delay=%d condition=%s",
                     mode, delay, condition)

    def wait_for(self, tag: str, parameter: int = 0) -> None:
        """Arm a registered wait condition by tag."""
        self.set_wait_mode(self.condition_code(tag), parameter)

    def satisfy(self, tag: str) -> bool:
        """Release the current wait if it is the condition named `tag`."""
        if self.state.condition is not None and self.state.condition.casefold() == tag.casefold():
            self.state.reset()
            logger.debug("Wait condition %r satisfied by host", tag)
            return True
        return False

    def clear(self) -> None:
        self.set_wait_mode(RUNNING, 0)

    def check_wait_mode(self) -> bool:
        """Advance the wait state by one tick. Returns True when running."""
        state = self.state
        if state.mode == RUNNING:
            return True

        if state.mode == TICKS:
            if state.remaining == 0:
                state.reset()
                logger.debug("Tick wait elapsed")
                return True
            state.remaining -= 1
            return False

        spec = self._conditions.get(state.mode)
        if spec is None or spec.predicate is None:
            return False
        if state.faulted:
            return False
        try:
            met = spec.predicate(state)
        except Exception as exc:
            state.faulted = True
            logger.exception("Wait condition %r raised; wait stays armed", spec.tag)
            raise WaitConditionError(spec.tag, exc) from exc
        if met:
            state.reset()
            logger.debug("Wait condition %r met", spec.tag)
            return True
        return False

    @property
    def waiting(self) -> bool:
        return not self.state.running
