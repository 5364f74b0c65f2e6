# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Bounded-attempts combinator for puzzle generation.

Each attempt returns a tagged Result instead of raising. attempt() keeps
calling until one succeeds, a non-retryable failure comes back, or the
attempt budget runs out, and reports which of those happened.
"""

import logging
import time
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar, Union

T = TypeVar("T")

logger = logging.getLogger(__name__)


class FailureKind(Enum):
    EXTERNAL_CALL = "external_call"
    PARSE = "parse"
    VALIDATION = "validation"


@dataclass(frozen=True)
class Failure:
    """Why a single attempt did not produce a value."""
    kind: FailureKind
    message: str

    def __str__(self):
        return f"{self.kind.value}: {self.message}"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Tagged success/failure value returned by one attempt."""
    value: Optional[T] = None
    failure: Optional[Failure] = None

    @property
    def is_ok(self) -> bool:
        return self.failure is None

    @classmethod
    def ok(cls, value: T) -> 'Result[T]':
        return cls(value=value)

    @classmethod
    def fail(cls, kind: FailureKind, message: str) -> 'Result[T]':
        return cls(failure=Failure(kind, message))


@dataclass
class AttemptRecord:
    """Record of a single attempt."""
    number: int
    timestamp: float
    failure: Optional[Failure] = None

    @property
    def success(self) -> bool:
        return self.failure is None


@dataclass
class AttemptLog:
    """
    Tracks attempts across generation runs.

    Attributes:
        counts: Failures by kind
        history: Every attempt in order
    """
    counts: Dict[FailureKind, int] = field(default_factory=lambda: defaultdict(int))
    history: List[AttemptRecord] = field(default_factory=list)
    start_time: float = field(default_factory=time.time)

    def record(self, number: int, failure: Optional[Failure] = None) -> None:
        if failure is not None:
            self.counts[failure.kind] += 1
        self.history.append(AttemptRecord(
            number=number,
            timestamp=time.time(),
            failure=failure,
        ))

    @property
    def total_attempts(self) -> int:
        return len(self.history)

    def success_rate(self) -> float:
        if not self.history:
            return 1.0
        return sum(1 for r in self.history if r.success) / len(self.history)

    def get_stats(self) -> Dict[str, Any]:
        return {
            'total_attempts': self.total_attempts,
            'failures_by_kind': {k.value: v for k, v in self.counts.items()},
            'success_rate': self.success_rate(),
            'elapsed_seconds': time.time() - self.start_time,
        }

    def reset(self) -> None:
        self.counts = defaultdict(int)
        self.history = []
        self.start_time = time.time()


@dataclass(frozen=True)
class Success(Generic[T]):
    """attempt() produced a value."""
    value: T
    attempts: int
    failures: tuple = ()


@dataclass(frozen=True)
class Exhausted:
    """attempt() gave up; failures lists every attempt's reason in order."""
    attempts: int
    failures: tuple = ()

    @property
    def last_failure(self) -> Optional[Failure]:
        return self.failures[-1] if self.failures else None


def always_retry(failure: Failure) -> bool:
    return True


def attempt(
    fn: Callable[[int], Result[T]],
    max_attempts: int,
    is_retryable: Callable[[Failure], bool] = always_retry,
    log: Optional[AttemptLog] = None
) -> Union[Success[T], Exhausted]:
    """
    Run fn until it succeeds or the attempt budget is spent.

    Args:
        fn: Called with the 1-based attempt number; returns a Result
        max_attempts: Maximum number of calls to fn
        is_retryable: Decides whether a failure allows another attempt
        log: Optional AttemptLog to record attempts into

    Returns:
        Success with the value, or Exhausted with all failures seen
    """
    failures: List[Failure] = []
    for number in range(1, max_attempts + 1):
        result = fn(number)
        if log is not None:
            log.record(number, result.failure)

        if result.is_ok:
            return Success(value=result.value, attempts=number, failures=tuple(failures))

        failures.append(result.failure)
        logger.warning(f"Attempt {number}/{max_attempts} failed - {result.failure}")

        if not is_retryable(result.failure):
            logger.warning(f"Failure is not retryable, stopping after {number} attempts")
            break

    return Exhausted(attempts=len(failures), failures=tuple(failures))
