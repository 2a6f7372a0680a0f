# ghbackup Schedule Policy
# Timing of backup passes

import random
from dataclasses import dataclass, field
from typing import Optional

DEFAULT_INTERVAL = 3600.0


@dataclass
class SchedulePolicy:
    """
    When to run the next backup pass.

    A failed file is retried implicitly on the next pass; there is no
    other retry.
    """

    interval: float = DEFAULT_INTERVAL
    jitter: float = 0.0
    max_cycles: Optional[int] = None
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.interval < 0:
            raise ValueError("interval must not be negative")
        if self.jitter < 0:
            raise ValueError("jitter must not be negative")
        if self.max_cycles is not None and self.max_cycles < 1:
            raise ValueError("max_cycles must be at least 1")

    def next_delay(self) -> float:
        """Seconds to wait after a pass, including random jitter."""
        if self.jitter:
            return self.interval + self.rng.uniform(0, self.jitter)
        return self.interval

    def should_continue(self, completed_cycles: int) -> bool:
        """Check if another pass should run after completed_cycles passes."""
        return self.max_cycles is None or completed_cycles < self.max_cycles
