from dataclasses import dataclass


@dataclass
class RunSummary:
    """Outcome counters for one processing run."""

    attempted: int = 0
    completed: int = 0
    failed: int = 0
    skipped: int = 0
    prospects: int = 0

    @property
    def is_noop(self) -> bool:
        return self.attempted == 0 and self.skipped == 0
