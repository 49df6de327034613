from dataclasses import dataclass, field


@dataclass(frozen=True)
class ImportFailure:
    """One record the creation collaborator did not accept."""

    index: int
    reason: str


@dataclass
class ImportTally:
    """Outcome of a bulk import."""

    succeeded: int = 0
    failed: int = 0
    failures: list[ImportFailure] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.succeeded + self.failed

    def summary(self) -> str:
        return f"Import complete. Success: {self.succeeded}, Failed: {self.failed}"
