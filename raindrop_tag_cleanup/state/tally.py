"""Per-tag outcome tracking and final statistics for a cleanup run."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional


class DeletionOutcome(Enum):
    SKIPPED_ALLOWLISTED = "skipped_allowlisted"
    SKIPPED_DRY_RUN = "skipped_dry_run"
    SKIPPED_DUPLICATE = "skipped_duplicate"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class DeletionTally:
    """Records what happened to each tag during a run."""

    def __init__(self):
        self.outcomes: dict[str, DeletionOutcome] = {}
        self.duplicates: list[str] = []
        self.failures: dict[str, str] = {}
        self.start_time = datetime.now()

    def record(
        self, tag: str, outcome: DeletionOutcome, reason: Optional[str] = None
    ) -> None:
        """Record the outcome for a tag.

        Args:
            tag: Tag name
            outcome: What happened to it
            reason: Error description for failed deletions

        Raises:
            ValueError: If the tag already has an outcome.
        """
        if outcome is DeletionOutcome.SKIPPED_DUPLICATE:
            self.duplicates.append(tag)
            return

        if tag in self.outcomes:
            raise ValueError(f"Tag '{tag}' was already processed this run")

        self.outcomes[tag] = outcome
        if outcome is DeletionOutcome.FAILED:
            self.failures[tag] = reason or "unknown error"

    def count(self, outcome: DeletionOutcome) -> int:
        if outcome is DeletionOutcome.SKIPPED_DUPLICATE:
            return len(self.duplicates)
        return sum(1 for o in self.outcomes.values() if o is outcome)

    @property
    def succeeded(self) -> int:
        return self.count(DeletionOutcome.SUCCEEDED)

    @property
    def failed(self) -> int:
        return self.count(DeletionOutcome.FAILED)

    @property
    def total(self) -> int:
        return len(self.outcomes) + len(self.duplicates)

    def summary(self) -> dict[str, Any]:
        """Counts for every outcome, keyed by outcome value."""
        return {outcome.value: self.count(outcome) for outcome in DeletionOutcome}

    def print_stats(self, dry_run: bool = False) -> None:
        """Print final statistics.

        Args:
            dry_run: Whether this was a dry run
        """
        elapsed = datetime.now() - self.start_time

        print(f"\n{'='*60}")
        if dry_run:
            print("🧪 Dry run complete.")
            print(f"{'='*60}")
            print(f"⏱️  This session: {elapsed}")
            return

        print("🎉 TAG CLEANUP COMPLETE!")
        print(f"{'='*60}")
        print(f"⏱️  This session: {elapsed}")
        print(f"📊 Tags processed: {self.total}")
        print(f"✅ Kept (allowlisted): {self.count(DeletionOutcome.SKIPPED_ALLOWLISTED)}")
        print(f"❌ Deleted: {self.succeeded}")
        print(f"⚠️  Failed: {self.failed}")
        if self.duplicates:
            print(f"🔁 Duplicate listings skipped: {len(self.duplicates)}")

        for tag, reason in self.failures.items():
            print(f"    ⚠️  {tag}: {reason}")

        print(f"\nFailed to delete {self.failed} tags; deleted {self.succeeded} tags.")
