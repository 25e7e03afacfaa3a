"""Core tag deletion logic that orchestrates the cleanup run."""

import time
from typing import Optional

from ..api.raindrop_client import RaindropAPIError, RaindropClient, Tag
from ..config import DELETE_DELAY
from ..state.tally import DeletionOutcome, DeletionTally
from ..ui.interfaces import UserInterface


class RaindropTagCleaner:
    """Deletes every tag that isn't allowlisted, one request at a time."""

    def __init__(
        self,
        access_token: str,
        dry_run: bool = False,
        delete_delay: float = DELETE_DELAY,
    ):
        """Initialize the tag cleaner.

        Args:
            access_token: OAuth access token for the authorized user
            dry_run: If True, report what would be deleted without deleting
            delete_delay: Seconds to pause after each delete request
        """
        # Initialize components
        self.raindrop_client = RaindropClient(token=access_token)
        self.ui = UserInterface()
        self.tally = DeletionTally()

        # Configuration
        self.dry_run = dry_run
        self.delete_delay = delete_delay

    def run(self, allowlist: frozenset[str]) -> Optional[DeletionTally]:
        """Fetch tags, confirm with the operator, then process every tag.

        Args:
            allowlist: Tags to keep

        Returns:
            The run's tally, or None if the operator didn't confirm

        Raises:
            RaindropAPIError: If the tag list can't be fetched.
        """
        tags = self.raindrop_client.get_tags()
        to_delete = self.tags_to_delete(tags, allowlist)

        self.ui.show_summary(tags, allowlist, len(to_delete), self.dry_run)
        if not self.ui.confirm():
            print("❌ Cancelled; no tags were deleted")
            return None

        return self.process_tags(tags, allowlist)

    @staticmethod
    def tags_to_delete(tags: list[Tag], allowlist: frozenset[str]) -> list[Tag]:
        """Tags that are not in the allowlist, in listing order."""
        return [tag for tag in tags if tag.id not in allowlist]

    def process_tags(self, tags: list[Tag], allowlist: frozenset[str]) -> DeletionTally:
        """Visit every tag in listing order and delete the ones not allowlisted.

        A failed deletion is recorded and the loop moves on; nothing is retried.

        Args:
            tags: Tags in the order the API returned them
            allowlist: Tags to keep

        Returns:
            The tally of outcomes for this run
        """
        for tag in tags:
            name = tag.id
            if name in self.tally.outcomes:
                self.ui.show_duplicate(name)
                self.tally.record(name, DeletionOutcome.SKIPPED_DUPLICATE)
                continue

            self.ui.show_processing(name)

            if name in allowlist:
                self.ui.show_allowlisted(name)
                self.tally.record(name, DeletionOutcome.SKIPPED_ALLOWLISTED)
                continue

            if self.dry_run:
                self.ui.show_dry_run(name)
                self.tally.record(name, DeletionOutcome.SKIPPED_DRY_RUN)
                continue

            try:
                self.raindrop_client.delete_tags([name])
            except RaindropAPIError as e:
                self.ui.show_failed(name, str(e))
                self.tally.record(name, DeletionOutcome.FAILED, reason=str(e))
            else:
                self.ui.show_deleted(name)
                self.tally.record(name, DeletionOutcome.SUCCEEDED)

            time.sleep(self.delete_delay)

        return self.tally

    def print_stats(self):
        """Print final statistics."""
        self.tally.print_stats(dry_run=self.dry_run)
