"""User interface components for confirming and reporting tag deletions."""

from ..api.raindrop_client import Tag


class UserInterface:
    """Handles operator interaction for the tag cleanup run."""

    def show_summary(
        self, tags: list[Tag], allowlist: frozenset[str], to_delete: int, dry_run: bool
    ) -> None:
        """Print what the run is about to do.

        Args:
            tags: All tags fetched from Raindrop
            allowlist: Tags that will be kept
            to_delete: Number of tags that are not allowlisted
            dry_run: Whether deletions will be simulated
        """
        print(f"\n📚 Discovered {len(tags)} Raindrop tags")

        if not allowlist:
            print(f"📝 No tags in allowlist; all {to_delete} tags will be deleted.")
        else:
            listed = "\n\t".join(sorted(allowlist))
            print(f"📝 Allowlist contains {len(allowlist)} tags:\n\t{listed}\n")
            print(f"❌ {to_delete} other tags will be deleted.")

        if dry_run:
            print("🧪 DRY-RUN MODE: No tags will be deleted")

    def confirm(self) -> bool:
        """Block until the operator presses Enter.

        Returns:
            True to continue, False if input was closed
        """
        try:
            input("\nPress 'Enter' to continue (Ctrl-C to cancel) ...")
        except EOFError:
            print("\n❌ No confirmation received")
            return False
        return True

    def show_processing(self, tag: str) -> None:
        print(f"🏷️  Processing tag '{tag}'...")

    def show_allowlisted(self, tag: str) -> None:
        print(f"    ✅ '{tag}' is allowlisted; skipping it.")

    def show_duplicate(self, tag: str) -> None:
        print(f"    🔁 '{tag}' was listed more than once; skipping the repeat.")

    def show_dry_run(self, tag: str) -> None:
        print(f"    🧪 [DRY-RUN] Would delete '{tag}'.")

    def show_deleted(self, tag: str) -> None:
        print(f"    ❌ DELETED: {tag}")

    def show_failed(self, tag: str, reason: str) -> None:
        print(f"    ⚠️  Failed to delete '{tag}': {reason}")
