"""Upload completion evaluation for events."""

from collections.abc import Iterable
from dataclasses import dataclass

from eventface.domain.assignments import PhotographerAssignment


@dataclass(frozen=True)
class CompletionSnapshot:
    """Point-in-time view of photographer progress for one event."""

    assigned: int
    done: int

    @property
    def complete(self) -> bool:
        """Return true when no assigned photographer is still uploading."""
        return self.done == self.assigned

    @property
    def pending(self) -> int:
        """Return the number of photographers still uploading."""
        return self.assigned - self.done


def is_complete(assignments: Iterable[PhotographerAssignment]) -> bool:
    """Return true when every assignment is done; an empty set is complete."""
    return all(assignment.uploads_complete for assignment in assignments)


def snapshot(assignments: Iterable[PhotographerAssignment]) -> CompletionSnapshot:
    """Summarize assignment progress."""
    rows = list(assignments)
    return CompletionSnapshot(
        assigned=len(rows),
        done=sum(1 for row in rows if row.uploads_complete),
    )
