"""ID helpers: short unique suffixes for display and suffix resolution."""

from collections.abc import Sequence
from typing import Protocol


class _Identified(Protocol):
    id: str


def calculate_unique_suffixes(ids: list[str]) -> dict[str, int]:
    """
    Calculate minimum unique suffix length for each ID.

    Starts from length 1 and grows until unique among all IDs.

    Args:
        ids: List of full IDs

    Returns:
        Dict mapping id -> required suffix length
    """
    return {item_id: len(find_shortest_unique_suffix(ids, item_id)) for item_id in ids}


def find_shortest_unique_suffix(ids: Sequence[str], target_id: str) -> str:
    """
    Find the shortest suffix of target_id that uniquely identifies it.

    Args:
        ids: List of all IDs
        target_id: The ID to find a unique suffix for

    Returns:
        The shortest unique suffix
    """
    for length in range(1, len(target_id) + 1):
        suffix = target_id[-length:]
        conflicts = [other for other in ids if other != target_id and other.endswith(suffix)]
        if not conflicts:
            return suffix
    return target_id  # Fallback to full ID


def resolve_id(
    items: Sequence[_Identified],
    id_or_suffix: str,
    kind: str = "todo",
    describe=None,
) -> str:
    """
    Resolve a full ID or a unique suffix against already-loaded records.

    Args:
        items: Records to search (todos, categories or subtasks)
        id_or_suffix: Full ID or suffix typed by the user
        kind: Record name used in error messages
        describe: Optional callable returning a display name for a record

    Returns:
        The full ID

    Raises:
        ValueError: If no record matches or the suffix is ambiguous
    """
    if not id_or_suffix:
        raise ValueError(f"No {kind} ID given")

    for item in items:
        if item.id == id_or_suffix:
            return item.id

    matching = [item for item in items if item.id.endswith(id_or_suffix)]
    if not matching:
        raise ValueError(f"No {kind} found with ID or suffix '{id_or_suffix}'")

    if len(matching) > 1:
        all_ids = [item.id for item in items]
        suggestions = []
        for item in matching:
            unique_suffix = find_shortest_unique_suffix(all_ids, item.id)
            name = describe(item) if describe else item.id
            if len(name) > 70:
                name = name[:67] + "..."
            suggestions.append(f"  [{unique_suffix}] {name}")
        raise ValueError(
            f"Multiple {kind}s match suffix '{id_or_suffix}':\n"
            + "\n".join(suggestions)
            + f"\n\nUse the suffix in brackets to select a specific {kind}."
        )

    return matching[0].id
