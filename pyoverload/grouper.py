from typing import Dict, Iterable, List
from pyoverload.decl import Declaration

TGroups = Dict[str, List[Declaration]]


def group_by_name(declarations: Iterable[Declaration]) -> TGroups:
    """Partition the declarations of one scope by name.

    Every group is sorted by position once everything is collected, so the
    order of the input doesn't matter.
    """
    groups: TGroups = {}
    for decl in declarations:
        groups.setdefault(decl.name, []).append(decl)
    for group in groups.values():
        group.sort(key=lambda decl: decl.position)
    return groups
