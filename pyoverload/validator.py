import logging
from typing import Any, Callable, Optional, Sequence, TYPE_CHECKING
from pyoverload.decl import Declaration, ScopeKind
from pyoverload.error.errorcode import MissingImplementation, IncompatibleOverload

if TYPE_CHECKING:
    from pyoverload.error.errorbox import ErrorBox

logger = logging.getLogger(__name__)

TIsCompatible = Callable[[Any, Any], bool]


def find_implementation(group: Sequence[Declaration]) -> Optional[Declaration]:
    """The last declaration that is not an overload"""
    for decl in reversed(group):
        if not decl.is_overload:
            return decl
    return None


def check_group(
    group: Sequence[Declaration],
    scope_kind: ScopeKind,
    errbox: "ErrorBox",
    is_compatible: TIsCompatible,
):
    """Check one group of same-name declarations sorted by position.

    Errors are added to errbox, exceptions raised by is_compatible are not
    caught.
    """
    assert group, "a group has at least one declaration"
    if not any(decl.is_overload for decl in group):
        return

    implementation = find_implementation(group)

    if implementation is None:
        tail = max(group, key=lambda decl: decl.position)
        logger.debug(f"{tail.name}: no implementation after overloads")
        errbox.add_err(MissingImplementation(tail, scope_kind))
        return

    if implementation is not group[-1]:
        logger.debug(f"{implementation.name}: overload follows the implementation")
        errbox.add_err(MissingImplementation(group[-1], scope_kind))

    for decl in group:
        if decl is implementation or not decl.is_overload:
            continue
        if not is_compatible(implementation.signature, decl.signature):
            errbox.add_err(IncompatibleOverload(decl, scope_kind))
