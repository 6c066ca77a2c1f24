import ast
import logging
from typing import List, Optional, Sequence
from pyoverload.compat import is_signature_compatible
from pyoverload.decl import ScopeKind, TIsOverload, collect_declarations
from pyoverload.error.errorbox import ErrorBox
from pyoverload.fsys import split_lines
from pyoverload.grouper import group_by_name
from pyoverload.marker import OverloadMarker
from pyoverload.validator import TIsCompatible, check_group
from pyoverload.visitor import BaseVisitor

logger = logging.getLogger(__name__)


class OverloadChecker(BaseVisitor):
    """Checks overload groups of a module and of every class inside it.

    A module's top-level functions form one scope, each class's methods form
    another. Functions nested in function bodies are not checked, classes
    nested anywhere are.

    @param is_stub: True if the module comes from a stub file, then nothing is
    reported.

    @param is_overload: decides whether a definition is an overload, by
    default decorators are matched against the imports of the checked module.
    """

    def __init__(
        self,
        errbox: ErrorBox,
        is_stub: bool = False,
        is_overload: Optional[TIsOverload] = None,
        is_compatible: TIsCompatible = is_signature_compatible,
    ) -> None:
        super().__init__()
        self.errbox = errbox
        self.is_stub = is_stub
        self.is_overload = is_overload
        self.is_compatible = is_compatible
        self.lines: Optional[List[str]] = None

    def check(self, tree: ast.AST, lines: Optional[List[str]] = None):
        """lines: source lines of tree, used to locate the name of each
        definition"""
        if self.is_stub:
            logger.debug(f"skip stub {self.errbox.tag}")
            return
        is_overload = self.is_overload
        if is_overload is None:
            # import aliases belong to this module only
            module = tree if isinstance(tree, ast.Module) else None
            is_overload = OverloadMarker(module)
        self.lines = lines
        self.visit(tree, is_overload)

    def visit_Module(self, node: ast.Module, is_overload: TIsOverload):
        self.check_scope(node.body, ScopeKind.MODULE, is_overload)
        self.generic_visit(node, is_overload)

    def visit_ClassDef(self, node: ast.ClassDef, is_overload: TIsOverload):
        logger.debug(f"check methods of class {node.name}")
        self.check_scope(node.body, ScopeKind.CLASS, is_overload)
        self.generic_visit(node, is_overload)

    def check_scope(
        self,
        body: Sequence[ast.stmt],
        scope_kind: ScopeKind,
        is_overload: TIsOverload,
    ):
        declarations = collect_declarations(body, is_overload, self.lines)
        for group in group_by_name(declarations).values():
            check_group(group, scope_kind, self.errbox, self.is_compatible)


def check_module(
    tree: ast.Module,
    errbox: ErrorBox,
    is_stub: bool = False,
    source: Optional[str] = None,
):
    """Check a parsed module with the default marker and compatibility check"""
    lines = split_lines(source) if source is not None else None
    OverloadChecker(errbox, is_stub).check(tree, lines)
