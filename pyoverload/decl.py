import ast
import enum
from typing import Callable, Iterator, List, Optional, Sequence, Union
from pyoverload.error.position import Position

FunctionNode = Union[ast.FunctionDef, ast.AsyncFunctionDef]
TIsOverload = Callable[[FunctionNode], bool]


class ScopeKind(enum.Enum):
    MODULE = ("function", "functions")
    CLASS = ("method", "methods")

    @property
    def singular(self) -> str:
        return self.value[0]

    @property
    def plural(self) -> str:
        return self.value[1]


class Declaration:
    """One function or method definition of a scope.

    signature is handed to the compatibility check as is, by default it is the
    defining node itself.
    """

    __slots__ = ["name", "position", "is_overload", "signature", "node"]

    def __init__(
        self,
        name: str,
        position: Position,
        is_overload: bool,
        signature=None,
        node: Optional[ast.AST] = None,
    ):
        self.name = name
        self.position = position
        self.is_overload = is_overload
        self.signature = signature
        self.node = node

    def __repr__(self) -> str:
        marker = "@overload " if self.is_overload else ""
        return f"<Declaration {marker}{self.name} at {self.position}>"


# statements whose bodies still belong to the enclosing scope
_BLOCK_FIELDS = {
    ast.If: ("body", "orelse"),
    ast.Try: ("body", "handlers", "orelse", "finalbody"),
    ast.ExceptHandler: ("body",),
    ast.With: ("body",),
    ast.AsyncWith: ("body",),
}
if hasattr(ast, "TryStar"):
    _BLOCK_FIELDS[ast.TryStar] = ("body", "handlers", "orelse", "finalbody")


def iter_scope_functions(body: Sequence[ast.stmt]) -> Iterator[FunctionNode]:
    """Yield function definitions declared directly in a module or class body.

    Conditional blocks (if TYPE_CHECKING, try/except, with) are entered,
    function and class bodies are not.
    """
    for stmt in body:
        if isinstance(stmt, (ast.FunctionDef, ast.AsyncFunctionDef)):
            yield stmt
            continue
        fields = _BLOCK_FIELDS.get(type(stmt))
        if not fields:
            continue
        for field in fields:
            yield from iter_scope_functions(getattr(stmt, field, []))


def name_position(node: FunctionNode, lines: Optional[List[str]] = None) -> Position:
    """Position of the name identifier following def/async def"""
    lineno = node.lineno
    col = None
    if lines and 0 < lineno <= len(lines):
        line = lines[lineno - 1]
        # ast offsets are utf-8 byte offsets
        raw = line.encode("utf-8")
        keyword = raw.find(b"def", node.col_offset)
        if keyword != -1:
            start = raw.find(node.name.encode("utf-8"), keyword + len(b"def"))
            if start != -1:
                col = start
    if col is None:
        prefix = "async def " if isinstance(node, ast.AsyncFunctionDef) else "def "
        col = node.col_offset + len(prefix)
    return Position(lineno, lineno, col, col + len(node.name.encode("utf-8")))


def collect_declarations(
    body: Sequence[ast.stmt],
    is_overload: TIsOverload,
    lines: Optional[List[str]] = None,
) -> List[Declaration]:
    """Build the declarations of one scope in discovery order"""
    return [
        Declaration(node.name, name_position(node, lines), is_overload(node), node, node)
        for node in iter_scope_functions(body)
    ]
