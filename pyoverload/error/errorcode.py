import ast
import enum
from typing import Optional, TYPE_CHECKING, Protocol
from pyoverload.error.position import Position, ast_to_position
from pyoverload.error.level import Level
from pyoverload.error.message import Message, PositionMessage

if TYPE_CHECKING:
    from pyoverload.decl import Declaration, ScopeKind
    from pyoverload.fsys import FilePath


MANAGER_TAG = "__MANAGER_TAG__"


class Sendable(Protocol):
    def send(self, tag: str, msg: Message):
        ...


class HasTag(Protocol):
    tag: str


class DiagnosticKind(enum.Enum):
    MISSING_IMPLEMENTATION = 1
    INCOMPATIBLE_OVERLOAD = 2


class ErrorCode:
    __slots__ = ["level", "node"]

    kind: Optional[DiagnosticKind] = None

    def __init__(self, level: Level, node: Optional[ast.AST]):
        self.level = level
        self.node = node

    def to_string(self) -> str:
        ...

    def get_position(self) -> Optional[Position]:
        if self.node:
            return ast_to_position(self.node)
        return None

    def send_message(self, box: HasTag, mailman: Sendable):
        pos = self.get_position()
        if pos:
            msg = PositionMessage(self.level, pos, self.to_string())
        else:
            msg = Message(self.level, self.to_string())
        mailman.send(box.tag, msg)

    @staticmethod
    def concat_msg(review: str, detail: str) -> str:
        msg = review + "(" + detail + ")"
        return msg

    def __str__(self) -> str:
        return self.to_string()


class OverloadErrorCode(ErrorCode):
    """Finding anchored at the name identifier of a declaration."""

    __slots__ = ["decl", "scope_kind"]

    def __init__(self, decl: "Declaration", scope_kind: "ScopeKind"):
        super().__init__(Level.WARN, decl.node)
        self.decl = decl
        self.scope_kind = scope_kind

    @property
    def anchor(self) -> "Declaration":
        return self.decl

    def get_position(self) -> Optional[Position]:
        return self.decl.position


class MissingImplementation(OverloadErrorCode):
    template = (
        "A series of @overload-decorated {} should always be followed "
        "by an implementation that is not @overload-ed"
    )
    kind = DiagnosticKind.MISSING_IMPLEMENTATION

    def to_string(self) -> str:
        return self.template.format(self.scope_kind.plural)


class IncompatibleOverload(OverloadErrorCode):
    template = (
        "Signature of this @overload-decorated {} "
        "is not compatible with the implementation"
    )
    kind = DiagnosticKind.INCOMPATIBLE_OVERLOAD

    def to_string(self) -> str:
        return self.template.format(self.scope_kind.singular)


class FileNotFound(ErrorCode):
    template = "{} not found"

    def __init__(self, path: "FilePath") -> None:
        super().__init__(Level.ERROR, None)
        self.path = path

    def to_string(self) -> str:
        return self.template.format(self.path)


class ModuleSyntaxError(ErrorCode):
    template = "Cannot parse {}"

    def __init__(self, path: "FilePath", err: SyntaxError) -> None:
        super().__init__(Level.ERROR, None)
        self.path = path
        self.err = err

    def get_position(self) -> Optional[Position]:
        if self.err.lineno:
            col = max((self.err.offset or 1) - 1, 0)
            return Position(self.err.lineno, self.err.lineno, col, col)
        return None

    def to_string(self) -> str:
        return self.concat_msg(self.template.format(self.path), str(self.err.msg))


class FileUnreadable(ErrorCode):
    template = "Cannot read {}"

    def __init__(self, path: "FilePath", err: Exception) -> None:
        super().__init__(Level.ERROR, None)
        self.path = path
        self.err = err

    def to_string(self) -> str:
        detail = getattr(self.err, "strerror", None) or str(self.err)
        return self.concat_msg(self.template.format(self.path), detail)
