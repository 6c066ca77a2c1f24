import ast
from pyoverload.decl import (
    ScopeKind,
    collect_declarations,
    iter_scope_functions,
    name_position,
)
from pyoverload.fsys import split_lines
from pyoverload.marker import OverloadMarker

SRC = '''\
import sys
from typing import overload

@overload
def f(a: int) -> int: ...
async  def   f(a): ...

if sys.version_info >= (3, 8):
    def g(): ...
else:
    def g(): ...

try:
    def h(): ...
except ImportError:
    def h(): ...
finally:
    pass

with open("x") as fp:
    def w(): ...

class C:
    def method(self):
        def local(): ...

def outer():
    def inner(): ...
'''


def test_iter_scope_functions():
    module = ast.parse(SRC)
    names = [node.name for node in iter_scope_functions(module.body)]
    assert names == ["f", "f", "g", "g", "h", "h", "w", "outer"]

    cls = [node for node in module.body if isinstance(node, ast.ClassDef)][0]
    assert [node.name for node in iter_scope_functions(cls.body)] == ["method"]


def test_name_position():
    lines = SRC.splitlines()
    module = ast.parse(SRC)
    funcs = list(iter_scope_functions(module.body))

    pos = name_position(funcs[0], lines)
    assert (pos.lineno, pos.col_offset, pos.end_col_offset) == (5, 4, 5)

    pos = name_position(funcs[1], lines)
    assert (pos.lineno, pos.col_offset) == (6, 13)

    # without source the name is assumed to follow a single space
    pos = name_position(funcs[1])
    assert (pos.lineno, pos.col_offset) == (6, 10)

    pos = name_position(funcs[2], lines)
    assert (pos.lineno, pos.col_offset) == (9, 8)


def test_collect_declarations():
    module = ast.parse(SRC)
    decls = collect_declarations(module.body, OverloadMarker(module), SRC.splitlines())
    assert [(decl.name, decl.is_overload) for decl in decls[:2]] == [
        ("f", True),
        ("f", False),
    ]
    assert decls[0].signature is decls[0].node
    assert isinstance(decls[1].node, ast.AsyncFunctionDef)
    positions = [decl.position for decl in decls]
    assert len(set(positions)) == len(positions)


def test_scope_kind_noun():
    assert ScopeKind.MODULE.singular == "function"
    assert ScopeKind.MODULE.plural == "functions"
    assert ScopeKind.CLASS.singular == "method"
    assert ScopeKind.CLASS.plural == "methods"


def test_split_lines():
    assert split_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]
    assert split_lines("a\x0cb\n\x0c\nc\x85d e") == ["a\x0cb", "\x0c", "c\x85d e"]
