import ast
from typing import Optional, Set
from pyoverload.decl import FunctionNode

TYPING_MODULES = ("typing", "typing_extensions")
OVERLOAD = "overload"


class OverloadMarker:
    """Decides whether a function definition is decorated by typing.overload.

    Import aliases found at any level of the module are honored:
    - from typing import overload as ov
    - import typing as t
    """

    def __init__(self, module: Optional[ast.Module] = None) -> None:
        self.names: Set[str] = {OVERLOAD}
        self.modules: Set[str] = set(TYPING_MODULES)
        if module is not None:
            self.collect_imports(module)

    def collect_imports(self, module: ast.Module):
        for node in ast.walk(module):
            if isinstance(node, ast.ImportFrom):
                if node.level == 0 and node.module in TYPING_MODULES:
                    for alias in node.names:
                        if alias.name == OVERLOAD:
                            self.names.add(alias.asname or alias.name)
            elif isinstance(node, ast.Import):
                for alias in node.names:
                    if alias.name in TYPING_MODULES and alias.asname:
                        self.modules.add(alias.asname)

    def is_marker(self, decorator: ast.expr) -> bool:
        if isinstance(decorator, ast.Name):
            return decorator.id in self.names
        elif isinstance(decorator, ast.Attribute):
            return (
                decorator.attr == OVERLOAD
                and isinstance(decorator.value, ast.Name)
                and decorator.value.id in self.modules
            )
        return False

    def is_overload(self, node: FunctionNode) -> bool:
        for dec in node.decorator_list:
            if self.is_marker(dec):
                return True
        return False

    __call__ = is_overload
