import ast
from typing import Any


class BaseVisitor(object):
    """Calls visit_<node class name> if defined, otherwise visits the children.

    Unlike ast.NodeVisitor, a context value is handed down with every node.
    """

    def visit(self, node: ast.AST, ctx: Any):
        visit_func = getattr(self, 'visit_' + node.__class__.__name__,
                             self.generic_visit)
        return visit_func(node, ctx)

    def generic_visit(self, node: ast.AST, ctx: Any):
        for child in ast.iter_child_nodes(node):
            self.visit(child, ctx)
