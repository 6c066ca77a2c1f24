import ast
from typing import List, Optional


class Arg(object):
    def __init__(self, name: str, ann: Optional[str] = None, valid=False):
        """
        ann: annotation in source form, None if not annotated
        valid: whether this argument has default value
        """
        self.name = name
        self.ann = ann
        self.valid = valid

    def __str__(self):
        result = self.name
        if self.ann is not None:
            result += ": " + self.ann
        if self.valid:
            result += " = ..."
        return result


class Argument(object):
    def __init__(self):
        self.posonlyargs: List[Arg] = []
        self.args: List[Arg] = []
        self.kwonlyargs: List[Arg] = []

        # vararg and kwarg's star is not store in the name
        self.vararg: Optional[Arg] = None
        self.kwarg: Optional[Arg] = None

    @property
    def positional(self) -> List[Arg]:
        return self.posonlyargs + self.args

    def __str__(self):
        arg_list = [str(arg) for arg in self.posonlyargs + self.args]
        if self.vararg:
            arg_list.append("*" + str(self.vararg))
        elif self.kwonlyargs:
            arg_list.append("*")
        arg_list += [str(arg) for arg in self.kwonlyargs]
        if self.kwarg:
            arg_list.append("**" + str(self.kwarg))

        return "(" + ", ".join(arg_list) + ")"


def ann_to_str(node: Optional[ast.expr]) -> Optional[str]:
    if node is None:
        return None
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        # string forward reference
        return node.value.strip()
    return ast.unparse(node)


def eval_argument(node: ast.arguments) -> Argument:
    """Gernerate an Argument instance according to an ast.arguments node"""
    new_args = Argument()
    # order_arg: [**posonlyargs, **args]
    # these list is created to deal with default values
    order_arg: List[Arg] = []

    def resolve_arg(node: ast.arg) -> Arg:
        return Arg(node.arg, ann_to_str(node.annotation))

    def add_to_list(target_list: List[Arg], args: List[ast.arg]):
        for arg in args:
            newarg = resolve_arg(arg)
            target_list.append(newarg)
            order_arg.append(newarg)

    add_to_list(new_args.posonlyargs, node.posonlyargs)
    add_to_list(new_args.args, node.args)
    for kwarg in node.kwonlyargs:
        new_args.kwonlyargs.append(resolve_arg(kwarg))

    if node.vararg:
        new_args.vararg = resolve_arg(node.vararg)
    if node.kwarg:
        new_args.kwarg = resolve_arg(node.kwarg)

    for arg, _ in zip(reversed(order_arg), reversed(node.defaults)):
        arg.valid = True

    # kw_defaults holds None for keyword-only arguments without default
    for arg, value in zip(new_args.kwonlyargs, node.kw_defaults):
        arg.valid = value is not None

    return new_args
