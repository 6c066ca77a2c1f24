"""Default signature compatibility check between an implementation and one of
its overloads.

The implementation is compatible when it accepts every call the overload
accepts. Annotations are compared in source form only: no name resolution is
done, so a subclass annotated in the overload is reported unless the
implementation uses the same type, a union containing it, Any or object. A
Literal value is accepted where the type of the value is.
"""
import ast
import logging
from typing import List, Optional
from pyoverload.arg import Arg, Argument, ann_to_str, eval_argument
from pyoverload.decl import FunctionNode

logger = logging.getLogger(__name__)

TOP_TYPES = {"Any", "object"}
TYPING_PREFIXES = ("typing.", "typing_extensions.")

# bool is acceptable where int is expected, int where float is, int and float
# where complex is
NUMERIC_PROMOTION = {
    "bool": {"int", "float", "complex"},
    "int": {"float", "complex"},
    "float": {"complex"},
}


def normalize_type(text: str) -> str:
    text = text.strip()
    for prefix in TYPING_PREFIXES:
        if text.startswith(prefix):
            return text[len(prefix):]
    return text


def _union_members(node: ast.expr) -> List[str]:
    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
        return _union_members(node.left) + _union_members(node.right)
    if isinstance(node, ast.Subscript):
        head = normalize_type(ast.unparse(node.value))
        if head == "Union":
            elts = node.slice.elts if isinstance(node.slice, ast.Tuple) else [node.slice]
            res = []
            for elt in elts:
                res.extend(_union_members(elt))
            return res
        elif head == "Optional":
            return _union_members(node.slice) + ["None"]
        elif head == "Literal":
            # Literal[a, b] is Literal[a] | Literal[b]
            elts = node.slice.elts if isinstance(node.slice, ast.Tuple) else [node.slice]
            return [f"Literal[{ast.unparse(elt)}]" for elt in elts]
    if isinstance(node, ast.Constant) and node.value is None:
        return ["None"]
    return [normalize_type(ast.unparse(node))]


def split_union(text: str) -> List[str]:
    """Split an annotation into the members of its union

    Example:
    - 'Union[int, str]' -> ['int', 'str']
    - 'Optional[int]' -> ['int', 'None']
    - 'int | None' -> ['int', 'None']
    """
    try:
        node = ast.parse(text, mode="eval").body
    except SyntaxError:
        logger.debug(f"annotation {text!r} is not an expression")
        return [normalize_type(text)]
    return _union_members(node)


def literal_type(member: str) -> Optional[str]:
    """Name of the type of the value in a union member like 'Literal[1]', None if
    member is not a literal

    Example:
    - 'Literal[True]' -> 'bool'
    - 'Literal[None]' -> 'None'
    - 'Literal[Color.RED]' -> 'Color'
    """
    try:
        node = ast.parse(member, mode="eval").body
    except SyntaxError:
        return None
    if not isinstance(node, ast.Subscript):
        return None
    if normalize_type(ast.unparse(node.value)) != "Literal":
        return None
    value = node.slice
    if isinstance(value, ast.UnaryOp) and isinstance(value.op, ast.USub):
        value = value.operand
    if isinstance(value, ast.Constant):
        if value.value is None:
            return "None"
        return type(value.value).__name__
    if isinstance(value, ast.Attribute):
        # enum member
        return normalize_type(ast.unparse(value.value))
    return None


def is_ann_acceptable(impl_ann: Optional[str], ovl_ann: Optional[str]) -> bool:
    """Can a value annotated ovl_ann be passed where impl_ann is expected?"""
    if impl_ann is None or ovl_ann is None:
        return True
    impl_members = set(split_union(impl_ann))
    if impl_members & TOP_TYPES:
        return True
    ovl_members = split_union(ovl_ann)
    if "Any" in ovl_members:
        return True
    for member in ovl_members:
        if member in impl_members:
            continue
        member = literal_type(member) or member
        if member in impl_members:
            continue
        if NUMERIC_PROMOTION.get(member, set()) & impl_members:
            continue
        return False
    return True


def _check_positional(impl: Argument, ovl: Argument) -> bool:
    impl_pos = impl.positional
    ovl_pos = ovl.positional
    for i, oarg in enumerate(ovl_pos):
        by_keyword = i >= len(ovl.posonlyargs)
        if i < len(impl_pos):
            iarg = impl_pos[i]
            if not is_ann_acceptable(iarg.ann, oarg.ann):
                return False
            if oarg.valid and not iarg.valid:
                return False
            if by_keyword:
                same_name = i >= len(impl.posonlyargs) and iarg.name == oarg.name
                if not same_name and not (impl.kwarg and iarg.valid):
                    return False
        elif impl.vararg:
            if not is_ann_acceptable(impl.vararg.ann, oarg.ann):
                return False
            if by_keyword:
                target = _find_kwonly(impl, oarg.name)
                if target:
                    # omitted when the value travels through *args
                    if not target.valid or not is_ann_acceptable(target.ann, oarg.ann):
                        return False
                elif not impl.kwarg:
                    return False
        else:
            return False
    return True


def _find_kwonly(argument: Argument, name: str) -> Optional[Arg]:
    for arg in argument.kwonlyargs:
        if arg.name == name:
            return arg
    return None


def _check_keyword(impl: Argument, ovl: Argument) -> bool:
    n_ovl_pos = len(ovl.positional)
    # impl parameters already bound positionally can't take a keyword
    free_args = impl.positional[n_ovl_pos:]
    free_args = [arg for arg in free_args if arg not in impl.posonlyargs]
    for oarg in ovl.kwonlyargs:
        target = None
        for arg in free_args + impl.kwonlyargs:
            if arg.name == oarg.name:
                target = arg
                break
        if target:
            if not is_ann_acceptable(target.ann, oarg.ann):
                return False
            if oarg.valid and not target.valid:
                return False
        elif impl.kwarg:
            if not is_ann_acceptable(impl.kwarg.ann, oarg.ann):
                return False
        else:
            return False
    return True


def _check_required(impl: Argument, ovl: Argument) -> bool:
    """Parameters without default value of impl are always supplied"""
    n_ovl_pos = len(ovl.positional)
    required_kw = {arg.name for arg in ovl.kwonlyargs if not arg.valid}
    for i, iarg in enumerate(impl.positional):
        if i < n_ovl_pos or iarg.valid:
            continue
        if iarg in impl.posonlyargs or iarg.name not in required_kw:
            return False
    for iarg in impl.kwonlyargs:
        if not iarg.valid and iarg.name not in required_kw:
            return False
    return True


def is_argument_compatible(impl: Argument, ovl: Argument) -> bool:
    if ovl.vararg:
        if not impl.vararg or not is_ann_acceptable(impl.vararg.ann, ovl.vararg.ann):
            return False
    if ovl.kwarg:
        if not impl.kwarg or not is_ann_acceptable(impl.kwarg.ann, ovl.kwarg.ann):
            return False
    return (
        _check_positional(impl, ovl)
        and _check_keyword(impl, ovl)
        and _check_required(impl, ovl)
    )


def is_signature_compatible(implementation: FunctionNode, overload: FunctionNode) -> bool:
    """True if implementation can serve every call described by overload"""
    impl_argument = eval_argument(implementation.args)
    ovl_argument = eval_argument(overload.args)
    if not is_argument_compatible(impl_argument, ovl_argument):
        logger.debug(
            f"{implementation.name}{impl_argument} doesn't accept "
            f"{overload.name}{ovl_argument}"
        )
        return False
    impl_ret = ann_to_str(implementation.returns)
    ovl_ret = ann_to_str(overload.returns)
    if not is_ann_acceptable(impl_ret, ovl_ret):
        logger.debug(f"return type {ovl_ret} is not covered by {impl_ret}")
        return False
    return True
