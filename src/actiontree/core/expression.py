"""
Restricted Expression Language for Condition Nodes

Condition actions carry a short boolean expression such as
``date === '1.1.2025' && !muted``. Expressions are evaluated here by a small
AST interpreter over a whitelist of node types. The string is never handed to
Python's ``eval`` or any other general-purpose evaluator.

Supported syntax:
- Literals: 'string', "string", integers, floats, true/false, null/undefined
- Variables: name, dotted lookups into nested mappings (order.total)
- Comparisons: ===, !==, ==, !=, <, <=, >, >=, in, not in (chains allowed)
- Boolean logic: &&, ||, ! as well as and, or, not
- Unary minus, list literals (for ``in``), parentheses

Names missing from the context resolve to ``None`` (undefined) rather than
raising. Everything else, including function calls, subscripts and
arithmetic, is rejected as disallowed syntax.
"""

from __future__ import annotations

import ast
import re
from typing import Any, Mapping, Set

from actiontree.core.errors import ExpressionEvaluationError

# Whitelist of allowed AST node types
ALLOWED_NODES: Set[type] = {
    ast.Expression,
    ast.BoolOp,
    ast.And, ast.Or, ast.Not,
    ast.UnaryOp, ast.USub, ast.UAdd, ast.Invert,
    ast.Compare,
    ast.Name,
    ast.Attribute,
    ast.Load,
    ast.Constant,
    ast.List,
    ast.Tuple,
    ast.In, ast.NotIn,
    ast.Eq, ast.NotEq,
    ast.Lt, ast.LtE, ast.Gt, ast.GtE,
}

_JS_TOKENS = re.compile(
    r"""(?P<string>'(?:\\.|[^'\\])*'|"(?:\\.|[^"\\])*")"""
    r"""|(?P<op>===|!==|&&|\|\||!(?!=))"""
    r"""|(?P<tilde>~)"""
    r"""|(?P<word>\b(?:true|false|null|undefined)\b)"""
)

_REPLACEMENTS = {
    "===": "==",
    "!==": "!=",
    "&&": " and ",
    "||": " or ",
    # `~` binds tighter than comparisons, like JS `!`; it is read back as logical not
    "!": "~",
    "true": "True",
    "false": "False",
    "null": "None",
    "undefined": "None",
}


def _rewrite_js_operators(expr: str) -> str:
    """
    Translate JavaScript-style operators and keywords to their Python spelling.

    String literals are matched first and passed through untouched, so an
    operator inside quotes is never rewritten. `!` becomes a prefix `~` so it
    keeps its JavaScript precedence (`!a === b` is `(!a) === b`); a literal
    `~` in the input is rejected.

    Examples:
        >>> _rewrite_js_operators("date === '1.1.2025' && !muted")
        "date == '1.1.2025'  and  ~muted"
        >>> _rewrite_js_operators("note !== 'a && b'")
        "note != 'a && b'"
    """

    def _sub(match: re.Match) -> str:
        if match.group("string") is not None:
            return match.group("string")
        if match.group("tilde") is not None:
            raise ValueError("Disallowed syntax: ~")
        return _REPLACEMENTS[match.group(0)]

    return _JS_TOKENS.sub(_sub, expr).strip()


def _validate_ast(node: ast.AST) -> None:
    """
    Recursively check that an AST only contains whitelisted node types.

    Raises:
        ValueError: If any node type is not in the whitelist
    """
    if type(node) not in ALLOWED_NODES:
        raise ValueError(f"Disallowed syntax: {type(node).__name__}")
    for child in ast.iter_child_nodes(node):
        _validate_ast(child)


def _parse(expr: str) -> ast.Expression:
    code = _rewrite_js_operators(expr)
    try:
        tree = ast.parse(code, mode="eval")
    except SyntaxError as e:
        raise ValueError(f"Invalid expression syntax: {expr}") from e
    _validate_ast(tree)
    return tree


def eval_expr(expr: str, ctx: Mapping[str, Any]) -> Any:
    """
    Evaluate an expression against a variable mapping and return its raw value.

    Raises:
        ExpressionEvaluationError: On invalid syntax, disallowed operations or
            any runtime failure (for example ordering ``None`` against a number)
    """
    try:
        tree = _parse(expr)
        return _eval_node(tree.body, ctx)
    except ExpressionEvaluationError:
        raise
    except Exception as exc:
        raise ExpressionEvaluationError(expr, str(exc)) from exc


def evaluate_condition(expr: str, ctx: Mapping[str, Any]) -> bool:
    """Evaluate an expression and coerce the result to a boolean."""
    return bool(eval_expr(expr, ctx))


def _eval_node(node: ast.AST, ctx: Mapping[str, Any]) -> Any:
    if isinstance(node, ast.Constant):
        value = node.value
        if value is None or isinstance(value, (str, bool, int, float)):
            return value
        raise ValueError(f"Unsupported literal: {value!r}")

    # Unknown names are undefined, not an error
    if isinstance(node, ast.Name):
        return ctx.get(node.id)

    if isinstance(node, ast.Attribute):
        base = _eval_node(node.value, ctx)
        if base is None:
            raise ValueError(f"Cannot read '{node.attr}' of undefined")
        if isinstance(base, Mapping):
            return base.get(node.attr)
        return None

    if isinstance(node, ast.List):
        return [_eval_node(elt, ctx) for elt in node.elts]

    if isinstance(node, ast.Tuple):
        return tuple(_eval_node(elt, ctx) for elt in node.elts)

    if isinstance(node, ast.UnaryOp):
        operand = _eval_node(node.operand, ctx)
        if isinstance(node.op, (ast.Not, ast.Invert)):
            return not bool(operand)
        if isinstance(operand, bool) or not isinstance(operand, (int, float)):
            raise ValueError(f"Unary minus/plus needs a number, got {operand!r}")
        return -operand if isinstance(node.op, ast.USub) else operand

    if isinstance(node, ast.BoolOp):
        if isinstance(node.op, ast.And):
            return all(bool(_eval_node(value_node, ctx)) for value_node in node.values)
        return any(bool(_eval_node(value_node, ctx)) for value_node in node.values)

    if isinstance(node, ast.Compare):
        left = _eval_node(node.left, ctx)
        for op, comparator in zip(node.ops, node.comparators):
            right = _eval_node(comparator, ctx)
            if not _compare(op, left, right):
                return False
            left = right
        return True

    raise ValueError(f"Unsupported expression node: {type(node).__name__}")


def _compare(op: ast.cmpop, left: Any, right: Any) -> bool:
    if isinstance(op, ast.Eq):
        return left == right
    if isinstance(op, ast.NotEq):
        return left != right
    if isinstance(op, ast.Lt):
        return left < right
    if isinstance(op, ast.LtE):
        return left <= right
    if isinstance(op, ast.Gt):
        return left > right
    if isinstance(op, ast.GtE):
        return left >= right
    if isinstance(op, ast.In):
        return left in right
    if isinstance(op, ast.NotIn):
        return left not in right
    raise ValueError(f"Unsupported comparison operator: {type(op).__name__}")


def validate_expression_syntax(expr: str) -> None:
    """
    Check that an expression parses and uses only allowed syntax, without evaluating it.

    Raises:
        ExpressionEvaluationError: If the expression is invalid
    """
    try:
        _parse(expr)
    except ValueError as exc:
        raise ExpressionEvaluationError(expr, str(exc)) from exc


__all__ = ["ALLOWED_NODES", "eval_expr", "evaluate_condition", "validate_expression_syntax"]
