"""Condition and branch helpers: negate a test, invert an if/else, find exits."""

from typing import Callable, List, Optional, Tuple, Union

import libcst as cst

# Operators whose negation is exactly the other operator, for any operands.
_COMPLEMENTS = {
    cst.Equal: cst.NotEqual,
    cst.NotEqual: cst.Equal,
    cst.In: cst.NotIn,
    cst.NotIn: cst.In,
    cst.Is: cst.IsNot,
    cst.IsNot: cst.Is,
}

# Expressions that bind looser than `not` and need parentheses under it.
_LOOSE_BINDING = (cst.BooleanOperation, cst.IfExp, cst.Lambda, cst.NamedExpr)

Block = Union[cst.IndentedBlock, cst.SimpleStatementSuite]


def _parenthesize(expr: cst.BaseExpression) -> cst.BaseExpression:
    if expr.lpar:
        return expr
    return expr.with_changes(lpar=[cst.LeftParen()], rpar=[cst.RightParen()])


def _wrap_not(expr: cst.BaseExpression) -> cst.UnaryOperation:
    if isinstance(expr, _LOOSE_BINDING):
        expr = _parenthesize(expr)
    return cst.UnaryOperation(operator=cst.Not(), expression=expr)


def _complement(op: cst.BaseCompOp) -> cst.BaseCompOp:
    new_op = _COMPLEMENTS[type(op)]
    return new_op(
        whitespace_before=op.whitespace_before,
        whitespace_after=op.whitespace_after,
    )


def _negate_comparison(expr: cst.Comparison) -> cst.BaseExpression:
    # Ordering operators are not complements of each other (NaN, sets), and a
    # chained comparison does not distribute, so both keep an explicit `not`.
    if len(expr.comparisons) != 1:
        return _wrap_not(expr)
    target = expr.comparisons[0]
    if type(target.operator) not in _COMPLEMENTS:
        return _wrap_not(expr)
    return expr.with_changes(
        comparisons=[target.with_changes(operator=_complement(target.operator))]
    )


def _negate_boolean(expr: cst.BooleanOperation) -> cst.BooleanOperation:
    """Apply De Morgan's law, keeping operand order (and so short-circuiting)."""
    op = expr.operator
    if isinstance(op, cst.And):
        new_op: cst.BaseBooleanOp = cst.Or(
            whitespace_before=op.whitespace_before,
            whitespace_after=op.whitespace_after,
        )
    else:
        new_op = cst.And(
            whitespace_before=op.whitespace_before,
            whitespace_after=op.whitespace_after,
        )
    left = negate(expr.left)
    right = negate(expr.right)
    if isinstance(new_op, cst.And):
        # `a and b or c` negates to `(not a or not b) and not c`
        left = _guard_or(left)
        right = _guard_or(right)
    return expr.with_changes(left=left, operator=new_op, right=right)


def _guard_or(expr: cst.BaseExpression) -> cst.BaseExpression:
    if isinstance(expr, cst.BooleanOperation) and isinstance(expr.operator, cst.Or):
        return _parenthesize(expr)
    return expr


def negate(expr: cst.BaseExpression) -> cst.BaseExpression:
    """Return an expression that is truthy exactly when *expr* is falsy."""
    if isinstance(expr, cst.UnaryOperation) and isinstance(expr.operator, cst.Not):
        return expr.expression
    if isinstance(expr, cst.Name) and expr.value in ("True", "False"):
        return expr.with_changes(value="False" if expr.value == "True" else "True")
    if isinstance(expr, cst.Comparison):
        return _negate_comparison(expr)
    if isinstance(expr, cst.BooleanOperation):
        return _negate_boolean(expr)
    return _wrap_not(expr)


def invert_if(node: cst.If) -> Optional[cst.If]:
    """Negate the test of *node* and swap its body with its else body.

    Returns None if *node* has no plain ``else`` clause (no else, or elif).
    """
    orelse = node.orelse
    if not isinstance(orelse, cst.Else):
        return None
    test = negate(node.test)
    whitespace = node.whitespace_before_test
    # `if(x):` becomes `if not (x):`, never `ifnot (x):`
    if not test.lpar and not whitespace.value:
        whitespace = cst.SimpleWhitespace(" ")
    return node.with_changes(
        test=test,
        whitespace_before_test=whitespace,
        body=orelse.body,
        orelse=orelse.with_changes(body=node.body),
    )


def else_chain(
    node: cst.If, parent_of: Callable[[cst.CSTNode], Optional[cst.CSTNode]]
) -> List[cst.If]:
    """Return *node* followed by each ``If`` it is reached from via ``orelse``.

    The last element is the head of the chain: the ``if`` that is an ordinary
    statement in its block.
    """
    chain = [node]
    current = node
    while True:
        parent = parent_of(current)
        if not isinstance(parent, cst.If) or parent.orelse is not current:
            return chain
        chain.append(parent)
        current = parent


def last_statement(block: Block) -> Optional[cst.CSTNode]:
    """Return the last statement executed at the end of *block*, or None.

    A trailing simple statement line is unpacked to its last small statement
    so that ``a(); return`` ends in the return.
    """
    if isinstance(block, cst.SimpleStatementSuite):
        return block.body[-1] if block.body else None
    if not block.body:
        return None
    last = block.body[-1]
    if isinstance(last, cst.SimpleStatementLine):
        return last.body[-1] if last.body else None
    return last


def is_terminator(stmt: Optional[cst.CSTNode]) -> bool:
    return isinstance(stmt, (cst.Return, cst.Raise))


def append_return(block: Block) -> Block:
    """Return *block* with a bare ``return`` added as its last statement."""
    if isinstance(block, cst.SimpleStatementSuite):
        return block.with_changes(body=[*block.body, cst.Return()])
    line = cst.SimpleStatementLine(body=[cst.Return()])
    return block.with_changes(body=[*block.body, line])


def block_statements(block: Block) -> List[cst.BaseStatement]:
    """Return the statements of *block* as they would sit in an enclosing body."""
    if isinstance(block, cst.SimpleStatementSuite):
        if not block.body:
            return []
        return [
            cst.SimpleStatementLine(
                body=block.body, trailing_whitespace=block.trailing_whitespace
            )
        ]
    return list(block.body)


def unwrap_else(
    orelse: cst.Else,
) -> Tuple[List[cst.BaseStatement], List[cst.EmptyLine]]:
    """Split *orelse* into statements for the enclosing body and trailing lines.

    Comments above ``else:`` and the comment on the block's header line are
    moved onto the first statement. The block's footer (comments and blank
    lines after its last statement) is returned separately, since it must
    follow the statements wherever they land.
    """
    statements = block_statements(orelse.body)
    if not statements:
        return [], []
    leading = list(orelse.leading_lines)
    footer: List[cst.EmptyLine] = []
    if isinstance(orelse.body, cst.IndentedBlock):
        comment = orelse.body.header.comment
        if comment is not None:
            leading.append(cst.EmptyLine(comment=comment))
        footer = list(orelse.body.footer)
    if leading:
        first = statements[0]
        statements[0] = first.with_changes(
            leading_lines=[*leading, *first.leading_lines]
        )
    return statements, footer


class _OwnScopeScanner(cst.CSTVisitor):
    """Record returns and yields belonging to one function, not nested scopes."""

    def __init__(self) -> None:
        self.returns_value = False
        self.is_generator = False

    def visit_FunctionDef(self, node: cst.FunctionDef) -> Optional[bool]:
        return False

    def visit_ClassDef(self, node: cst.ClassDef) -> Optional[bool]:
        return False

    def visit_Lambda(self, node: cst.Lambda) -> Optional[bool]:
        return False

    def visit_Return(self, node: cst.Return) -> None:
        if node.value is not None:
            self.returns_value = True

    def visit_Yield(self, node: cst.Yield) -> None:
        self.is_generator = True


def returns_value(function: cst.FunctionDef) -> bool:
    """Return True if a bare ``return`` would not be a valid exit of *function*.

    Generators always accept a bare return.  Otherwise a ``-> None``
    annotation means no value, any other annotation means a value, and an
    unannotated function returns a value if it has a ``return <expr>``.
    """
    scanner = _OwnScopeScanner()
    function.body.visit(scanner)
    if scanner.is_generator:
        return False
    if function.returns is not None:
        annotation = function.returns.annotation
        return not (isinstance(annotation, cst.Name) and annotation.value == "None")
    return scanner.returns_value
