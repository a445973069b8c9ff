"""Table-driven translation of syntax trees into Docs.

A grammar provides a ``RuleTable`` mapping node kinds to rule functions and
a ``ContinuationPolicy``. Each rule receives the ``TreePath`` of the node to
translate and a ``TranslateContext`` through which it translates children
and queries the continuation policy:

    rules = RuleTable()

    @rules.register('parenthesized_expression')
    def paren(path, ctx):
        return concat(['(', ctx.print(path.child(0)), ')'])
"""
import logging

from .api import (
    break_group,
    concat,
    conditional_group,
    fill,
    group,
    indent,
    NIL,
    LINE,
)
from .continuation import flatten_chain, is_continuation
from .errors import TranslationError
from .tree import TreePath

logger = logging.getLogger(__name__)


class RuleTable:
    def __init__(self, rules=None):
        self._rules = dict(rules or {})

    def register(self, *kinds):
        def decorator(fn):
            for kind in kinds:
                self._rules[kind] = fn
            return fn
        return decorator

    def get(self, kind):
        return self._rules.get(kind)

    def kinds(self):
        return frozenset(self._rules)

    def __contains__(self, kind):
        return kind in self._rules


class TranslateContext:
    __slots__ = ('translator', 'node_count')

    def __init__(self, translator):
        self.translator = translator
        self.node_count = 0

    @property
    def policy(self):
        return self.translator.policy

    def print(self, path):
        node = path.node
        rule = self.translator.rules.get(node.kind)
        if rule is None:
            raise TranslationError(node.kind, node.span)
        self.node_count += 1
        return rule(path, self)

    def print_children(self, path):
        return [self.print(child) for child in path.children()]

    def is_continuation(self, path):
        return is_continuation(path, self.translator.policy)

    def flatten_chain(self, path):
        return flatten_chain(
            path,
            self.translator.policy,
            self.translator.operator_of,
        )


class Translator:
    def __init__(self, rules, policy, operator_of=None):
        self.rules = rules
        self.policy = policy
        self.operator_of = operator_of

    def translate(self, root):
        ctx = TranslateContext(self)
        doc = ctx.print(TreePath.root(root))
        logger.debug(
            'Translated %d node(s) under %r',
            ctx.node_count,
            root.kind,
        )
        return doc


def hug_operand(operand, separator=LINE):
    """Builds the three layouts for an operand that can hug its operator.

    In order: everything flat; the operand kept on the operator's line with
    its own group broken; the operand moved to the next line.
    """
    return conditional_group([
        concat([' ', operand]),
        concat([' ', break_group(operand)]),
        concat([separator, operand]),
    ])


def binary_chain(
    operands,
    operators,
    *,
    indent_rest=True,
    packed=False,
    hug_last=False,
):
    """Lays out a flattened operator chain ``a op b op c ...``.

    Operators stay at the end of the line they follow. The first operand
    stays outside the indentation; every continuation line shares a single
    ``Indent`` (none at all without ``indent_rest``). With ``packed``, the
    continuation operands are filled onto as few lines as fit, otherwise
    the chain breaks at every operator or not at all.
    """
    if len(operands) != len(operators) + 1:
        raise ValueError(
            f'Expected {len(operators) + 1} operands, got {len(operands)}'
        )
    if not operators:
        return operands[0]

    head = concat([operands[0], ' ', operators[0]])
    middle = [
        concat([operand, ' ', operator])
        for operand, operator in zip(operands[1:-1], operators[1:])
    ]
    last = operands[-1]

    rest = []
    if packed:
        # The fill starts with empty content so that its first separator
        # is decided like every other one.
        parts = [NIL]
        for item in middle:
            parts.extend([LINE, item])
        if not hug_last:
            parts.extend([LINE, last])
        if len(parts) > 1:
            rest.append(fill(parts))
    else:
        for item in middle:
            rest.extend([LINE, item])
        if not hug_last:
            rest.extend([LINE, last])

    if hug_last:
        rest.append(hug_operand(last))

    rest = concat(rest)
    if indent_rest:
        rest = indent(rest)
    return group(concat([head, rest]))
