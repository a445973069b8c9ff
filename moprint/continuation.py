"""Continuation indentation: deciding who owns an indentation level.

When an expression breaks over several lines, its continuation lines need
exactly one level of indentation relative to the construct they continue.
If every translation rule added an ``Indent`` of its own, nested
expressions would indent once per nesting level, producing a staircase.

``is_continuation`` answers, for a position in the syntax tree, whether an
ancestor has already opened an indentation scope that the position should
reuse. It walks up the explicit parent chain of a ``TreePath`` and stops at
the first ancestor that either claims the scope or bounds the search.
"""
from enum import Enum


class Role(Enum):
    # The ancestor's translation already indents its children.
    CLAIMS = 'claims'
    # The ancestor starts a fresh context; continuations below it indent.
    BOUNDARY = 'boundary'
    # The ancestor is a wrapper that doesn't affect layout; keep walking.
    TRANSPARENT = 'transparent'


class ContinuationPolicy:
    """Grammar-specific tables driving ``is_continuation``.

    - ``claiming_kinds``: parenthesized groups, named argument bindings and
      other nodes whose translation indents their content.
    - ``boundary_kinds``: declarations, statements, argument lists.
    - ``transparent_kinds``: single-child wrappers with no layout of their own.
    - ``conditional_kinds``: conditional expressions. They claim the scope for
      their value branches, but bound it for their condition, which sits at
      one of ``condition_indices``.
    - ``binary_kinds``: binary operator nodes. ``precedence_of`` maps such a
      node to its precedence class; an ancestor chain of the same class
      claims the scope, one of another class is transparent.

    Kinds not listed anywhere are boundaries.
    """
    __slots__ = (
        'claiming_kinds',
        'boundary_kinds',
        'transparent_kinds',
        'conditional_kinds',
        'condition_indices',
        'binary_kinds',
        'precedence_of',
    )

    def __init__(
        self,
        *,
        claiming_kinds=(),
        boundary_kinds=(),
        transparent_kinds=(),
        conditional_kinds=(),
        condition_indices=(0, ),
        binary_kinds=(),
        precedence_of=None,
    ):
        self.claiming_kinds = frozenset(claiming_kinds)
        self.boundary_kinds = frozenset(boundary_kinds)
        self.transparent_kinds = frozenset(transparent_kinds)
        self.conditional_kinds = frozenset(conditional_kinds)
        self.condition_indices = frozenset(condition_indices)
        self.binary_kinds = frozenset(binary_kinds)
        self.precedence_of = precedence_of

    def precedence(self, node):
        if node.kind not in self.binary_kinds or self.precedence_of is None:
            return None
        return self.precedence_of(node)

    def classify(self, ancestor, child_index, subject):
        """Returns the ``Role`` of ``ancestor`` for a walk started at
        ``subject`` that reached it through its child at ``child_index``."""
        kind = ancestor.kind

        if kind in self.binary_kinds:
            subject_precedence = self.precedence(subject)
            if (
                subject_precedence is not None and
                self.precedence(ancestor) == subject_precedence
            ):
                return Role.CLAIMS
            return Role.TRANSPARENT

        if kind in self.conditional_kinds:
            if child_index in self.condition_indices:
                return Role.BOUNDARY
            return Role.CLAIMS

        if kind in self.claiming_kinds:
            return Role.CLAIMS
        if kind in self.boundary_kinds:
            return Role.BOUNDARY
        if kind in self.transparent_kinds:
            return Role.TRANSPARENT
        return Role.BOUNDARY

    def unwrap(self, path):
        """Follows single-child transparent wrappers down from ``path``."""
        while (
            path.node.kind in self.transparent_kinds and
            len(path.node.children) == 1
        ):
            path = path.child(0)
        return path


def is_continuation(path, policy):
    """Checks if an ancestor of ``path`` already opened the indentation
    scope that continuation lines at ``path`` should use."""
    subject = path.node
    for ancestor, child_index in path.ancestors():
        role = policy.classify(ancestor.node, child_index, subject)
        if role is Role.CLAIMS:
            return True
        if role is Role.BOUNDARY:
            return False
    return False


def flatten_chain(path, policy, operator_of):
    """Flattens a run of same-precedence binary operators rooted at ``path``.

    Returns ``(operand_paths, operators)`` with
    ``len(operand_paths) == len(operators) + 1``, in source order. Operands
    of another precedence class, and parenthesized operands, are not
    descended into.
    """
    precedence = policy.precedence(policy.unwrap(path).node)

    operands = []
    operators = []
    # Items are ('path', TreePath) or ('op', str); the top of the stack is
    # the next item in source order.
    stack = [('path', path)]
    while stack:
        tag, item = stack.pop()
        if tag == 'op':
            operators.append(item)
            continue

        inner = policy.unwrap(item)
        node = inner.node
        if (
            precedence is not None and
            len(node.children) == 2 and
            policy.precedence(node) == precedence
        ):
            stack.append(('path', inner.child(1)))
            stack.append(('op', operator_of(node)))
            stack.append(('path', inner.child(0)))
        else:
            operands.append(item)

    return operands, operators
