"""Syntax tree model consumed by the translators.

Trees come from tree-sitter: ``read_sexp`` turns the S-expression printed by
``tree-sitter parse`` into ``SyntaxNode`` objects, taking each node's text
from the source text by its span.
"""
import re

from .errors import MoprintError


class Position:
    __slots__ = ('row', 'column')

    def __init__(self, row, column):
        self.row = row
        self.column = column

    def __iter__(self):
        yield self.row
        yield self.column

    def __eq__(self, other):
        if not isinstance(other, Position):
            return NotImplemented
        return (self.row, self.column) == (other.row, other.column)

    def __lt__(self, other):
        return (self.row, self.column) < (other.row, other.column)

    def __le__(self, other):
        return (self.row, self.column) <= (other.row, other.column)

    def __hash__(self):
        return hash((self.row, self.column))

    def __repr__(self):
        return f'Position({self.row}, {self.column})'


class Span:
    __slots__ = ('start', 'end')

    def __init__(self, start, end):
        self.start = start
        self.end = end

    def contains(self, row, column):
        return self.start <= Position(row, column) <= self.end

    def __eq__(self, other):
        if not isinstance(other, Span):
            return NotImplemented
        return (self.start, self.end) == (other.start, other.end)

    def __hash__(self):
        return hash((self.start, self.end))

    def __str__(self):
        return (
            f'{self.start.row + 1}:{self.start.column + 1}-'
            f'{self.end.row + 1}:{self.end.column + 1}'
        )

    def __repr__(self):
        return f'Span({repr(self.start)}, {repr(self.end)})'


class SyntaxNode:
    """A node of a concrete syntax tree.

    ``children`` holds the named children in source order. ``field_name`` is
    the name of the grammar field the node fills in its parent, if any.
    """
    __slots__ = ('kind', 'children', 'text', 'span', 'field_name')

    def __init__(self, kind, children=(), text=None, span=None, field_name=None):
        self.kind = kind
        self.children = tuple(children)
        self.text = text
        self.span = span
        self.field_name = field_name

    @property
    def is_error(self):
        return self.kind == 'ERROR'

    @property
    def is_missing(self):
        return self.kind.startswith('MISSING')

    def child_by_field(self, field_name):
        for child in self.children:
            if child.field_name == field_name:
                return child
        return None

    def first_child(self, *kinds):
        for child in self.children:
            if child.kind in kinds:
                return child
        return None

    def __repr__(self):
        if self.children:
            return f'SyntaxNode({repr(self.kind)}, <{len(self.children)} children>)'
        return f'SyntaxNode({repr(self.kind)}, text={repr(self.text)})'


class TreePath:
    """The position of a node in a tree, as an explicit chain of parents.

    Paths are immutable; ``child`` returns a new path one level deeper.
    """
    __slots__ = ('node', 'parent', 'index', 'depth')

    def __init__(self, node, parent=None, index=None):
        self.node = node
        self.parent = parent
        self.index = index
        self.depth = 0 if parent is None else parent.depth + 1

    @classmethod
    def root(cls, node):
        return cls(node)

    def child(self, index):
        return TreePath(self.node.children[index], self, index)

    def children(self):
        return [self.child(i) for i in range(len(self.node.children))]

    def ancestors(self):
        """Yields ``(ancestor_path, child_index)`` pairs, innermost first.

        ``child_index`` is the index of the child of the ancestor that the
        walk came up through.
        """
        path = self
        while path.parent is not None:
            yield path.parent, path.index
            path = path.parent

    @property
    def parent_node(self):
        if self.parent is None:
            return None
        return self.parent.node

    def __repr__(self):
        kinds = []
        path = self
        while path is not None:
            kinds.append(path.node.kind)
            path = path.parent
        return f"TreePath({' > '.join(reversed(kinds))})"


class SexpSyntaxError(MoprintError, ValueError):
    def __init__(self, message, offset):
        super().__init__(f'{message} at offset {offset}')
        self.offset = offset


_SEXP_TOKEN_PATTERN = re.compile(
    r'\s+'
    r'|(?P<punct>[()\[\],:\-])'
    r'|"(?P<string>(?:[^"\\]|\\.)*)"'
    r'|(?P<atom>[^\s()\[\],:"\-]+)'
)


def _tokenize_sexp(sexp):
    pos = 0
    tokens = []
    while pos < len(sexp):
        match = _SEXP_TOKEN_PATTERN.match(sexp, pos)
        if match is None:
            raise SexpSyntaxError('Unterminated string', pos)
        if match.group('punct') is not None:
            tokens.append((match.group('punct'), pos))
        elif match.group('string') is not None:
            tokens.append((('str', match.group('string')), pos))
        elif match.group('atom') is not None:
            tokens.append((('atom', match.group('atom')), pos))
        pos = match.end()
    return tokens


def extract_text(span, source_lines):
    start, end = span.start, span.end
    if start.row >= len(source_lines):
        return ''
    if start.row == end.row:
        return source_lines[start.row][start.column:end.column]

    parts = [source_lines[start.row][start.column:]]
    parts.extend(source_lines[start.row + 1:end.row])
    if end.row < len(source_lines):
        parts.append(source_lines[end.row][:end.column])
    return '\n'.join(parts)


class _SexpReader:
    def __init__(self, sexp, source):
        self.tokens = _tokenize_sexp(sexp)
        self.pos = 0
        self.source_lines = source.split('\n')
        self.sexp_len = len(sexp)

    def _offset(self):
        if self.pos < len(self.tokens):
            return self.tokens[self.pos][1]
        return self.sexp_len

    def _peek(self):
        if self.pos < len(self.tokens):
            return self.tokens[self.pos][0]
        return None

    def _next(self):
        token = self._peek()
        if token is None:
            raise SexpSyntaxError('Unexpected end of input', self.sexp_len)
        self.pos += 1
        return token

    def _expect(self, expected):
        offset = self._offset()
        token = self._next()
        if token != expected:
            raise SexpSyntaxError(
                f'Expected {repr(expected)}, got {repr(token)}', offset
            )

    def _atom(self):
        offset = self._offset()
        token = self._next()
        if not isinstance(token, tuple):
            raise SexpSyntaxError(f'Expected a name, got {repr(token)}', offset)
        return token[1]

    def _int(self):
        offset = self._offset()
        value = self._atom()
        try:
            return int(value)
        except ValueError:
            raise SexpSyntaxError(
                f'Expected an integer, got {repr(value)}', offset
            ) from None

    def _position(self):
        self._expect('[')
        row = self._int()
        self._expect(',')
        column = self._int()
        self._expect(']')
        return Position(row, column)

    def _span(self):
        if self._peek() != '[':
            return None
        start = self._position()
        self._expect('-')
        end = self._position()
        return Span(start, end)

    def read_node(self, field_name=None):
        self._expect('(')
        kind = self._atom()
        # MISSING nodes print as `(MISSING ";" [r, c] - [r, c])`.
        if kind == 'MISSING' and isinstance(self._peek(), tuple):
            kind = f'MISSING {self._atom()}'

        span = self._span()
        children = []
        while True:
            token = self._peek()
            if token == ')':
                self.pos += 1
                break
            elif token == '(':
                children.append(self.read_node())
            elif isinstance(token, tuple) and token[0] == 'atom':
                # `field_name: (child ...)`
                name = self._atom()
                self._expect(':')
                children.append(self.read_node(field_name=name))
            else:
                raise SexpSyntaxError(
                    f'Unexpected token {repr(token)}', self._offset()
                )

        text = None
        if span is not None:
            text = extract_text(span, self.source_lines)

        return SyntaxNode(
            kind,
            children,
            text=text,
            span=span,
            field_name=field_name,
        )

    def read(self):
        root = self.read_node()
        if self._peek() is not None:
            raise SexpSyntaxError('Trailing input', self._offset())
        return root


def read_sexp(sexp, source):
    """Parses the output of ``tree-sitter parse`` into a ``SyntaxNode`` tree.

    ``source`` is the text that was parsed; node texts are sliced from it.
    """
    return _SexpReader(sexp, source).read()


def walk(node, parent=None):
    """Yields ``(node, parent)`` pairs in pre-order."""
    stack = [(node, parent)]
    while stack:
        node, parent = stack.pop()
        yield node, parent
        stack.extend((child, node) for child in reversed(node.children))


def find_nodes_by_kind(node, kind):
    return [n for n, _ in walk(node) if n.kind == kind]


def count_errors(node):
    """Returns ``(error_count, missing_count)`` for the tree under ``node``."""
    error_count = 0
    missing_count = 0
    for n, _ in walk(node):
        if n.is_error:
            error_count += 1
        if n.is_missing:
            missing_count += 1
    return error_count, missing_count


def node_at_position(node, row, column):
    """Returns the deepest node whose span contains ``(row, column)``."""
    if node.span is None or not node.span.contains(row, column):
        return None

    for child in node.children:
        found = node_at_position(child, row, column)
        if found is not None:
            return found
    return node
