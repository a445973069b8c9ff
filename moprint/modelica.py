"""Translation rules for Modelica syntax trees.

The rules target the node kinds of the tree-sitter-modelica grammar. Each
rule receives the ``TreePath`` of its node and the ``TranslateContext`` and
returns a Doc; ``format_tree`` runs the translation and the layout.
"""
import logging
import re
from enum import IntEnum

from .api import (
    annotate,
    concat,
    fill,
    group,
    indent,
    join,
    HARDLINE,
    LINE,
    SOFTLINE,
)
from .continuation import ContinuationPolicy
from .errors import TranslationError
from .render import render
from .syntax import Token
from .translate import RuleTable, Translator, binary_chain, hug_operand
from .tree import count_errors, read_sexp
from .utils import find

logger = logging.getLogger(__name__)


class Precedence(IntEnum):
    LOGICAL_OR = 1
    LOGICAL_AND = 2
    RELATIONAL = 3
    ADDITIVE = 4
    MULTIPLICATIVE = 5
    EXPONENT = 6


OPERATOR_PRECEDENCE = {
    'or': Precedence.LOGICAL_OR,
    'and': Precedence.LOGICAL_AND,
    '<': Precedence.RELATIONAL,
    '<=': Precedence.RELATIONAL,
    '>': Precedence.RELATIONAL,
    '>=': Precedence.RELATIONAL,
    '==': Precedence.RELATIONAL,
    '<>': Precedence.RELATIONAL,
    '+': Precedence.ADDITIVE,
    '-': Precedence.ADDITIVE,
    '.+': Precedence.ADDITIVE,
    '.-': Precedence.ADDITIVE,
    '*': Precedence.MULTIPLICATIVE,
    '/': Precedence.MULTIPLICATIVE,
    '.*': Precedence.MULTIPLICATIVE,
    './': Precedence.MULTIPLICATIVE,
    '^': Precedence.EXPONENT,
    '.^': Precedence.EXPONENT,
}

# Chains of these break at their operators; other binary expressions
# (comparisons, powers) are kept on one line.
LOGICAL_PRECEDENCES = frozenset([
    Precedence.LOGICAL_OR,
    Precedence.LOGICAL_AND,
])
ARITHMETIC_PRECEDENCES = frozenset([
    Precedence.ADDITIVE,
    Precedence.MULTIPLICATIVE,
])

# Tried in order when the operator can't be located from spans.
_FALLBACK_OPERATORS = [
    '==', '<>', '<=', '>=', '.+', '.-', '.*', './', '.^',
    'and', 'or', '<', '>', '+', '-', '*', '/', '^',
]

GRAPHICAL_PRIMITIVE_NAMES = frozenset([
    'Line', 'Polygon', 'Rectangle', 'Ellipse', 'Text', 'Bitmap', 'Placement',
])

GRAPHICAL_PRIMITIVES = frozenset([
    'Line', 'Polygon', 'Rectangle', 'Ellipse', 'Text', 'Bitmap',
    'Placement', 'Transformation', 'IconMap', 'DiagramMap',
    'transformation', 'extent', 'origin', 'points', 'color', 'lineColor',
    'fillColor', 'pattern', 'fillPattern', 'lineThickness', 'rotation',
])

# Graphical annotations no longer than this are printed compactly from
# their source text.
GRAPHICAL_COMPACT_WIDTH = 70

HUGGABLE_KINDS = frozenset([
    'function_application',
    'parenthesized_expression',
    'array_constructor',
    'array_concatenation',
])

EXPRESSION_WRAPPERS = frozenset([
    'expression',
    'simple_expression',
    'primary_expression',
])


def _offset_in(node, position):
    """Converts an absolute source position into an offset in node.text."""
    start = node.span.start
    lines = node.text.split('\n')
    row = position.row - start.row
    if row == 0:
        column = position.column - start.column
    else:
        column = position.column
    return sum(len(line) + 1 for line in lines[:row]) + column


def _has_spans(*nodes):
    return all(
        node.span is not None and node.text is not None
        for node in nodes
    )


def operator_of(node):
    """Recovers the operator of a binary expression from its source text."""
    left, right = node.children[0], node.children[1]
    text = node.text or ''

    if _has_spans(node, left, right):
        gap = text[_offset_in(node, left.span.end):_offset_in(node, right.span.start)]
        found = gap.strip()
        if found:
            return found

    left_text = left.text or ''
    right_text = right.text or ''
    left_end = text.find(left_text) + len(left_text)
    right_start = text.rfind(right_text)
    if right_start > left_end:
        found = text[left_end:right_start].strip()
        if found:
            return found

    return find(lambda op: op in text, _FALLBACK_OPERATORS, default='?')


def precedence_of(node):
    return OPERATOR_PRECEDENCE.get(operator_of(node))


def leading_text(node, child):
    """Returns the keywords in ``node`` that precede ``child``, such as the
    ``parameter`` in ``parameter Real x``."""
    if child is None or not node.text:
        return ''

    if _has_spans(node, child):
        prefix = node.text[:_offset_in(node, child.span.start)]
    else:
        at = node.text.find(child.text or '')
        if at <= 0:
            return ''
        prefix = node.text[:at]
    return ' '.join(prefix.split())


def normalize_graphical_text(text):
    text = re.sub(r'\s+', ' ', text)
    text = re.sub(r'\(\s+', '(', text)
    text = re.sub(r'\s+\)', ')', text)
    text = re.sub(r'\{\s+', '{', text)
    text = re.sub(r'\s+\}', '}', text)
    text = re.sub(r',\s*', ', ', text)
    text = re.sub(r'\s*=\s*', '=', text)
    return text.strip()


MODELICA_POLICY = ContinuationPolicy(
    claiming_kinds=[
        'parenthesized_expression',
        'named_argument',
        'modification',
    ],
    boundary_kinds=[
        'stored_definitions',
        'stored_definition',
        'class_definition',
        'long_class_specifier',
        'short_class_specifier',
        'element_list',
        'public_element_list',
        'protected_element_list',
        'named_element',
        'component_clause',
        'component_list',
        'component_declaration',
        'declaration',
        'condition_attribute',
        'equation_section',
        'algorithm_section',
        'equation_list',
        'statement_list',
        'simple_equation',
        'assignment_statement',
        'connect_clause',
        'for_equation',
        'for_statement',
        'for_index',
        'if_equation',
        'if_statement',
        'when_equation',
        'when_statement',
        'while_statement',
        'class_modification',
        'argument_list',
        'element_modification',
        'function_call_args',
        'function_arguments',
        'named_arguments',
        'array_constructor',
        'array_arguments',
        'array_concatenation',
        'array_subscripts',
        'subscript',
        'expression_list',
        'unary_expression',
    ],
    transparent_kinds=EXPRESSION_WRAPPERS,
    conditional_kinds=['if_expression', 'else_if_clause'],
    condition_indices=[0],
    binary_kinds=['binary_expression'],
    precedence_of=precedence_of,
)

rules = RuleTable()


def keyword(s):
    return annotate(Token.KEYWORD, s)


def operator(s):
    if s.isalpha():
        return annotate(Token.OPERATOR_WORD, s)
    return annotate(Token.OPERATOR, s)


def print_children_with_spaces(path, ctx):
    return join(' ', ctx.print_children(path))


def is_inside_annotation(path):
    return any(
        ancestor.node.kind == 'annotation_clause'
        for ancestor, _ in path.ancestors()
    )


def _modification_name(path):
    """Returns the name of the element_modification that owns ``path``."""
    node = path.node
    if node.kind != 'element_modification':
        return None
    name = node.first_child('name')
    return (name.text or '') if name is not None else ''


def is_graphical_primitive_context(path):
    parent = path.parent
    if parent is None:
        return False
    if parent.node.kind == 'annotation_clause':
        return True
    if parent.node.kind == 'modification' and parent.parent is not None:
        return _modification_name(parent.parent) in GRAPHICAL_PRIMITIVE_NAMES
    return _modification_name(parent) in GRAPHICAL_PRIMITIVE_NAMES


def comma_separated(docs, packed=False):
    """Joins docs with commas; ``packed`` fills as many per line as fit."""
    if not packed:
        return join(concat([',', LINE]), docs)
    parts = []
    for i, doc in enumerate(docs):
        if i > 0:
            parts.append(concat([',', LINE]))
        parts.append(doc)
    return fill(parts)


def is_huggable(path):
    return MODELICA_POLICY.unwrap(path).node.kind in HUGGABLE_KINDS


# Terminals

@rules.register('IDENT', 'base_prefix', 'end_expression')
def print_ident(path, ctx):
    return path.node.text or ''


@rules.register('STRING')
def print_string(path, ctx):
    return annotate(Token.LITERAL_STRING, path.node.text or '')


@rules.register('UNSIGNED_INTEGER')
def print_integer(path, ctx):
    return annotate(Token.NUMBER_INT, path.node.text or '')


@rules.register('UNSIGNED_REAL')
def print_real(path, ctx):
    return annotate(Token.NUMBER_FLOAT, path.node.text or '')


@rules.register('comment')
def print_comment(path, ctx):
    return annotate(Token.COMMENT_SINGLE, path.node.text or '')


@rules.register('BLOCK_COMMENT')
def print_block_comment(path, ctx):
    return annotate(Token.COMMENT_MULTILINE, path.node.text or '')


@rules.register('class_prefixes')
def print_class_prefixes(path, ctx):
    return keyword(' '.join((path.node.text or '').split()))


@rules.register('logical_literal_expression')
def print_logical_literal(path, ctx):
    return annotate(Token.KEYWORD_CONSTANT, path.node.text or '')


@rules.register(
    'literal_expression',
    'string_literal_expression',
    'unsigned_integer_literal_expression',
    'unsigned_real_literal_expression',
)
def print_literal(path, ctx):
    if not path.node.children:
        return path.node.text or ''
    return concat(ctx.print_children(path))


@rules.register(
    'expression',
    'simple_expression',
    'primary_expression',
    'type_specifier',
    'description_string',
    'language_specification',
)
def print_children(path, ctx):
    return concat(ctx.print_children(path))


# Top level structure

@rules.register('stored_definitions')
def print_stored_definitions(path, ctx):
    return concat([join(HARDLINE, ctx.print_children(path)), HARDLINE])


@rules.register('stored_definition', 'element_list', 'equation_list',
                'statement_list', 'else_if_equation_clause_list',
                'else_if_statement_clause_list',
                'else_when_equation_clause_list',
                'else_when_statement_clause_list')
def print_lines(path, ctx):
    return join(HARDLINE, ctx.print_children(path))


@rules.register('within_clause')
def print_within_clause(path, ctx):
    parts = [keyword('within')]
    for child_path in path.children():
        if child_path.node.kind == 'name':
            parts.extend([' ', ctx.print(child_path)])
    parts.append(';')
    return concat(parts)


# Classes

@rules.register('class_definition')
def print_class_definition(path, ctx):
    return print_children_with_spaces(path, ctx)


@rules.register('long_class_specifier')
def print_long_class_specifier(path, ctx):
    parts = []
    class_name = ''

    for child_path in path.children():
        kind = child_path.node.kind
        if kind == 'IDENT' and not class_name:
            class_name = child_path.node.text or ''
            parts.append(annotate(Token.NAME_CLASS, class_name))
        elif kind == 'description_string':
            parts.append(indent(concat([LINE, ctx.print(child_path)])))
        elif kind in ('element_list', 'public_element_list', 'protected_element_list'):
            if child_path.node.children:
                parts.append(indent(concat([HARDLINE, ctx.print(child_path)])))
        elif kind in ('equation_section', 'algorithm_section', 'external_clause'):
            parts.extend([HARDLINE, ctx.print(child_path)])
        elif kind == 'annotation_clause':
            parts.append(indent(concat([HARDLINE, ctx.print(child_path), ';'])))
        elif kind in ('comment', 'BLOCK_COMMENT'):
            parts.append(indent(concat([HARDLINE, ctx.print(child_path)])))

    parts.extend([
        HARDLINE,
        keyword('end'),
        ' ',
        annotate(Token.NAME_CLASS, class_name),
        ';',
    ])
    return group(concat(parts))


@rules.register('short_class_specifier')
def print_short_class_specifier(path, ctx):
    parts = []
    for child_path in path.children():
        kind = child_path.node.kind
        if kind == 'IDENT':
            parts.extend([
                annotate(Token.NAME_CLASS, child_path.node.text or ''),
                ' ',
                operator('='),
                ' ',
            ])
        elif kind == 'base_prefix':
            parts.extend([ctx.print(child_path), ' '])
        elif kind == 'enum_list':
            parts.extend([keyword('enumeration'), '(', ctx.print(child_path), ')'])
        elif kind in ('type_specifier', 'class_modification', 'array_subscripts'):
            parts.append(ctx.print(child_path))
        elif kind in ('description_string', 'comment'):
            parts.extend([' ', ctx.print(child_path)])
    return concat(parts)


@rules.register(
    'derivative_class_specifier',
    'enumeration_class_specifier',
    'extends_class_specifier',
    'enumeration_literal',
    'element_replaceable',
    'external_function',
)
def print_spaced(path, ctx):
    return print_children_with_spaces(path, ctx)


@rules.register('enum_list', 'import_list', 'for_indices',
                'output_expression_list', 'expression_list')
def print_comma_list(path, ctx):
    return join(', ', ctx.print_children(path))


@rules.register('public_element_list', 'protected_element_list')
def print_visibility_section(path, ctx):
    title = 'public' if path.node.kind == 'public_element_list' else 'protected'
    return concat([
        keyword(title),
        indent(concat([HARDLINE, join(HARDLINE, ctx.print_children(path))])),
    ])


# Elements

@rules.register('named_element')
def print_named_element(path, ctx):
    parts = []
    node = path.node
    prefix = leading_text(node, node.children[0] if node.children else None)
    if prefix:
        parts.extend([keyword(prefix), ' '])

    for child_path in path.children():
        kind = child_path.node.kind
        if kind == 'component_clause':
            parts.extend([ctx.print(child_path), ';'])
        elif kind == 'class_definition':
            parts.append(ctx.print(child_path))
        elif kind == 'comment':
            parts.extend([' ', ctx.print(child_path)])
    return concat(parts)


@rules.register('import_clause')
def print_import_clause(path, ctx):
    return concat([
        keyword('import'),
        ' ',
        print_children_with_spaces(path, ctx),
        ';',
    ])


@rules.register('extends_clause')
def print_extends_clause(path, ctx):
    parts = [keyword('extends'), ' ']
    for child_path in path.children():
        kind = child_path.node.kind
        if kind in ('type_specifier', 'class_modification'):
            parts.append(ctx.print(child_path))
        elif kind == 'annotation_clause':
            parts.extend([' ', ctx.print(child_path)])
    parts.append(';')
    return group(concat(parts))


@rules.register('constraining_clause')
def print_constraining_clause(path, ctx):
    return concat([
        keyword('constrainedby'),
        ' ',
        print_children_with_spaces(path, ctx),
    ])


@rules.register('component_clause')
def print_component_clause(path, ctx):
    parts = []
    node = path.node
    prefix = leading_text(node, node.first_child('type_specifier'))
    if prefix:
        parts.extend([keyword(prefix), ' '])

    for child_path in path.children():
        kind = child_path.node.kind
        if kind == 'type_specifier':
            parts.extend([
                annotate(Token.KEYWORD_TYPE, ctx.print(child_path)),
                ' ',
            ])
        elif kind == 'array_subscripts':
            parts.extend([ctx.print(child_path), ' '])
        elif kind == 'component_list':
            parts.append(ctx.print(child_path))
    return concat(parts)


@rules.register('component_list')
def print_component_list(path, ctx):
    declarations = ctx.print_children(path)
    if len(declarations) == 1:
        return declarations[0]
    return group(indent(comma_separated(declarations)))


@rules.register('component_declaration')
def print_component_declaration(path, ctx):
    parts = []
    for child_path in path.children():
        kind = child_path.node.kind
        if kind == 'declaration':
            parts.append(ctx.print(child_path))
        elif kind in ('condition_attribute', 'comment'):
            parts.extend([' ', ctx.print(child_path)])
        elif kind in ('description_string', 'annotation_clause'):
            parts.append(indent(concat([LINE, ctx.print(child_path)])))
    return group(concat(parts))


@rules.register('condition_attribute')
def print_condition_attribute(path, ctx):
    return concat([keyword('if'), ' ', concat(ctx.print_children(path))])


@rules.register('declaration')
def print_declaration(path, ctx):
    parts = []
    for child_path in path.children():
        kind = child_path.node.kind
        if kind in ('IDENT', 'array_subscripts', 'modification'):
            parts.append(ctx.print(child_path))
    return concat(parts)


# Modifications

@rules.register('modification')
def print_modification(path, ctx):
    parts = []
    is_binding = path.parent_node is not None and path.parent_node.kind == 'declaration'

    for child_path in path.children():
        kind = child_path.node.kind
        if kind == 'class_modification':
            parts.append(ctx.print(child_path))
        elif kind in ('expression', 'simple_expression'):
            value = ctx.print(child_path)
            if is_binding:
                parts.extend([' ', operator('='), indent(hug_operand(value))])
            else:
                parts.extend([operator('='), indent(value)])
    return concat(parts)


@rules.register('class_modification')
def print_class_modification(path, ctx):
    if not path.node.children:
        return '()'

    args = ctx.print_children(path)

    if is_inside_annotation(path):
        packed = comma_separated(args, packed=True)
        if is_graphical_primitive_context(path):
            return group(concat(['(', indent(packed), ')']))

        # Arguments of `name(...)` inside an annotation already sit in the
        # indentation of the enclosing argument list.
        parent = path.parent
        nested = (
            parent is not None and
            parent.node.kind == 'modification' and
            parent.parent_node is not None and
            parent.parent_node.kind == 'element_modification'
        )
        body = concat([SOFTLINE, packed])
        return group(concat(['(', body if nested else indent(body), ')']))

    return group(concat([
        '(',
        indent(concat([SOFTLINE, comma_separated(args)])),
        ')',
    ]))


@rules.register('argument_list', 'function_arguments', 'named_arguments')
def print_argument_list(path, ctx):
    return comma_separated(
        ctx.print_children(path),
        packed=is_inside_annotation(path),
    )


@rules.register('element_modification')
def print_element_modification(path, ctx):
    parts = []
    node = path.node
    prefix = leading_text(node, node.children[0] if node.children else None)
    if prefix:
        parts.extend([keyword(prefix), ' '])

    name = node.first_child('name')
    if (
        is_inside_annotation(path) and
        name is not None and name.text in GRAPHICAL_PRIMITIVES
    ):
        compact = normalize_graphical_text(node.text[node.text.find(name.text):])
        if len(compact) <= GRAPHICAL_COMPACT_WIDTH:
            return concat([*parts, compact])

    for child_path in path.children():
        kind = child_path.node.kind
        if kind in ('name', 'modification'):
            parts.append(ctx.print(child_path))
        elif kind == 'description_string':
            parts.extend([' ', ctx.print(child_path)])
    return concat(parts)


@rules.register('class_redeclaration', 'component_redeclaration')
def print_redeclaration(path, ctx):
    node = path.node
    prefix = leading_text(node, node.children[0] if node.children else None)
    parts = [keyword(prefix or 'redeclare'), ' ']
    for child_path in path.children():
        if child_path.node.kind in ('short_class_definition', 'class_definition',
                                    'component_clause'):
            parts.append(ctx.print(child_path))
    return concat(parts)


@rules.register('short_class_definition')
def print_short_class_definition(path, ctx):
    parts = []
    for child_path in path.children():
        kind = child_path.node.kind
        if kind == 'class_prefixes':
            parts.extend([ctx.print(child_path), ' '])
        elif kind == 'short_class_specifier':
            parts.append(ctx.print(child_path))
    return concat(parts)


# Equations and statements

def _section(path, ctx, title, body_kind):
    content = [
        ctx.print(child_path)
        for child_path in path.children()
        if child_path.node.kind in (body_kind, 'comment')
    ]
    is_initial = (path.node.text or '').lstrip().startswith('initial')
    parts = [keyword(f'initial {title}' if is_initial else title)]
    if content:
        parts.append(indent(concat([HARDLINE, join(HARDLINE, content)])))
    return concat(parts)


@rules.register('equation_section')
def print_equation_section(path, ctx):
    return _section(path, ctx, 'equation', 'equation_list')


@rules.register('algorithm_section')
def print_algorithm_section(path, ctx):
    return _section(path, ctx, 'algorithm', 'statement_list')


def _is_expression(node):
    return node.kind in ('expression', 'simple_expression')


@rules.register('simple_equation')
def print_simple_equation(path, ctx):
    parts = []
    expressions_seen = 0
    for child_path in path.children():
        node = child_path.node
        if _is_expression(node):
            if expressions_seen == 1:
                parts.extend([' ', operator('='), ' '])
            parts.append(ctx.print(child_path))
            expressions_seen += 1
        elif node.kind == 'comment':
            parts.extend([' ', ctx.print(child_path)])
    parts.append(';')
    return group(concat(parts))


@rules.register('assignment_statement')
def print_assignment_statement(path, ctx):
    parts = []
    has_target = False
    for child_path in path.children():
        node = child_path.node
        if node.kind == 'component_reference':
            parts.append(ctx.print(child_path))
            has_target = True
        elif _is_expression(node):
            if has_target:
                parts.extend([' ', operator(':='), ' '])
            parts.append(ctx.print(child_path))
        elif node.kind == 'comment':
            parts.extend([' ', ctx.print(child_path)])
    parts.append(';')
    return group(concat(parts))


@rules.register('connect_clause')
def print_connect_clause(path, ctx):
    args = []
    annotation = None
    for child_path in path.children():
        kind = child_path.node.kind
        if kind == 'component_reference':
            args.append(ctx.print(child_path))
        elif kind == 'annotation_clause':
            annotation = ctx.print(child_path)

    parts = [keyword('connect'), '(', join(', ', args), ')']
    if annotation is not None:
        parts.append(indent(concat([LINE, annotation])))
    parts.append(';')
    return group(concat(parts))


@rules.register('for_equation', 'for_statement')
def print_for(path, ctx):
    parts = [keyword('for'), ' ']
    for child_path in path.children():
        kind = child_path.node.kind
        if kind == 'for_indices':
            parts.extend([ctx.print(child_path), ' ', keyword('loop')])
        elif kind in ('equation_list', 'statement_list'):
            parts.append(indent(concat([HARDLINE, ctx.print(child_path)])))
    parts.extend([HARDLINE, keyword('end for'), ';'])
    return concat(parts)


@rules.register('for_index')
def print_for_index(path, ctx):
    parts = []
    for child_path in path.children():
        node = child_path.node
        if node.kind == 'IDENT':
            parts.append(node.text or '')
        elif _is_expression(node):
            parts.extend([' ', keyword('in'), ' ', ctx.print(child_path)])
    return concat(parts)


@rules.register('while_statement')
def print_while(path, ctx):
    return _conditional_block(path, ctx, 'while', 'end while', ())


_ELSE_BODY_FIELDS = frozenset(['elseEquations', 'elseStatements'])


def _conditional_block(path, ctx, opener, closer, else_clause_kinds):
    """Prints block statements and their `elseif`/`elsewhen` clauses.

    A second body, or one that follows the else-clauses, is the `else`
    branch.
    """
    parts = [keyword(opener), ' ']
    condition_done = False
    bodies_seen = 0
    after_clauses = False
    for child_path in path.children():
        node = child_path.node
        if _is_expression(node) and not condition_done:
            parts.extend([ctx.print(child_path), ' ', keyword(
                'loop' if opener == 'while' else 'then'
            )])
            condition_done = True
        elif node.kind in ('equation_list', 'statement_list'):
            if (
                closer is not None and
                (node.field_name in _ELSE_BODY_FIELDS or bodies_seen or after_clauses)
            ):
                parts.extend([HARDLINE, keyword('else')])
            parts.append(indent(concat([HARDLINE, ctx.print(child_path)])))
            bodies_seen += 1
        elif node.kind in else_clause_kinds:
            parts.extend([HARDLINE, ctx.print(child_path)])
            after_clauses = True
        elif node.kind == 'comment':
            parts.extend([' ', ctx.print(child_path)])
    if closer is not None:
        parts.extend([HARDLINE, keyword(closer), ';'])
    return concat(parts)


@rules.register('if_equation', 'if_statement')
def print_if_block(path, ctx):
    return _conditional_block(
        path, ctx, 'if', 'end if',
        ('else_if_equation_clause_list', 'else_if_statement_clause_list'),
    )


@rules.register('else_if_equation_clause', 'else_if_statement_clause')
def print_else_if_block(path, ctx):
    return _conditional_block(path, ctx, 'elseif', None, ())


@rules.register('when_equation', 'when_statement')
def print_when_block(path, ctx):
    return _conditional_block(
        path, ctx, 'when', 'end when',
        ('else_when_equation_clause_list', 'else_when_statement_clause_list'),
    )


@rules.register('else_when_equation_clause', 'else_when_statement_clause')
def print_else_when_block(path, ctx):
    return _conditional_block(path, ctx, 'elsewhen', None, ())


@rules.register('function_application_equation', 'function_application_statement')
def print_call_statement(path, ctx):
    return concat([*ctx.print_children(path), ';'])


@rules.register('break_statement')
def print_break(path, ctx):
    return concat([keyword('break'), ';'])


@rules.register('return_statement')
def print_return(path, ctx):
    return concat([keyword('return'), ';'])


@rules.register('multiple_output_function_application_statement')
def print_multiple_output_call(path, ctx):
    parts = ['(']
    for child_path in path.children():
        kind = child_path.node.kind
        if kind == 'output_expression_list':
            parts.append(ctx.print(child_path))
        elif kind in ('component_reference', 'function_application'):
            parts.extend([') ', operator(':='), ' ', ctx.print(child_path)])
    parts.append(';')
    return concat(parts)


# Expressions

@rules.register('if_expression')
def print_if_expression(path, ctx):
    children = path.children()
    if len(children) < 2:
        raise TranslationError(
            path.node.kind,
            path.node.span,
            message='Conditional expression without a value branch',
        )

    condition = ctx.print(children[0])
    branches = [LINE, keyword('then'), ' ', ctx.print(children[1])]
    for child_path in children[2:]:
        if child_path.node.kind == 'else_if_clause':
            branches.extend([LINE, ctx.print(child_path)])
        else:
            branches.extend([LINE, keyword('else'), ' ', ctx.print(child_path)])

    branches = concat(branches)
    if not ctx.is_continuation(path):
        branches = indent(branches)
    return group(concat([keyword('if'), ' ', condition, branches]))


@rules.register('else_if_clause')
def print_else_if_clause(path, ctx):
    children = path.children()
    parts = [keyword('elseif'), ' ', ctx.print(children[0])]
    if len(children) > 1:
        parts.extend([LINE, keyword('then'), ' ', ctx.print(children[1])])
    return group(concat(parts))


@rules.register('range_expression')
def print_range_expression(path, ctx):
    return join(':', ctx.print_children(path))


@rules.register('binary_expression')
def print_binary_expression(path, ctx):
    node = path.node
    if len(node.children) != 2:
        return print_children_with_spaces(path, ctx)

    precedence = precedence_of(node)
    if precedence in LOGICAL_PRECEDENCES or precedence in ARITHMETIC_PRECEDENCES:
        operand_paths, operators = ctx.flatten_chain(path)
        packed = precedence in ARITHMETIC_PRECEDENCES
        return binary_chain(
            [ctx.print(p) for p in operand_paths],
            [operator(op) for op in operators],
            indent_rest=not ctx.is_continuation(path),
            packed=packed,
            hug_last=(
                is_huggable(operand_paths[-1]) and
                (packed or len(operand_paths) == 2)
            ),
        )

    return concat([
        ctx.print(path.child(0)),
        ' ',
        operator(operator_of(node)),
        ' ',
        ctx.print(path.child(1)),
    ])


_UNARY_OPERATORS = ['not ', '.-', '.+', '-', '+']


@rules.register('unary_expression')
def print_unary_expression(path, ctx):
    text = path.node.text or ''
    parts = []
    prefix = find(text.startswith, _UNARY_OPERATORS)
    if prefix is not None:
        parts.append(operator(prefix.strip()))
        if prefix.endswith(' '):
            parts.append(' ')
    parts.extend(ctx.print_children(path))
    return concat(parts)


@rules.register('parenthesized_expression')
def print_parenthesized_expression(path, ctx):
    return group(concat(['(', indent(concat(ctx.print_children(path))), ')']))


@rules.register('array_constructor')
def print_array_constructor(path, ctx):
    args = ctx.print_children(path)
    if is_inside_annotation(path):
        return group(concat(['{', join(', ', args), '}']))
    return group(concat([
        '{',
        indent(concat([SOFTLINE, concat(args)])),
        SOFTLINE,
        '}',
    ]))


@rules.register('array_arguments')
def print_array_arguments(path, ctx):
    return comma_separated(ctx.print_children(path))


@rules.register('array_concatenation')
def print_array_concatenation(path, ctx):
    rows = ctx.print_children(path)
    if is_inside_annotation(path):
        return group(concat(['[', join('; ', rows), ']']))
    return group(concat([
        '[',
        indent(concat([SOFTLINE, join(concat([';', LINE]), rows)])),
        SOFTLINE,
        ']',
    ]))


@rules.register('array_comprehension')
def print_array_comprehension(path, ctx):
    parts = ['{']
    for child_path in path.children():
        if child_path.node.kind == 'for_indices':
            parts.extend([' ', keyword('for'), ' ', ctx.print(child_path)])
        else:
            parts.append(ctx.print(child_path))
    parts.append('}')
    return concat(parts)


@rules.register('array_subscripts')
def print_array_subscripts(path, ctx):
    return concat(['[', join(', ', ctx.print_children(path)), ']'])


@rules.register('subscript')
def print_subscript(path, ctx):
    if path.node.text == ':' or not path.node.children:
        return path.node.text or ''
    return concat(ctx.print_children(path))


# Calls

@rules.register('function_application')
def print_function_application(path, ctx):
    node = path.node
    if is_inside_annotation(path):
        callee = node.first_child('component_reference', 'name')
        if callee is not None and callee.text in GRAPHICAL_PRIMITIVES:
            compact = normalize_graphical_text(node.text or '')
            if len(compact) <= GRAPHICAL_COMPACT_WIDTH:
                return compact

    parts = []
    for child_path in path.children():
        kind = child_path.node.kind
        if kind in ('component_reference', 'name'):
            parts.append(annotate(Token.NAME_FUNCTION, ctx.print(child_path)))
        elif kind == 'function_call_args':
            parts.append(ctx.print(child_path))
    return concat(parts)


@rules.register('function_call_args')
def print_function_call_args(path, ctx):
    node = path.node
    if not node.children:
        return '()'

    args = ctx.print_children(path)

    if is_inside_annotation(path):
        return group(concat([
            '(',
            indent(concat([SOFTLINE, comma_separated(args, packed=True)])),
            ')',
        ]))

    first = node.children[0]
    if (
        first.kind in ('function_arguments', 'named_arguments') and
        len(first.children) == 1 and len(node.children) == 1
    ):
        return group(concat(['(', args[0], ')']))

    return group(concat([
        '(',
        indent(concat([SOFTLINE, comma_separated(args)])),
        ')',
    ]))


@rules.register('named_argument')
def print_named_argument(path, ctx):
    parts = []
    for child_path in path.children():
        if child_path.node.kind == 'IDENT':
            parts.extend([child_path.node.text or '', operator('=')])
        else:
            parts.append(indent(ctx.print(child_path)))
    return concat(parts)


@rules.register('function_partial_application')
def print_function_partial_application(path, ctx):
    return concat([keyword('function'), ' ', print_children_with_spaces(path, ctx)])


# Names

@rules.register('name', 'component_reference')
def print_reference(path, ctx):
    parts = []
    for child_path in path.children():
        node = child_path.node
        if node.kind in ('IDENT', 'name', 'component_reference'):
            if parts and parts[-1] != '.':
                parts.append('.')
            parts.append(ctx.print(child_path))
        elif node.kind == 'array_subscripts':
            parts.append(ctx.print(child_path))
    if not parts:
        return path.node.text or ''
    return concat(parts)


@rules.register('annotation_clause')
def print_annotation_clause(path, ctx):
    return concat([keyword('annotation'), *ctx.print_children(path)])


@rules.register('external_clause')
def print_external_clause(path, ctx):
    parts = [keyword('external')]
    for child_path in path.children():
        if child_path.node.kind in ('language_specification', 'external_function',
                                    'annotation_clause'):
            parts.extend([' ', ctx.print(child_path)])
    parts.append(';')
    return concat(parts)


MODELICA_TRANSLATOR = Translator(rules, MODELICA_POLICY, operator_of=operator_of)


def translate(root):
    """Translates a Modelica syntax tree into a Doc."""
    return MODELICA_TRANSLATOR.translate(root)


def format_tree(root, options=None, **overrides):
    """Formats a Modelica syntax tree into text ending with a newline."""
    text = render(translate(root), options, **overrides)
    if not text.endswith('\n'):
        text += '\n'
    return text


def format_sexp(sexp, source, options=None, **overrides):
    """Formats ``source`` from the S-expression tree-sitter printed for it."""
    root = read_sexp(sexp, source)
    error_count, missing_count = count_errors(root)
    if error_count or missing_count:
        logger.debug(
            'Tree has %d error and %d missing node(s)',
            error_count,
            missing_count,
        )
    return format_tree(root, options, **overrides)
