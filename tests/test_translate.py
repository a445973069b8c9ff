import pytest

from moprint import concat, group, indent, render, SOFTLINE
from moprint.continuation import ContinuationPolicy
from moprint.errors import TranslationError
from moprint.tree import Position, Span, SyntaxNode
from moprint.translate import (
    RuleTable,
    Translator,
    binary_chain,
    hug_operand,
)


def test_rule_table_register():
    rules = RuleTable()

    @rules.register('a', 'b')
    def rule(path, ctx):
        return 'x'

    assert 'a' in rules
    assert rules.get('b') is rule
    assert rules.get('c') is None
    assert rules.kinds() == frozenset(['a', 'b'])


def make_translator():
    rules = RuleTable()

    @rules.register('list')
    def print_list(path, ctx):
        return concat(['[', concat(ctx.print_children(path)), ']'])

    @rules.register('item')
    def print_item(path, ctx):
        return path.node.text

    @rules.register('probe')
    def print_probe(path, ctx):
        return 'yes' if ctx.is_continuation(path) else 'no'

    policy = ContinuationPolicy(claiming_kinds=['list'])
    return Translator(rules, policy)


def test_translator_runs_rules():
    root = SyntaxNode('list', [
        SyntaxNode('item', text='a'),
        SyntaxNode('probe'),
    ])
    doc = make_translator().translate(root)
    assert render(doc) == '[ayes]'


def test_translator_fails_on_unknown_kind():
    span = Span(Position(1, 2), Position(1, 5))
    root = SyntaxNode('list', [SyntaxNode('mystery', span=span)])
    with pytest.raises(TranslationError) as excinfo:
        make_translator().translate(root)
    assert excinfo.value.kind == 'mystery'
    assert excinfo.value.span is span
    assert 'mystery' in str(excinfo.value)
    assert '2:3-2:6' in str(excinfo.value)


def test_binary_chain_flat():
    doc = binary_chain(['aaa', 'bbb', 'ccc'], ['+', '+'])
    assert render(doc) == 'aaa + bbb + ccc'


def test_binary_chain_single_operand():
    assert binary_chain(['aaa'], []) == 'aaa'


def test_binary_chain_checks_arity():
    with pytest.raises(ValueError):
        binary_chain(['aaa', 'bbb'], ['+', '+'])


def test_binary_chain_breaks_at_every_operator():
    doc = binary_chain(['aaa', 'bbb', 'ccc'], ['+', '+'])
    assert render(doc, print_width=10) == 'aaa +\n  bbb +\n  ccc'


def test_binary_chain_without_indent():
    doc = binary_chain(['aaa', 'bbb', 'ccc'], ['+', '+'], indent_rest=False)
    assert render(doc, print_width=10) == 'aaa +\nbbb +\nccc'


def test_packed_binary_chain_fills_lines():
    doc = binary_chain(
        ['aaa', 'bbb', 'ccc', 'ddd'],
        ['+', '+', '+'],
        packed=True,
    )
    assert render(doc) == 'aaa + bbb + ccc + ddd'
    assert render(doc, print_width=12) == 'aaa + bbb +\n  ccc + ddd'


def call(name, arg):
    return concat([
        name,
        group(concat(['(', indent(concat([SOFTLINE, arg])), SOFTLINE, ')'])),
    ])


def test_hugged_last_operand_stays_on_operator_line():
    doc = binary_chain(['a', call('f', 'xxxxxxxxxx')], ['+'], hug_last=True)
    assert render(doc) == 'a + f(xxxxxxxxxx)'
    assert render(doc, print_width=10) == 'a + f(\n    xxxxxxxxxx\n  )'


def test_hug_operand_moves_to_next_line_as_last_resort():
    doc = concat(['=', indent(hug_operand('xxxxxxxxxx'))])
    assert render(doc) == '= xxxxxxxxxx'
    assert render(doc, print_width=5) == '=\n  xxxxxxxxxx'
