import pytest

from moprint.doc import (
    AlwaysBreak,
    Concat,
    ConditionalGroup,
    Fill,
    Group,
    Indent,
    Line,
    Text,
    NIL,
    LINE,
    HARDLINE,
    LITERALLINE,
)


def test_text_requires_str():
    with pytest.raises(TypeError):
        Text(3)


def test_empty_text_normalizes_to_nil():
    assert Text('').normalize() is NIL


def test_line_requires_line_kind():
    with pytest.raises(TypeError):
        Line('soft')


def test_concat_rejects_non_docs():
    with pytest.raises(TypeError):
        Concat(['a', 1])


def test_hard_lines_normalize_to_always_break():
    for line in (HARDLINE, LITERALLINE):
        normalized = line.normalize()
        assert isinstance(normalized, AlwaysBreak)
        assert normalized.doc is line


def test_soft_line_does_not_force_a_break():
    assert LINE.normalize() is LINE


def test_concat_normalize_flattens_nested_concats():
    doc = Concat(['a', Concat(['b', Concat(['c'])]), NIL, ''])
    normalized = doc.normalize()
    assert isinstance(normalized, Concat)
    assert normalized.docs == ['a', 'b', 'c']


def test_concat_normalize_collapses_empty_and_single():
    assert Concat([NIL, '']).normalize() is NIL
    assert Concat(['a', NIL]).normalize() == 'a'


def test_hard_line_propagates_through_concat():
    normalized = Concat(['a', HARDLINE, 'b']).normalize()
    assert isinstance(normalized, AlwaysBreak)
    assert normalized.doc.docs == ['a', HARDLINE, 'b']


def test_hard_line_propagates_through_group_and_indent():
    normalized = Group(Indent(Concat(['a', HARDLINE, 'b']))).normalize()
    assert isinstance(normalized, AlwaysBreak)
    assert isinstance(normalized.doc, Indent)


def test_hard_line_propagates_through_fill():
    normalized = Fill(['a', HARDLINE, 'b']).normalize()
    assert isinstance(normalized, AlwaysBreak)
    assert isinstance(normalized.doc, Fill)


def test_force_break_does_not_propagate():
    normalized = Concat([Group('a', force_break=True), 'b']).normalize()
    assert isinstance(normalized, Concat)
    assert normalized.docs[0].force_break


def test_conditional_group_stops_propagation():
    normalized = Concat([ConditionalGroup(['a', HARDLINE]), 'b']).normalize()
    assert isinstance(normalized, Concat)
    assert isinstance(normalized.docs[0], ConditionalGroup)
    assert isinstance(normalized.docs[0].candidates[1], AlwaysBreak)


def test_conditional_group_of_breaking_candidates_propagates():
    normalized = Concat([ConditionalGroup([HARDLINE, LITERALLINE]), 'b']).normalize()
    assert isinstance(normalized, AlwaysBreak)
    assert isinstance(normalized.doc.docs[0], ConditionalGroup)


def test_conditional_group_requires_candidates():
    with pytest.raises(ValueError):
        ConditionalGroup([])


def test_always_break_does_not_nest():
    normalized = AlwaysBreak(AlwaysBreak('a')).normalize()
    assert isinstance(normalized, AlwaysBreak)
    assert normalized.doc == 'a'


def test_reprs():
    assert repr(Group(Concat(['a', LINE]))) == "Group(Concat('a', Line(soft)))"
    assert repr(Group('a', force_break=True)) == "Group('a', force_break=True)"
    assert repr(NIL) == 'NIL'
