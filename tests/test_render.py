from io import StringIO

import pytest

from moprint import (
    concat,
    group,
    indent,
    render,
    render_to_stream,
    FormatOptions,
    HARDLINE,
    LINE,
)
from moprint.render import default_render_to_stream, default_render_to_str
from moprint.sdoc import SLine


def test_default_options():
    options = FormatOptions()
    assert options.print_width == 80
    assert options.indent_width == 2
    assert options.use_tabs is False
    assert options.indent_unit == '  '


def test_options_from_mapping_accepts_both_spellings():
    options = FormatOptions.from_mapping({
        'printWidth': 100,
        'indent_width': 4,
        'useTabs': True,
    })
    assert options == FormatOptions(print_width=100, indent_width=4, use_tabs=True)
    assert options.indent_unit == '\t'


def test_options_from_mapping_rejects_unknown_keys():
    with pytest.raises(ValueError):
        FormatOptions.from_mapping({'tabWidth': 4})


@pytest.mark.parametrize('value', [0, -1])
def test_options_reject_non_positive_widths(value):
    with pytest.raises(ValueError):
        FormatOptions(print_width=value)
    with pytest.raises(ValueError):
        FormatOptions(indent_width=value)


@pytest.mark.parametrize('value', [True, 1.5, '80', None])
def test_options_reject_non_int_widths(value):
    with pytest.raises(TypeError):
        FormatOptions(print_width=value)


def test_options_reject_non_bool_use_tabs():
    with pytest.raises(TypeError):
        FormatOptions(use_tabs='yes')


def test_options_replace():
    options = FormatOptions().replace(print_width=40)
    assert options.print_width == 40
    assert options.indent_width == 2

    with pytest.raises(ValueError):
        FormatOptions().replace(width=40)


def test_options_repr():
    assert repr(FormatOptions()) == (
        'FormatOptions(print_width=80, indent_width=2, use_tabs=False)'
    )


def test_render_with_options_and_overrides():
    doc = group(concat(['aaa', LINE, 'bbb']))
    narrow = FormatOptions(print_width=4)
    assert render(doc, narrow) == 'aaa\nbbb'
    assert render(doc, narrow, print_width=80) == 'aaa bbb'


def test_render_rejects_unknown_overrides():
    with pytest.raises(ValueError):
        render('a', bogus=1)


def test_render_to_stream():
    stream = StringIO()
    doc = concat(['a', indent(concat([HARDLINE, 'b']))])
    render_to_stream(stream, doc, indent_width=3)
    assert stream.getvalue() == 'a\n   b'


def test_default_render_to_stream_defers_indentation():
    stream = StringIO()
    default_render_to_stream(stream, ['a', SLine(2), SLine(1), 'b', SLine(1)])
    assert stream.getvalue() == 'a\n\n  b\n'


def test_default_render_to_str_with_custom_indent_unit():
    assert default_render_to_str(['a', SLine(2), 'b'], indent_unit='\t') == 'a\n\t\tb'
