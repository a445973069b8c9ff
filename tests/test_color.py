import re
from io import StringIO

from pygments.style import Style

from moprint import annotate, cformat, concat, group, indent, HARDLINE, LINE
from moprint.extras.color import (
    _SYNTAX_TOKEN_TO_PYGMENTS_TOKEN,
    colored_render_to_stream,
    resolve_style,
)
from moprint.layout import layout
from moprint.syntax import Token

ANSI_ESCAPE = re.compile(r'\x1b\[[0-9;]*m')


def strip_ansi(s):
    return ANSI_ESCAPE.sub('', s)


def test_every_token_has_a_pygments_token():
    assert set(_SYNTAX_TOKEN_TO_PYGMENTS_TOKEN) == set(Token)


def test_resolve_style():
    default = resolve_style(None)
    assert issubclass(default, Style)
    assert resolve_style('monokai') is default
    assert resolve_style(default) is default


def test_cformat_matches_plain_text():
    doc = concat([
        annotate(Token.KEYWORD, 'model'),
        ' ',
        annotate(Token.NAME_CLASS, 'M'),
        indent(concat([
            HARDLINE,
            annotate(Token.KEYWORD_TYPE, 'Real'),
            ' x = ',
            annotate(Token.NUMBER_INT, '1'),
            ';',
        ])),
        HARDLINE,
        annotate(Token.KEYWORD, 'end'),
        ' M;',
    ])
    assert strip_ansi(cformat(doc)) == 'model M\n  Real x = 1;\nend M;'
    assert strip_ansi(cformat(doc, use_tabs=True)) == 'model M\n\tReal x = 1;\nend M;'


def test_cformat_respects_print_width():
    doc = group(concat([annotate(Token.OPERATOR, '+'), LINE, 'a']))
    assert strip_ansi(cformat(doc, print_width=1)) == '+\na'


def test_colored_render_ignores_other_annotations():
    stream = StringIO()
    doc = annotate('not a token', concat(['a', HARDLINE, 'b']))
    colored_render_to_stream(stream, layout(doc))
    assert stream.getvalue() == 'a\nb'
