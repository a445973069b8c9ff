# -*- coding: utf-8 -*-

"""Top-level package for moprint."""

__version__ = '0.1.0'

from io import StringIO

from .api import (
    always_break,
    annotate,
    break_group,
    concat,
    conditional_group,
    fill,
    fillsep,
    group,
    hsep,
    indent,
    join,
    text,
    vsep,
    NIL,
    LINE,
    SOFTLINE,
    HARDLINE,
    LITERALLINE,
)
from .doc import (
    AlwaysBreak,
    Annotated,
    Concat,
    ConditionalGroup,
    Doc,
    Fill,
    Group,
    Indent,
    Line,
    LineKind,
    Text,
)
from .errors import MoprintError, TranslationError
from .extras.color import colored_render_to_stream
from .layout import fits, fits_doc, layout
from .modelica import format_sexp, format_tree
from .options import FormatOptions
from .render import default_render_to_stream, render, render_to_stream
from .syntax import Token
from .tree import SexpSyntaxError, SyntaxNode, TreePath, read_sexp
from .utils import intersperse


__all__ = [
    'render',
    'render_to_stream',
    'cformat',
    'format_tree',
    'format_sexp',
    'layout',
    'fits',
    'fits_doc',
    'default_render_to_stream',
    'colored_render_to_stream',
    'FormatOptions',
    'Doc',
    'Text',
    'Line',
    'LineKind',
    'Concat',
    'Indent',
    'Annotated',
    'Group',
    'AlwaysBreak',
    'Fill',
    'ConditionalGroup',
    'always_break',
    'annotate',
    'break_group',
    'concat',
    'conditional_group',
    'fill',
    'fillsep',
    'group',
    'hsep',
    'indent',
    'join',
    'text',
    'vsep',
    'NIL',
    'LINE',
    'SOFTLINE',
    'HARDLINE',
    'LITERALLINE',
    'Token',
    'SyntaxNode',
    'TreePath',
    'read_sexp',
    'MoprintError',
    'TranslationError',
    'SexpSyntaxError',
    'intersperse',
]


def cformat(doc, options=None, style=None, **overrides):
    """Like ``render``, but colors the output by the ``Token`` annotations
    in ``doc`` using a pygments ``style``."""
    if options is None:
        options = FormatOptions()
    if overrides:
        options = options.replace(**overrides)

    sdocs = layout(
        doc,
        width=options.print_width,
        indent_width=options.indent_width,
    )
    stream = StringIO()
    colored_render_to_stream(
        stream,
        sdocs,
        style=style,
        indent_unit=options.indent_unit,
    )
    return stream.getvalue()
