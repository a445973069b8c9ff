import logging
from io import StringIO

from .layout import layout
from .options import FormatOptions
from .sdoc import SLine

logger = logging.getLogger(__name__)


def default_render_to_stream(stream, sdocs, newline='\n', indent_unit='  '):
    """Writes laid out SDocs to ``stream``.

    Indentation after a line break is only written once non-empty text
    follows it on that line, so blank lines carry no trailing whitespace.
    """
    pending_indent = None
    for sdoc in sdocs:
        if isinstance(sdoc, str):
            if not sdoc:
                continue
            if pending_indent:
                stream.write(indent_unit * pending_indent)
            pending_indent = None
            stream.write(sdoc)
        elif isinstance(sdoc, SLine):
            stream.write(newline)
            pending_indent = sdoc.indent


def default_render_to_str(sdocs, newline='\n', indent_unit='  '):
    stream = StringIO()
    default_render_to_stream(stream, sdocs, newline, indent_unit)
    return stream.getvalue()


def _resolve_options(options, overrides):
    if options is None:
        options = FormatOptions()
    if overrides:
        options = options.replace(**overrides)
    return options


def render_to_stream(stream, doc, options=None, **overrides):
    options = _resolve_options(options, overrides)
    sdocs = layout(
        doc,
        width=options.print_width,
        indent_width=options.indent_width,
    )
    default_render_to_stream(stream, sdocs, indent_unit=options.indent_unit)


def render(doc, options=None, **overrides):
    """Lays out ``doc`` and returns the resulting text.

    ``overrides`` are applied on top of ``options``, e.g.
    ``render(doc, print_width=40)``.
    """
    options = _resolve_options(options, overrides)
    stream = StringIO()
    render_to_stream(stream, doc, options)
    text = stream.getvalue()
    logger.debug(
        'Rendered %d line(s) at print_width=%d',
        text.count('\n') + 1,
        options.print_width,
    )
    return text
