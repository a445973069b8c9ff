import colorful
from pygments import styles
from pygments import token

from ..sdoc import (
    SLine,
    SAnnotationPush,
    SAnnotationPop,
)
from ..syntax import Token

_SYNTAX_TOKEN_TO_PYGMENTS_TOKEN = {
    Token.KEYWORD: token.Keyword,
    Token.KEYWORD_CONSTANT: token.Keyword.Constant,
    Token.KEYWORD_TYPE: token.Keyword.Type,
    Token.NAME: token.Name,
    Token.NAME_BUILTIN: token.Name.Builtin,
    Token.NAME_CLASS: token.Name.Class,
    Token.NAME_FUNCTION: token.Name.Function,
    Token.LITERAL_STRING: token.String,
    Token.NUMBER_INT: token.Number.Integer,
    Token.NUMBER_FLOAT: token.Number.Float,
    Token.OPERATOR: token.Operator,
    Token.OPERATOR_WORD: token.Operator.Word,
    Token.PUNCTUATION: token.Punctuation,
    Token.COMMENT_SINGLE: token.Comment.Single,
    Token.COMMENT_MULTILINE: token.Comment.Multiline,
}

DEFAULT_STYLE_NAME = 'monokai'


def styleattrs_to_colorful(attrs):
    c = colorful.reset
    if attrs['color'] or attrs['bgcolor']:
        # Colorful doesn't have a way to directly set Hex/RGB
        # colors- until I find a better way, we do it like this :)
        accessor = ''
        if attrs['color']:
            colorful.update_palette({'moprintCurrFg': attrs['color']})
            accessor = 'moprintCurrFg'
        if attrs['bgcolor']:
            colorful.update_palette({'moprintCurrBg': attrs['bgcolor']})
            accessor += '_on_moprintCurrBg'
        c &= getattr(colorful, accessor)
    if attrs['bold']:
        c &= colorful.bold
    if attrs['italic']:
        c &= colorful.italic
    if attrs['underline']:
        c &= colorful.underline
    return c


def resolve_style(style):
    if style is None:
        return styles.get_style_by_name(DEFAULT_STYLE_NAME)
    if isinstance(style, str):
        return styles.get_style_by_name(style)
    return style


def colored_render_to_stream(
    stream,
    sdocs,
    style=None,
    newline='\n',
    indent_unit='  ',
):
    style = resolve_style(style)

    colorstack = []
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
        elif isinstance(sdoc, SAnnotationPush):
            if isinstance(sdoc.value, Token):
                pygments_token = _SYNTAX_TOKEN_TO_PYGMENTS_TOKEN[sdoc.value]
                tokenattrs = style.style_for_token(pygments_token)
                color = styleattrs_to_colorful(tokenattrs)
                colorstack.append(color)
                stream.write(str(color))

        elif isinstance(sdoc, SAnnotationPop):
            if not isinstance(sdoc.value, Token):
                continue

            colorstack.pop()

            if colorstack:
                stream.write(str(colorstack[-1]))
            else:
                stream.write(str(colorful.reset))

    if colorstack:
        stream.write(str(colorful.reset))
