"""The layout algorithm: turns a Doc into a stream of SDocs.

Based on Wadler's "A Prettier Printer", in the iterative form popularized
by Prettier. Layout keeps an explicit stack of ``(indent, mode, doc)``
commands instead of recursing, so deeply nested documents don't grow the
Python call stack.

``indent`` is a count of indentation levels, not a column. The column an
indented line starts at is ``indent * indent_width``; how a level is spelled
out (spaces or a tab) is up to the renderer.
"""

from .doc import (
    AlwaysBreak,
    Annotated,
    Concat,
    ConditionalGroup,
    Fill,
    Group,
    Indent,
    Line,
    LineKind,
    NIL,
    Text,
    normalize_doc,
)
from .sdoc import SAnnotationPop, SAnnotationPush, SLine
from .utils import text_width

BREAK_MODE = 0
FLAT_MODE = 1


class _AnnotationEnd:
    __slots__ = ('value', )

    def __init__(self, value):
        self.value = value


class _FillFrom:
    """The part of a fill starting at index ``start``."""
    __slots__ = ('docs', 'start')

    def __init__(self, docs, start):
        self.docs = docs
        self.start = start


def _measure_text(s, chars_left):
    """Returns ``(chars_left, ended_line)`` after printing ``s``."""
    newline_at = s.find('\n')
    if newline_at == -1:
        return chars_left - text_width(s), False
    return chars_left - text_width(s[:newline_at]), True


def fits(next_cmds, rest_cmds, width, must_be_flat=False):
    """Checks if the commands in ``next_cmds`` fit in ``width`` columns.

    Measuring stops with success at the first line break printed in break
    mode, since whatever follows it starts on a new line. When
    ``next_cmds`` runs out, measuring continues into ``rest_cmds`` (the
    pending layout stack, top of the stack last) so that text trailing on
    the same line is accounted for.

    With ``must_be_flat``, any content that is forced to break makes the
    check fail.
    """
    chars_left = width
    rest_idx = len(rest_cmds)
    cmds = list(reversed(next_cmds))

    while chars_left >= 0:
        if not cmds:
            if rest_idx == 0:
                return True
            rest_idx -= 1
            cmds.append(rest_cmds[rest_idx])
            continue

        indent, mode, doc = cmds.pop()

        if isinstance(doc, str) or isinstance(doc, Text):
            s = doc if isinstance(doc, str) else doc.value
            chars_left, ended_line = _measure_text(s, chars_left)
            if ended_line:
                return chars_left >= 0
        elif doc is NIL or isinstance(doc, _AnnotationEnd):
            continue
        elif isinstance(doc, Concat):
            cmds.extend(
                (indent, mode, child)
                for child in reversed(doc.docs)
            )
        elif isinstance(doc, Fill):
            cmds.extend(
                (indent, mode, child)
                for child in reversed(doc.docs)
            )
        elif isinstance(doc, _FillFrom):
            if doc.start + 1 < len(doc.docs):
                cmds.append((indent, mode, _FillFrom(doc.docs, doc.start + 1)))
            cmds.append((indent, mode, doc.docs[doc.start]))
        elif isinstance(doc, Indent):
            cmds.append((indent + 1, mode, doc.doc))
        elif isinstance(doc, Annotated):
            cmds.append((indent, mode, doc.doc))
        elif isinstance(doc, AlwaysBreak):
            if must_be_flat:
                return False
            cmds.append((indent, BREAK_MODE, doc.doc))
        elif isinstance(doc, Group):
            if must_be_flat and doc.force_break:
                return False
            group_mode = BREAK_MODE if doc.force_break else mode
            cmds.append((indent, group_mode, doc.doc))
        elif isinstance(doc, ConditionalGroup):
            if mode is BREAK_MODE:
                cmds.append((indent, mode, doc.candidates[-1]))
            else:
                cmds.append((indent, mode, doc.flat_candidate()))
        elif isinstance(doc, Line):
            if mode is BREAK_MODE:
                return True
            if doc.kind.forces_break:
                return False
            if doc.kind is LineKind.SOFT:
                chars_left -= 1
        else:
            raise TypeError(f'Unknown doc type {type(doc).__name__}')

    return False


def fits_doc(doc, remaining_width, mode=FLAT_MODE):
    """Checks if ``doc`` fits in ``remaining_width`` columns on its own.

    ``doc`` is measured as given, without normalization, so a hard line met
    in flat mode fails the check.
    """
    return fits([(0, mode, doc)], [], remaining_width)


def layout(doc, width=80, indent_width=2):
    """Lays out ``doc`` into a stream of SDocs.

    Yields ``str`` fragments, ``SLine`` breaks and annotation push/pop
    markers. Content that can't be made to fit ``width`` is printed in its
    broken form and allowed to overflow.
    """
    normalized = normalize_doc(doc)

    outcol = 0
    stack = [(0, BREAK_MODE, normalized)]

    while stack:
        indent, mode, doc = stack.pop()

        if isinstance(doc, str) or isinstance(doc, Text):
            s = doc if isinstance(doc, str) else doc.value
            if not s:
                continue
            yield s
            newline_at = s.rfind('\n')
            if newline_at == -1:
                outcol += text_width(s)
            else:
                outcol = text_width(s[newline_at + 1:])
        elif doc is NIL:
            continue
        elif isinstance(doc, Concat):
            stack.extend(
                (indent, mode, child)
                for child in reversed(doc.docs)
            )
        elif isinstance(doc, Indent):
            stack.append((indent + 1, mode, doc.doc))
        elif isinstance(doc, Annotated):
            yield SAnnotationPush(doc.annotation)
            stack.append((indent, mode, _AnnotationEnd(doc.annotation)))
            stack.append((indent, mode, doc.doc))
        elif isinstance(doc, _AnnotationEnd):
            yield SAnnotationPop(doc.value)
        elif isinstance(doc, AlwaysBreak):
            stack.append((indent, BREAK_MODE, doc.doc))
        elif isinstance(doc, Group):
            if doc.force_break:
                stack.append((indent, BREAK_MODE, doc.doc))
            elif mode is FLAT_MODE:
                stack.append((indent, FLAT_MODE, doc.doc))
            else:
                flat_cmd = (indent, FLAT_MODE, doc.doc)
                if fits([flat_cmd], stack, width - outcol):
                    stack.append(flat_cmd)
                else:
                    stack.append((indent, BREAK_MODE, doc.doc))
        elif isinstance(doc, ConditionalGroup):
            if mode is FLAT_MODE:
                stack.append((indent, FLAT_MODE, doc.flat_candidate()))
                continue

            for candidate in doc.candidates[:-1]:
                cmd = (indent, FLAT_MODE, candidate)
                if fits([cmd], stack, width - outcol):
                    stack.append(cmd)
                    break
            else:
                stack.append((indent, BREAK_MODE, doc.candidates[-1]))
        elif isinstance(doc, Fill):
            if mode is FLAT_MODE:
                stack.extend(
                    (indent, FLAT_MODE, child)
                    for child in reversed(doc.docs)
                )
            elif doc.docs:
                stack.extend(
                    _layout_fill(_FillFrom(doc.docs, 0), indent, width - outcol)
                )
        elif isinstance(doc, _FillFrom):
            stack.extend(_layout_fill(doc, indent, width - outcol))
        elif isinstance(doc, Line):
            if mode is FLAT_MODE and not doc.kind.forces_break:
                if doc.kind is LineKind.SOFT:
                    yield ' '
                    outcol += 1
            elif doc.kind is LineKind.LITERAL:
                yield SLine(0)
                outcol = 0
            else:
                yield SLine(indent)
                outcol = indent * indent_width
        else:
            raise TypeError(f'Unknown doc type {type(doc).__name__}')


def _layout_fill(cursor, indent, remaining):
    """Returns the commands to push for the fill item under ``cursor``, in
    push order.

    Items are decided one at a time, when the layout reaches them, so each
    decision sees the actual column. Content is printed flat when it fits
    flat. A separator is printed flat when it fits together with the first
    line of the content after it.
    """
    docs, start = cursor.docs, cursor.start
    item = docs[start]

    cmds = []
    if start + 1 < len(docs):
        cmds.append((indent, BREAK_MODE, _FillFrom(docs, start + 1)))

    measured = [(indent, FLAT_MODE, item)]
    is_separator = start % 2 == 1
    if is_separator and start + 1 < len(docs):
        measured.append((indent, BREAK_MODE, docs[start + 1]))

    if fits(measured, [], remaining, must_be_flat=not is_separator):
        cmds.append((indent, FLAT_MODE, item))
    else:
        cmds.append((indent, BREAK_MODE, item))
    return cmds
