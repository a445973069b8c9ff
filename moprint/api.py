from .doc import (
    AlwaysBreak,
    Annotated,
    Concat,
    ConditionalGroup,
    Doc,
    Fill,
    Group,
    Indent,
    Text,
    NIL,
    LINE,
    SOFTLINE,
    HARDLINE,
    LITERALLINE,
)
from .utils import intersperse


def text(x):
    if not isinstance(x, str):
        raise TypeError("Argument to text function must be a str")
    return Text(x)


def cast_doc(doc):
    """Casts value to doc, if possible."""
    if isinstance(doc, Doc):
        return doc
    elif isinstance(doc, str):
        if doc == "":
            return NIL
        return doc

    raise ValueError(doc)


def group(doc, force_break=False):
    """Annotates doc with special meaning to the layout algorithm, so that the
    document is attempted to output on a single line if it is possible within
    the layout constraints. To lay out the doc on a single line, every line
    inside it that isn't nested in another group is printed flat.

    With ``force_break``, the group is always printed broken. Unlike a hard
    line, this does not force the enclosing groups to break."""
    return Group(cast_doc(doc), force_break=force_break)


def concat(docs):
    """Returns a concatenation of the documents in the iterable argument"""
    docs = list(docs)
    if not docs:
        return NIL
    elif len(docs) == 1:
        return cast_doc(docs[0])
    return Concat([cast_doc(doc) for doc in docs])


def annotate(annotation, doc):
    """Annotates ``doc`` with the arbitrary value``annotation``"""
    return Annotated(cast_doc(doc), annotation)


def indent(doc):
    """Indents every line break inside ``doc`` by one more level."""
    return Indent(cast_doc(doc))


def join(separator, docs):
    return concat(intersperse(separator, docs))


def hsep(docs):
    return join(' ', docs)


def vsep(docs):
    return join(LINE, docs)


def fillsep(docs):
    return Fill(intersperse(LINE, map(cast_doc, docs)))


def fill(docs):
    """Packs ``docs`` greedily onto lines. ``docs`` must alternate between
    content and separators, starting and ending with content."""
    return Fill([cast_doc(doc) for doc in docs])


def conditional_group(candidates):
    """Tries each of the ``candidates`` in order and prints the first one
    that fits flat on the current line. The last candidate is printed
    broken when none of the others fit."""
    return ConditionalGroup([cast_doc(doc) for doc in candidates])


def always_break(doc):
    """Instructs the layout algorithm that ``doc`` must be
    broken to multiple lines. This instruction propagates
    to all higher levels in the layout, but nested Docs
    may still be laid out flat."""
    return AlwaysBreak(cast_doc(doc))


def break_group(doc):
    """Returns ``doc`` with its outermost group forced to break.

    For a concatenation, the group at its end is broken, so that a call
    ``f(...)`` breaks its argument list. Other docs are returned unchanged.
    """
    if isinstance(doc, Group):
        return Group(doc.doc, force_break=True)
    if isinstance(doc, Annotated):
        return Annotated(break_group(doc.doc), doc.annotation)
    if isinstance(doc, Concat) and doc.docs:
        return Concat([*doc.docs[:-1], break_group(doc.docs[-1])])
    return doc

