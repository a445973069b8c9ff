from enum import Enum


def normalize_doc(doc):
    """Normalizes ``doc`` bottom-up, splicing concatenations and propagating
    forced breaks to the enclosing groups.

    The tree is walked with an explicit stack, so deeply nested documents
    don't grow the Python call stack. Each node is rebuilt from its already
    normalized children.
    """
    if isinstance(doc, str):
        return doc

    done = []
    stack = [(doc, False)]
    while stack:
        node, children_done = stack.pop()
        if isinstance(node, str):
            done.append(node)
            continue

        children = node.children()
        if children_done:
            start = len(done) - len(children)
            normalized = done[start:]
            del done[start:]
            done.append(node.rebuild(normalized))
        else:
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(children))

    return done[0]


def is_doc(doc):
    if isinstance(doc, str):
        return True
    return isinstance(doc, Doc)


def _check_doc(doc):
    if not is_doc(doc):
        raise TypeError(
            f"Got {repr(doc)} of type {type(doc).__name__}, "
            "expected 'str' or 'Doc'"
        )
    return doc


class Doc:
    __slots__ = ()

    def children(self):
        return ()

    def rebuild(self, children):
        """Returns the normalized form of this doc, given its normalized
        ``children``."""
        return self

    def normalize(self):
        return normalize_doc(self)


class Text(Doc):
    __slots__ = ('value', )

    def __init__(self, value):
        if not isinstance(value, str):
            raise TypeError(
                f"Got {repr(value)} of type {type(value).__name__}, "
                "expected 'str'"
            )
        self.value = value

    def rebuild(self, children):
        if not self.value:
            return NIL
        return self

    def __repr__(self):
        return f'Text({repr(self.value)})'


class Nil(Doc):
    __slots__ = ()

    def __repr__(self):
        return 'NIL'


NIL = Nil()


class LineKind(Enum):
    # A space when flat, a newline when broken.
    SOFT = 'soft'
    # Nothing when flat, a newline when broken.
    EMPTY = 'empty'
    # Always a newline followed by the indentation.
    HARD = 'hard'
    # Always a newline, never indented.
    LITERAL = 'literal'

    @property
    def forces_break(self):
        return self in (LineKind.HARD, LineKind.LITERAL)


class Line(Doc):
    __slots__ = ('kind', )

    def __init__(self, kind):
        if not isinstance(kind, LineKind):
            raise TypeError(
                f"Got {repr(kind)} of type {type(kind).__name__}, "
                "expected 'LineKind'"
            )
        self.kind = kind

    def rebuild(self, children):
        if self.kind.forces_break:
            return AlwaysBreak(self)
        return self

    def __repr__(self):
        return f'Line({self.kind.value})'


LINE = Line(LineKind.SOFT)
SOFTLINE = Line(LineKind.EMPTY)
HARDLINE = Line(LineKind.HARD)
LITERALLINE = Line(LineKind.LITERAL)


class Concat(Doc):
    __slots__ = ('docs', )

    def __init__(self, docs):
        self.docs = [_check_doc(doc) for doc in docs]

    def children(self):
        return self.docs

    def rebuild(self, children):
        normalized_docs = []
        propagate_broken = False
        for doc in children:
            if isinstance(doc, Concat):
                normalized_docs.extend(doc.docs)
            elif isinstance(doc, AlwaysBreak):
                propagate_broken = True
                inner = doc.doc
                if isinstance(inner, Concat):
                    normalized_docs.extend(inner.docs)
                else:
                    normalized_docs.append(inner)
            elif doc is NIL or doc == '':
                continue
            else:
                normalized_docs.append(doc)

        if not normalized_docs:
            res = NIL
        elif len(normalized_docs) == 1:
            res = normalized_docs[0]
        else:
            res = Concat(normalized_docs)

        if propagate_broken:
            res = AlwaysBreak(res)
        return res

    def __repr__(self):
        return f"Concat({', '.join(repr(doc) for doc in self.docs)})"


class Indent(Doc):
    """Renders ``doc`` one indentation level deeper than its context."""
    __slots__ = ('doc', )

    def __init__(self, doc):
        self.doc = _check_doc(doc)

    def children(self):
        return (self.doc, )

    def rebuild(self, children):
        inner_normalized, = children
        if isinstance(inner_normalized, AlwaysBreak):
            return AlwaysBreak(
                Indent(inner_normalized.doc)
            )
        return Indent(inner_normalized)

    def __repr__(self):
        return f'Indent({repr(self.doc)})'


class Annotated(Doc):
    __slots__ = ('doc', 'annotation')

    def __init__(self, doc, annotation):
        self.doc = _check_doc(doc)
        self.annotation = annotation

    def children(self):
        return (self.doc, )

    def rebuild(self, children):
        inner_normalized, = children
        if isinstance(inner_normalized, AlwaysBreak):
            return AlwaysBreak(
                Annotated(inner_normalized.doc, self.annotation)
            )
        return Annotated(inner_normalized, self.annotation)

    def __repr__(self):
        return f'Annotated({repr(self.doc)}, {repr(self.annotation)})'


class Group(Doc):
    __slots__ = ('doc', 'force_break')

    def __init__(self, doc, force_break=False):
        self.doc = _check_doc(doc)
        self.force_break = bool(force_break)

    def children(self):
        return (self.doc, )

    def rebuild(self, children):
        doc_normalized, = children
        if isinstance(doc_normalized, AlwaysBreak):
            # Group is the possibility of either flat
            # or break; since we're always breaking,
            # we don't need Group.
            return doc_normalized
        return Group(doc_normalized, force_break=self.force_break)

    def __repr__(self):
        if self.force_break:
            return f'Group({repr(self.doc)}, force_break=True)'
        return f'Group({repr(self.doc)})'


class AlwaysBreak(Doc):
    __slots__ = ('doc', )

    def __init__(self, doc):
        self.doc = _check_doc(doc)

    def children(self):
        return (self.doc, )

    def rebuild(self, children):
        doc_normalized, = children
        if isinstance(doc_normalized, AlwaysBreak):
            return doc_normalized
        return AlwaysBreak(doc_normalized)

    def __repr__(self):
        return f'AlwaysBreak({repr(self.doc)})'


class Fill(Doc):
    """Alternating content and separator docs, packed greedily onto lines.

    Even indices hold content, odd indices hold separators. Each separator is
    broken or kept flat on its own, depending on whether the first line of
    the content after it still fits on the current line.
    """
    __slots__ = ('docs', )

    def __init__(self, docs):
        self.docs = [_check_doc(doc) for doc in docs]

    def children(self):
        return self.docs

    def rebuild(self, children):
        res = Fill(children)
        if any(isinstance(doc, AlwaysBreak) for doc in children):
            return AlwaysBreak(res)
        return res

    def __repr__(self):
        return f"Fill([{', '.join(repr(doc) for doc in self.docs)}])"


class ConditionalGroup(Doc):
    """Layout candidates tried in order; the first one that fits wins.

    The last candidate is the fallback and is printed broken when none of
    the others fit. In a flat context the first candidate without a forced
    break is printed.
    """
    __slots__ = ('candidates', )

    def __init__(self, candidates):
        candidates = [_check_doc(doc) for doc in candidates]
        if not candidates:
            raise ValueError("ConditionalGroup requires at least one candidate")
        self.candidates = candidates

    def children(self):
        return self.candidates

    def rebuild(self, children):
        res = ConditionalGroup(children)
        # A forced break in some of the candidates stays local to them; only
        # when none can be printed flat do the enclosing groups have to break.
        if all(isinstance(doc, AlwaysBreak) for doc in children):
            return AlwaysBreak(res)
        return res

    def flat_candidate(self):
        for candidate in self.candidates:
            if not isinstance(candidate, AlwaysBreak):
                return candidate
        return self.candidates[0]

    def __repr__(self):
        return (
            'ConditionalGroup(['
            f"{', '.join(repr(doc) for doc in self.candidates)}])"
        )
