class SDoc(object):
    pass


class SLine(SDoc):
    """A line break followed by ``indent`` levels of indentation."""
    __slots__ = ('indent', )

    def __init__(self, indent):
        assert isinstance(indent, int)
        self.indent = indent

    def __repr__(self):
        return f'SLine({repr(self.indent)})'


class SAnnotationPush(SDoc):
    __slots__ = ('value', )

    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return f'SAnnotationPush({repr(self.value)})'


class SAnnotationPop(SDoc):
    __slots__ = ('value', )

    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return f'SAnnotationPop({repr(self.value)})'
