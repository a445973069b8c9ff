class MoprintError(Exception):
    pass


class TranslationError(MoprintError):
    """Raised when a syntax node can't be turned into a Doc."""

    def __init__(self, kind, span=None, message=None):
        if message is None:
            message = f'No translation rule for node kind {repr(kind)}'
        if span is not None:
            message = f'{message} at {span}'
        super().__init__(message)
        self.kind = kind
        self.span = span
