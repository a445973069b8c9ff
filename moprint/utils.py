def intersperse(x, ys):
    it = iter(ys)

    try:
        y = next(it)
    except StopIteration:
        return

    yield y

    for y in it:
        yield x
        yield y


def find(predicate, iterable, default=None):
    filtered = iter((x for x in iterable if predicate(x)))
    return next(filtered, default)


def text_width(s):
    # Tabs only reach the output inside verbatim text (string literals,
    # comments) and are not counted towards the line width.
    return len(s) - s.count('\t')
