DEFAULT_PRINT_WIDTH = 80
DEFAULT_INDENT_WIDTH = 2

_CAMEL_CASE_NAMES = {
    'printWidth': 'print_width',
    'indentWidth': 'indent_width',
    'useTabs': 'use_tabs',
}


def _check_positive_int(name, value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(
            f"Got {repr(value)} of type {type(value).__name__} "
            f"for {name}, expected 'int'"
        )
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


class FormatOptions:
    """Options recognized by the layout and rendering passes.

    - ``print_width``: preferred maximum line length, in characters.
    - ``indent_width``: columns per indentation level. Also used to account
      for tab-indented lines.
    - ``use_tabs``: indent with one tab per level instead of spaces.
    """
    __slots__ = (
        'print_width',
        'indent_width',
        'use_tabs',
    )

    def __init__(
        self,
        print_width=DEFAULT_PRINT_WIDTH,
        indent_width=DEFAULT_INDENT_WIDTH,
        use_tabs=False,
    ):
        self.print_width = _check_positive_int('print_width', print_width)
        self.indent_width = _check_positive_int('indent_width', indent_width)

        if not isinstance(use_tabs, bool):
            raise TypeError(
                f"Got {repr(use_tabs)} of type {type(use_tabs).__name__} "
                "for use_tabs, expected 'bool'"
            )
        self.use_tabs = use_tabs

    @classmethod
    def from_mapping(cls, mapping):
        """Builds options from a mapping of option names to values.

        Both ``print_width`` and ``printWidth`` spellings are accepted.
        """
        kwargs = {}
        for key, value in mapping.items():
            name = _CAMEL_CASE_NAMES.get(key, key)
            if name not in cls.__slots__:
                raise ValueError(f"Unknown format option {repr(key)}")
            kwargs[name] = value
        return cls(**kwargs)

    def replace(self, **kwargs):
        passed_keys = set(kwargs.keys())
        fieldnames = type(self).__slots__
        unknown = passed_keys - set(fieldnames)
        if unknown:
            raise ValueError(
                f"Unknown format option(s): {', '.join(sorted(unknown))}"
            )
        return FormatOptions(
            **{
                k: (
                    kwargs[k]
                    if k in passed_keys
                    else getattr(self, k)
                )
                for k in fieldnames
            }
        )

    @property
    def indent_unit(self):
        if self.use_tabs:
            return '\t'
        return ' ' * self.indent_width

    def __eq__(self, other):
        if not isinstance(other, FormatOptions):
            return NotImplemented
        return all(
            getattr(self, k) == getattr(other, k)
            for k in type(self).__slots__
        )

    def __repr__(self):
        return (
            f'FormatOptions(print_width={self.print_width}, '
            f'indent_width={self.indent_width}, '
            f'use_tabs={self.use_tabs})'
        )
