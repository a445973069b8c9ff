from enum import Enum, unique, auto


@unique
class Token(Enum):
    KEYWORD = auto()
    KEYWORD_CONSTANT = auto()
    KEYWORD_TYPE = auto()

    NAME = auto()
    NAME_BUILTIN = auto()
    NAME_CLASS = auto()
    NAME_FUNCTION = auto()

    LITERAL_STRING = auto()
    NUMBER_INT = auto()
    NUMBER_FLOAT = auto()

    OPERATOR = auto()
    OPERATOR_WORD = auto()
    PUNCTUATION = auto()

    COMMENT_SINGLE = auto()
    COMMENT_MULTILINE = auto()
