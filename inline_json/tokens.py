"""Tokens that make up grouped token trees

The lexer spits out a flat sequence of these for each nesting level. Bracketed
regions arrive as a single ``Group`` whose contents can't be seen from the
outside, which is what lets the splitter cut at separators without counting
brackets.

"""
from enum import Enum


class Delimiter(Enum):
    """The kind of bracket around a ``Group``"""

    BRACE = '{}'
    BRACKET = '[]'
    PARENTHESIS = '()'
    NONE = ''


class Token(object):
    """A lexical unit, pointing back into the text it was read from

    Consider these immutable once constructed.

    """
    __slots__ = ['full_text',  # The full text fed to the lexer
                 'start',  # Where in the text the token starts
                 'end']  # Just past where it ends, slice-style

    def __init__(self, full_text, start, end):
        self.full_text = full_text
        self.start = start
        self.end = end

    @property
    def text(self):
        """Return the text this token was read from."""
        return self.full_text[self.start:self.end]

    def prettily(self, error=None):
        """Return a pretty-printed representation of me.

        :arg error: The token to highlight because an error occurred there

        """
        return '<%s matching "%s">%s' % (
            self.__class__.__name__,
            self.text,
            '  <-- *** We were here. ***' if error is self else '')

    def __str__(self):
        return self.prettily()

    def __repr__(self):
        return '%s(%r, %s, %s)' % (
            self.__class__.__name__, self.full_text, self.start, self.end)

    def __eq__(self, other):
        """Support by-value comparison with other tokens for testing."""
        return (type(self) is type(other) and
                self.full_text == other.full_text and
                self.start == other.start and
                self.end == other.end)

    def __hash__(self):
        return hash((type(self), self.full_text, self.start, self.end))


class Leaf(Token):
    """A token with no tokens inside it"""


class Ident(Leaf):
    """A name or keyword"""


class Literal(Leaf):
    """A string or number literal"""


class Punct(Leaf):
    """An operator or other punctuation

    Multi-character operators like ``:=`` are a single ``Punct``, so they never
    compare equal to a one-character separator.

    """


class Group(Token):
    """A bracketed run of tokens, opaque to anything walking its parent"""

    __slots__ = ['delimiter', 'children']

    def __init__(self, delimiter, full_text, start, end, children=None):
        super().__init__(full_text, start, end)
        self.delimiter = delimiter
        self.children = children or []

    def __iter__(self):
        """Support looping over the tokens inside the brackets."""
        return iter(self.children)

    def prettily(self, error=None):
        def indent(text):
            return '\n'.join(('    ' + line) for line in text.splitlines())
        ret = ['<%s "%s" matching "%s">%s' % (
            self.__class__.__name__,
            self.delimiter.value,
            self.text,
            '  <-- *** We were here. ***' if error is self else '')]
        for token in self:
            ret.append(indent(token.prettily(error=error)))
        return '\n'.join(ret)

    def __repr__(self):
        return '%s(%s, %r, %s, %s%s)' % (
            self.__class__.__name__,
            self.delimiter,
            self.full_text,
            self.start,
            self.end,
            (', children=[%s]' % ', '.join(repr(c) for c in self.children))
            if self.children else '')

    def __eq__(self, other):
        return (super().__eq__(other) and
                self.delimiter == other.delimiter and
                self.children == other.children)

    def __hash__(self):
        return hash((type(self), self.full_text, self.start, self.end))


def source_text(tokens):
    """Return the source text spanned by a non-empty run of ``tokens``.

    Whitespace and comments between the tokens come along verbatim.

    """
    first, last = tokens[0], tokens[-1]
    return first.full_text[first.start:last.end]
