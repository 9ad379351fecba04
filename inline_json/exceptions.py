class InlineJsonError(Exception):
    """Something went wrong while expanding a literal."""


class CompileError(InlineJsonError):
    """A literal couldn't be expanded.

    Every failure is detected before any generated code runs, so all of them
    point back into the source of the literal.

    """
    def __init__(self, message, text='', pos=-1):
        super().__init__(message)
        self.message = message
        self.text = text
        self.pos = pos

    def line(self):
        """Return the 1-based line number where the error occurred."""
        return self.text.count('\n', 0, self.pos) + 1

    def column(self):
        """Return the 1-based column where the error occurred."""
        return self.pos - (self.text.rfind('\n', 0, self.pos) + 1) + 1

    def __str__(self):
        if self.pos < 0:
            return self.message
        return "%s at '%s' (line %s, column %s)." % (
            self.message,
            self.text[self.pos:self.pos + 20],
            self.line(),
            self.column())


class LexError(CompileError):
    """The text couldn't be turned into a token tree.

    Usually that means unbalanced brackets or a character Python has no token
    for.

    """


class StructuralError(CompileError):
    """Tokens don't have the shape the literal grammar expects at some
    nesting level, like an object entry without a ``:``."""


class ExpressionError(CompileError):
    """A segment which should be a freestanding Python expression isn't one."""
