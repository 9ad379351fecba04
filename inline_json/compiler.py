"""Compile JSON-like literals into code that builds them

Given a target type and a literal, the compiler emits Python statements which
construct the literal's value using nothing but the target type's builder
operations. Any Python expression can stand in for a value, or for a key::

    >>> print(expand('T, {"name": "example", "array": ["foo", bar]}'))
    _json_object_0 = T.empty_object()
    _json_object_0.insert(str("name"), T.convert("example"))
    _json_key_2 = str("array")
    _json_array_1 = T.empty_array()
    _json_array_1.push_back(T.convert("foo"))
    _json_array_1.push_back(T.convert(bar))
    _json_object_0.insert(_json_key_2, T.convert(_json_array_1))
    value = T.convert(_json_object_0)

A literal is classified by looking at its tokens. A lone ``{...}`` group is an
object, a lone ``[...]`` group an array, and anything else a scalar
expression. Entries are found by cutting at top-level ``,`` and keys at the
first top-level ``:``. Expressions therefore can't contain a bare ``,`` or
``:`` unless it sits inside brackets.

"""
import ast
import logging
from itertools import count
from textwrap import indent

from inline_json.exceptions import ExpressionError, StructuralError
from inline_json.lexer import tokenize
from inline_json.splitter import is_separator, split
from inline_json.tokens import Delimiter, Group, source_text


__all__ = ['ValueCompiler', 'Fragment', 'MethodCalls', 'ProtocolCalls',
           'classify', 'expand', 'evaluate']

log = logging.getLogger(__name__)

ENTRY_SEPARATOR = ','
PAIR_SEPARATOR = ':'


class Fragment(object):
    """Emitted code: some statements, then an expression for the value they
    built

    Fragments nest by their parents embedding the statements verbatim.

    """
    __slots__ = ['expression', 'statements', 'imports']

    def __init__(self, expression, statements=None, imports=()):
        self.expression = expression
        self.statements = statements or []
        self.imports = tuple(imports)

    def render(self, target='value'):
        """Return a block of code which assigns the built value to
        ``target``."""
        lines = list(self.imports)
        lines.extend(self.statements)
        lines.append('%s = %s' % (target, self.expression))
        return '\n'.join(lines)

    def as_function(self, name='build'):
        """Return the source of a function which builds and returns the value
        each time it's called."""
        lines = list(self.imports)
        lines.extend(self.statements)
        lines.append('return %s' % self.expression)
        return 'def %s():\n%s\n' % (name, indent('\n'.join(lines), '    '))

    def __str__(self):
        return self.render()

    def __repr__(self):
        return '<Fragment %r>' % self.expression


class MethodCalls(object):
    """Emits builder operations as methods of the target type and its values

    This is the contract ``inline_json.target.Buildable`` describes. Each
    method returns source text.

    """
    imports = ()

    def empty_object(self, ty):
        return '%s.empty_object()' % ty

    def empty_array(self, ty):
        return '%s.empty_array()' % ty

    def insert(self, target, key, value):
        return '%s.insert(%s, %s)' % (target, key, value)

    def push_back(self, target, value):
        return '%s.push_back(%s)' % (target, value)

    def convert(self, ty, expression):
        return '%s.convert(%s)' % (ty, expression)


class ProtocolCalls(MethodCalls):
    """Emits ``insert`` and ``push_back`` as calls to the dispatching
    functions in ``inline_json.target``

    Use this for targets whose containers are foreign types, like the plain
    dicts and lists ``PyValue`` builds.

    """
    imports = ('import inline_json.target',)

    def insert(self, target, key, value):
        return 'inline_json.target.insert(%s, %s, %s)' % (target, key, value)

    def push_back(self, target, value):
        return 'inline_json.target.push_back(%s, %s)' % (target, value)


def classify(tokens):
    """Return ``'object'``, ``'array'`` or ``'scalar'``, the shape of the
    literal in ``tokens``.

    Only a sequence made of one lone brace or bracket group is a container;
    whatever is inside the group doesn't matter.

    """
    if len(tokens) == 1 and isinstance(tokens[0], Group):
        delimiter = tokens[0].delimiter
        if delimiter is Delimiter.BRACE:
            return 'object'
        if delimiter is Delimiter.BRACKET:
            return 'array'
    return 'scalar'


class ValueCompiler(object):
    """Compiles literals to ``Fragment`` objects

    One instance can compile any number of literals; nothing carries over
    from one to the next.

    """
    def __init__(self, convention=None, max_depth=32, trailing_separator=True):
        """Construct.

        :arg convention: How to spell the builder operations. Defaults to
            ``MethodCalls()``.
        :arg max_depth: How many containers deep a container may sit inside
            the outermost one before we give up with a ``StructuralError``
        :arg trailing_separator: Whether a ``,`` may follow the last entry of
            an object or array. If not, it's a ``StructuralError``.

        """
        self.convention = convention or MethodCalls()
        self.max_depth = max_depth
        self.trailing_separator = trailing_separator

    def expand(self, source):
        """Compile the body of a literal invocation: a target type, a comma,
        and the literal."""
        tokens = tokenize(source)
        parts = split(tokens, ENTRY_SEPARATOR, maxsplit=1)
        if len(parts) < 2:
            raise StructuralError(
                "Expected a target type followed by '%s'" % ENTRY_SEPARATOR,
                source, tokens[0].start if tokens else 0)
        type_tokens, literal = parts
        if not literal:
            raise StructuralError(
                "Expected a literal after '%s'" % ENTRY_SEPARATOR,
                source, len(source.rstrip()))
        ty = self._expression(type_tokens, source, 0)
        log.debug('Expanding literal for target type %s', ty)
        return self.compile(ty, literal)

    def compile(self, ty, tokens):
        """Return a ``Fragment`` which builds the literal in ``tokens`` as a
        ``ty``.

        :arg ty: Source text of an expression naming the target type
        :arg tokens: The literal, as a non-empty sequence of tokens

        """
        if not tokens:
            raise ExpressionError('Expected an expression')
        fragment = self._compile(_operand(ty), tokens, tokens[-1], 0, count())
        fragment.imports = self.convention.imports
        return fragment

    def _compile(self, ty, tokens, at, depth, names):
        """Dispatch on the shape of ``tokens``.

        :arg at: The token to blame if ``tokens`` turns out to be empty
        :arg depth: How many containers enclose ``tokens``
        :arg names: Where numbers for temporary variables come from

        """
        method = getattr(self, 'compile_' + classify(tokens))
        return method(ty, tokens, at, depth, names)

    def compile_object(self, ty, tokens, at, depth, names):
        group = tokens[0]
        self._check_depth(group, depth)
        conv = self.convention
        name = '_json_object_%s' % next(names)
        statements = ['%s = %s' % (name, conv.empty_object(ty))]
        for entry in self._entries(group):
            parts = split(entry, PAIR_SEPARATOR, maxsplit=1)
            if len(parts) < 2:
                raise StructuralError(
                    "Object entry has no '%s' between key and value" %
                    PAIR_SEPARATOR,
                    group.full_text, entry[0].start)
            key, value = parts
            key = 'str(%s)' % self._expression(key, group.full_text, entry[0].start)
            value = self._compile(ty, value, entry[-1], depth + 1, names)
            if value.statements:
                # Evaluate the key before anything the value does.
                key_name = '_json_key_%s' % next(names)
                statements.append('%s = %s' % (key_name, key))
                key = key_name
            statements.extend(value.statements)
            statements.append(conv.insert(name, key, value.expression))
        return Fragment(conv.convert(ty, name), statements)

    def compile_array(self, ty, tokens, at, depth, names):
        group = tokens[0]
        self._check_depth(group, depth)
        conv = self.convention
        name = '_json_array_%s' % next(names)
        statements = ['%s = %s' % (name, conv.empty_array(ty))]
        for element in self._entries(group):
            value = self._compile(ty, element, element[-1], depth + 1, names)
            statements.extend(value.statements)
            statements.append(conv.push_back(name, value.expression))
        return Fragment(conv.convert(ty, name), statements)

    def compile_scalar(self, ty, tokens, at, depth, names):
        expression = self._expression(tokens, at.full_text, at.end)
        return Fragment(self.convention.convert(ty, expression))

    def _check_depth(self, group, depth):
        """Complain if the container ``group`` sits inside more than
        ``max_depth`` others."""
        if depth > self.max_depth:
            raise StructuralError(
                'Literal is nested more than %s levels deep' % self.max_depth,
                group.full_text, group.start)

    def _entries(self, group):
        """Return the comma-separated entries of an object or array group."""
        entries = split(group.children, ENTRY_SEPARATOR)
        if entries and not entries[-1]:
            if not self.trailing_separator:
                comma = group.children[-1]
                raise StructuralError(
                    "Trailing '%s' after the last entry" % ENTRY_SEPARATOR,
                    comma.full_text, comma.start)
            entries.pop()
        commas = [t for t in group.children if is_separator(t, ENTRY_SEPARATOR)]
        for entry, comma in zip(entries, commas):
            # An empty trailing entry is gone, so every empty one ends at a
            # comma.
            if not entry:
                raise StructuralError(
                    "Empty entry before '%s'" % ENTRY_SEPARATOR,
                    comma.full_text, comma.start)
        return entries

    def _expression(self, tokens, text, pos):
        """Return the source of ``tokens`` after making sure it's a single
        valid expression on its own.

        It's checked the way it's emitted: as the sole argument of a call.

        :arg text: The full text to report an empty ``tokens`` against
        :arg pos: Where in it to report an empty ``tokens``

        """
        if not tokens:
            raise ExpressionError('Expected an expression', text, pos)
        source = source_text(tokens)
        try:
            call = ast.parse('f(\n%s\n)' % source, mode='eval').body
        except (SyntaxError, ValueError) as exc:
            raise ExpressionError(
                'Invalid expression (%s)' % getattr(exc, 'msg', exc),
                tokens[0].full_text, tokens[0].start)
        if (len(call.args) != 1 or call.keywords or
                isinstance(call.args[0], ast.Starred)):
            raise ExpressionError('Expected a single expression',
                                  tokens[0].full_text, tokens[0].start)
        return source


def _operand(source):
    """Return the expression ``source``, parenthesized unless an attribute can
    be looked up on it as it stands."""
    try:
        node = ast.parse(source, mode='eval').body
    except (SyntaxError, ValueError):
        node = None
    if isinstance(node, (ast.Name, ast.Attribute, ast.Call, ast.Subscript)):
        return source
    return '(%s)' % source


def expand(source, convention=None, **options):
    """Return a ``Fragment`` for ``source``, the body of a literal invocation:
    a target type, a comma, and the literal.

    Keyword arguments go to ``ValueCompiler``.

    """
    return ValueCompiler(convention, **options).expand(source)


def evaluate(source, namespace=None, convention=None, **options):
    """Expand ``source`` and run the result, returning the value it builds.

    :arg namespace: The names the target type and expressions in the literal
        can refer to. It's copied, not modified.

    """
    fragment = expand(source, convention, **options)
    scope = dict(namespace or {})
    code = compile(fragment.render('_json_value'), '<inline_json>', 'exec')
    exec(code, scope)
    return scope['_json_value']
