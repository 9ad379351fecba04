r"""Turn text into a grouped token tree

Python's own ``tokenize`` module hands back a flat stream; the compiler wants
bracketed regions already folded into single ``Group`` tokens. A small PEG
grammar does both at once::

    >>> [t.text for t in tokenize('"a": [1, 2], # two\n "b": f(x)')]
    ['"a"', ':', '[1, 2]', ',', '"b"', ':', 'f', '(x)']

Only single-line string literals are recognized.

"""
import logging

from parsimonious.exceptions import ParseError
from parsimonious.grammar import Grammar
from parsimonious.nodes import NodeVisitor

from inline_json.exceptions import LexError
from inline_json.tokens import Delimiter, Group, Ident, Literal, Punct


__all__ = ['tokenize', 'token_grammar', 'TokenTreeBuilder']

log = logging.getLogger(__name__)


token_grammar = Grammar(r"""
    stream      = _ items
    items       = item*
    item        = (group / leaf) _

    group       = brace / bracket / parenthesis
    brace       = "{" _ items "}"
    bracket     = "[" _ items "]"
    parenthesis = "(" _ items ")"

    leaf        = string / number / name / punct
    string      = ~r'[rRbBuUfF]{0,2}"(?:[^"\\\n]|\\.)*"' /
                  ~r"[rRbBuUfF]{0,2}'(?:[^'\\\n]|\\.)*'"
    number      = ~r"(?:0[xXoObB][0-9a-fA-F_]+|(?:\d[\d_]*(?:\.[\d_]*)?|\.\d[\d_]*)(?:[eE][+-]?\d[\d_]*)?[jJ]?)"
    name        = ~r"[^\W\d]\w*"
    punct       = ~r"\.\.\.|\*\*=|//=|>>=|<<=|->|:=|==|!=|<=|>=|\*\*|//|<<|>>|[-+*/%@&|^]=|[-+*/%@&|^~<>=.,:;]"

    _           = ~r"(?:\s+|#[^\r\n]*)*"  # whitespace and comments
    """)


class TokenTreeBuilder(NodeVisitor):
    """Turns a parse tree of ``token_grammar`` into a list of tokens"""

    grammar = token_grammar
    unwrapped_exceptions = (RecursionError,)

    visit_group = visit_leaf = NodeVisitor.lift_child

    def visit_stream(self, node, visited_children):
        _, items = visited_children
        return items

    def visit_items(self, node, items):
        """Return the tokens of one nesting level, even if there are none."""
        return items

    def visit_item(self, node, visited_children):
        """Strip off the trailing space."""
        (token,), _ = visited_children
        return token

    def visit_brace(self, node, visited_children):
        return self._group(Delimiter.BRACE, node, visited_children)

    def visit_bracket(self, node, visited_children):
        return self._group(Delimiter.BRACKET, node, visited_children)

    def visit_parenthesis(self, node, visited_children):
        return self._group(Delimiter.PARENTHESIS, node, visited_children)

    def _group(self, delimiter, node, visited_children):
        _, _, items, _ = visited_children
        return Group(delimiter, node.full_text, node.start, node.end, items)

    def visit_string(self, node, visited_children):
        return Literal(node.full_text, node.start, node.end)

    visit_number = visit_string

    def visit_name(self, node, visited_children):
        return Ident(node.full_text, node.start, node.end)

    def visit_punct(self, node, visited_children):
        return Punct(node.full_text, node.start, node.end)

    def generic_visit(self, node, visited_children):
        """Replace childbearing nodes with a list of their children; keep
        others untouched."""
        return visited_children or node


def tokenize(text):
    """Return the top-level tokens of ``text``, with bracketed regions folded
    into ``Group`` tokens.

    :raise LexError: if the brackets don't balance or nest deeper than
        Python can recurse, or if some character doesn't start any token

    """
    try:
        tokens = TokenTreeBuilder().parse(text)
    except ParseError as exc:
        raise LexError(_describe(exc.text, exc.pos), exc.text, exc.pos) from exc
    except RecursionError as exc:
        raise LexError('Brackets are nested too deeply', text, 0) from exc
    log.debug('Read %s top-level tokens from %r', len(tokens), text[:40])
    return tokens


def _describe(text, pos):
    """Say why lexing stopped at ``pos``."""
    if pos >= len(text):
        return 'Unexpected end of input'
    char = text[pos]
    if char in '([{':
        return "Unbalanced or unreadable group opened by '%s'" % char
    if char in ')]}':
        return "Unmatched '%s'" % char
    return "Unrecognized character %r" % char
