"""inline_json's public API. Import from here.

Things may move around in modules deeper than this one.

"""
from inline_json.exceptions import (InlineJsonError, CompileError, LexError,
                                    StructuralError, ExpressionError)
from inline_json.compiler import (ValueCompiler, Fragment, MethodCalls,
                                  ProtocolCalls, classify, expand, evaluate)
from inline_json.lexer import tokenize
from inline_json.splitter import split
from inline_json.target import Buildable, JsonValue, PyValue
from inline_json.tokens import (Token, Leaf, Ident, Literal, Punct, Group,
                                Delimiter, source_text)
