"""Cut token sequences at top-level separators"""

from inline_json.tokens import Punct


def is_separator(token, separator):
    """Return whether ``token`` is a bare ``separator`` punct."""
    return isinstance(token, Punct) and token.text == separator


def split(tokens, separator, maxsplit=-1):
    """Return the runs of ``tokens`` between top-level ``separator`` puncts.

    Groups are never looked into, so a separator nested inside one can't
    cut a run short::

        a , [b, c] , d   ->   [a], [[b, c]], [d]

    Otherwise this works like ``str.split()``: separators are dropped, a
    trailing one leaves an empty last run, and at most ``maxsplit`` cuts are
    made if it isn't negative. The exception is empty input, which gives no
    runs at all rather than one empty one.

    """
    segments = []
    current = []
    for token in tokens:
        if is_separator(token, separator) and len(segments) != maxsplit:
            segments.append(current)
            current = []
        else:
            current.append(token)
    if current or segments:
        segments.append(current)
    return segments
