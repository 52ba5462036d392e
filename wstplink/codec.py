"""
Encodes expressions as tokens on a link, and decodes them back.

A Normal expression is written as a function token carrying the argument count, followed by the head
and then each argument. Atoms are written as a single token.

Decoding is recursive, so the depth of expressions that can be read is limited by the interpreter's
recursion limit.
"""
import math

from wstplink.errors import DomainError, ProtocolError
from wstplink.expr import Integer, Normal, Real, String, Symbol, has_context
from wstplink.native import constants as c


def _check_writable(expr):
    if isinstance(expr, Normal):
        _check_writable(expr.head)
        for elem in expr.contents:
            _check_writable(elem)
    elif not isinstance(expr, (Symbol, String, Integer, Real)):
        raise TypeError("cannot write %r to a link, expected an expression" % (expr,))


def _put(link, expr):
    if isinstance(expr, Normal):
        link.put_function_head_tag()
        link.put_argument_count(len(expr.contents))
        _put(link, expr.head)
        for elem in expr.contents:
            _put(link, elem)
    elif isinstance(expr, Symbol):
        link.put_symbol(expr.name)
    elif isinstance(expr, String):
        link.put_string(expr.value)
    elif isinstance(expr, Integer):
        link.put_integer(expr.value)
    else:
        link.put_real(expr.value)


def put_expr(link, expr):
    """
    Writes an expression to a link. Atom values are written as given, without validation.
    :raises TypeError: if any node of the tree is not an expression. Nothing is written in that case.
    """
    _check_writable(expr)
    _put(link, expr)


def _get_integer(link):
    return Integer(link.get_integer())


def _get_real(link):
    value = link.get_real()
    if math.isnan(value):
        raise DomainError("non-finite real is not representable")
    return Real(value)


def _get_string(link):
    return String(link.get_string())


def _get_symbol(link):
    name = link.get_symbol()
    if not has_context(name):
        raise DomainError("symbol has no context: `%s`" % name)
    return Symbol(name)


def _get_normal(link):
    count = link.get_argument_count()
    head = get_expr(link)
    contents = [get_expr(link) for _ in range(count)]
    return Normal(head, contents)


_decoders = {
    c.TKINT: _get_integer,
    c.TKREAL: _get_real,
    c.TKSTR: _get_string,
    c.TKSYM: _get_symbol,
    c.TKFUNC: _get_normal,
}


def get_expr(link):
    """
    Reads an expression from a link.
    :raises ProtocolError: if a token has an unknown tag.
    :raises DomainError: for a NaN real or a symbol with no context.
    """
    tag = link.read_next_token_type()
    decoder = _decoders.get(tag)
    if decoder is None:
        raise ProtocolError(tag, "unknown token type: %s" % tag)
    return decoder(link)


def transfer_expression(source, dest):
    """
    Copies the next expression on source to dest, without decoding it.
    :raises TransportError: with the error recorded on the source link.
    """
    if not source._raw_link().transfer_expression(dest._raw_link()):
        raise source._error_or_unknown()
