"""
The expression tree exchanged over links.

An expression is one of:
- Normal: a head expression applied to a sequence of argument expressions, e.g. Plus[2, 3]
- Symbol: a context-qualified name, e.g. System`Plus
- String: text
- Integer: a 64-bit signed integer
- Real: a 64-bit float

Expressions are immutable values that compare structurally.
"""
from wstplink.native.constants import CONTEXT_SEPARATOR


class Expr:
    """ base class for expressions. Subclasses define _key() for equality and hashing. """
    __slots__ = ()

    def _key(self):
        raise NotImplementedError

    def __eq__(self, other):
        return type(other) is type(self) and self._key() == other._key()

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((type(self).__name__, self._key()))

    def __setattr__(self, name, value):
        raise AttributeError("expressions are immutable")


class Normal(Expr):
    __slots__ = ('head', 'contents')

    def __init__(self, head: Expr, contents=()):
        object.__setattr__(self, 'head', head)
        object.__setattr__(self, 'contents', tuple(contents))

    def _key(self):
        return self.head, self.contents

    def __len__(self):
        return len(self.contents)

    def __repr__(self):
        return "Normal(%r, %r)" % (self.head, list(self.contents))


class Symbol(Expr):
    """
    A symbol name. The name is not checked here; names read from a link must have a context.

    >>> Symbol('System`Plus').context
    'System`'
    >>> Symbol('Global`a`b').short_name
    'b'
    >>> Symbol('x').has_context
    False
    """
    __slots__ = ('name',)

    def __init__(self, name: str):
        object.__setattr__(self, 'name', name)

    def _key(self):
        return self.name

    @property
    def has_context(self) -> bool:
        return has_context(self.name)

    @property
    def context(self):
        """ the context of the symbol including the trailing separator, or None """
        i = self.name.rfind(CONTEXT_SEPARATOR)
        return self.name[:i + 1] if i >= 0 else None

    @property
    def short_name(self):
        return self.name[self.name.rfind(CONTEXT_SEPARATOR) + 1:]

    def __repr__(self):
        return "Symbol(%r)" % self.name


class String(Expr):
    __slots__ = ('value',)

    def __init__(self, value: str):
        object.__setattr__(self, 'value', value)

    def _key(self):
        return self.value

    def __repr__(self):
        return "String(%r)" % self.value


class Integer(Expr):
    __slots__ = ('value',)

    def __init__(self, value: int):
        object.__setattr__(self, 'value', value)

    def _key(self):
        return self.value

    def __repr__(self):
        return "Integer(%r)" % self.value


class Real(Expr):
    """ A 64-bit float. Any float can be held, but a NaN cannot be read back from a link. """
    __slots__ = ('value',)

    def __init__(self, value: float):
        object.__setattr__(self, 'value', float(value))

    def _key(self):
        return self.value

    def __repr__(self):
        return "Real(%r)" % self.value


def has_context(name) -> bool:
    """
    Determines if a symbol name is qualified with a context.
    >>> has_context('System`List')
    True
    >>> has_context('List')
    False
    """
    return CONTEXT_SEPARATOR in name


def normal(head, *contents) -> Normal:
    """
    Builds a Normal expression, converting a str head to a Symbol.
    >>> normal('System`List', Integer(1))
    Normal(Symbol('System`List'), [Integer(1)])
    """
    if isinstance(head, str):
        head = Symbol(head)
    return Normal(head, contents)
