"""
Errors raised by links, the expression codec and address resolution.
"""


class LinkError(Exception):
    """ Base class for errors raised by this package. """


class TransportError(LinkError):
    """ A native open, activate, flush, read or write call failed.
    :param code the native error code, or None when the link did not record one.
    :param message the native error message.
    """

    def __init__(self, code=None, message="unknown error occurred on link"):
        super().__init__(code, message)
        self.code = code
        self.message = message

    def __str__(self):
        return self.message if self.code is None else "%s (code %d)" % (self.message, self.code)


class LinkClosedError(TransportError):
    """ An operation was attempted on a link that has been closed. """

    def __init__(self, message="link is closed"):
        super().__init__(None, message)


class ProtocolError(LinkError):
    """ An unexpected or unknown token tag was read, or a read returned a failure sentinel.
    :param tag the raw tag or sentinel value
    """

    def __init__(self, tag, message=None, code=None):
        super().__init__(tag, message, code)
        self.tag = tag
        self.message = message if message is not None else "unknown token type: %s" % tag
        self.code = code

    def __str__(self):
        return self.message


class DomainError(LinkError):
    """ Well-formed wire data that cannot be represented as an expression. """

    def __init__(self, reason):
        super().__init__(reason)
        self.reason = reason

    def __str__(self):
        return self.reason


class AddressResolutionError(LinkError):
    """ No candidate address is available to listen or connect on. """
