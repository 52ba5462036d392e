"""
The link owns a single native link and exposes its lifecycle, properties and error state.
Token primitives come from TokenStream, expression reading and writing from the codec.
"""
import logging

from wstplink import codec, env
from wstplink.env import stdenv
from wstplink.errors import LinkClosedError, LinkError, TransportError
from wstplink.link.shared import SharedLink
from wstplink.link.stream import TokenStream
from wstplink.native.constants import EOK, error_message
from wstplink.support.events import EventSource
from wstplink.transport.resolver import LinkMode, Protocol, build_open_arguments, resolve_with_fallback, \
    socket_addresses, tcpip_address_name

logger = logging.getLogger(__name__)


class LinkEvent:
    """ base class for link events. """
    def __init__(self, link):
        self.link = link

    def __eq__(self, other):
        return type(other) is type(self) and other.link is self.link

    def __hash__(self):
        return id(self.link)


class LinkActivatedEvent(LinkEvent):
    """ The link was activated. """


class LinkClosedEvent(LinkEvent):
    """ The link was closed and its native link released. """


def _checked_open(raw_link, err, description):
    if raw_link is None or err != EOK:
        if raw_link is not None:
            raw_link.close()
        logger.warning("unable to open %s: %s" % (description, error_message(err)))
        raise TransportError(err, error_message(err))
    return raw_link


class Link(TokenStream):
    """
    A link to another endpoint, through which expressions are read and written.

    The link owns its native link, which is released exactly once: by close(), on leaving a with block,
    or when the link is garbage collected. Once closed, all operations other than close() raise
    LinkClosedError.

    A link must not be used from more than one thread at a time. It can be handed from one thread to another,
    and enable_link_lock() provides a wrapper for concurrent use.

    :param raw_link the native link. The link takes ownership of it.
    """

    def __init__(self, raw_link, mode=LinkMode.loopback):
        if raw_link is None:
            raise ValueError("raw_link is required")
        self._raw = raw_link
        self.mode = mode
        self._activated = False
        self.events = EventSource()

    # creating links

    @classmethod
    def new_loopback(cls):
        """ Creates a link that reads back what is written to it. """
        raw_link, err = stdenv().loopback_open()
        return cls(_checked_open(raw_link, err, "loopback link"), LinkMode.loopback)

    @classmethod
    def listen(cls, protocol: Protocol, name):
        """ Creates a named link that waits for a connection. """
        stdenv()
        args = build_open_arguments(LinkMode.listen, protocol, name, env.listen_options)
        return cls.open_with_args(args)

    @classmethod
    def connect(cls, protocol: Protocol, name):
        """ Connects to an existing named link. The link must be activated before use. """
        return cls.connect_with_options(protocol, name, ())

    @classmethod
    def connect_with_options(cls, protocol: Protocol, name, options):
        args = build_open_arguments(LinkMode.connect, protocol, name, options)
        return cls.open_with_args(args)

    @classmethod
    def open_with_args(cls, args):
        """
        Opens a link of any protocol and mode. Prefer listen(), connect(), tcpip_listen(), tcpip_connect()
        or connect_to_link_server() when the kind of link is known.
        """
        args = list(args)
        raw_link, err = stdenv().open_argv(args)
        raw_link = _checked_open(raw_link, err, "link %s" % ' '.join(args))
        mode = LinkMode.listen if args[args.index('-linkmode') + 1] == 'listen' else LinkMode.connect
        return cls(raw_link, mode)

    @classmethod
    def tcpip_listen(cls, addr):
        """
        Creates a TCPIP link listening at addr.
        If addr resolves to several addresses, each is tried in turn until one succeeds. If none succeed,
        the error from the last address is raised.
        """
        return resolve_with_fallback(socket_addresses(addr),
                                     lambda a: cls.listen(Protocol.TCPIP, tcpip_address_name(a)))

    @classmethod
    def tcpip_connect(cls, addr):
        """
        Connects to a TCPIP link listening at addr, trying each address addr resolves to in turn.
        """
        return resolve_with_fallback(socket_addresses(addr),
                                     lambda a: cls.connect(Protocol.TCPIP, tcpip_address_name(a)))

    @classmethod
    def connect_to_link_server(cls, addr):
        """
        Connects and activates a TCPIP link to a link server listening at addr, trying each address
        addr resolves to in turn.
        """
        def attempt(a):
            link = cls.connect_with_options(Protocol.TCPIP, tcpip_address_name(a), env.link_server_options)
            try:
                link.activate()
            except LinkError:
                link.close()
                raise
            return link

        stdenv()
        return resolve_with_fallback(socket_addresses(addr), attempt)

    # lifecycle

    def _raw_link(self):
        if self._raw is None:
            raise LinkClosedError()
        return self._raw

    def activate(self):
        """ Completes the connection to the other end. Has no effect on an activated or loopback link. """
        if not self._raw_link().activate():
            error = self._error_or_unknown()
            logger.warning("unable to activate link %s: %s" % (self.link_name(), error))
            raise error
        if not self._activated:
            self._activated = True
            logger.debug("activated link %s" % self.link_name())
            self.events.fire(LinkActivatedEvent(self))

    def close(self):
        """ Closes this end of the link. Closing a closed link does nothing. """
        raw_link = self._raw
        if raw_link is None:
            return
        self._raw = None
        raw_link.close()
        logger.debug("closed link %s" % raw_link.name())
        self.events.fire(LinkClosedEvent(self))

    @property
    def closed(self) -> bool:
        return self._raw is None

    def enable_link_lock(self) -> SharedLink:
        """ Enables native locking of this link, and returns a wrapper that serializes access to it. """
        self._check(self._raw_link().enable_link_lock())
        return SharedLink(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __del__(self):
        raw_link = getattr(self, '_raw', None)
        if raw_link is not None:
            self._raw = None
            raw_link.close()

    def __repr__(self):
        state = 'closed' if self._raw is None else self._raw.name()
        return "<%s %s %s>" % (type(self).__name__, self.mode, state)

    # properties

    def link_name(self) -> str:
        return self._raw_link().name()

    def is_ready(self) -> bool:
        """ Determines if data can be read from the link without blocking. Never blocks. """
        return self._raw is not None and bool(self._raw.ready())

    def is_loopback(self) -> bool:
        return bool(self._raw_link().is_loopback())

    # errors

    def error(self):
        """
        Retrieves the last error to occur on this link as a TransportError, or None.
        The native message is released once read, so the same error is not reported twice unless the
        link fails again.
        """
        raw_link = self._raw_link()
        code = raw_link.error()
        message = raw_link.error_message()
        if code == EOK or message is None:
            return None
        raw_link.release_error_message(message)
        return TransportError(code, message)

    def error_message(self):
        error = self.error()
        return error.message if error is not None else None

    def _error_or_unknown(self):
        error = self.error()
        return error if error is not None else TransportError()

    def clear_error(self):
        self._raw_link().clear_error()

    # expressions

    def put_expr(self, expr):
        """ Writes an expression to this link. """
        codec.put_expr(self, expr)

    def get_expr(self):
        """ Reads an expression from this link. """
        return codec.get_expr(self)

    def transfer_expr_to(self, dest):
        """ Copies the next expression on this link to dest. """
        codec.transfer_expression(self, dest)
