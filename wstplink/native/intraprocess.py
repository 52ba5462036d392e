"""
Raw links that pass tokens through in-process queues. A loopback link reads back what it writes.
An IntraProcess pair connects a listening link and a connecting link by name, each reading what
the other writes.
"""
import logging
import threading

from wstplink.native import constants as c
from wstplink.native.base import RawLink, Transport
from wstplink.native.queue import TokenQueue

logger = logging.getLogger(__name__)


class QueueRawLink(RawLink):
    """
    A raw link that reads tokens from one queue and writes them to another.
    Loopback links use the same queue for both, never block, and make writes readable immediately.
    Other links buffer writes until flush() and block reads until a token arrives or the peer closes.
    """

    def __init__(self, name, inbound: TokenQueue, outbound: TokenQueue, loopback=False,
                 listening=False, on_close=None):
        self._name = name
        self._inbound = inbound
        self._outbound = outbound
        self._loopback = loopback
        self._listening = listening
        self._on_close = on_close
        self._activated = loopback
        self._attached = threading.Event()
        self._closed = False
        self._lock_enabled = False
        self._code = c.EOK
        self._message = None
        self._buffer = []
        self._put_tag = None
        self._pending = 0        # expressions still to be read to complete the current object
        self._positioned = False  # get_next() has looked at a token that is not yet read

    # properties

    def name(self):
        return self._name

    def is_loopback(self):
        return self._loopback

    def ready(self):
        return not self._closed and len(self._inbound) > 0

    @property
    def closed(self):
        return self._closed

    @property
    def attached(self):
        return self._attached.is_set()

    @property
    def lock_enabled(self):
        return self._lock_enabled

    # errors

    def error(self):
        return self._code

    def error_message(self):
        return self._message

    def release_error_message(self, message):
        if message is self._message:
            self._message = None

    def clear_error(self):
        self._code = c.EOK
        self._message = None
        self._put_tag = None
        return 1

    def _fail(self, code, result=0):
        self._code = code
        self._message = c.error_message(code)
        return result

    def _usable(self):
        """ checks the link can be read or written, recording an error when not. """
        if self._closed:
            self._fail(c.EDEAD)
        elif self._code != c.EOK:
            self._fail(self._code)
        elif not self._activated:
            self._fail(c.ECONNECT)
        else:
            return True
        return False

    # lifecycle

    def attach(self):
        """ called by the transport when a connecting link pairs with this listening link """
        self._attached.set()

    def activate(self):
        if self._closed:
            return self._fail(c.EDEAD)
        if self._code != c.EOK:
            return self._fail(self._code)
        if self._activated:
            return 1
        if self._listening:
            self._attached.wait()
            if self._closed:
                return self._fail(c.EDEAD)
        self._activated = True
        return 1

    def enable_link_lock(self):
        if self._closed:
            return self._fail(c.EDEAD)
        self._lock_enabled = True
        return 1

    def close(self):
        if self._closed:
            return
        if self._buffer:
            self._outbound.put_all(self._buffer)
            self._buffer = []
        self._closed = True
        self._outbound.close()
        self._inbound.close()
        self._attached.set()
        if self._on_close is not None:
            self._on_close(self)
        logger.debug("closed raw link %s" % self._name)

    # reading

    def _peek(self, index=0):
        token = self._inbound.peek(index, block=not self._loopback)
        if token is None:
            self._fail(c.ECLOSED if self._inbound.closed else c.EGSEQ)
        return token

    def _consume(self):
        tag, payload = self._inbound.take()
        if self._pending == 0:
            self._pending = 1
        self._pending -= 1
        if tag == c.TKFUNC:
            self._pending += payload + 1
        self._positioned = False
        return tag, payload

    def _get(self, tag):
        if not self._usable():
            return 0, None
        token = self._peek()
        if token is None:
            return 0, None
        if token[0] != tag:
            return self._fail(c.EGSEQ), None
        return 1, self._consume()[1]

    def get_next(self):
        if not self._usable():
            return c.TKERR
        token = self._peek()
        if token is None:
            return c.TKERR
        self._positioned = True
        return token[0]

    def next_packet(self):
        if not self._usable():
            return c.ILLEGALPKT
        if self._pending:
            return self._fail(c.ENEXTPACKET, c.ILLEGALPKT)
        first = self._peek()
        if first is None:
            return c.ILLEGALPKT
        self._positioned = True
        if first[0] != c.TKFUNC:
            return self._fail(c.EUNKNOWNPACKET, c.ILLEGALPKT)
        head = self._peek(1)
        if head is None:
            return c.ILLEGALPKT
        code = c.PACKET_HEADS.get(head[1]) if head[0] == c.TKSYM else None
        if code is None:
            return self._fail(c.EUNKNOWNPACKET, c.ILLEGALPKT)
        self._consume()
        self._consume()
        return code

    def new_packet(self):
        if not self._usable():
            return 0
        if self._pending == 0 and self._positioned:
            self._pending = 1
        while self._pending:
            if self._inbound.peek(block=not self._loopback) is None:
                self._pending = 0
                break
            self._consume()
        self._positioned = False
        return 1

    def get_integer64(self):
        return self._get(c.TKINT)

    def get_real64(self):
        return self._get(c.TKREAL)

    def get_string(self):
        return self._get(c.TKSTR)

    def get_symbol(self):
        return self._get(c.TKSYM)

    def get_arg_count(self):
        return self._get(c.TKFUNC)

    # writing

    def _put(self, token):
        if self._put_tag is not None:
            return self._fail(c.EPSEQ)
        if self._outbound.closed:
            return self._fail(c.ECLOSED)
        if self._loopback:
            if not self._outbound.put_all([token]):
                return self._fail(c.EMEM)
        else:
            self._buffer.append(token)
        return 1

    def put_type(self, tag):
        if not self._usable():
            return 0
        if tag != c.TKFUNC:
            return self._fail(c.EPBTK)
        if self._put_tag is not None:
            return self._fail(c.EPSEQ)
        self._put_tag = tag
        return 1

    def put_arg_count(self, count):
        if not self._usable():
            return 0
        if self._put_tag != c.TKFUNC or not isinstance(count, int) or count < 0:
            return self._fail(c.EPSEQ)
        self._put_tag = None
        return self._put((c.TKFUNC, count))

    def put_integer64(self, value):
        if not self._usable():
            return 0
        if not isinstance(value, int):
            return self._fail(c.EPBTK)
        if not c.INT64_MIN <= value <= c.INT64_MAX:
            return self._fail(c.EOVFL)
        return self._put((c.TKINT, int(value)))

    def put_real64(self, value):
        if not self._usable():
            return 0
        if not isinstance(value, (int, float)):
            return self._fail(c.EPBTK)
        return self._put((c.TKREAL, float(value)))

    def put_string(self, value):
        if not self._usable():
            return 0
        if not isinstance(value, str):
            return self._fail(c.EPBTK)
        return self._put((c.TKSTR, value))

    def put_symbol(self, value):
        if not self._usable():
            return 0
        if not isinstance(value, str):
            return self._fail(c.EPBTK)
        return self._put((c.TKSYM, value))

    def flush(self):
        if not self._usable():
            return 0
        if self._buffer:
            if self._outbound.closed:
                return self._fail(c.ECLOSED)
            if not self._outbound.put_all(self._buffer):
                return self._fail(c.EMEM)
            self._buffer = []
        return 1

    def transfer_expression(self, dest):
        if not self._usable():
            return 0
        remaining = 1
        while remaining:
            tag = self.get_next()
            if tag == c.TKFUNC:
                ok, count = self.get_arg_count()
                written = ok and dest.put_type(c.TKFUNC) and dest.put_arg_count(count)
                # the head and the arguments follow
                remaining += count + 1 if ok else 0
            elif tag == c.TKINT:
                ok, value = self.get_integer64()
                written = ok and dest.put_integer64(value)
            elif tag == c.TKREAL:
                ok, value = self.get_real64()
                written = ok and dest.put_real64(value)
            elif tag == c.TKSTR:
                ok, value = self.get_string()
                written = ok and dest.put_string(value)
            elif tag == c.TKSYM:
                ok, value = self.get_symbol()
                written = ok and dest.put_symbol(value)
            else:
                return 0
            if not ok:
                return 0
            if not written:
                # report the failure of the destination on this link
                return self._fail(dest.error())
            remaining -= 1
        return 1


def open_loopback(capacity=0) -> QueueRawLink:
    return QueueRawLink('loopback', *([TokenQueue(capacity)] * 2), loopback=True)


class IntraProcessTransport(Transport):
    """
    Pairs listening and connecting links within this process by link name.
    Each listening link accepts a single connection. The name becomes available again when the listening
    link is closed.
    """

    def __init__(self):
        self._listeners = {}
        self._lock = threading.Lock()

    def open(self, mode, name, options, capacity):
        with self._lock:
            if mode == 'listen':
                return self._listen(name, capacity)
            elif mode == 'connect':
                return self._connect(name)
            return None, c.EMODE

    def _listen(self, name, capacity):
        if name in self._listeners:
            return None, c.ENAME
        link = QueueRawLink(name, TokenQueue(capacity), TokenQueue(capacity), listening=True,
                            on_close=self._release)
        self._listeners[name] = link
        logger.debug("listening on intra-process link %s" % name)
        return link, c.EOK

    def _connect(self, name):
        listener = self._listeners.get(name)
        if listener is None or listener.attached or listener.closed:
            return None, c.ECONNECT
        # the connecting side reads what the listener writes and vice versa
        link = QueueRawLink(name, listener._outbound, listener._inbound)
        listener.attach()
        logger.debug("connected to intra-process link %s" % name)
        return link, c.EOK

    def _release(self, link):
        with self._lock:
            if self._listeners.get(link.name()) is link:
                del self._listeners[link.name()]

    def listening(self):
        """ the names of links waiting for a connection or connected """
        with self._lock:
            return sorted(self._listeners)
