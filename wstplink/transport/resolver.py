"""
Builds the arguments used to open links, and resolves network addresses into candidate link names.
"""
import logging
import socket
from enum import Enum

from wstplink.errors import AddressResolutionError, LinkError

logger = logging.getLogger(__name__)


class Protocol(Enum):
    """ The transport used to reach the other end of a link. """
    IntraProcess = 'IntraProcess'    # both ends in the same process
    SharedMemory = 'SharedMemory'    # both ends on the same machine
    TCPIP = 'TCPIP'                  # ends reachable over a network

    def __str__(self):
        return self.value


class LinkMode(Enum):
    listen = 'listen'
    connect = 'connect'
    loopback = 'loopback'

    def __str__(self):
        return self.value


def build_open_arguments(mode, protocol, name, options=()):
    """
    Builds the argument list used to open a link.

    >>> build_open_arguments(LinkMode.connect, Protocol.TCPIP, '8000@127.0.0.1')
    ['-wstp', '-linkmode', 'connect', '-linkprotocol', 'TCPIP', '-linkname', '8000@127.0.0.1']
    >>> build_open_arguments('listen', Protocol.IntraProcess, 'a', ['MLDontInteract'])[-2:]
    ['-linkoptions', 'MLDontInteract']
    """
    args = [
        '-wstp',
        '-linkmode', str(mode),
        '-linkprotocol', str(protocol),
        '-linkname', name,
    ]
    if options:
        args.append('-linkoptions')
        args.extend(options)
    return args


def tcpip_address_name(addr):
    """
    Names a socket address in the port@ip syntax used for TCPIP links.
    >>> tcpip_address_name(('127.0.0.1', 8000))
    '8000@127.0.0.1'
    >>> tcpip_address_name(('::1', 8000, 0, 0))
    '8000@::1'
    """
    return "%d@%s" % (addr[1], addr[0])


def socket_addresses(addr):
    """
    Resolves addr into a list of candidate socket addresses.
    :param addr: a (host, port) tuple, a "host:port" string, or a list of (host, port) tuples.
    """
    if isinstance(addr, list):
        return list(addr)
    if isinstance(addr, str):
        host, sep, port = addr.rpartition(':')
        if not sep or not port.isdigit():
            raise AddressResolutionError("invalid link address '%s', expected host:port" % addr)
        addr = (host.strip('[]'), int(port))
    host, port = addr
    try:
        infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
    except (socket.gaierror, UnicodeError) as e:
        raise AddressResolutionError("error resolving link address %s:%s: %s" % (host, port, e)) from e
    result = []
    for family, type_, proto, canonname, sockaddr in infos:
        if sockaddr not in result:
            result.append(sockaddr)
    return result


def resolve_with_fallback(candidates, attempt_fn):
    """
    Calls attempt_fn with each candidate in turn, returning the first result.
    When every attempt raises a LinkError, the error from the last attempt is raised.
    Other exceptions are not caught.
    :raises AddressResolutionError: if there are no candidates.
    """
    last_error = None
    for candidate in candidates:
        try:
            return attempt_fn(candidate)
        except LinkError as e:
            logger.debug("link attempt with address %s failed: %s" % (candidate, e))
            last_error = e
    if last_error is None:
        raise AddressResolutionError("link address list is empty")
    raise last_error
