"""
The native environment. Links are opened through an environment, which knows the transports
available for each protocol.
"""
import logging
import threading

from wstplink.native import constants as c
from wstplink.native.base import Transport
from wstplink.native.intraprocess import IntraProcessTransport, open_loopback

logger = logging.getLogger(__name__)

LINK_MODES = ('listen', 'connect')


def parse_link_arguments(argv):
    """
    Parses an open argument list into a dictionary of link parameters.
    Values following -linkoptions are collected up to the next -link flag.
    :return: a dictionary with keys mode, protocol, name and options, or None if the arguments are malformed.

    >>> parse_link_arguments(['-wstp', '-linkmode', 'listen', '-linkprotocol', 'TCPIP', '-linkname', '8000@127.0.0.1'])
    {'mode': 'listen', 'protocol': 'TCPIP', 'name': '8000@127.0.0.1', 'options': []}
    >>> parse_link_arguments(['-linkmode', 'connect', '-linkname', 'a', '-linkoptions', 'x', 'y'])['options']
    ['x', 'y']
    >>> parse_link_arguments(['-linkmode']) is None
    True
    """
    result = {'mode': None, 'protocol': None, 'name': None, 'options': []}
    flags = {'-linkmode': 'mode', '-linkprotocol': 'protocol', '-linkname': 'name'}
    args = list(argv)
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == '-wstp':
            i += 1
        elif arg in flags:
            if i + 1 >= len(args):
                return None
            result[flags[arg]] = args[i + 1]
            i += 2
        elif arg == '-linkoptions':
            i += 1
            while i < len(args) and not args[i].startswith('-link'):
                result['options'].append(args[i])
                i += 1
        else:
            return None
    return result


class RawEnvironment:
    """
    Holds the transports used to open links.
    :param token_capacity the maximum number of tokens queued in each direction of a link, 0 for no limit.
    """

    def __init__(self, token_capacity=0):
        self.token_capacity = token_capacity
        self._transports = {'IntraProcess': IntraProcessTransport()}
        self._lock = threading.Lock()
        self._initialized = True

    @property
    def initialized(self):
        return self._initialized

    def register_transport(self, protocol, transport: Transport):
        """ makes a transport available for links using the named protocol. """
        with self._lock:
            self._transports[str(protocol)] = transport

    def transport(self, protocol):
        with self._lock:
            return self._transports.get(str(protocol))

    def loopback_open(self):
        """ :return: a (raw_link, error_code) pair """
        if not self._initialized:
            return None, c.EINIT
        return open_loopback(self.token_capacity), c.EOK

    def open_argv(self, argv):
        """ :return: a (raw_link, error_code) pair """
        if not self._initialized:
            return None, c.EINIT
        params = parse_link_arguments(argv)
        if params is None or not params['name'] or not params['protocol'] or not params['mode']:
            return None, c.EARGV
        if params['mode'] not in LINK_MODES:
            return None, c.EMODE
        transport = self.transport(params['protocol'])
        if transport is None:
            logger.debug("no transport registered for protocol %s" % params['protocol'])
            return None, c.EPROTOCOL
        return transport.open(params['mode'], params['name'], params['options'], self.token_capacity)

    def deinitialize(self):
        self._initialized = False


def initialize(token_capacity=0):
    """
    Creates a native environment.
    :return: an (environment, error_code) pair. environment is None when initialization fails.
    """
    if not isinstance(token_capacity, int) or token_capacity < 0:
        return None, c.EINIT
    return RawEnvironment(token_capacity), c.EOK
