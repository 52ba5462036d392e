"""
The process-wide native environment, created on first use.

Module values configured from env.cfg files on initialization:
- listen_options: option strings passed when a link listens
- link_server_options: option strings passed when connecting to a link server
- token_capacity: the maximum number of tokens queued in each direction of a link, 0 for no limit
"""
import logging
import sys
import threading

from wstplink.config.config import ConfigError, configure_module
from wstplink.errors import LinkError, TransportError
from wstplink.native import env as native_env
from wstplink.native.constants import error_message

logger = logging.getLogger(__name__)

listen_options = ['MLDontInteract']
link_server_options = ['MLUseUUIDTCPIPConnection']
token_capacity = 0

this_module = sys.modules[__name__]

_lock = threading.Lock()
_stdenv = None
_stdenv_error = None


def _initialize():
    configure_module(this_module)
    raw_env, err = native_env.initialize(token_capacity=int(token_capacity))
    if raw_env is None:
        raise TransportError(err, error_message(err))
    logger.debug("initialized environment, token capacity %s" % token_capacity)
    return raw_env


def stdenv():
    """
    Retrieves the shared environment, initializing it on the first call.
    If initialization fails, the error is raised from this call and every later call, until deinitialize().
    """
    global _stdenv, _stdenv_error
    with _lock:
        if _stdenv_error is not None:
            raise _stdenv_error
        if _stdenv is None:
            try:
                _stdenv = _initialize()
            except (LinkError, ConfigError) as e:
                logger.error("unable to initialize environment: %s" % e)
                _stdenv_error = e
                raise
        return _stdenv


def deinitialize():
    """ Releases the shared environment. The next call to stdenv() initializes it again. """
    global _stdenv, _stdenv_error
    with _lock:
        if _stdenv is not None:
            _stdenv.deinitialize()
        _stdenv = None
        _stdenv_error = None
