from abc import abstractmethod


class RawLink:
    """
    A native link handle. Reads and writes single tokens, and keeps the error state of the link.
    Methods return 1 on success and 0 on failure unless noted otherwise. get_xxx() methods return
    a (success, value) pair.
    """

    @abstractmethod
    def name(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def is_loopback(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def ready(self) -> bool:
        """ determines if data can be read without blocking. Never fails. """
        raise NotImplementedError

    @abstractmethod
    def activate(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def close(self):
        """ releases the link. Calling close more than once has no further effect. """
        raise NotImplementedError

    @abstractmethod
    def flush(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def error(self) -> int:
        """ the code of the last error, or EOK """
        raise NotImplementedError

    @abstractmethod
    def error_message(self):
        """ the message for the last error, or None when there is no message to read.
            The message must be handed back with release_error_message(). """
        raise NotImplementedError

    @abstractmethod
    def release_error_message(self, message):
        raise NotImplementedError

    @abstractmethod
    def clear_error(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def enable_link_lock(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def get_next(self) -> int:
        """ the tag of the next token, or TKERR """
        raise NotImplementedError

    @abstractmethod
    def next_packet(self) -> int:
        """ the code of the next packet, or ILLEGALPKT """
        raise NotImplementedError

    @abstractmethod
    def new_packet(self) -> int:
        """ discards the rest of the object at the read cursor """
        raise NotImplementedError

    @abstractmethod
    def get_integer64(self):
        raise NotImplementedError

    @abstractmethod
    def get_real64(self):
        raise NotImplementedError

    @abstractmethod
    def get_string(self):
        raise NotImplementedError

    @abstractmethod
    def get_symbol(self):
        raise NotImplementedError

    @abstractmethod
    def get_arg_count(self):
        raise NotImplementedError

    @abstractmethod
    def put_type(self, tag) -> int:
        raise NotImplementedError

    @abstractmethod
    def put_arg_count(self, count) -> int:
        raise NotImplementedError

    @abstractmethod
    def put_integer64(self, value) -> int:
        raise NotImplementedError

    @abstractmethod
    def put_real64(self, value) -> int:
        raise NotImplementedError

    @abstractmethod
    def put_string(self, value) -> int:
        raise NotImplementedError

    @abstractmethod
    def put_symbol(self, value) -> int:
        raise NotImplementedError

    @abstractmethod
    def transfer_expression(self, dest) -> int:
        """ copies the next expression readable from this link to dest """
        raise NotImplementedError


class Transport:
    """
    A transport knows how to open raw links for a protocol.
    """

    @abstractmethod
    def open(self, mode, name, options, capacity):
        """
        Opens a raw link.
        :param mode: 'listen' or 'connect'
        :param name: the link name, in the addressing syntax of the protocol
        :param options: a list of option strings
        :param capacity: the maximum number of queued tokens per direction, 0 for no limit.
        :return: a (raw_link, error_code) pair. raw_link is None when the open failed.
        """
        raise NotImplementedError
