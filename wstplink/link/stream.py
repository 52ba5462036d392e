"""
Reading and writing single tokens on a link.
"""
from wstplink.errors import ProtocolError
from wstplink.native import constants as c


class TokenStream:
    """
    Typed token primitives. Mixed into Link, which supplies _raw_link() and _error_or_unknown().
    Failed native calls raise TransportError carrying the error recorded on the link.
    """

    def _raw_link(self):
        raise NotImplementedError

    def _error_or_unknown(self):
        raise NotImplementedError

    def _check(self, result):
        if not result:
            raise self._error_or_unknown()

    def _get(self, getter):
        ok, value = getter()
        if not ok:
            raise self._error_or_unknown()
        return value

    def flush(self):
        """ Sends any buffered tokens to the other end of the link. """
        self._check(self._raw_link().flush())

    def read_next_token_type(self) -> int:
        """
        Positions the link at the next token and returns its tag, one of the TKxxx constants.
        :raises ProtocolError: when the native layer returns the error tag.
        """
        tag = self._raw_link().get_next()
        if tag == c.TKERR:
            error = self._error_or_unknown()
            raise ProtocolError(tag, error.message, error.code)
        return tag

    def read_next_packet_boundary(self) -> int:
        """
        Reads the head of the next packet and returns the packet code, leaving the link positioned
        at the packet contents.
        :raises ProtocolError: when the native layer returns the illegal packet code.
        """
        code = self._raw_link().next_packet()
        if code == c.ILLEGALPKT:
            error = self._error_or_unknown()
            raise ProtocolError(code, error.message, error.code)
        return code

    def skip_current_object(self):
        """ Discards what remains of the object at the read cursor. """
        self._check(self._raw_link().new_packet())

    def put_raw_type(self, tag):
        self._check(self._raw_link().put_type(tag))

    def put_function_head_tag(self):
        """ Starts a function token. Must be followed by put_argument_count(). """
        self.put_raw_type(c.TKFUNC)

    def put_argument_count(self, count):
        self._check(self._raw_link().put_arg_count(count))

    def put_function(self, head, count):
        """ Writes a function with a symbol head. The count arguments follow. """
        self.put_function_head_tag()
        self.put_argument_count(count)
        self.put_symbol(head)

    def put_integer(self, value):
        self._check(self._raw_link().put_integer64(value))

    def put_real(self, value):
        self._check(self._raw_link().put_real64(value))

    def put_string(self, value):
        self._check(self._raw_link().put_string(value))

    def put_symbol(self, name):
        self._check(self._raw_link().put_symbol(name))

    def get_argument_count(self) -> int:
        return self._get(self._raw_link().get_arg_count)

    def get_function(self):
        """
        Reads a function with a symbol head.
        :return: a (head name, argument count) pair
        """
        count = self.get_argument_count()
        return self.get_symbol(), count

    def get_integer(self) -> int:
        return self._get(self._raw_link().get_integer64)

    def get_real(self) -> float:
        return self._get(self._raw_link().get_real64)

    def get_string(self) -> str:
        return self._get(self._raw_link().get_string)

    def get_symbol(self) -> str:
        return self._get(self._raw_link().get_symbol)
