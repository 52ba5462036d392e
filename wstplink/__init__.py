"""

Expression links

- Link: a bi-directional connection that carries expressions between two endpoints.
  Opened as a loopback, or by listening or connecting over a protocol
  (IntraProcess, SharedMemory, TCPIP). Owns the native link and releases it when closed.
- TokenStream: the typed token primitives on a link - integers, reals, strings, symbols
  and function heads with their argument counts.
- codec: writes expression trees as tokens and reads them back.
- transport.resolver: builds the arguments to open links and tries candidate network addresses
  in turn until one succeeds.
- native: the environment and the raw links that move the tokens. IntraProcess is built in,
  other protocols are provided by registering a transport with the environment.

Typical use:

    with Link.new_loopback() as link:
        link.put_expr(normal('System`Plus', Integer(2), Integer(3)))
        expr = link.get_expr()

Links opened by listening or connecting must be activated before use, and written data is sent
when the link is flushed.

Errors derive from LinkError:
- TransportError - a native call failed. Carries the link's error code and message.
- ProtocolError - an unexpected token tag or a failure sentinel was read.
- DomainError - the data read cannot be represented as an expression.
- AddressResolutionError - no address to listen or connect on.

"""
