"""
A link binds a native link to the token primitives and the expression codec.

Links are opened in one of these modes:
- loopback: reads back what is written, usable at once
- listen: waits for a connection to its name, must be activated
- connect: connects to a listening link by name, must be activated

Closing a link releases the native link. Closing again has no effect.
"""
