"""
The native layer: the process environment, raw link handles and the transports that carry tokens.

Raw links follow the conventions of a C link library. Calls return 0 (or a sentinel tag) on failure and
record an error code on the link, which stays set until it is cleared or replaced by a later failure.
The wstplink.link package wraps raw links and turns those results into exceptions.

Transports are pluggable: IntraProcess is provided here, other protocols are registered with the
environment by the code that provides them.
"""
