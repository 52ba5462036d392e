"""
Token tags, packet codes and error codes shared by the native layer and the link.
The token tags are the on-wire type markers and must match any native peer.
"""

# token type tags
TKERR = 0
TKFUNC = ord('F')
TKSTR = ord('"')
TKSYM = ord('#')
TKREAL = ord('*')
TKINT = ord('+')

# packet codes, keyed by the symbol that heads the packet expression
ILLEGALPKT = 0
TEXTPKT = 2
RETURNPKT = 3
RETURNTEXTPKT = 4
MESSAGEPKT = 5
CALLPKT = 7
INPUTNAMEPKT = 8
OUTPUTNAMEPKT = 9
EVALUATEPKT = 13
ENTERTEXTPKT = 14
ENTEREXPRPKT = 15
RETURNEXPRPKT = 16

PACKET_HEADS = {
    'System`TextPacket': TEXTPKT,
    'System`ReturnPacket': RETURNPKT,
    'System`ReturnTextPacket': RETURNTEXTPKT,
    'System`MessagePacket': MESSAGEPKT,
    'System`CallPacket': CALLPKT,
    'System`InputNamePacket': INPUTNAMEPKT,
    'System`OutputNamePacket': OUTPUTNAMEPKT,
    'System`EvaluatePacket': EVALUATEPKT,
    'System`EnterTextPacket': ENTERTEXTPKT,
    'System`EnterExpressionPacket': ENTEREXPRPKT,
    'System`ReturnExpressionPacket': RETURNEXPRPKT,
}

# error codes
EOK = 0
EDEAD = 1
EGBAD = 2
EGSEQ = 3
EPBTK = 4
EPSEQ = 5
EOVFL = 7
EMEM = 8
ECONNECT = 10
ECLOSED = 11
ENEXTPACKET = 22
EUNKNOWNPACKET = 23
EINIT = 32
EARGV = 33
EPROTOCOL = 34
EMODE = 35
ENAME = 37

ERROR_MESSAGES = {
    EOK: "everything ok",
    EDEAD: "link died",
    EGBAD: "inconsistent data was read",
    EGSEQ: "get called out of sequence",
    EPBTK: "put was given a bad token",
    EPSEQ: "put called out of sequence",
    EOVFL: "machine number overflow",
    EMEM: "out of memory",
    ECONNECT: "a deferred connection is still unconnected",
    ECLOSED: "the other side closed the link",
    ENEXTPACKET: "next packet requested while the current packet has unread data",
    EUNKNOWNPACKET: "next packet read in an unknown packet head",
    EINIT: "the environment was not initialized",
    EARGV: "insufficient arguments to open the link",
    EPROTOCOL: "protocol unavailable",
    EMODE: "mode unavailable",
    ENAME: "link name not available",
}

CONTEXT_SEPARATOR = '`'

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def error_message(code):
    """
    >>> error_message(ECLOSED)
    'the other side closed the link'
    >>> error_message(999)
    'unknown error code 999'
    """
    return ERROR_MESSAGES.get(code, "unknown error code %d" % code)
