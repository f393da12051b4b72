# protocol.py
# This file is part of masterstat, released under the MIT license.
"""The QuakeWorld master server list protocol

A client asks a master for its list with a three byte datagram:
    'c\\n\\0'
and the master answers with a single datagram:
    '\\xff\\xff\\xff\\xffd\\n' followed by zero or more 6-byte records
        4 bytes of IPv4 address, network order
        2 bytes of port, big-endian
A record that is all zeroes ends the list early; it is not a server.
"""
import struct

from .addr import ServerAddress
from .config import ConcatError
from .utils import ipv4_string

STATUS_MSG = bytes([99, 10, 0])
RESPONSE_HEADER = bytes([255, 255, 255, 255, 100, 10])

RECORD = struct.Struct('!4sH')
TERMINATOR = bytes(RECORD.size)

class DecodeError(ConcatError):
    '''The master sent something that is not a server list'''
    @property
    def kind(self):
        return type(self).__name__

class BadHeader(DecodeError):
    pass

class Truncated(DecodeError):
    pass

def encode_query():
    '''Returns the datagram that asks a master for its server list'''
    return STATUS_MSG

def decode_response(data):
    '''Returns the list of ServerAddress in a master's response, in the order
    the master listed them. Raises BadHeader if data doesn't start with
    RESPONSE_HEADER and Truncated if what follows isn't whole records.'''
    if not data.startswith(RESPONSE_HEADER):
        raise BadHeader('invalid response header:',
                        repr(bytes(data[:len(RESPONSE_HEADER)])))
    body = memoryview(data)[len(RESPONSE_HEADER):]
    if len(body) % RECORD.size:
        raise Truncated('{0} bytes after the header is not a multiple '
                        'of {1}'.format(len(body), RECORD.size))

    addresses = []
    for offset in range(0, len(body), RECORD.size):
        record = body[offset:offset + RECORD.size]
        if record == TERMINATOR:
            break
        ip, port = RECORD.unpack(record)
        addresses.append(ServerAddress(ipv4_string(ip), port))
    return addresses

def encode_response(addresses):
    '''Builds a master's response listing addresses, as a master would'''
    return RESPONSE_HEADER + b''.join(ServerAddress(*a).packed()
                                      for a in addresses)
