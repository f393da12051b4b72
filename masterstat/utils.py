# utils.py
# This file is part of masterstat, released under the MIT license.
'''Helpers for turning address strings into (host, port) pairs'''

from socket import inet_aton, inet_ntoa, error as sockerr

def valid_port(port):
    '''Returns port as an int, raising ValueError unless 0 < port < 65536'''
    try:
        port = int(port)
    except (TypeError, ValueError):
        raise ValueError('invalid port {0!r}'.format(port))
    if not 0 < port <= 0xffff:
        raise ValueError('port {0} out of range'.format(port))
    return port

def stringtomaster(string, default_port):
    '''Splits 'host:port' or plain 'host' into a (host, port) tuple. The host
    is not resolved here: that only happens when a master is queried.'''
    string = string.strip()
    host, sep, port = string.rpartition(':')
    if not sep:
        host, port = string, default_port
    if not host or any(c.isspace() for c in host):
        raise ValueError('invalid host {0!r}'.format(host))
    return host, valid_port(port)

def packed_ipv4(host):
    '''Returns the 4 network-order bytes of a dotted-quad string'''
    try:
        return inet_aton(host)
    except sockerr:
        raise ValueError('{0!r} is not an IPv4 address'.format(host))

def ipv4_string(packed):
    '''The reverse of packed_ipv4'''
    return inet_ntoa(packed)
