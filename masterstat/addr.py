# addr.py
# This file is part of masterstat, released under the MIT license.
'''Address types: MasterAddr names a master to query, ServerAddress is one
game server as reported by a master.'''

from collections import namedtuple

from .config import config
from .utils import stringtomaster, valid_port, packed_ipv4

class MasterAddr(tuple):
    '''Data structure for storing a master's host and port, that provides
    parsing and a nice string representation'''
    def __new__(cls, arg, *args):
        '''MasterAddr('host:port'), MasterAddr('host'), MasterAddr(('host',
        port)) and MasterAddr('host', port) are all accepted. A MasterAddr
        given to MasterAddr is returned unchanged.'''
        if isinstance(arg, MasterAddr) and not args:
            return arg
        if args:
            host, port = arg, args[0]
        elif isinstance(arg, str):
            host, port = stringtomaster(arg, config.DEFAULT_PORT)
        else:
            host, port = arg
        host = str(host)
        if not host:
            raise ValueError('empty master host')
        return tuple.__new__(cls, (host, valid_port(port)))

    @property
    def host(self):
        return self[0]

    @property
    def port(self):
        return self[1]

    def __str__(self):
        return '{0[0]}:{0[1]}'.format(self)

    def __repr__(self):
        return 'MasterAddr({0!r})'.format(str(self))

class ServerAddress(namedtuple('ServerAddress', ['ip', 'port'])):
    '''A game server as listed by a master: a dotted-quad IPv4 string and a
    port. Equality and ordering are those of the (ip, port) tuple.'''
    __slots__ = ()

    def __str__(self):
        return '{0}:{1}'.format(self.ip, self.port)

    def packed(self):
        '''The 6-byte wire record for this address'''
        return packed_ipv4(self.ip) + bytes([self.port >> 8, self.port & 0xff])
