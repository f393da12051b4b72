"""masterstat: get server addresses from QuakeWorld master servers.

    import masterstat
    masterstat.server_addresses('master.quakeworld.nu:27000', timeout=2)
    masterstat.server_addresses_from_many(
        ['master.quakeworld.nu:27000', 'master.quakeservers.net:27000'])

server_addresses() raises QueryError when its one master fails.
server_addresses_from_many() never does: masters that fail simply contribute
nothing. query_multiple() keeps the per-master outcomes for diagnostics.
"""

from .addr import MasterAddr, ServerAddress
from .protocol import (encode_query, decode_response, DecodeError, BadHeader,
                       Truncated)
from .query import server_addresses, QueryError
from .query_multiple import (query_multiple, server_addresses_from_many,
                             MultiQueryResult, QuerySuccess, QueryFailure)
from .tinyudp import (TransportError, ResolutionFailed, SendFailed,
                      RecvFailed, Timeout)

__version__ = '0.7.0'

__all__ = [
    'MasterAddr', 'ServerAddress',
    'encode_query', 'decode_response',
    'server_addresses', 'server_addresses_from_many', 'query_multiple',
    'MultiQueryResult', 'QuerySuccess', 'QueryFailure',
    'QueryError', 'DecodeError', 'BadHeader', 'Truncated',
    'TransportError', 'ResolutionFailed', 'SendFailed', 'RecvFailed',
    'Timeout',
]
