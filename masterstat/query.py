# query.py
# This file is part of masterstat, released under the MIT license.
'''Asking a single master for its server list'''

from math import isfinite

from .addr import MasterAddr
from .config import ConcatError, config
from .config import log, LOG_DEBUG, LOG_VERBOSE
from .protocol import encode_query, decode_response, DecodeError
from .tinyudp import send_and_receive, TransportError, ResolutionFailed

class QueryError(ConcatError):
    '''A query to `master' failed because of `cause', which is either a
    TransportError or a DecodeError'''
    def __init__(self, master, cause):
        ConcatError.__init__(self, master, cause, sep = ': ')
        self.master = master
        self.cause = cause

    @property
    def kind(self):
        '''The class name of the underlying failure, e.g. 'Timeout' '''
        return self.cause.kind

def check_timeout(timeout):
    '''Returns timeout in seconds, substituting the default for None'''
    if timeout is None:
        return config.DEFAULT_TIMEOUT
    if hasattr(timeout, 'total_seconds'):
        timeout = timeout.total_seconds()
    timeout = float(timeout)
    if not isfinite(timeout) or timeout <= 0:
        raise ValueError('timeout must be positive and finite, not {0}'.format(
                         timeout))
    return timeout

def parse_master(master):
    '''MasterAddr(master), but a master that can't be parsed is a QueryError
    (kind ResolutionFailed) naming it as given'''
    try:
        return MasterAddr(master)
    except (TypeError, ValueError) as err:
        raise QueryError(master, ResolutionFailed('invalid address:', err)) \
            from err

def server_addresses(master, timeout = None):
    '''Returns the list of ServerAddress that master reports.

    master may be anything MasterAddr accepts, e.g. 'host:port'. timeout is
    in seconds (a datetime.timedelta also works) and defaults to
    config.DEFAULT_TIMEOUT. Any failure of the master itself, a malformed
    address included, raises QueryError naming the master.
    A bad timeout is the caller's mistake and raises ValueError.'''
    timeout = check_timeout(timeout)
    master = parse_master(master)
    log(LOG_DEBUG, 'Querying', master, 'timeout {0}s'.format(timeout))
    try:
        response = send_and_receive(master, encode_query(), timeout)
        addresses = decode_response(response)
    except (TransportError, DecodeError) as err:
        log(LOG_VERBOSE, '<< {0}: {1}: {2}'.format(master, err.kind, err))
        raise QueryError(master, err) from err
    log(LOG_VERBOSE, '<< {0}: {1} server addresses'.format(master,
                                                           len(addresses)))
    return addresses
