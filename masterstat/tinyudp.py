# tinyudp.py
# This file is part of masterstat, released under the MIT license.
'''One datagram out, one datagram back.

send_and_receive() resolves a (host, port) target, sends a message from a
fresh socket and waits, for at most `timeout' seconds, for a single reply
from that target. Every failure is raised as a TransportError subclass; the
socket is closed whichever way the call ends.'''

from socket import (socket, getaddrinfo, gaierror, timeout as socket_timeout,
                    AF_INET, SOCK_DGRAM, IPPROTO_UDP)

from .config import ConcatError, config
from .config import log, LOG_DEBUG

class TransportError(ConcatError):
    '''A network-level failure talking to one target'''
    @property
    def kind(self):
        return type(self).__name__

class ResolutionFailed(TransportError):
    pass

class SendFailed(TransportError):
    pass

class RecvFailed(TransportError):
    pass

class Timeout(TransportError):
    pass

def resolve(host, port):
    '''Returns the first IPv4 UDP sockaddr for host and port'''
    try:
        infos = getaddrinfo(host, port, AF_INET, SOCK_DGRAM, IPPROTO_UDP)
    except gaierror as err:
        raise ResolutionFailed('failed to lookup address {0}:{1}:'.format(
                               host, port), err.strerror)
    except UnicodeError as err:
        raise ResolutionFailed('failed to lookup address {0}:{1}:'.format(
                               host, port), err)
    if not infos:
        raise ResolutionFailed('no IPv4 address for {0}:{1}'.format(host, port))
    return infos[0][4]

def send_and_receive(target, message, timeout, buffer_size = None):
    '''Sends message to target, a (host, port) pair, and returns the first
    datagram that comes back from it within timeout seconds'''
    if buffer_size is None:
        buffer_size = config.BUFFER_SIZE
    host, port = target
    sockaddr = resolve(host, port)
    addrstr = '{0}:{1}'.format(*sockaddr)

    with socket(AF_INET, SOCK_DGRAM, IPPROTO_UDP) as sock:
        sock.settimeout(timeout)
        try:
            # connected, so datagrams from anywhere else are dropped
            sock.connect(sockaddr)
            sock.send(message)
        except OSError as err:
            raise SendFailed('failed to send message to', addrstr + ':',
                             err.strerror or err)
        log(LOG_DEBUG, '>> {0}: {1!r}'.format(addrstr, message))

        try:
            data = sock.recv(buffer_size)
        except (socket_timeout, BlockingIOError):
            raise Timeout('timeout reached while waiting for response from',
                          addrstr)
        except OSError as err:
            raise RecvFailed('failed to receive message from', addrstr + ':',
                             err.strerror or err)

    log(LOG_DEBUG, '<< {0}: {1} bytes'.format(addrstr, len(data)))
    return data
