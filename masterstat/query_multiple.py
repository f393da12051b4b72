# query_multiple.py
# This file is part of masterstat, released under the MIT license.
'''Asking many masters at once.

Each master gets its own worker thread and its own socket; all of them start
together and all are joined before anything is returned, so the whole call
takes about as long as the slowest single query. Outcomes are kept in the
order the masters were given, never in the order the answers arrived.'''

from threading import Thread
from typing import Iterator, List, Optional, Union

from .addr import MasterAddr, ServerAddress
from .config import log, LOG_DEBUG, LOG_VERBOSE
from .query import server_addresses, check_timeout, parse_master, QueryError


class QuerySuccess(object):
    '''A master that answered, and the addresses it listed'''
    def __init__(self, master: MasterAddr, server_addresses: List[ServerAddress]):
        self.master = master
        self.server_addresses = server_addresses

    def __bool__(self):
        return True

    def __repr__(self):
        return 'QuerySuccess({0!r}, {1} addresses)'.format(
            self.master, len(self.server_addresses))


class QueryFailure(object):
    '''A master that didn't answer usefully, and the QueryError saying why.
    master is left as given when it couldn't be parsed.'''
    def __init__(self, master: MasterAddr, error: QueryError):
        self.master = master
        self.error = error

    def __bool__(self):
        return False

    def __repr__(self):
        return 'QueryFailure({0!r}, {1})'.format(self.master, self.error.kind)


class MultiQueryResult(object):
    """The outcome of every query made by query_multiple().

    outcomes holds one QuerySuccess or QueryFailure per master, in the order
    the masters were given.
    """

    def __init__(self, outcomes: List[Union[QuerySuccess, QueryFailure]]):
        self.outcomes = outcomes

    def successful_queries(self) -> Iterator[QuerySuccess]:
        """Iterator over successful queries, in input order."""
        return (o for o in self.outcomes if o)

    def failed_queries(self) -> Iterator[QueryFailure]:
        """Iterator over failed queries, in input order."""
        return (o for o in self.outcomes if not o)

    def server_addresses(self) -> List[ServerAddress]:
        """Addresses from every successful query, merged in input order.

        Each master's addresses keep the order that master listed them in.
        Duplicates reported by more than one master are kept.
        """
        return [address for success in self.successful_queries()
                for address in success.server_addresses]

    def unique_server_addresses(self) -> List[ServerAddress]:
        """Sorted addresses from every successful query, without duplicates."""
        return sorted(set(self.server_addresses()))


def query_multiple(masters, timeout: Optional[float] = None) -> MultiQueryResult:
    """Query every master concurrently.

    Args:
        masters: An iterable of anything MasterAddr accepts. One it can't
            parse is recorded as a ResolutionFailed QueryFailure, and
            the others are still queried.
        timeout: Seconds each master has to answer, counted from the start
            of its own query. Defaults to config.DEFAULT_TIMEOUT.

    Returns:
        A MultiQueryResult. Failed masters never raise from here; they are
        recorded as QueryFailure.
    """
    timeout = check_timeout(timeout)
    outcomes = []
    queries = []
    for index, master in enumerate(masters):
        try:
            master = parse_master(master)
        except QueryError as err:
            log(LOG_VERBOSE, err)
            outcomes.append(QueryFailure(master, err))
            continue
        outcomes.append(None)
        queries.append((index, master))

    def worker(index, master):
        # each worker only ever writes its own slot
        try:
            outcomes[index] = QuerySuccess(master,
                                           server_addresses(master, timeout))
        except QueryError as err:
            outcomes[index] = QueryFailure(master, err)
        except Exception as err:
            # not the master's fault: re-raised below
            outcomes[index] = err

    threads = [Thread(target=worker, args=query, daemon=True,
                      name='masterstat-{0}'.format(query[1]))
               for query in queries]
    log(LOG_DEBUG, 'Querying {0} masters, timeout {1}s'.format(len(threads),
                                                              timeout))
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    for outcome in outcomes:
        if isinstance(outcome, Exception):
            raise outcome

    result = MultiQueryResult(outcomes)
    log(LOG_VERBOSE, '{0} of {1} masters answered'.format(
        sum(1 for _ in result.successful_queries()), len(outcomes)))
    return result


def server_addresses_from_many(masters, timeout: Optional[float] = None) -> List[ServerAddress]:
    """Addresses from every master that answered, in input order.

    Never raises because a master failed: if nobody answered, the list is
    simply empty. Use query_multiple() to find out which masters failed.
    """
    return query_multiple(masters, timeout).server_addresses()
