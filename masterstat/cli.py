# cli.py
# This file is part of masterstat, released under the MIT license.
"""The masterstat command

Queries QuakeWorld master servers and prints the game server addresses they
report, by default one ip:port per line.
    masterstat [options] [MASTER ...]
Masters not given on the command line are taken from MASTERSTAT_MASTERS, the
masters file, or the built-in list. Run with --help for the options.
"""

import sys

from dotenv import find_dotenv, load_dotenv

from .config import config, ConfigError
from .config import log, LOG_ERROR, LOG_PRINT, LOG_VERBOSE
from .formatters import load_formatter, FormatterNotFound
from .query_multiple import query_multiple

def report_failures(result):
    '''Logs why each failed master failed'''
    for failure in result.failed_queries():
        log(LOG_PRINT, 'Warning: {0} failed ({1}):'.format(
            failure.master, failure.error.kind), failure.error.cause)

def run(masters, timeout, formatter, unique):
    '''Queries masters and writes what they report; returns the exit status'''
    log(LOG_VERBOSE, 'Querying', ', '.join(str(m) for m in masters))
    result = query_multiple(masters, timeout)
    report_failures(result)

    if unique:
        addresses = result.unique_server_addresses()
    else:
        addresses = result.server_addresses()
    sys.stdout.write(formatter.format(addresses))
    sys.stdout.flush()

    if not any(True for _ in result.successful_queries()):
        log(LOG_PRINT, 'Warning: no master answered')
        return 1
    log(LOG_VERBOSE, 'Found', len(addresses), 'server addresses')
    return 0

def main(args = None):
    '''Entry point of the masterstat console script'''
    # a .env in the working directory can supply MASTERSTAT_* settings
    load_dotenv(find_dotenv(usecwd = True))
    try:
        config.parse(args)
    except ConfigError as err:
        log(LOG_ERROR, err)
        return 1

    try:
        formatter = load_formatter(config.format, config)
    except FormatterNotFound as err:
        log(LOG_ERROR, 'Error:', err)
        return 1

    try:
        return run(config.masters, config.timeout, formatter, config.unique)
    except KeyboardInterrupt:
        sys.stderr.write('Interrupted\n')
        return 130

if __name__ == '__main__':
    sys.exit(main())
