# config.py
# This file is part of masterstat, released under the MIT license.
'''Configuration for masterstat

This module provides the MasterstatConfig class, and the ConfigError
exception. The latter is raised when the former fails to initialise for some
reason. The former, after its parse() method is called, provides the
following instance variables:

VERSION:
        a string giving the name and version of masterstat
DEFAULT_PORT:
        the port assumed for a master given without one
DEFAULT_TIMEOUT:
        in seconds, how long each master has to answer a query
BUFFER_SIZE:
        the size of the receive buffer for a single response datagram
MASTERS_FILE:
        the default file from which a list of masters is read
DEFAULT_MASTERS:
        used when no master is named anywhere else
masters:
        a list of 'host[:port]' strings, from the command line, the
        MASTERSTAT_MASTERS environment variable, the masters file or the
        defaults, in that order of preference
timeout, format, unique:
        the command line options of the same name

and some useful functions:

log(level, arg[, arg...], sep = ' '):
        level may be one of LOG_ERROR, LOG_PRINT, LOG_VERBOSE, or LOG_DEBUG:
        if the user's chosen verbosity level is less, the message will not be
        printed. All the subsequent arguments will be str()'d and written to
        stderr, preceded by a timestamp and joined by the string given in the
        keyword argument `sep' (default ' ')
'''

# Required imports
from errno import ENOENT, EIO
from math import isfinite
from optparse import OptionParser, Values
from os import getenv
import sys
from sys import exit
from time import strftime

from .utils import stringtomaster

( # Log levels
    LOG_ALWAYS,
    LOG_ERROR,
    LOG_PRINT,
    LOG_VERBOSE,
    LOG_DEBUG,
    LOG_LEVELS
) = list(range(6))
# and their names
loglevels = ['ALWAYS', 'ERROR', 'PRINT', 'VERBOSE', 'DEBUG']

def concat(*args, sep = ' '):
    '''concat('a', 1, sep = ': ') == 'a: 1' '''
    return sep.join(str(arg) for arg in args)

class ConcatError(Exception):
    '''Base of masterstat's errors: the message is concat() of the
    arguments, so they read the same as log() lines'''
    def __init__(self, *args, sep = ' '):
        super().__init__(concat(*args, sep = sep))

class ConfigError(ConcatError):
    '''Raised for a bad command line, environment or masters file'''
    pass

class MasterstatConfig(object):
    '''Holds the settings of one masterstat run'''
    def constants(self):
        '''Sets instance variables that do not change at run-time'''
        self.VERSION = 'masterstat v0.7.0'

        # QuakeWorld masters conventionally listen here
        self.DEFAULT_PORT = 27000
        self.DEFAULT_TIMEOUT = 2.0
        # A whole server list fits in one datagram
        self.BUFFER_SIZE = 64 * 1024

        self.MASTERS_FILE = 'masters.txt'
        self.DEFAULT_MASTERS = [
            'master.quakeworld.nu:27000',
            'master.quakeservers.net:27000',
            'qwmaster.ocrana.de:27000',
            'qwmaster.fodquake.net:27000',
        ]
        self.DEFAULT_FORMAT = 'text'

    def __init__(self, vlevel = LOG_PRINT):
        # Set this early so that self.log can be used immediately
        self.constants()
        self.options = Values()
        self.options.verbose = vlevel
        self.masters = []

    def parse(self, args = None):
        '''Reads the command line, then the masters file if it is needed'''
        self.cmdline(args)
        self.files()

    def __getattr__(self, attr):
        '''When the command line options have been parsed, this allows direct
        access to them'''
        # They aren't set as attributes of self directly because of the way
        # optparse.OptionParser works.
        return getattr(object.__getattribute__(self, 'options'), attr)

    def cmdline(self, args = None):
        '''Parse options from the command line. For an explanation of the
        options and their usage, use:

        masterstat --help
        '''
        if args is None:
            args = sys.argv[1:]
        # we add our own help option for obscure reasons
        parser = OptionParser(usage = '%prog [options] [MASTER ...]',
                              add_help_option = False)
        parser.add_option('-h', '--help', action = 'store_true',
                          help = 'Display this help and exit')
        # options other than --help are in loose alphabetical order
        parser.add_option('-f', '--format',
                          help = 'Output format, as named by an installed '
                                 'formatter plugin (default: text)',
                          metavar = 'NAME',
                          default = getenv('MASTERSTAT_FORMAT',
                                           self.DEFAULT_FORMAT))
        parser.add_option('-m', '--masters-file',
                          help = 'File listing one master per line '
                                 '(default: {0})'.format(self.MASTERS_FILE),
                          metavar = 'FILE', default = self.MASTERS_FILE)
        parser.add_option('-q', action = 'count', default = 0,
                          help = 'Decrease verbose level. Multiple -q options '
                                 'may suppress logging entirely.')
        parser.add_option('-t', '--timeout', type = 'float',
                          help = 'Seconds to wait for each master '
                                 '(default: {0})'.format(self.DEFAULT_TIMEOUT),
                          metavar = 'SECONDS')
        parser.add_option('-u', '--unique', action = 'store_true',
                          default = False,
                          help = 'Sort the addresses and drop duplicates')
        parser.add_option('-v', action = 'count', default = 0,
                          help = 'Increase verbose level. Multiple -v options '
                                 'increase the level further.')
        parser.add_option('--verbose', type = 'int', default = LOG_PRINT,
                          help = 'Set verbose level directly. Takes a single '
                                 'integer argument between {0} and {1}'.format(
                                 LOG_ALWAYS, LOG_LEVELS - 1),
                          metavar = 'LEVEL')
        parser.add_option('-V', '--version', action = 'store_true',
                          help = 'Show version information')
        self.options, masters = parser.parse_args(args)

        if self.help:
            sys.stdout.write(parser.format_help())
            exit(0)
        # don't need this anymore
        parser.destroy()
        del parser

        if self.version:
            sys.stdout.write('{0}\n'.format(self.VERSION))
            exit(0)

        self.options.verbose += self.v - self.q

        if not LOG_ALWAYS <= self.verbose < LOG_LEVELS:
            raise ConfigError('Verbose level must be between', LOG_ALWAYS,
                              'and', LOG_LEVELS - 1,
                              '(not {0})'.format(self.verbose))

        self.log(LOG_VERBOSE, 'Logging:', *loglevels[:self.verbose + 1])

        if self.timeout is None:
            envtimeout = getenv('MASTERSTAT_TIMEOUT')
            if envtimeout:
                try:
                    self.options.timeout = float(envtimeout)
                except ValueError:
                    raise ConfigError('MASTERSTAT_TIMEOUT is not a number:',
                                      repr(envtimeout))
            else:
                self.options.timeout = self.DEFAULT_TIMEOUT
        if not isfinite(self.timeout) or self.timeout <= 0:
            raise ConfigError('Timeout must be positive',
                              '(not {0})'.format(self.timeout))

        self.masters = masters
        if not self.masters:
            envmasters = getenv('MASTERSTAT_MASTERS', '')
            self.masters = [m.strip() for m in envmasters.split(',')
                            if m.strip()]
            if self.masters:
                self.log(LOG_VERBOSE, 'Masters from MASTERSTAT_MASTERS:',
                         ', '.join(self.masters))

        for master in self.masters:
            try:
                stringtomaster(master, self.DEFAULT_PORT)
            except ValueError as err:
                raise ConfigError(master, err, sep = ': ')

    def files(self):
        '''Read self.masters_file if no master was named on the command line
        or in the environment. Each non-blank line that is not a comment is a
        master address. A missing file is ignored and the built-in list is
        used, but other errors - e.g. if the file is present but can't be
        read - are fatal.'''
        if self.masters:
            return
        masters = list()
        try:
            with open(self.masters_file) as masterlist:
                self.log(LOG_DEBUG, 'Opened', self.masters_file)
                lineno = 0
                for line in iter(l.strip() for l in masterlist):
                    lineno += 1
                    wheremsg = '{0}:{1}:'.format(self.masters_file, lineno)
                    # ignore blank lines and comments
                    if not line or line.startswith('#'):
                        continue
                    try:
                        stringtomaster(line, self.DEFAULT_PORT)
                    except ValueError as err:
                        raise ConfigError(wheremsg, 'Error:', err)
                    if line in masters:
                        self.log(LOG_PRINT, wheremsg, 'Warning:',
                                 line, 'appears multiple times')
                    masters.append(line)
        except IOError as err:
            if err.errno != ENOENT:
                raise ConfigError(self.masters_file, err.strerror,
                                  sep = ': ')
            self.log(LOG_DEBUG, self.masters_file, 'not found')

        if masters:
            self.log(LOG_VERBOSE, self.masters_file, masters, sep = ': ')
            self.masters = masters
        else:
            self.log(LOG_VERBOSE, 'Using the default masters')
            self.masters = list(self.DEFAULT_MASTERS)

    def log(self, level, *args, sep = ' '):
        '''Writes '[HH:MM:SS] L message' to stderr, L being the first letter
        of the level's name, unless level is above the chosen verbosity'''
        if not args:
            raise TypeError('log() needs something to log')
        if level > self.verbose:
            return
        line = '[{0}] {1} {2}\n'.format(strftime('%H:%M:%S'),
                                        loglevels[level][0],
                                        concat(*args, sep = sep))
        try:
            sys.stderr.write(line)
            sys.stderr.flush()
        except OSError as err:
            # EIO: the controlling terminal went away
            if err.errno != EIO:
                raise

config = MasterstatConfig()
log = config.log
