"""
Output formatters for masterstat.

Formatters are discovered with stevedore in the 'masterstat.formatters'
entry point namespace, so other packages can add their own. The two that
ship with masterstat are:
- text: one ip:port per line
- json: a JSON array of "ip:port" strings
"""
from stevedore import extension

from ..config import log, LOG_DEBUG, LOG_VERBOSE
from .base import FormatterPluginBase

NAMESPACE = 'masterstat.formatters'


class FormatterNotFound(LookupError):
    """No installed formatter has the requested name."""
    pass


def formatter_manager():
    """Return an ExtensionManager over every installed formatter."""
    log(LOG_DEBUG, 'Formatters: Searching namespace: {0}'.format(NAMESPACE))
    return extension.ExtensionManager(
        namespace=NAMESPACE,
        invoke_on_load=False,
    )


def available_formatters():
    """Names of the installed formatters, sorted."""
    return sorted(formatter_manager().names())


def load_formatter(name, config):
    """Create the formatter called name.

    Args:
        name: The entry point name, e.g. 'text'
        config: The masterstat configuration object, handed to the formatter

    Raises:
        FormatterNotFound if there is no such formatter
    """
    for ext in formatter_manager().extensions:
        if ext.name != name:
            continue
        formatter_class = ext.plugin
        log(LOG_DEBUG, 'Formatters: Loaded formatter class: {0}'.format(
            formatter_class.__name__))
        formatter = formatter_class(config)
        info = formatter.get_info()
        log(LOG_VERBOSE, 'Formatters: Using {0} v{1} - {2}'.format(
            info['name'], info['version'], info['description']))
        return formatter
    raise FormatterNotFound('no formatter named {0!r} (available: {1})'.format(
        name, ', '.join(available_formatters()) or 'none'))


__all__ = ['FormatterPluginBase', 'FormatterNotFound', 'available_formatters',
           'load_formatter', 'NAMESPACE']
