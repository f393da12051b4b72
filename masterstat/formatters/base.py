"""
Base class for masterstat output formatters.

Formatters turn the list of server addresses into the text that the
masterstat command writes to stdout.
"""
import abc
from typing import Any, Dict, List


class FormatterPluginBase(metaclass=abc.ABCMeta):
    """Base class for output formatter plugins.

    All formatters must implement the methods defined in this class.
    The command line front end uses stevedore to find formatters at
    runtime, in the 'masterstat.formatters' entry point namespace.
    """

    def __init__(self, config: Any):
        """Initialize the formatter.

        Args:
            config: The masterstat configuration object
        """
        self.config = config

    @abc.abstractmethod
    def get_name(self) -> str:
        """Return the name this formatter is selected by.

        Returns:
            A string identifying this formatter
        """
        pass

    @abc.abstractmethod
    def format(self, addresses: List[Any]) -> str:
        """Render the addresses.

        Args:
            addresses: ServerAddress values, in the order to print them

        Returns:
            The complete output, ending with a newline unless empty
        """
        pass

    def get_info(self) -> Dict[str, Any]:
        """Return formatter information.

        Returns:
            A dictionary with formatter metadata
        """
        return {
            'name': self.get_name(),
            'version': getattr(self, 'version', 'unknown'),
            'description': getattr(self, 'description', ''),
        }
