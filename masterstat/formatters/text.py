"""Plain text output: one ip:port per line."""
from typing import Any, List

from .base import FormatterPluginBase


class TextFormatter(FormatterPluginBase):
    """Writes each address on its own line."""

    version = '1.0.0'
    description = 'One ip:port per line'

    def get_name(self) -> str:
        return 'text'

    def format(self, addresses: List[Any]) -> str:
        return ''.join('{0}\n'.format(a) for a in addresses)
