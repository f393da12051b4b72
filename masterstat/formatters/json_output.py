"""JSON output: an array of "ip:port" strings."""
import json
from typing import Any, List

from .base import FormatterPluginBase


class JSONFormatter(FormatterPluginBase):
    """Writes the addresses as a JSON array of strings."""

    version = '1.0.0'
    description = 'JSON array of "ip:port" strings'

    def get_name(self) -> str:
        return 'json'

    def format(self, addresses: List[Any]) -> str:
        return json.dumps([str(a) for a in addresses]) + '\n'
