"""
Endpoint registry: where each operation is sent and with which verb.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

DEFAULT_BASE_URL = "https://api.openai.com"


class Operation(str, Enum):
    COMPLETIONS = "completions"
    EDITS = "edits"
    CHAT = "chat"
    IMAGE_GENERATIONS = "image_generations"


@dataclass(frozen=True)
class Endpoint:
    """Fixed (base URL, path, method) triple for one operation."""

    path: str
    method: str = "POST"
    base_url: str = DEFAULT_BASE_URL

    def url(self, base_url: Optional[str] = None) -> str:
        """Full URL, optionally against a different host (proxies, test servers)."""
        return f"{(base_url or self.base_url).rstrip('/')}{self.path}"


ENDPOINTS: Mapping[Operation, Endpoint] = MappingProxyType({
    Operation.COMPLETIONS: Endpoint("/v1/completions"),
    Operation.EDITS: Endpoint("/v1/edits"),
    Operation.CHAT: Endpoint("/v1/chat/completions"),
    Operation.IMAGE_GENERATIONS: Endpoint("/v1/images/generations"),
})


def get_endpoint(operation: Operation) -> Endpoint:
    return ENDPOINTS[Operation(operation)]
