from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class ServiceRecord:
    """Normalized service description produced by the host bridge."""
    name: str
    id: str
    ip: str
    port: int
    tags: Tuple[str, ...] = field(default_factory=tuple)  # "key|value" or bare "key"
