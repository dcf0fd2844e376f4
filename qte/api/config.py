from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass
class EngineConfig:
    screen_size: Tuple[int, int]
    fps: int = 60
    mirror: bool = False
    seed: Optional[int] = None
    # launcher overrides layered over the manifest's `options`
    options: Dict[str, Any] = field(default_factory=dict)
