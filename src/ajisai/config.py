## ajisai — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import os
import sys
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name, "").strip()
    return int(value) if value else default


# A nesting level costs a few Python frames, so the default stays below the host limit.
DEFAULT_MAX_DEPTH = sys.getrecursionlimit() // 4


@dataclass(frozen=True)
class EngineConfig:
    max_iterations: int = 10_000            # per LOOP, BEGIN ... AGAIN/UNTIL/REPEAT
    max_depth: int = DEFAULT_MAX_DEPTH      # nested word calls and quotations

    @classmethod
    def from_env(cls) -> "EngineConfig":
        return cls(max_iterations=_env_int("AJISAI_MAX_ITERATIONS", cls.max_iterations),
                   max_depth=_env_int("AJISAI_MAX_DEPTH", cls.max_depth))
