## ajisai — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from .types import Symbol, Token, nil
from .errors import *
from .config import EngineConfig
from .runtime import Engine

_ENGINE = Engine()

def __getattr__(name):
    return getattr(_ENGINE, name)
