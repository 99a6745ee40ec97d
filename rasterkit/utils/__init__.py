"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Geometry value types and the arc predicate (geometry)
    - RGBA pixels and alpha compositing (color)
    - Config and scene validation (validators)
    - Atomic I/O (fs)
    - Profiling (profiler)
    - Unified logging (logging_config)

No module in utils/ may import from upper layers (canvas, renderers, scene).

Convenience imports:
    from rasterkit.utils import color, geometry, fs, validators
    from rasterkit.utils.logging_config import setup_logging, get_logger
"""

from . import color
from . import fs
from . import geometry
from . import logging_config
from . import profiler
from . import validators

from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    # Modules
    'color',
    'fs',
    'geometry',
    'logging_config',
    'profiler',
    'validators',
    # Direct exports
    'setup_logging',
    'get_logger',
    'push_context',
]
