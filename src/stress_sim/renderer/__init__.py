# MIT License (see LICENSE)
"""
Rendering adapters for the stress overlay.

This subpackage provides:
    - RendererAdapter: Abstract base class defining the rendering interface.
    - DebugRenderer: Text output for debugging.
    - NullRenderer: No-op renderer.
    - BufferedRenderer: Records frames (with per-vertex colors) as plain data.

Typical usage:
    from stress_sim.renderer import DebugRenderer

    DebugRenderer().render_engine(engine)
"""
from .adapter import (
    RendererAdapter,
    DebugRenderer,
    NullRenderer,
    BufferedRenderer,
)

__all__ = [
    "RendererAdapter",
    "DebugRenderer",
    "NullRenderer",
    "BufferedRenderer",
]
