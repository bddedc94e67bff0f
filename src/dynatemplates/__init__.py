"""dynatemplates - multi-tenant template resolution and rendering.

Templates are resolved by name, scope and locale with fallback to system
defaults, expanded by a pluggable template engine and processed by a
pluggable content language, optionally wrapped in a layout.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
