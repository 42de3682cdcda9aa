"""
Tattoo Studio - generate tattoo designs and preview them on body-part photos.
"""

__version__ = "0.1.0"

from .errors import EmptyResultError, TattooStudioError, ValidationError
from .pipeline import generate_tattoo_design, simulate_tattoo_placement

__all__ = [
    "generate_tattoo_design",
    "simulate_tattoo_placement",
    "ValidationError",
    "EmptyResultError",
    "TattooStudioError",
    "__version__",
]
