"""
API route modules.
"""

from luhnlab.api.routes.generate import router as generate_router
from luhnlab.api.routes.mask import router as mask_router
from luhnlab.api.routes.validate import router as validate_router

__all__ = [
    "generate_router",
    "mask_router",
    "validate_router",
]
