"""
Gutory Core
Daily gut-health log aggregation, reporting, and report archive
"""

__version__ = "0.1.0"

from . import models
from . import utils

__all__ = ["models", "utils"]
