"""Feature modules: error codes, categories, translations and health.

Importing the package registers every mapped class, so string-based
relationships resolve no matter which feature is imported first.
"""

from error_registry.features import models

__all__ = ["models"]
