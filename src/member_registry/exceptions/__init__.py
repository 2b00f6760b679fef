# member_registry/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # Repository-level errors (RepositoryError, DuplicateError, ...)
# │   ├── integrity_classifier.py    # Classify driver IntegrityErrors (unique / not-null / ...)
# │   └── mapper.py                  # Map classified errors to repository-level errors

from .base import RepositoryError, NotFoundError, DuplicateError

__all__ = [
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
]
