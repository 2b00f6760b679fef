"""
Logging for the member registry service.

    setup_logging(settings)      install handlers/formatters from Settings
    RequestIDMiddleware          tag each request; ids show up as %(request_id)s
"""

from .builder import make_dict_config, setup_logging
from .filters import RequestIdFilter, get_request_id, set_request_id
from .middleware import RequestIDMiddleware

__all__ = [
    "setup_logging",
    "make_dict_config",
    "set_request_id",
    "get_request_id",
    "RequestIdFilter",
    "RequestIDMiddleware",
]
