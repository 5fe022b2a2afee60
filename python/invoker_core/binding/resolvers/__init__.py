"""Built-in value resolver implementations.

This module provides the core resolvers of the default chain:
- UriVarValueResolver (priority 10): raw named values, coerced or constructed
- PayloadValueResolver (priority 20): the write payload
- OperationValueResolver (priority 30): the matched Operation
- RequestValueResolver (priority 40): the request carrier itself
"""

from __future__ import annotations

from .operation import OperationValueResolver
from .payload import PayloadValueResolver
from .request import RequestValueResolver
from .uri_var import UriVarValueResolver

__all__ = [
    "UriVarValueResolver",
    "PayloadValueResolver",
    "OperationValueResolver",
    "RequestValueResolver",
]
