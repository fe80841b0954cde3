"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Token and account addresses
- factories: Pool, route and raw record factory functions
"""

from tests.helpers.constants import (
    CALLER,
    ROUTER,
    SPAM_TOKEN,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    TOKEN_D,
    TOKEN_E,
)
from tests.helpers.factories import make_pool, make_record, make_route, make_segment

__all__ = [
    # Constants
    "TOKEN_A",
    "TOKEN_B",
    "TOKEN_C",
    "TOKEN_D",
    "TOKEN_E",
    "SPAM_TOKEN",
    "CALLER",
    "ROUTER",
    # Factories
    "make_pool",
    "make_record",
    "make_route",
    "make_segment",
]
