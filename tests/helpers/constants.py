"""Shared token and account constants for tests.

All addresses are lowercase for consistency with normalize_address().

Usage:
    from tests.helpers import TOKEN_A, TOKEN_B
    # or
    from tests.helpers.constants import TOKEN_A, TOKEN_B
"""

# =============================================================================
# Synthetic tokens (graph and routing tests)
# =============================================================================

TOKEN_A = "0x" + "aa" * 20
TOKEN_B = "0x" + "bb" * 20
TOKEN_C = "0x" + "cc" * 20
TOKEN_D = "0x" + "dd" * 20
TOKEN_E = "0x" + "ee" * 20

# Token present in pools but never allow-listed
SPAM_TOKEN = "0x" + "5a" * 20

# =============================================================================
# Accounts
# =============================================================================

CALLER = "0x" + "c0" * 20
ROUTER = "0x" + "f0" * 20
