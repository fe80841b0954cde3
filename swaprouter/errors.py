"""Swap router error classes.

Discovery misses (no path, no allow-listed path, no usable quote) are
reported as empty results by the routing layer, not as errors. These
classes cover malformed input and failures surfaced to callers.
"""


class SwapRouterError(Exception):
    """Base error for swap routing and execution planning."""

    pass


class InvalidPoolError(SwapRouterError):
    """Raw pool record cannot be turned into a Pool."""

    pass


class UnknownTokenError(SwapRouterError):
    """Token is not present in the token registry."""

    pass


class EmptyRouteError(SwapRouterError):
    """A route with no segments was passed where hops are required."""

    pass


class PathDecodeError(SwapRouterError):
    """Encoded path does not follow the token/fee byte layout."""

    pass


class NoRouteError(SwapRouterError):
    """No route produced a usable quote for the requested swap."""

    pass


class SubmissionError(SwapRouterError):
    """Approval or swap transaction failed on submission."""

    pass


class ExchangeRateError(SwapRouterError):
    """Quoted exchange rate is far below the expected reference rate."""

    pass


__all__ = [
    "SwapRouterError",
    "InvalidPoolError",
    "UnknownTokenError",
    "EmptyRouteError",
    "PathDecodeError",
    "NoRouteError",
    "SubmissionError",
    "ExchangeRateError",
]
