"""Unified exception hierarchy for cachepool.

All library exceptions inherit from CachePoolException, enabling unified
error handling across modules.

Categories:
- CacheInvalidArgumentException: caller errors (bad keys, foreign items)
- CacheInvalidConfigurationException: unknown drivers, unusable settings
- CacheDriverException: a driver could not be brought to the ready state

Cache misses and store-level failures are not exceptions: they surface as
``None`` / ``False`` results from the driver contract.
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class CachePoolException(Exception):
    """Base exception for all cachepool errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CACHE_TYPE_CONFUSION").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    default_code: str | None = None

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code if code is not None else self.default_code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Argument Exceptions
# =============================================================================


class CacheInvalidArgumentException(CachePoolException):
    """An argument passed to the pool or a driver is invalid."""

    default_code = "CACHE_INVALID_ARGUMENT"


class CacheTypeConfusionException(CacheInvalidArgumentException):
    """A driver received a cache item that belongs to another driver.

    This is a programming error upstream and is never retried.
    """

    default_code = "CACHE_TYPE_CONFUSION"


# =============================================================================
# Configuration Exceptions
# =============================================================================


class CacheInvalidConfigurationException(CachePoolException):
    """Cache configuration is invalid."""

    default_code = "CACHE_INVALID_CONFIGURATION"


class CacheDriverNotFoundException(CacheInvalidConfigurationException):
    """No driver is registered under the requested name."""

    default_code = "CACHE_DRIVER_NOT_FOUND"


# =============================================================================
# Driver Exceptions
# =============================================================================


class CacheDriverException(CachePoolException):
    """A driver failed outside of its normal boolean/optional outcomes."""

    default_code = "CACHE_DRIVER_ERROR"


class CacheDriverCheckException(CacheDriverException):
    """The driver's backing store is not available in this runtime."""

    default_code = "CACHE_DRIVER_CHECK"


class CacheDriverConnectException(CacheDriverException):
    """The driver reported a failed connection."""

    default_code = "CACHE_DRIVER_CONNECT"
