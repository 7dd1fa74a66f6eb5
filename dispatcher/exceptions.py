"""
Custom exceptions for the task dispatcher
"""


class DispatchError(Exception):
    """Base exception for dispatch-related errors"""


class InvalidConfigurationError(DispatchError, ValueError):
    """Raised when a pool or dispatcher setting is invalid"""
