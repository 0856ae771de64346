"""Exceptions raised by the cost watch pipeline."""


class CostWatchError(Exception):
    """Base exception for cost watch failures"""
    pass


class ConfigurationMissing(CostWatchError):
    """A required parameter is absent or empty in Parameter Store"""
    pass


class ParameterStoreError(CostWatchError):
    """Parameter Store could not be read"""
    pass


class BillingQueryFailed(CostWatchError):
    """Cost Explorer call failed or returned an unexpected shape"""
    pass


class NoCostData(CostWatchError):
    """No service group with a positive cost for the period"""
    pass


class ConversionFailed(CostWatchError):
    """Exchange rate lookup failed"""
    pass


class IdentityLookupFailed(CostWatchError):
    """IAM account alias lookup failed"""
    pass


class NotificationFailed(CostWatchError):
    """Posting to the Slack webhook failed"""
    pass
