"""
Resilience patterns for feeledger.
"""

from .retry import execute_with_retry, is_transient_error, retry_policy

__all__ = ["execute_with_retry", "is_transient_error", "retry_policy"]
