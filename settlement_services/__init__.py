"""
Settlement services -- clock-injected orchestration over the pure engine.

Usage:
    from settlement_services import RevenueService
"""

from settlement_services.revenue_service import (
    RevenueService,
    RevenueStatement,
    VerificationResult,
)

__all__ = [
    "RevenueService",
    "RevenueStatement",
    "VerificationResult",
]
