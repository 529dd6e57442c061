"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .poll_analytics import PollAnalyticsService, PollRepositoryProtocol

__all__ = ["PollAnalyticsService", "PollRepositoryProtocol"]
