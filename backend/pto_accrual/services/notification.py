from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pto_accrual.schemas.accrual import PTOAccrualNotice

logger = logging.getLogger(__name__)


@runtime_checkable
class NotificationService(Protocol):
    """Interface for delivering accrual notices to users."""

    async def notify_pto_accrued(self, notice: PTOAccrualNotice) -> None:
        """Tell a user that PTO was added to their balance."""
        ...


class LoggingNotificationService:
    """Default implementation that only logs the notice."""

    async def notify_pto_accrued(self, notice: PTOAccrualNotice) -> None:
        """Log the notice in place of a push delivery."""
        logger.info("Notify user=%s org=%s: %s", notice.user_id, notice.organization_id, notice.body)


class InMemoryNotificationService:
    """Records notices for inspection in tests."""

    def __init__(self) -> None:
        self.sent: list[PTOAccrualNotice] = []

    async def notify_pto_accrued(self, notice: PTOAccrualNotice) -> None:
        """Record the notice."""
        self.sent.append(notice)


_notification_service: NotificationService = LoggingNotificationService()


def get_notification_service() -> NotificationService:
    """Return the active notification service."""
    return _notification_service


def set_notification_service(service: NotificationService) -> None:
    """Override the service (for testing or production wiring)."""
    global _notification_service
    _notification_service = service
