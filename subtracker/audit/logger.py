"""
Audit Logger

DESIGN DECISION: Every change to the subscription collection is logged.
This provides:
1. Traceability of what was added and removed
2. Debugging capability when a form is rejected
3. A history the user can be shown

The audit logger:
- Is synchronous; the whole core is single-threaded
- Gracefully handles storage failures (never breaks the main flow)
- Supports correlation IDs to trace related events
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from subtracker.config import LoggingSettings
from subtracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from subtracker.services.storage import AuditStorageInterface


_SHARED_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
]


_handler: Optional[logging.Handler] = None


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Configure structlog on top of stdlib logging.

    The stdout handler is installed once; later calls only change the
    level and renderer.
    """
    global _handler
    settings = settings or LoggingSettings()

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.json_output
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[*_SHARED_PROCESSORS, renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    package_logger = logging.getLogger("subtracker")
    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(_handler)
    package_logger.setLevel(settings.level)


# Configure structlog for local logging
structlog.configure(
    processors=[*_SHARED_PROCESSORS, structlog.processors.JSONRenderer()],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=False,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage, when one is configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for the audit trail.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger(__name__)

    @property
    def storage(self) -> Optional[AuditStorageInterface]:
        return self._storage

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage is not None:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_subscription_added(
        self,
        subscription_id: str,
        name: str,
        cost: str,
        currency: str,
        cycle: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a subscription joining the collection."""
        event = AuditEventBuilder.subscription_added(
            subscription_id=subscription_id,
            name=name,
            cost=cost,
            currency=currency,
            cycle=cycle,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_subscription_removed(
        self,
        subscription_id: str,
        name: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a subscription leaving the collection."""
        event = AuditEventBuilder.subscription_removed(
            subscription_id=subscription_id,
            name=name,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_remove_skipped(
        self,
        subscription_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a remove request for an id that is not present."""
        event = AuditEventBuilder.subscription_remove_skipped(
            subscription_id=subscription_id,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_validation_passed(
        self,
        warnings: list[str],
        correlation_id: UUID,
    ) -> None:
        event = AuditEventBuilder.form_validation_passed(
            correlation_id=correlation_id,
            warnings=warnings,
        )
        self.log(event)

    def log_validation_failed(
        self,
        stage: str,
        issues: list[dict],
        correlation_id: UUID,
    ) -> None:
        """Log a rejected subscription form."""
        event = AuditEventBuilder.form_validation_failed(
            stage=stage,
            issues=issues,
            correlation_id=correlation_id,
        )
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., submitting the
    add-subscription form). Pass it through all subsequent operations.
    """
    return uuid4()
