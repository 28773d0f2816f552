"""Domain layer DI providers."""

from dishka import Scope, provide

from gate.config import Settings
from gate.domain.repository import (
    AuditRepository,
    CodeRepository,
    SubscriptionRepository,
)
from gate.domain.service import (
    AuditService,
    ChannelGateway,
    CodeService,
    InviteService,
    SubscriptionService,
)
from gate.domain.value import ChatId
from gate.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each inbound update and each swept subscription gets fresh service
    instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_code_service(
        self, code_repository: CodeRepository, settings: Settings
    ) -> CodeService:
        """Provide code domain service."""
        return CodeService(
            code_repository=code_repository,
            allowed_durations=settings.subscription.allowed_durations,
        )

    @provide
    def get_subscription_service(
        self, subscription_repository: SubscriptionRepository
    ) -> SubscriptionService:
        """Provide subscription domain service."""
        return SubscriptionService(subscription_repository=subscription_repository)

    @provide
    def get_invite_service(
        self, gateway: ChannelGateway, settings: Settings
    ) -> InviteService:
        """Provide invite domain service."""
        return InviteService(
            gateway=gateway,
            channel_id=ChatId(settings.telegram.channel_id),
            label_prefix=settings.subscription.invite_label_prefix,
        )

    @provide
    def get_audit_service(self, audit_repository: AuditRepository) -> AuditService:
        """Provide audit domain service."""
        return AuditService(audit_repository=audit_repository)
