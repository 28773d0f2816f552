"""Application layer DI providers."""

from dishka import Scope, provide

from gate.application.usecase.code import IssueCodeUseCase
from gate.application.usecase.join import ArbitrateJoinRequestUseCase
from gate.application.usecase.redeem import RedeemCodeUseCase
from gate.application.usecase.sweep import ExpireSubscriptionUseCase
from gate.config import Settings
from gate.domain.service import (
    AuditService,
    ChannelGateway,
    CodeService,
    InviteService,
    SubscriptionService,
)
from gate.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_issue_code_use_case(
        self,
        code_service: CodeService,
        audit_service: AuditService,
        settings: Settings,
    ) -> IssueCodeUseCase:
        """Provide issue code use case."""
        return IssueCodeUseCase(
            code_service=code_service,
            audit_service=audit_service,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_redeem_code_use_case(
        self,
        code_service: CodeService,
        subscription_service: SubscriptionService,
        invite_service: InviteService,
        audit_service: AuditService,
    ) -> RedeemCodeUseCase:
        """Provide redeem code use case."""
        return RedeemCodeUseCase(
            code_service=code_service,
            subscription_service=subscription_service,
            invite_service=invite_service,
            audit_service=audit_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_arbitrate_join_request_use_case(
        self,
        subscription_service: SubscriptionService,
        audit_service: AuditService,
        gateway: ChannelGateway,
        settings: Settings,
    ) -> ArbitrateJoinRequestUseCase:
        """Provide join arbitration use case."""
        return ArbitrateJoinRequestUseCase(
            subscription_service=subscription_service,
            audit_service=audit_service,
            gateway=gateway,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_expire_subscription_use_case(
        self,
        subscription_service: SubscriptionService,
        audit_service: AuditService,
        gateway: ChannelGateway,
        settings: Settings,
    ) -> ExpireSubscriptionUseCase:
        """Provide expire subscription use case."""
        return ExpireSubscriptionUseCase(
            subscription_service=subscription_service,
            audit_service=audit_service,
            gateway=gateway,
            settings=settings,
        )
