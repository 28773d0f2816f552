"""Domain services."""

from .audit_service import AuditService
from .base import Service
from .code_service import CodeService, generate_code
from .gateway import ChannelGateway
from .invite_service import InviteService
from .subscription_service import SubscriptionService

__all__ = [
    "AuditService",
    "ChannelGateway",
    "CodeService",
    "InviteService",
    "Service",
    "SubscriptionService",
    "generate_code",
]
