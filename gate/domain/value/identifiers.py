"""Strongly typed identifiers for Channel Gate domain entities.

Telegram identifies users and chats with 64-bit integers; our own records
use UUIDs.
"""

from typing import NewType
from uuid import UUID

# Telegram identifiers
UserId = NewType("UserId", int)
ChatId = NewType("ChatId", int)

# Record identifiers
SubscriptionId = NewType("SubscriptionId", UUID)
AuditEntryId = NewType("AuditEntryId", UUID)
