"""Integration tests for PostgresSubscriptionRepository.

Requires PostgreSQL at DATABASE__URL with migrations applied.
"""

from datetime import timedelta

import pytest

from gate.domain.error import DuplicateError
from gate.domain.repository import CodeRepository, SubscriptionRepository
from gate.domain.service import generate_code
from gate.domain.value import SubscriptionStatus
from tests.factories import T0, make_code, make_subscription
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

integration_env = create_env_fixture(unmock={"persistence"})


async def seed_code(container) -> str:
    code_repo = await container.get(CodeRepository)
    code = await code_repo.create(make_code(generate_code().root))
    return code.code.root


class TestSubscriptionRepositoryIntegration:
    """Integration tests for subscription storage."""

    @pytest.mark.asyncio
    async def test_one_subscription_per_user_and_code(self, integration_env):
        # Arrange
        repo = await integration_env.get(SubscriptionRepository)
        token = await seed_code(integration_env)
        await repo.create(make_subscription(user_id=100, token=token))

        # Act / Assert
        with pytest.raises(DuplicateError):
            await repo.create(make_subscription(user_id=100, token=token))

    @pytest.mark.asyncio
    async def test_updates_round_trip(self, integration_env):
        # Arrange
        repo = await integration_env.get(SubscriptionRepository)
        token = await seed_code(integration_env)
        sub = await repo.create(make_subscription(user_id=100, token=token))

        # Act
        await repo.update_invite_link(sub.id, "https://t.me/+fresh")
        await repo.update_status(sub.id, SubscriptionStatus.EXPIRED)

        # Assert
        stored = await repo.find_by_id(sub.id)
        assert stored.invite_link == "https://t.me/+fresh"
        assert stored.status == SubscriptionStatus.EXPIRED
        assert stored.expires_at == T0 + timedelta(days=15)

    @pytest.mark.asyncio
    async def test_delete_frees_the_user_and_code_pair(self, integration_env):
        # Arrange
        repo = await integration_env.get(SubscriptionRepository)
        token = await seed_code(integration_env)
        sub = await repo.create(make_subscription(user_id=100, token=token))

        # Act
        await repo.delete(sub.id)

        # Assert
        assert await repo.find_by_id(sub.id) is None
        again = await repo.create(make_subscription(user_id=100, token=token))
        assert await repo.find_by_id(again.id) is not None

    @pytest.mark.asyncio
    async def test_list_expirable_includes_boundary(self, integration_env):
        """A subscription is due at exactly its expiry instant."""
        repo = await integration_env.get(SubscriptionRepository)
        token = await seed_code(integration_env)
        sub = await repo.create(make_subscription(user_id=100, token=token))

        due = await repo.list_expirable(sub.expires_at)

        assert sub.id in {s.id for s in due}
        assert sub.id not in {
            s.id for s in await repo.list_expirable(sub.expires_at - timedelta(seconds=1))
        }
