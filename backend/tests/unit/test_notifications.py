"""Unit tests for the contract change feed."""

import asyncio
import json

from redis.exceptions import ConnectionError as RedisConnectionError

from vendor_contracts.enums import ContractChange
from vendor_contracts.features.notifications.api import matches_pair
from vendor_contracts.features.notifications.client import NotificationsClient
from vendor_contracts.features.notifications.schemas import NotificationEvent


class FakeRedis:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.published: list[tuple[str, str]] = []

    async def publish(self, channel: str, message: str) -> int:
        if self.fail:
            raise RedisConnectionError("redis unavailable")
        self.published.append((channel, message))
        return 1


class TestNotificationsClient:
    """Tests for NotificationsClient.publish_contract_change."""

    def test_publishes_change_event(self, saved_record):
        client = NotificationsClient(redis_url="redis://localhost:6379", channel="contracts-test")
        client.redis = FakeRedis()

        asyncio.run(client.publish_contract_change(saved_record, ContractChange.SIGNED))

        [(channel, message)] = client.redis.published
        assert channel == "contracts-test"
        event = NotificationEvent.model_validate(json.loads(message))
        assert event.event == "contract"
        assert event.data.contract_id == saved_record.id
        assert event.data.change == "signed"
        assert event.data.status == saved_record.status
        assert matches_pair(event, saved_record.event_id, saved_record.vendor_id)
        assert not matches_pair(event, saved_record.event_id, "other-vendor")

    def test_publish_failure_is_not_raised(self, saved_record):
        client = NotificationsClient(redis_url="redis://localhost:6379")
        client.redis = FakeRedis(fail=True)

        asyncio.run(client.publish_contract_change(saved_record, ContractChange.SAVED))

        assert client.redis.published == []
