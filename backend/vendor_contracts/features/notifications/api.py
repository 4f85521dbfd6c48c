import json
import logging

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import APIRouter
from pydantic import ValidationError
from redis.asyncio.client import PubSub
from sse_starlette import EventSourceResponse, ServerSentEvent

from vendor_contracts.features.notifications.client import get_notifications_client
from vendor_contracts.features.notifications.schemas import NotificationEvent, RedisPubSubMessage


router = APIRouter()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def subscribe_contract_feed() -> AsyncGenerator[PubSub, None]:
    """get a pubsub connection subscribed to the contract change channel"""

    client = await get_notifications_client()
    pubsub = await client.subscribe(client.channel)
    try:
        yield pubsub
    finally:
        await client.unsubscribe(pubsub=pubsub, channel=client.channel)


def matches_pair(notification_event: NotificationEvent, event_id: str, vendor_id: str) -> bool:
    return notification_event.data.event_id == event_id and notification_event.data.vendor_id == vendor_id


@router.get("/contracts/event/{event_id}/vendor/{vendor_id}/events", tags=["notifications"])
async def contract_events(event_id: str, vendor_id: str) -> EventSourceResponse:
    """long-lived SSE endpoint streaming change events for one (event, vendor) contract"""

    async def stream_contract_events() -> AsyncGenerator[ServerSentEvent, None]:
        """listen for messages, validate the payload, and yield events for the requested pair"""

        async with subscribe_contract_feed() as pubsub:
            async for message in pubsub.listen():
                message: RedisPubSubMessage
                if message["type"] != "message":
                    continue
                try:
                    notification_event = NotificationEvent.model_validate(json.loads(message["data"]))
                except (json.JSONDecodeError, ValidationError):
                    logger.error("invalid payload on the contract change feed", exc_info=True)
                    continue
                if matches_pair(notification_event, event_id, vendor_id):
                    yield ServerSentEvent(event=notification_event.event, data=notification_event.data.model_dump_json())

    return EventSourceResponse(stream_contract_events())
