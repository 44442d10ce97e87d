"""
backend/sportslot/services/events.py

Event emitter: pushes events to the Redis queue `events:p2p` for the
notification consumer.

Event types:
- booking_created: a customer reserved places
- schedule_published: operator published staged changes; clients should re-poll

Events are advisory. Polling /sync stays the source of truth, so a missing
Redis (REDIS_URL unset) or a failed push is logged and never breaks the caller.
"""

import json
import time
import logging

from ..redis_client import redis_client

logger = logging.getLogger(__name__)

P2P_QUEUE = "events:p2p"


def emit_event(event_type: str, payload: dict) -> None:
    """
    Emit a p2p event (instant delivery).

    Pushed to Redis list `events:p2p` for the consumer loop.
    """
    if redis_client is None:
        logger.debug(f"Redis disabled, event {event_type} not emitted")
        return
    event = {
        "type": event_type,
        **payload,
        "ts": int(time.time()),
    }
    try:
        redis_client.rpush(P2P_QUEUE, json.dumps(event))
        logger.info(f"Event emitted: {event_type} → {P2P_QUEUE}")
    except Exception as e:
        logger.error(f"Failed to emit event {event_type}: {e}")
