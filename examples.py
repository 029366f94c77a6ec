#!/usr/bin/env python3
"""
Examples of programmatic usage of fcmclient.

Shows how a host application builds a client from configuration, sends a
dry-run message and reacts to the gateway's answer. Set FCM_API_KEY (or
fcm.api_key in ~/.fcmclient/config.yaml) and FCM_EXAMPLE_TOKEN first.

Usage:
    python examples.py
"""

import asyncio
import logging
import os

from fcmclient import (
    ERROR_NOT_REGISTERED,
    FCMError,
    GatewayError,
    HttpMessage,
    Notification,
    Priority,
    create_client_from_config,
)
from fcmclient.domain.events.send_events import DomainEvent
from fcmclient.infrastructure.monitoring.logger_setup import setup_logging

logger = logging.getLogger("fcmclient.examples")


def log_event(event: DomainEvent) -> None:
    logger.info(f"Event: {event}")


def example_send(client, token: str) -> None:
    """Blocking send of a dry-run notification to one device."""
    message = HttpMessage(
        to=token,
        priority=Priority.HIGH,
        time_to_live=600,
        dry_run=True,
        data={"match_id": "1234"},
        notification=Notification(title="Kick-off", body="The match has started", sound="default"),
    )
    try:
        response = client.send_http(message)
    except GatewayError as e:
        logger.error(f"Gateway rejected the request: {e.status_line}")
        wait = client.get_retry_after()
        if wait:
            logger.info(f"Gateway asked to wait {wait}s before retrying")
        return
    except FCMError as e:
        logger.error(f"Send failed: {e}")
        return

    for result in response.results:
        if result.error == ERROR_NOT_REGISTERED:
            # Host applications usually forget the token here
            logger.info(f"Token {token[:8]}... is no longer registered")
        elif result.registration_id:
            logger.info(f"Replace token with canonical id {result.registration_id[:8]}...")
        else:
            logger.info(f"Accepted as {result.message_id}")


async def example_post(client, token: str) -> None:
    """Awaitable variant for asyncio applications."""
    response = await client.post_http(HttpMessage(to=token, dry_run=True, data={"ping": "1"}))
    logger.info(f"Async send: success={response.success}, failure={response.failure}")


def main() -> None:
    setup_logging()
    token = os.getenv("FCM_EXAMPLE_TOKEN")
    if not token:
        raise SystemExit("Set FCM_EXAMPLE_TOKEN to a device registration token.")

    with create_client_from_config(event_handler=log_event) as client:
        example_send(client, token)
        asyncio.run(example_post(client, token))


if __name__ == "__main__":
    main()
