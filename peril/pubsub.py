"""Publishing and consuming JSON messages over AMQP."""

from __future__ import annotations

import json
import logging
import threading
from enum import IntEnum
from typing import Any, Callable, TypeVar

import pika

T = TypeVar("T")

_log = logging.getLogger(__name__)

_HTML_ESCAPES = {"<": "\\u003c", ">": "\\u003e", "&": "\\u0026",
                 "\u2028": "\\u2028", "\u2029": "\\u2029"}


class AckType(IntEnum):
    """How a handler wants a delivered message settled."""

    ACK = 0
    NACK_REQUEUE = 1
    NACK_DISCARD = 2


class SimpleQueueType(IntEnum):
    """Whether a queue survives restarts or lives only with its consumer."""

    DURABLE = 0
    TRANSIENT = 1


def _to_plain(value: Any) -> Any:
    if callable(getattr(value, "to_dict", None)):
        return value.to_dict()
    raise TypeError(f"{type(value).__name__} is not JSON serialisable")


def encode_json(value: Any) -> bytes:
    """Encode *value* as compact JSON, escaping HTML-sensitive characters."""
    text = json.dumps(value, default=_to_plain, separators=(",", ":"), ensure_ascii=False)
    for char, escape in _HTML_ESCAPES.items():
        text = text.replace(char, escape)
    return text.encode("utf-8")


def publish_json(channel: Any, exchange: str, key: str, value: Any) -> None:
    """Publish *value* as a JSON message to *exchange* with routing *key*."""
    channel.basic_publish(exchange=exchange, routing_key=key, body=encode_json(value),
                          properties=pika.BasicProperties(content_type="application/json"),
                          mandatory=False)


def declare_and_bind(connection: Any, exchange: str, queue_name: str, key: str,
                     queue_type: int) -> tuple[Any, Any]:
    """Open a channel, declare and bind *queue_name*; return channel and queue."""
    channel = connection.channel()
    transient = queue_type == SimpleQueueType.TRANSIENT
    queue = channel.queue_declare(queue=queue_name, durable=not transient,
                                  auto_delete=transient, exclusive=transient)
    channel.queue_bind(queue=queue_name, exchange=exchange, routing_key=key)
    return channel, queue


def subscribe_json(connection: Any, exchange: str, queue_name: str, key: str,
                   queue_type: int, handler: Callable[[T], AckType],
                   decoder: Callable[[Any], T]) -> threading.Thread:
    """Consume JSON messages on a background thread and return that thread.

    A body that is not valid JSON is decoded as an empty object.
    """
    channel, _ = declare_and_bind(connection, exchange, queue_name, key, queue_type)

    def on_message(ch: Any, method: Any, _properties: Any, body: bytes) -> None:
        try:
            data = json.loads(body)
        except ValueError:
            data = {}
        outcome = handler(decoder(data))
        tag = method.delivery_tag
        if outcome == AckType.ACK:
            _log.info("Received Ack")
            ch.basic_ack(delivery_tag=tag, multiple=False)
        elif outcome in (AckType.NACK_REQUEUE, AckType.NACK_DISCARD):
            requeue = outcome == AckType.NACK_REQUEUE
            _log.info("Received NackRequeue" if requeue else "Received NackDiscard")
            ch.basic_nack(delivery_tag=tag, multiple=False, requeue=requeue)

    channel.basic_consume(queue=queue_name, on_message_callback=on_message, auto_ack=False)
    consumer = threading.Thread(target=channel.start_consuming,
                                name=f"consume-{queue_name}", daemon=True)
    consumer.start()
    return consumer