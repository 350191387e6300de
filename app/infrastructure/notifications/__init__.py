"""Realtime notification helpers for the infrastructure layer."""

from .manager import NotificationConnectionManager, notification_manager
from .publisher import (
    NOTIFICATION_EVENT,
    NotificationPublisher,
    build_envelope,
    dispatch_notification,
    notification_publisher,
    serialize_notification,
)
from .realtime import DOMAIN_EVENT_TYPES, DomainEventRelay, domain_event_relay

__all__ = [
    "NotificationConnectionManager",
    "notification_manager",
    "NOTIFICATION_EVENT",
    "NotificationPublisher",
    "notification_publisher",
    "dispatch_notification",
    "build_envelope",
    "serialize_notification",
    "DOMAIN_EVENT_TYPES",
    "DomainEventRelay",
    "domain_event_relay",
]
