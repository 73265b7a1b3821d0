"""Backing logic: catalog adapters, swipe persistence, broker notification."""

from .catalog_source import HttpCatalogSource, InMemoryCatalogSource, JsonCatalogSource
from .notifier import HttpBrokerNotifier, LoggingNotifier, NotificationSink
from .swipe_store import InMemorySwipeStore, JsonSwipeStore, SwipeStore, UserActivity

__all__ = [
    "HttpBrokerNotifier",
    "HttpCatalogSource",
    "InMemoryCatalogSource",
    "InMemorySwipeStore",
    "JsonCatalogSource",
    "JsonSwipeStore",
    "LoggingNotifier",
    "NotificationSink",
    "SwipeStore",
    "UserActivity",
]
