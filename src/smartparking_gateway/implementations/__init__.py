"""Concrete storage and navigation implementations."""

from smartparking_gateway.implementations.file_store import JsonFileKeyValueStore
from smartparking_gateway.implementations.memory_store import InMemoryKeyValueStore
from smartparking_gateway.implementations.navigator import InMemoryNavigator

__all__ = ["InMemoryKeyValueStore", "InMemoryNavigator", "JsonFileKeyValueStore"]
