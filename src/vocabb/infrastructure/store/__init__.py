# Infrastructure Store Adapters Package
from .memory_store import InMemoryItemStore
from .yaml_store import YamlItemStore

__all__ = ["YamlItemStore", "InMemoryItemStore"]
