from stayhub.infrastructure.in_memory.notification_sink import InMemoryNotificationSink
from stayhub.infrastructure.in_memory.persistence_store import InMemoryPersistenceStore
from stayhub.infrastructure.in_memory.user_directory import InMemoryUserDirectory

__all__ = [
    "InMemoryNotificationSink",
    "InMemoryPersistenceStore",
    "InMemoryUserDirectory",
]
