from stayhub.infrastructure.db.repositories.notification_sink_sql import NotificationSinkSQL
from stayhub.infrastructure.db.repositories.persistence_store_sql import PersistenceStoreSQL
from stayhub.infrastructure.db.repositories.user_directory_sql import UserDirectorySQL

__all__ = ["NotificationSinkSQL", "PersistenceStoreSQL", "UserDirectorySQL"]
