"""
Model package: SQLAlchemy entities plus the shared DBStorage instance.

`storage` is created and reloaded on import, driven by APP_ENV / DATABASE_URL.
"""
from models.db_storage import DBStorage

storage = DBStorage()
storage.reload()
