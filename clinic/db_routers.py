"""
Database router for the optional read replica.

Enabled from settings when ``DB_REPLICA_URL`` is configured.  Plain reads
go to the ``replica`` alias; writes, migrations and anything done inside
the services' locked sections stay on ``default`` (the services pass
``using`` explicitly there).
"""
from __future__ import annotations

from django.conf import settings

PRIMARY = 'default'
REPLICA = 'replica'


class ReadReplicaRouter:
    def db_for_read(self, model, **hints):
        instance = hints.get('instance')
        if instance is not None and instance._state.db:
            return instance._state.db
        return REPLICA if REPLICA in settings.DATABASES else PRIMARY

    def db_for_write(self, model, **hints):
        return PRIMARY

    def allow_relation(self, obj1, obj2, **hints):
        # Both aliases point at the same data set.
        return True

    def allow_migrate(self, db, app_label, model_name=None, **hints):
        return db == PRIMARY
