from django.db.backends.postgresql.base import DatabaseWrapper as PostgresqlDatabaseWrapper

from db.backends.postgresql.introspection import DatabaseIntrospection
from db.backends.postgresql.schema import DatabaseSchemaEditor


class DatabaseWrapper(PostgresqlDatabaseWrapper):
    introspection_class = DatabaseIntrospection
    SchemaEditorClass = DatabaseSchemaEditor
