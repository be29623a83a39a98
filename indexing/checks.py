from django.core import checks
from django.db import connections


def _concurrent_operations(operations):
    from django.contrib.postgres.operations import AddIndexConcurrently
    from django.db.migrations.operations import RunSQL, SeparateDatabaseAndState
    from indexing.operations import AddConcurrentIndex

    for operation in operations:
        if isinstance(operation, (AddConcurrentIndex, AddIndexConcurrently)):
            yield operation
        elif isinstance(operation, SeparateDatabaseAndState):
            yield from _concurrent_operations(operation.database_operations)
        elif isinstance(operation, RunSQL):
            sqls = [operation.sql] if isinstance(operation.sql, str) else operation.sql
            if any(isinstance(sql, str) and 'CONCURRENTLY' in sql.upper() for sql in sqls):
                yield operation


def check_concurrent_index_migrations_nonatomic(app_configs, **kwargs):
    from django.db.migrations.loader import MigrationLoader

    app_labels = None if app_configs is None else {app_config.label for app_config in app_configs}
    loader = MigrationLoader(None, ignore_no_migrations=True)
    errors = []
    for (app_label, migration_name), migration in sorted(loader.disk_migrations.items()):
        if app_labels is not None and app_label not in app_labels:
            continue
        if not migration.atomic:
            continue
        if any(True for _ in _concurrent_operations(migration.operations)):
            errors.append(
                checks.Error(
                    'Migration {}.{} builds an index concurrently inside a transaction'.format(app_label, migration_name),
                    hint='Set "atomic = False" on the migration (and keep other schema changes in a separate migration)',
                    obj=migration,
                    id='indexing.E001',
                )
            )
    return errors


def check_no_invalid_indexes(app_configs, databases=None, **kwargs):
    errors = []
    for alias in databases or ():
        connection = connections[alias]
        if not hasattr(connection.introspection, 'get_invalid_indexes'):
            continue
        with connection.cursor() as cursor:
            invalid_indexes = connection.introspection.get_invalid_indexes(cursor)
        for index_name, table_name in invalid_indexes:
            errors.append(
                checks.Warning(
                    'Index {} on {} is invalid (left behind by an interrupted concurrent build)'.format(index_name, table_name),
                    hint='Drop it with `manage.py invalidindexes --drop --database {}` and rebuild it'.format(alias),
                    obj=index_name,
                    id='indexing.W001',
                )
            )
    return errors
