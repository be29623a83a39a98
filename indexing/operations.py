from django.db.migrations.operations import AddIndex

from indexing.descriptor import IndexDescriptor
from indexing.exceptions import AtomicExecutionError, ConcurrentIndexNotSupported
from indexing.issuer import ConcurrentIndexIssuer


class AddConcurrentIndex(AddIndex):
    """Add an index using Postgres' CONCURRENTLY (without locking the table)

    Migrations containing AddConcurrentIndex must have "atomic = False"
    See https://www.postgresql.org/docs/current/static/sql-createindex.html#SQL-CREATEINDEX-CONCURRENTLY

    For the above reason it is recommended to keep index creation and schema changes in separate migrations

        class Migration(migrations.Migration):
            atomic = False

            operations = [
                AddConcurrentIndex(
                    model_name='product',
                    index=models.Index(fields=['name'], name='name_idx'),
                ),
            ]

    `unique` only applies to the database; migration state records the plain models.Index
    """
    atomic = False

    def __init__(self, model_name, index, unique=False):
        super().__init__(model_name, index)
        self.unique = unique

    @property
    def migration_name_fragment(self):
        return 'concurrent_{}{}_{}'.format(
            'unique_' if self.unique else '',
            self.model_name_lower,
            self.index.name.lower(),
        )

    def reduce(self, operation, app_label):
        reduced = super().reduce(operation, app_label)
        # AddIndex.reduce rebuilds the operation (e.g. for RenameIndex) without `unique`
        if isinstance(reduced, list):
            for reduced_operation in reduced:
                if isinstance(reduced_operation, AddConcurrentIndex):
                    reduced_operation.unique = self.unique
        return reduced

    def deconstruct(self):
        name, args, kwargs = super().deconstruct()
        if self.unique:
            kwargs['unique'] = True
        return name, args, kwargs

    def describe(self):
        return 'Concurrently create {}index {} on field(s) {} of model {}'.format(
            'unique ' if self.unique else '',
            self.index.name,
            ', '.join(self.index.fields),
            self.model_name,
        )

    def database_forwards(self, app_label, schema_editor, from_state, to_state):
        self._assert_not_atomic(schema_editor)
        model = to_state.apps.get_model(app_label, self.model_name)
        if not self.allow_migrate_model(schema_editor.connection.alias, model):
            return
        descriptor = IndexDescriptor.from_index(model, self.index, unique=self.unique)
        if schema_editor.collect_sql:
            schema_editor.create_index_concurrently(descriptor)
        else:
            ConcurrentIndexIssuer(using=schema_editor.connection.alias).issue(descriptor)

    def database_backwards(self, app_label, schema_editor, from_state, to_state):
        self._assert_not_atomic(schema_editor)
        model = from_state.apps.get_model(app_label, self.model_name)
        if self.allow_migrate_model(schema_editor.connection.alias, model):
            schema_editor.drop_index_concurrently(self.index.name)

    def _assert_not_atomic(self, schema_editor):
        if schema_editor.atomic_migration:
            raise AtomicExecutionError('Migrations creating concurrent indexes must have "atomic = False"')
        if not hasattr(schema_editor, 'create_index_concurrently'):
            raise ConcurrentIndexNotSupported('Concurrent index creation not supported by {}'.format(schema_editor))
