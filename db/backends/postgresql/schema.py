import logging

from django.db.backends.postgresql.schema import DatabaseSchemaEditor as PostgresDatabaseSchemaEditor

from indexing import statements
from indexing.exceptions import AtomicExecutionError


logger = logging.getLogger(__name__)


class DatabaseSchemaEditor(PostgresDatabaseSchemaEditor):

    def _assert_not_atomic(self, action):
        # reject before anything reaches the server
        if self.atomic_migration or (not self.collect_sql and self.connection.in_atomic_block):
            raise AtomicExecutionError(
                'Cannot {} inside a transaction; migrations doing so must have "atomic = False"'.format(action)
            )

    def create_index_concurrently(self, descriptor):
        self._assert_not_atomic('CREATE INDEX CONCURRENTLY')
        sql = statements.create_index_concurrently(descriptor)
        logger.debug('Creating index %s on %s: %s', descriptor.name, descriptor.table, sql)
        self.execute(sql, params=None)

    def drop_index_concurrently(self, name, if_exists=True, schema=None):
        self._assert_not_atomic('DROP INDEX CONCURRENTLY')
        self.execute(statements.drop_index_concurrently(name, if_exists=if_exists, schema=schema), params=None)
