import contextlib
import logging

from django.conf import settings
from django.db import DEFAULT_DB_ALIAS, DatabaseError, connections

from indexing import statements
from indexing.exceptions import (
    AtomicExecutionError,
    ConcurrentIndexNotSupported,
    IndexDescriptorError,
    IndexingError,
    IndexNameConflict,
    InvalidIndexError,
)
from indexing.states import IndexState


logger = logging.getLogger(__name__)


class ConcurrentIndexIssuer:
    """Build indexes with CREATE INDEX CONCURRENTLY and check they came out valid

    A concurrent build takes several passes over the table, each with its own
    snapshot, so it cannot run inside a transaction. If it is interrupted
    partway (cancelled, connection lost, a unique violation...) postgres
    leaves an INVALID index behind instead of rolling back; that index has to
    be dropped before a build with the same name can succeed.

    Nothing here drops and retries on its own unless asked to (`recreate_invalid`).
    """

    def __init__(self, using=DEFAULT_DB_ALIAS):
        self.using = using

    @property
    def connection(self):
        return connections[self.using]

    def preview(self, descriptor):
        return statements.create_index_concurrently(descriptor)

    def issue(self, descriptor, recreate_invalid=False):
        self._assert_not_atomic()

        with self.connection.cursor() as cursor:
            # the index lands in the same schema as its table
            schema = self._validate_columns(cursor, descriptor)
            state = self._introspection().get_index_state(cursor, descriptor.name, schema)

        if state is IndexState.INVALID:
            if not recreate_invalid:
                raise InvalidIndexError(descriptor.name)
            logger.warning('Dropping invalid index %s before rebuilding it on %s', descriptor.name, descriptor.table)
            self._drop(descriptor.name, schema)
        elif state is not IndexState.ABSENT:
            raise IndexNameConflict('"{}" already exists ({}); choose another index name'.format(descriptor.name, state.value))

        logger.info('Building index %s on %s (%s)', descriptor.name, descriptor.table, ', '.join(descriptor.columns))
        try:
            with self._lock_timeout():
                with self._schema_editor() as editor:
                    editor.create_index_concurrently(descriptor)
        except DatabaseError as e:
            if self._state_after_failure(descriptor.name, schema) is IndexState.INVALID:
                logger.error('Building index %s failed and left it invalid: %s', descriptor.name, e)
                raise InvalidIndexError(
                    descriptor.name,
                    'Building index "{}" failed and left an invalid index behind: {}'.format(descriptor.name, e),
                ) from e
            raise
        except KeyboardInterrupt:
            logger.warning('Interrupted while building index %s; it may have been left invalid', descriptor.name)
            raise

        state = self.state(descriptor.name, schema)
        if state is not IndexState.VALID:
            raise InvalidIndexError(descriptor.name, 'Index "{}" is {} after building it'.format(descriptor.name, state.value))
        logger.info('Index %s on %s is valid', descriptor.name, descriptor.table)
        return state

    def state(self, name, schema=None):
        with self.connection.cursor() as cursor:
            return self._introspection().get_index_state(cursor, name, schema)

    def invalid_indexes(self, schema=None):
        with self.connection.cursor() as cursor:
            return self._introspection().get_invalid_indexes(cursor, schema)

    def drop_invalid(self, name, schema=None):
        self._assert_not_atomic()
        state = self.state(name, schema)
        if state is not IndexState.INVALID:
            raise IndexingError('Refusing to drop "{}", it is {} not invalid'.format(name, state.value))
        logger.warning('Dropping invalid index %s', name)
        self._drop(name, schema)

    ###
    # private

    def _assert_not_atomic(self):
        connection = self.connection
        if connection.in_atomic_block or not connection.get_autocommit():
            raise AtomicExecutionError(
                'CONCURRENTLY cannot run inside a transaction; '
                'run it outside transaction.atomic() (or with "atomic = False" in migrations)'
            )

    def _introspection(self):
        introspection = self.connection.introspection
        if not hasattr(introspection, 'get_index_state'):
            raise ConcurrentIndexNotSupported('Concurrent index creation not supported by {}'.format(self.connection.vendor))
        return introspection

    @contextlib.contextmanager
    def _schema_editor(self):
        with self.connection.schema_editor(atomic=False) as editor:
            if not hasattr(editor, 'create_index_concurrently'):
                raise ConcurrentIndexNotSupported('Concurrent index creation not supported by {}'.format(editor))
            yield editor

    @contextlib.contextmanager
    def _lock_timeout(self):
        timeout = getattr(settings, 'CONCURRENT_INDEX_LOCK_TIMEOUT', 0)
        if not timeout:
            yield
            return
        with self.connection.cursor() as cursor:
            cursor.execute('SET lock_timeout = %s', [int(timeout)])
        try:
            yield
        finally:
            with self.connection.cursor() as cursor:
                cursor.execute('RESET lock_timeout')

    def _validate_columns(self, cursor, descriptor):
        introspection = self._introspection()
        schema = introspection.get_table_schema(cursor, descriptor.table)
        if schema is None:
            raise IndexDescriptorError('Table {} does not exist'.format(descriptor.table))
        columns = introspection.get_table_column_names(cursor, descriptor.table)
        missing = [column for column in descriptor.columns if column not in columns]
        if missing:
            raise IndexDescriptorError('Table {} has no column(s) {}'.format(descriptor.table, ', '.join(missing)))
        return schema

    def _drop(self, name, schema=None):
        with self._schema_editor() as editor:
            editor.drop_index_concurrently(name, schema=schema)

    def _state_after_failure(self, name, schema):
        try:
            return self.state(name, schema)
        except DatabaseError:
            # e.g. the connection is gone; the original error is more useful
            logger.exception('Could not check the state of index %s after a failed build', name)
            return None
