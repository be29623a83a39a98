from django.db.backends.postgresql.introspection import DatabaseIntrospection as PostgresDatabaseIntrospection

from indexing.states import IndexState


class DatabaseIntrospection(PostgresDatabaseIntrospection):

    # a concurrent build in progress also shows up as "not indisvalid"
    # so check pg_stat_progress_create_index (postgres 12+) to tell them apart
    sql_index_state = '''
        SELECT c.relkind,
               i.indisvalid,
               EXISTS (SELECT 1 FROM pg_stat_progress_create_index p WHERE p.index_relid = c.oid)
        FROM pg_class c
        JOIN pg_namespace n ON n.oid = c.relnamespace
        LEFT JOIN pg_index i ON i.indexrelid = c.oid
        WHERE c.relname = %s AND n.nspname = COALESCE(%s, current_schema())
    '''

    sql_invalid_indexes = '''
        SELECT c.relname, t.relname
        FROM pg_index i
        JOIN pg_class c ON c.oid = i.indexrelid
        JOIN pg_class t ON t.oid = i.indrelid
        JOIN pg_namespace n ON n.oid = c.relnamespace
        WHERE NOT i.indisvalid
          AND n.nspname = COALESCE(%s, current_schema())
          AND NOT EXISTS (SELECT 1 FROM pg_stat_progress_create_index p WHERE p.index_relid = c.oid)
        ORDER BY c.relname
    '''

    # to_regclass resolves an unqualified name through the whole search_path, like the statement itself
    sql_table_schema = '''
        SELECT n.nspname
        FROM pg_class c
        JOIN pg_namespace n ON n.oid = c.relnamespace
        WHERE c.oid = to_regclass(%s)
          AND c.relkind IN ('r', 'p', 'm')
    '''

    sql_table_columns = '''
        SELECT a.attname
        FROM pg_attribute a
        WHERE a.attrelid = to_regclass(%s)
          AND a.attnum > 0 AND NOT a.attisdropped
        ORDER BY a.attnum
    '''

    def get_index_state(self, cursor, name, schema=None):
        cursor.execute(self.sql_index_state, [name, schema])
        row = cursor.fetchone()
        if row is None:
            return IndexState.ABSENT
        relkind, is_valid, is_building = row
        if relkind not in ('i', 'I'):
            return IndexState.CONFLICT
        if is_valid:
            return IndexState.VALID
        if is_building:
            return IndexState.BUILDING
        return IndexState.INVALID

    def get_invalid_indexes(self, cursor, schema=None):
        """List (index name, table name) for every index left invalid by an interrupted build
        """
        cursor.execute(self.sql_invalid_indexes, [schema])
        return [tuple(row) for row in cursor.fetchall()]

    def get_table_schema(self, cursor, table):
        """Schema holding the table postgres would pick for `table`, or None if there is no such table
        """
        cursor.execute(self.sql_table_schema, [table])
        row = cursor.fetchone()
        return None if row is None else row[0]

    def get_table_column_names(self, cursor, table):
        cursor.execute(self.sql_table_columns, [table])
        return [row[0] for row in cursor.fetchall()]
