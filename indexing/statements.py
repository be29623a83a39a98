"""SQL for building and dropping indexes without locking the table

See https://www.postgresql.org/docs/current/sql-createindex.html#SQL-CREATEINDEX-CONCURRENTLY

Neither statement may run inside a transaction block.
"""
from __future__ import annotations

from indexing.descriptor import IndexDescriptor


SQL_CREATE_INDEX_CONCURRENTLY = 'CREATE {unique}INDEX CONCURRENTLY {name} ON {table}({columns});'
SQL_DROP_INDEX_CONCURRENTLY = 'DROP INDEX CONCURRENTLY {if_exists}{name};'


def quote_identifier(identifier: str) -> str:
    return '"{}"'.format(identifier.replace('"', '""'))


def create_index_concurrently(descriptor: IndexDescriptor) -> str:
    return SQL_CREATE_INDEX_CONCURRENTLY.format(
        unique='UNIQUE ' if descriptor.unique else '',
        name=quote_identifier(descriptor.name),
        table=descriptor.table,
        columns=', '.join(quote_identifier(_column) for _column in descriptor.columns),
    )


def drop_index_concurrently(name: str, if_exists: bool = True, schema: str | None = None) -> str:
    _name = quote_identifier(name)
    if schema:
        _name = '{}.{}'.format(quote_identifier(schema), _name)
    return SQL_DROP_INDEX_CONCURRENTLY.format(
        if_exists='IF EXISTS ' if if_exists else '',
        name=_name,
    )
