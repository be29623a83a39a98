from __future__ import annotations
import dataclasses
import typing

from django.core.exceptions import FieldDoesNotExist

from indexing.exceptions import IndexDescriptorError


# NAMEDATALEN - 1
MAX_IDENTIFIER_LENGTH = 63


@dataclasses.dataclass(frozen=True)
class IndexDescriptor:
    """What to index: a table, its columns (in order) and the index name
    """
    table: str
    columns: tuple[str, ...]
    name: str
    unique: bool = False

    def __post_init__(self):
        # accept any iterable of columns, store a tuple
        object.__setattr__(self, 'columns', tuple(self.columns))
        if not self.table:
            raise IndexDescriptorError('An index needs a target table')
        if not self.columns:
            raise IndexDescriptorError(f'Index "{self.name}" needs at least one column')
        if len(set(self.columns)) != len(self.columns):
            raise IndexDescriptorError(f'Index "{self.name}" lists a column more than once: {self.columns}')
        if not self.name:
            raise IndexDescriptorError(f'An index on {self.table} needs a name')
        if len(self.name.encode()) > MAX_IDENTIFIER_LENGTH:
            raise IndexDescriptorError(
                f'Index name "{self.name}" is longer than {MAX_IDENTIFIER_LENGTH} bytes'
                ' (postgres would silently truncate it)'
            )
        for _identifier in (self.table, self.name, *self.columns):
            if not _identifier or '\x00' in _identifier:
                raise IndexDescriptorError(f'Bad identifier {_identifier!r} in index "{self.name}"')

    ###
    # class methods

    @classmethod
    def for_model(cls, model, fields: typing.Iterable[str], name: str, unique: bool = False) -> IndexDescriptor:
        _columns = []
        for _field_name in fields:
            try:
                _field = model._meta.get_field(_field_name)
            except FieldDoesNotExist as e:
                raise IndexDescriptorError(f'{model.__name__} has no field "{_field_name}"') from e
            if not getattr(_field, 'column', None):
                raise IndexDescriptorError(f'{model.__name__}.{_field_name} has no database column')
            _columns.append(_field.column)
        return cls(table=model._meta.db_table, columns=_columns, name=name, unique=unique)

    @classmethod
    def from_index(cls, model, index, unique: bool = False) -> IndexDescriptor:
        if index.expressions:
            raise IndexDescriptorError(f'Index "{index.name}": expression indexes are not supported')
        if index.condition is not None:
            raise IndexDescriptorError(f'Index "{index.name}": partial indexes are not supported')
        if index.opclasses or index.include or getattr(index, 'db_tablespace', None):
            raise IndexDescriptorError(f'Index "{index.name}": opclasses, include and tablespaces are not supported')
        if any(_field_name.startswith('-') for _field_name in index.fields):
            raise IndexDescriptorError(f'Index "{index.name}": descending columns are not supported')
        if not index.name:
            raise IndexDescriptorError(f'Indexes on {model.__name__} must be named')
        return cls.for_model(model, index.fields, index.name, unique=unique)
