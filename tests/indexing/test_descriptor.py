import pytest

from django.db import models
from django.db.models.functions import Lower

from catalog.models import Product
from indexing.descriptor import IndexDescriptor
from indexing.exceptions import IndexDescriptorError


class TestIndexDescriptor:

    def test_columns_become_a_tuple(self):
        descriptor = IndexDescriptor('product', ['name', 'sku'], 'name_sku_idx')
        assert descriptor.columns == ('name', 'sku')
        assert descriptor.unique is False

    def test_frozen(self):
        descriptor = IndexDescriptor('product', ['name'], 'name_idx')
        with pytest.raises(AttributeError):
            descriptor.name = 'other_idx'

    @pytest.mark.parametrize('table, columns, name, message', [
        ('', ['name'], 'name_idx', 'target table'),
        ('product', [], 'name_idx', 'at least one column'),
        ('product', ['name', 'name'], 'name_idx', 'more than once'),
        ('product', ['name'], '', 'needs a name'),
        ('product', ['name'], 'x' * 64, 'longer than 63 bytes'),
        ('product', ['na\x00me'], 'name_idx', 'Bad identifier'),
    ])
    def test_invalid(self, table, columns, name, message):
        with pytest.raises(IndexDescriptorError, match=message):
            IndexDescriptor(table, columns, name)

    def test_name_length_counts_bytes(self):
        IndexDescriptor('product', ['name'], 'x' * 63)
        with pytest.raises(IndexDescriptorError):
            IndexDescriptor('product', ['name'], 'é' * 32)


class TestFromModel:

    def test_for_model(self):
        descriptor = IndexDescriptor.for_model(Product, ['sku', 'name'], 'sku_name_idx', unique=True)
        assert descriptor == IndexDescriptor('product', ('sku', 'name'), 'sku_name_idx', unique=True)

    def test_for_model_unknown_field(self):
        with pytest.raises(IndexDescriptorError, match='has no field "price"'):
            IndexDescriptor.for_model(Product, ['price'], 'price_idx')

    def test_from_index(self):
        index = models.Index(fields=['name'], name='name_idx')
        assert IndexDescriptor.from_index(Product, index) == IndexDescriptor('product', ['name'], 'name_idx')

    @pytest.mark.parametrize('index', [
        models.Index(fields=['-name'], name='name_desc_idx'),
        models.Index(fields=['name'], name='name_partial_idx', condition=models.Q(sku='')),
        models.Index(Lower('name'), name='name_lower_idx'),
        models.Index(fields=['name'], name='name_include_idx', include=['sku']),
        models.Index(fields=['name'], name='name_ops_idx', opclasses=['text_pattern_ops']),
    ])
    def test_from_index_unsupported(self, index):
        with pytest.raises(IndexDescriptorError, match='not supported'):
            IndexDescriptor.from_index(Product, index)
