import logging

import pytest

from django.db import connection

from indexing.issuer import ConcurrentIndexIssuer
from indexing import statements

from tests import factories


logger = logging.getLogger(__name__)


@pytest.fixture
def issuer():
    return ConcurrentIndexIssuer()


@pytest.fixture
def drop_after():
    """names of indexes to drop once the test is done

    indexes survive the table flush between transactional tests
    """
    index_names = []
    yield index_names
    with connection.cursor() as cursor:
        for index_name in index_names:
            cursor.execute('DROP INDEX IF EXISTS {}'.format(statements.quote_identifier(index_name)))
            logger.debug('dropped %s after test', index_name)


@pytest.fixture
def products():
    return factories.ProductFactory.create_batch(5)


@pytest.fixture
def duplicate_skus():
    # a unique index built over these fails partway through, leaving it invalid
    return [
        factories.ProductFactory(sku='SKU-DUPLICATE'),
        factories.ProductFactory(sku='SKU-DUPLICATE'),
        factories.ProductFactory(sku='SKU-UNIQUE'),
    ]
