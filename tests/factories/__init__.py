import factory
from factory.django import DjangoModelFactory
import faker

from catalog import models as catalog_db


fake = faker.Faker()


class ProductFactory(DjangoModelFactory):
    name = factory.Faker('catch_phrase')
    sku = factory.Sequence(lambda x: 'SKU-{:06d}'.format(x))

    class Meta:
        model = catalog_db.Product
