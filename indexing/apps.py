from django.apps import AppConfig
from django.core import checks
from indexing.checks import check_concurrent_index_migrations_nonatomic, check_no_invalid_indexes


class IndexingConfig(AppConfig):
    name = 'indexing'

    def ready(self):
        checks.register(check_concurrent_index_migrations_nonatomic)
        checks.register(check_no_invalid_indexes, checks.Tags.database)
