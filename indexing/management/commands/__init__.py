from contextlib import contextmanager

from django.apps import apps
from django.core.management.base import BaseCommand, CommandError
from django.db import DEFAULT_DB_ALIAS

from indexing.descriptor import IndexDescriptor
from indexing.exceptions import IndexingError


class BaseIndexingCommand(BaseCommand):

    def add_descriptor_arguments(self, parser):
        parser.add_argument('model', help='Model to index, as app_label.ModelName')
        parser.add_argument('fields', nargs='+', help='Field(s) to index, in order')
        parser.add_argument('--name', required=True, help='Name of the new index')
        parser.add_argument('--unique', action='store_true', help='Create a unique index')

    def add_database_argument(self, parser):
        parser.add_argument('--database', default=DEFAULT_DB_ALIAS, help='Database to use (default "{}")'.format(DEFAULT_DB_ALIAS))

    def descriptor_from_options(self, options):
        try:
            model = apps.get_model(options['model'])
        except (LookupError, ValueError) as e:
            raise CommandError('Unknown model "{}": {}'.format(options['model'], e))
        with self.indexing_errors():
            return IndexDescriptor.for_model(model, options['fields'], options['name'], unique=options['unique'])

    @contextmanager
    def indexing_errors(self):
        try:
            yield
        except IndexingError as e:
            raise CommandError(str(e)) from e

    def input_confirm(self, prompt, default=None):
        result = input(prompt)
        if not result and default is not None:
            return default
        while len(result) < 1 or result[0].lower() not in 'yn':
            result = input('Please answer yes or no: ')
        return result[0].lower() == 'y'
