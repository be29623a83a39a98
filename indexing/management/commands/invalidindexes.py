from indexing.issuer import ConcurrentIndexIssuer
from indexing.management.commands import BaseIndexingCommand


class Command(BaseIndexingCommand):
    help = 'List (and optionally drop) indexes left invalid by interrupted concurrent builds'

    def add_arguments(self, parser):
        self.add_database_argument(parser)
        parser.add_argument('--drop', action='store_true', help='Drop each invalid index (concurrently)')
        parser.add_argument('--no-input', action='store_false', dest='interactive', help='Do not ask for confirmation before dropping')

    def handle(self, *args, **options):
        issuer = ConcurrentIndexIssuer(using=options['database'])

        with self.indexing_errors():
            invalid_indexes = issuer.invalid_indexes()

        if not invalid_indexes:
            self.stdout.write(self.style.SUCCESS('No invalid indexes'))
            return

        for index_name, table_name in invalid_indexes:
            self.stdout.write('{} on {}'.format(index_name, table_name))

        if not options['drop']:
            return

        if options['interactive'] and not self.input_confirm('Drop {} invalid index(es)? [y/N] '.format(len(invalid_indexes)), default=False):
            self.stdout.write('Not dropping anything', style_func=self.style.NOTICE)
            return

        for index_name, _ in invalid_indexes:
            with self.indexing_errors():
                issuer.drop_invalid(index_name)
            self.stdout.write(self.style.SUCCESS('Dropped {}'.format(index_name)))
