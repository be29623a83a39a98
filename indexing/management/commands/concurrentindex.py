from indexing.issuer import ConcurrentIndexIssuer
from indexing.management.commands import BaseIndexingCommand


class Command(BaseIndexingCommand):
    help = 'Build an index on the given model fields with CREATE INDEX CONCURRENTLY (without locking the table)'

    def add_arguments(self, parser):
        self.add_descriptor_arguments(parser)
        self.add_database_argument(parser)
        parser.add_argument(
            '--recreate-invalid', action='store_true',
            help='If an invalid index by the same name was left behind by an interrupted build, drop it first',
        )

    def handle(self, *args, **options):
        descriptor = self.descriptor_from_options(options)
        issuer = ConcurrentIndexIssuer(using=options['database'])

        if options['verbosity'] > 1:
            self.stdout.write(issuer.preview(descriptor))

        with self.indexing_errors():
            state = issuer.issue(descriptor, recreate_invalid=options['recreate_invalid'])

        self.stdout.write(self.style.SUCCESS('Index {} on {} is {}'.format(descriptor.name, descriptor.table, state.value)))
