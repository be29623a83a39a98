from indexing.issuer import ConcurrentIndexIssuer
from indexing.management.commands import BaseIndexingCommand


class Command(BaseIndexingCommand):
    help = 'Print the CREATE INDEX CONCURRENTLY statement for the given model fields, without running it'

    output_transaction = False

    def add_arguments(self, parser):
        self.add_descriptor_arguments(parser)

    def handle(self, *args, **options):
        descriptor = self.descriptor_from_options(options)
        return ConcurrentIndexIssuer().preview(descriptor)
