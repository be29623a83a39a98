class IndexingError(Exception):
    pass


class IndexDescriptorError(IndexingError):
    pass


class ConcurrentIndexNotSupported(IndexingError):
    pass


class AtomicExecutionError(IndexingError):
    """CREATE/DROP INDEX CONCURRENTLY was requested inside a transaction.
    """
    pass


class IndexNameConflict(IndexingError):
    """The index name is already taken in the target schema.
    """
    pass


class InvalidIndexError(IndexingError):
    """A concurrent build was interrupted and left an invalid index behind.

    The index must be dropped before a build with the same name can succeed.
    """

    def __init__(self, index_name, message=None):
        self.index_name = index_name
        super().__init__(message or 'Index "{}" is invalid; drop it before retrying'.format(index_name))
