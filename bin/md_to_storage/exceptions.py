"""Errors raised while preparing markdown for Confluence storage format."""


class MdToStorageError(Exception):
    """Base class for md_to_storage errors."""


class FileReadError(MdToStorageError):
    """A linked file exists but could not be read."""


class MetadataExtractionError(MdToStorageError):
    """Metadata headers of a document are malformed."""


class RemoteLookupError(MdToStorageError):
    """Looking up the Confluence page behind a relative link failed."""
