"""Content-addressed naming of processed archives."""

PROCESSED_PREFIX = "processed"
ARCHIVE_EXTENSION = "zip"


def derive_output_key(digest: str, extension: str = ARCHIVE_EXTENSION) -> str:
    """Names the archive after the content digest, e.g. processed/<digest>.zip."""
    return f"{PROCESSED_PREFIX}/{digest}.{extension.lstrip('.')}"
