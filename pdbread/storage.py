"""
Opening PDB text from local or remote locations.

Local paths use plain ``open()``; remote URIs (s3://, gs://, http://, ...)
go through fsspec, which is only needed when a remote path is used.
Files ending in ``.gz`` are decompressed transparently.

Usage::

    from pdbread.storage import open_text

    with open_text("1abc.pdb.gz") as f:
        for line in f:
            ...
"""

from __future__ import annotations
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, TextIO
import gzip
import io
import os


def is_remote(path: str) -> bool:
    """Check if a path is a remote URI (s3://, gs://, az://, http://, etc.)."""
    return "://" in str(path) and not str(path).startswith("file://")


def _get_fs(path: str, storage_options: Optional[dict] = None):
    """Get an fsspec filesystem for the given path."""
    try:
        import fsspec
    except ImportError:
        raise ImportError(
            f"fsspec is required for remote path '{path}'. "
            "Install with: pip install 'pdbread[streaming]'"
        ) from None
    opts = storage_options or {}
    return fsspec.core.url_to_fs(path, **opts)


@contextmanager
def open_binary(path: str, storage_options: Optional[dict] = None) -> Iterator:
    """Open ``path`` for binary reading on any supported filesystem."""
    if not is_remote(str(path)):
        local_path = Path(os.path.expanduser(str(path)).removeprefix("file://"))
        with open(local_path, "rb") as f:
            yield f
    else:
        fs, fs_path = _get_fs(str(path), storage_options)
        with fs.open(fs_path, "rb") as f:
            yield f


@contextmanager
def open_text(
    path: str,
    storage_options: Optional[dict] = None,
    encoding: str = "utf-8",
) -> Iterator[TextIO]:
    """
    Open ``path`` as a text stream, decompressing ``.gz`` files.

    Args:
        path: Local or remote file path.
        storage_options: kwargs passed to the fsspec filesystem
            (e.g. ``{"endpoint_url": "http://localhost:9000"}`` for MinIO).
        encoding: Text encoding; undecodable bytes are replaced.

    Yields:
        Text stream yielding one line at a time.
    """
    with open_binary(path, storage_options) as raw:
        if str(path).endswith(".gz"):
            raw = gzip.GzipFile(fileobj=raw)
        with io.TextIOWrapper(raw, encoding=encoding, errors="replace") as text:
            yield text
