import asyncio
import logging
import os
import time

import aiohttp
from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from . import config
from .errors import (
    CipherFailure,
    MediaDecryptError,
    MediaReferenceMissing,
    SinkFailure,
    SourceFailure,
    UnsupportedMediaType,
)
from .keys import decode_media_key, derive_keys
from .models import DecryptionResult
from .normalize import normalize_payload
from .progress import ProgressObserver, print_progress
from .trimmer import MAC_SIZE, TrailerTrimmer

logger = logging.getLogger(__name__)

DEFAULT_MIME = "application/octet-stream"


class HttpByteSource:
    """GET ``url`` and yield the body in chunks.

    Use as ``async with``; ``declared_length`` is the Content-Length, if any.
    """

    def __init__(self, url, chunk_size=None, timeout=None):
        self.url = url
        self.chunk_size = chunk_size or config.CHUNK_SIZE
        self.timeout = config.HTTP_TIMEOUT if timeout is None else timeout
        self.declared_length = None
        self._session = None
        self._resp = None

    async def __aenter__(self):
        self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
        try:
            self._resp = await self._session.get(self.url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            await self._session.close()
            raise SourceFailure(f"Failed to download media: {e}") from e

        if self._resp.status >= 300:
            status = self._resp.status
            await self.__aexit__(None, None, None)
            raise SourceFailure(f"Failed to download media. Status code: {status}")

        self.declared_length = self._resp.content_length
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if self._resp is not None:
            self._resp.release()
            self._resp = None
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def __aiter__(self):
        try:
            async for chunk in self._resp.content.iter_chunked(self.chunk_size):
                yield chunk
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise SourceFailure(f"Download interrupted: {e}") from e


class AesCbcDecryptor:
    """AES-256-CBC decrypt with PKCS7 padding removed, as an update/finalize stage."""

    def __init__(self, keys):
        cr_obj = Cipher(algorithms.AES(keys.cipher_key), modes.CBC(keys.iv), backend=default_backend())
        self._decryptor = cr_obj.decryptor()
        self._unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()

    def update(self, chunk):
        return self._unpadder.update(self._decryptor.update(chunk))

    def finalize(self):
        try:
            res = self._unpadder.update(self._decryptor.finalize())
            return res + self._unpadder.finalize()
        except ValueError as e:
            raise CipherFailure(f"Failed to decrypt media: {e}") from e


def _write(sink, data):
    # blocking write, so a slow disk also stalls the download
    try:
        sink.write(data)
    except OSError as e:
        raise SinkFailure(f"Failed to write output: {e}") from e


async def stream_decrypt(chunks, sink, keys, total=None, on_progress=None, capacity=None):
    """Run ``chunks`` through progress, trailer removal and decryption into ``sink``.

    Each chunk is written before the next one is read, so a slow sink slows
    down the source. Returns the number of plaintext bytes written.
    """
    stages = [
        ProgressObserver(total, on_progress),
        TrailerTrimmer(MAC_SIZE, capacity),
        AesCbcDecryptor(keys),
    ]
    written = 0

    async for chunk in chunks:
        for stage in stages:
            chunk = stage.update(chunk)
            if not chunk:
                break
        else:
            _write(sink, chunk)
            written += len(chunk)

    tail = b""
    for stage in stages:
        tail = (stage.update(tail) if tail else b"") + stage.finalize()
    if tail:
        _write(sink, tail)
        written += len(tail)

    return written


def resolve_url(reference, host=None):
    if reference.url:
        return reference.url
    if reference.direct_path:
        host = config.MEDIA_HOST if host is None else host
        return host.rstrip("/") + "/" + reference.direct_path.lstrip("/")
    raise MediaReferenceMissing("URL or directPath not found in payload.")


def resolve_file_name(reference):
    if reference.file_name:
        name = os.path.basename(reference.file_name.split(";")[0].strip())
        if name:
            return name

    clean_mime = (reference.mimetype or DEFAULT_MIME).split(";")[0].strip()
    _, _, extension = clean_mime.partition("/")
    return f"media_{int(time.time() * 1000)}.{extension or 'bin'}"


def _open_sink(output_dir, file_name):
    try:
        os.makedirs(output_dir, exist_ok=True)
        return open(os.path.join(output_dir, file_name), "wb")
    except OSError as e:
        raise SinkFailure(f"Failed to open output file: {e}") from e


async def decrypt_media(payload, output_dir=None, source_factory=HttpByteSource,
                        on_progress=print_progress, host=None):
    """Download the media referenced by ``payload`` and decrypt it into ``output_dir``.

    ``source_factory`` is called with the resolved URL and must return an
    async context manager that iterates over byte chunks and exposes
    ``declared_length``.
    """
    output_dir = config.OUTPUT_DIR if output_dir is None else output_dir

    try:
        canonical = normalize_payload(payload)
        if canonical.reference is None:
            raise UnsupportedMediaType("Unsupported or missing media type.")
        reference = canonical.reference
        logger.info(f"Resolved media type: {canonical.kind.value}")

        url = resolve_url(reference, host)
        keys = derive_keys(decode_media_key(reference.media_key), canonical.kind)

        file_name = resolve_file_name(reference)
        output_path = os.path.join(output_dir, file_name)
        logger.debug(f"Writing {canonical.kind.value} to {output_path}")

        logger.info(f"Downloading media from: {url}")
        async with source_factory(url) as source:
            logger.debug(f"Declared length: {source.declared_length}")
            with _open_sink(output_dir, file_name) as sink:
                written = await stream_decrypt(source, sink, keys, source.declared_length, on_progress)
    except MediaDecryptError as e:
        logger.error(f"Media decryption failed: {type(e).__name__}: {e}")
        raise

    logger.info(f"Successfully decrypted media ({written} bytes) to {output_path}")
    return DecryptionResult(
        output_path=output_path,
        media_type=canonical.kind,
        mime_type=reference.mimetype or DEFAULT_MIME,
        file_name=file_name,
        caption=canonical.caption,
    )
