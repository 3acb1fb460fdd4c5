import os
from base64 import b64encode

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from whapp_media.keys import derive_keys

MEDIA_KEY = bytes(range(32))
MEDIA_KEY_B64 = b64encode(MEDIA_KEY).decode()


def encrypt_media(plaintext, kind, media_key=MEDIA_KEY, tag=None):
    keys = derive_keys(media_key, kind)
    padder = padding.PKCS7(128).padder()
    padded = padder.update(plaintext) + padder.finalize()
    encryptor = Cipher(algorithms.AES(keys.cipher_key), modes.CBC(keys.iv)).encryptor()
    tag = os.urandom(10) if tag is None else tag
    return encryptor.update(padded) + encryptor.finalize() + tag


def split_chunks(data, sizes):
    chunks = []
    pos = 0
    for size in sizes:
        if pos >= len(data):
            break
        chunks.append(data[pos:pos + size])
        pos += size
    if pos < len(data):
        chunks.append(data[pos:])
    return chunks


class MemorySource:
    def __init__(self, chunks, declared_length=None):
        self.chunks = list(chunks)
        self.declared_length = declared_length
        self.opened = False
        self.closed = False

    async def __aenter__(self):
        self.opened = True
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.closed = True

    async def __aiter__(self):
        for chunk in self.chunks:
            yield chunk
