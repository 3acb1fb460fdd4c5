from .download import HttpByteSource, decrypt_media, stream_decrypt
from .errors import (
    CipherFailure,
    KeyMaterialInvalid,
    MediaDecryptError,
    MediaReferenceMissing,
    SinkFailure,
    SourceFailure,
    TrailerUnderflow,
    UnsupportedMediaType,
)
from .keys import derive_keys
from .models import CanonicalPayload, DecryptionResult, DerivedKeySet, MediaKind, MediaReference
from .normalize import normalize_payload
from .progress import ProgressObserver
from .trimmer import TrailerTrimmer

__all__ = [
    "CanonicalPayload",
    "CipherFailure",
    "DecryptionResult",
    "DerivedKeySet",
    "HttpByteSource",
    "KeyMaterialInvalid",
    "MediaDecryptError",
    "MediaKind",
    "MediaReference",
    "MediaReferenceMissing",
    "ProgressObserver",
    "SinkFailure",
    "SourceFailure",
    "TrailerTrimmer",
    "TrailerUnderflow",
    "UnsupportedMediaType",
    "decrypt_media",
    "derive_keys",
    "normalize_payload",
    "stream_decrypt",
]
