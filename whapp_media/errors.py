class MediaDecryptError(Exception):
    pass


class UnsupportedMediaType(MediaDecryptError):
    pass


class MediaReferenceMissing(MediaDecryptError):
    pass


class KeyMaterialInvalid(MediaDecryptError):
    pass


class SourceFailure(MediaDecryptError):
    pass


class TrailerUnderflow(MediaDecryptError):
    pass


class CipherFailure(MediaDecryptError):
    pass


class SinkFailure(MediaDecryptError):
    pass
