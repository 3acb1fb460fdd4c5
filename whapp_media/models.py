from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MediaKind(str, Enum):
    AUDIO = "audio"
    IMAGE = "image"
    VIDEO = "video"
    DOCUMENT = "document"
    STICKER = "sticker"


@dataclass(frozen=True)
class MediaReference:
    """One media object as described by a message, e.g. an imageMessage."""

    media_key: Optional[str]
    url: Optional[str] = None
    direct_path: Optional[str] = None
    mimetype: Optional[str] = None
    file_name: Optional[str] = None
    caption: Optional[str] = None
    file_length: Optional[str] = None
    file_sha256: Optional[str] = None
    file_enc_sha256: Optional[str] = None
    media_key_timestamp: Optional[str] = None

    @classmethod
    def from_message(cls, media):
        return cls(
            media_key=media.get("mediaKey"),
            url=media.get("url") or media.get("URL"),
            direct_path=media.get("directPath"),
            mimetype=media.get("mimetype"),
            file_name=media.get("fileName"),
            caption=media.get("caption"),
            file_length=media.get("fileLength"),
            file_sha256=media.get("fileSha256"),
            file_enc_sha256=media.get("fileEncSha256"),
            media_key_timestamp=media.get("mediaKeyTimestamp"),
        )


@dataclass(frozen=True)
class CanonicalPayload:
    kind: MediaKind
    reference: Optional[MediaReference]
    caption: Optional[str] = None


@dataclass(frozen=True)
class DerivedKeySet:
    iv: bytes
    cipher_key: bytes
    # HMAC key for the trailing tag, never checked
    mac_key: bytes


@dataclass(frozen=True)
class DecryptionResult:
    output_path: str
    media_type: MediaKind
    mime_type: str
    file_name: str
    caption: Optional[str] = None

    def to_dict(self):
        return {
            "outputPath": self.output_path,
            "mediaType": self.media_type.value,
            "mimeType": self.mime_type,
            "fileName": self.file_name,
            "caption": self.caption,
        }
