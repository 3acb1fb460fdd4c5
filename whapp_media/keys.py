import binascii
from base64 import b64decode

from axolotl.kdf.hkdfv3 import HKDFv3
from axolotl.util.byteutil import ByteUtil

from .errors import KeyMaterialInvalid
from .models import DerivedKeySet, MediaKind

MEDIA_KEY_SIZE = 32
EXPANDED_SIZE = 112

INFO_MAP = {
    MediaKind.AUDIO: b"WhatsApp Audio Keys",
    MediaKind.IMAGE: b"WhatsApp Image Keys",
    MediaKind.VIDEO: b"WhatsApp Video Keys",
    MediaKind.DOCUMENT: b"WhatsApp Document Keys",
    MediaKind.STICKER: b"WhatsApp Image Keys",
}


def decode_media_key(media_key):
    if not media_key or not isinstance(media_key, str):
        raise KeyMaterialInvalid("mediaKey not found in payload.")
    # accept url-safe and unpadded keys
    media_key = media_key.strip().replace("-", "+").replace("_", "/")
    media_key += "=" * (-len(media_key) % 4)
    try:
        raw = b64decode(media_key, validate=True)
    except (binascii.Error, ValueError) as e:
        raise KeyMaterialInvalid(f"mediaKey is not valid base64: {e}") from e

    if len(raw) != MEDIA_KEY_SIZE:
        raise KeyMaterialInvalid(f"mediaKey must be {MEDIA_KEY_SIZE} bytes, got {len(raw)}")
    return raw


def derive_keys(media_key, kind):
    """Expand a raw 32 byte media key with HKDF-SHA256 (zero salt) into IV, cipher key and MAC key."""
    if len(media_key) != MEDIA_KEY_SIZE:
        raise KeyMaterialInvalid(f"mediaKey must be {MEDIA_KEY_SIZE} bytes, got {len(media_key)}")

    # salt defaults to 32 zero bytes
    derivative = HKDFv3().deriveSecrets(media_key, INFO_MAP[MediaKind(kind)], EXPANDED_SIZE)

    iv, cipher_key, mac_key = ByteUtil.split(bytes(derivative), 16, 32, 64)
    return DerivedKeySet(iv=bytes(iv), cipher_key=bytes(cipher_key), mac_key=bytes(mac_key))
