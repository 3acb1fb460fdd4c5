from .models import CanonicalPayload, MediaKind, MediaReference

MEDIA_TYPES = {
    "audioMessage": MediaKind.AUDIO,
    "imageMessage": MediaKind.IMAGE,
    "videoMessage": MediaKind.VIDEO,
    "documentMessage": MediaKind.DOCUMENT,
    "stickerMessage": MediaKind.STICKER,
    "documentWithCaptionMessage": MediaKind.DOCUMENT,
}


def _is_image(media):
    return (media.get("mimetype") or "").startswith("image/")


def _inner_document(wrapper):
    return (wrapper.get("message") or {}).get("documentMessage")


def normalize_payload(payload):
    """Map the different message shapes onto one CanonicalPayload.

    Documents whose MIME type is an image are treated as images, since they
    are encrypted with the image key info. When no known media key exists the
    result is a document without a reference; callers decide how to fail.
    """
    message = payload.get("message") or {}

    wrapper = message.get("documentWithCaptionMessage")
    if wrapper and _inner_document(wrapper):
        doc = _inner_document(wrapper)
        caption = doc.get("caption") or wrapper.get("caption")
        kind = MediaKind.IMAGE if _is_image(doc) else MediaKind.DOCUMENT
        return CanonicalPayload(kind, MediaReference.from_message({**doc, "caption": caption}), caption)

    doc = message.get("documentMessage")
    if doc and _is_image(doc):
        return CanonicalPayload(MediaKind.IMAGE, MediaReference.from_message(doc), doc.get("caption"))

    type_key = next((k for k in message if k in MEDIA_TYPES), None)
    if type_key is not None:
        media = message[type_key]
        if media is None:
            return CanonicalPayload(MEDIA_TYPES[type_key], None)
        if type_key == "documentWithCaptionMessage":
            # wrapper without an inner document
            return CanonicalPayload(MEDIA_TYPES[type_key], None, media.get("caption"))
        return CanonicalPayload(MEDIA_TYPES[type_key], MediaReference.from_message(media), media.get("caption"))

    return CanonicalPayload(MediaKind.DOCUMENT, None)
