import os
from dotenv import load_dotenv

load_dotenv()

MEDIA_HOST = os.getenv("WHAPP_MEDIA_HOST", "https://mmg.whatsapp.net")
OUTPUT_DIR = os.getenv("WHAPP_MEDIA_OUTPUT_DIR", "output")

# Trailer buffer capacity, must stay above the 10 byte tag
BUFFER_SIZE = int(os.getenv("WHAPP_MEDIA_BUFFER_SIZE", 64 * 1024))
CHUNK_SIZE = int(os.getenv("WHAPP_MEDIA_CHUNK_SIZE", 64 * 1024))

# Unset means the download may stall forever
_timeout = os.getenv("WHAPP_MEDIA_HTTP_TIMEOUT")
HTTP_TIMEOUT = float(_timeout) if _timeout else None

LOG_LEVEL = os.getenv("WHAPP_MEDIA_LOG_LEVEL", "INFO")

if BUFFER_SIZE <= 10:
    raise ValueError(f"WHAPP_MEDIA_BUFFER_SIZE must be larger than 10, got {BUFFER_SIZE}")
if CHUNK_SIZE <= 0:
    raise ValueError(f"WHAPP_MEDIA_CHUNK_SIZE must be positive, got {CHUNK_SIZE}")
