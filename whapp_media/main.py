import asyncio
import functools
import json
import logging
import sys

from . import config
from .download import decrypt_media
from .errors import MediaDecryptError
from .progress import print_progress

logger = logging.getLogger('whapp-media')


def ev(event, *arg):
    line = json.dumps({
        "event": event,
        "args": arg,
    }) + "\n"
    sys.stdout.write(line)
    sys.stdout.flush()


def read_payload(path):
    if path == "-":
        payload = json.load(sys.stdin)
    else:
        with open(path) as f:
            payload = json.load(f)

    if not isinstance(payload, dict):
        raise ValueError(f"payload must be a JSON object, got {type(payload).__name__}")
    return payload


async def download(path, output_dir):
    logger.debug(f"Reading payload from {path}")
    try:
        payload = read_payload(path)
    except (OSError, ValueError) as e:
        ev("download-failed", type(e).__name__, str(e))
        return 1

    try:
        res = await decrypt_media(payload, output_dir,
                                  on_progress=functools.partial(print_progress, stream=sys.stderr))
    except MediaDecryptError as e:
        ev("download-failed", type(e).__name__, str(e))
        return 1

    ev("download-ready", res.to_dict())
    return 0


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        sys.stderr.write("usage: python -m whapp_media <payload.json|-> [output_dir]\n")
        return 2

    logging.basicConfig(level=config.LOG_LEVEL, stream=sys.stderr,
                        format='%(asctime)s - %(name)s - [%(levelname)s] - %(message)s')

    output_dir = argv[1] if len(argv) > 1 else None
    return asyncio.run(download(argv[0], output_dir))
