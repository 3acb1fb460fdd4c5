import sys


def print_progress(seen, total, done=False, stream=None):
    stream = sys.stdout if stream is None else stream
    progress = f"{seen / total * 100:.2f}" if total else "unknown"
    stream.write(f"\rDownloading: {progress}%")
    if done:
        stream.write("\n")
    stream.flush()


class ProgressObserver:
    """Passthrough stage counting bytes against an optional declared total.

    ``callback(seen, total)`` runs for every chunk and once more with
    ``done=True`` when the stream ends. A total of 0 or None means unknown.
    """

    def __init__(self, total=None, callback=None):
        self.total = total or None
        self.seen = 0
        self.callback = callback

    def update(self, chunk):
        self.seen += len(chunk)
        if self.callback is not None:
            self.callback(self.seen, self.total)
        return chunk

    def finalize(self):
        if self.callback is not None:
            self.callback(self.seen, self.total, done=True)
        return b""
