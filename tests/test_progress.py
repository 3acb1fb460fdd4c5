import io
import unittest

from whapp_media.progress import ProgressObserver, print_progress


class ProgressObserverTests(unittest.TestCase):
    def test_passthrough_and_callbacks(self):
        calls = []
        observer = ProgressObserver(8, lambda seen, total, done=False: calls.append((seen, total, done)))
        self.assertEqual(observer.update(b"abc"), b"abc")
        self.assertEqual(observer.update(b"defgh"), b"defgh")
        self.assertEqual(observer.finalize(), b"")
        self.assertEqual(calls, [(3, 8, False), (8, 8, False), (8, 8, True)])

    def test_zero_total_is_unknown(self):
        self.assertIsNone(ProgressObserver(0).total)

    def test_print_progress(self):
        out = io.StringIO()
        print_progress(1, 4, stream=out)
        print_progress(4, None, done=True, stream=out)
        self.assertEqual(out.getvalue(), "\rDownloading: 25.00%\rDownloading: unknown%\n")


if __name__ == "__main__":
    unittest.main()
