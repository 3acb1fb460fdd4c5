import random
import unittest

from whapp_media.errors import TrailerUnderflow
from whapp_media.trimmer import TrailerTrimmer


def run(trimmer, chunks):
    out = b"".join(trimmer.update(c) for c in chunks)
    return out + trimmer.finalize()


class TrailerTrimmerTests(unittest.TestCase):
    def test_strips_last_ten_bytes_for_random_chunkings(self):
        rng = random.Random(1234)
        for _ in range(200):
            data = bytes(rng.getrandbits(8) for _ in range(rng.randint(11, 600)))
            chunks = []
            pos = 0
            while pos < len(data):
                size = rng.randint(0, 53)
                chunks.append(data[pos:pos + size])
                pos += size
            with self.subTest(length=len(data), chunks=len(chunks)):
                self.assertEqual(run(TrailerTrimmer(10, capacity=64), chunks), data[:-10])

    def test_single_byte_chunks(self):
        data = bytes(range(100))
        self.assertEqual(run(TrailerTrimmer(10, capacity=16), [bytes([b]) for b in data]), data[:-10])

    def test_chunk_larger_than_capacity(self):
        data = bytes(range(256)) * 4
        self.assertEqual(run(TrailerTrimmer(10, capacity=32), [data[:5], data[5:900], data[900:]]), data[:-10])

    def test_overflow_by_one_byte_keeps_trailer(self):
        data = bytes(range(66))
        trimmer = TrailerTrimmer(10, capacity=64)
        self.assertEqual(trimmer.update(data[:63]), b"")
        self.assertEqual(trimmer.update(data[63:65]), data[:55])
        self.assertEqual(trimmer.update(data[65:]), b"")
        self.assertEqual(trimmer.finalize(), data[55:56])

    def test_holds_bytes_until_capacity_exceeded(self):
        trimmer = TrailerTrimmer(10, capacity=64)
        self.assertEqual(trimmer.update(b"a" * 64), b"")
        self.assertEqual(trimmer.update(b"b"), b"a" * 55)

    def test_exactly_one_byte_over_trailer(self):
        self.assertEqual(run(TrailerTrimmer(10, capacity=64), [b"0123456789X"]), b"0")

    def test_underflow(self):
        for length in (0, 1, 9, 10):
            with self.subTest(length=length):
                trimmer = TrailerTrimmer(10, capacity=64)
                self.assertEqual(trimmer.update(b"x" * length), b"")
                with self.assertRaises(TrailerUnderflow):
                    trimmer.finalize()

    def test_empty_stream_underflows(self):
        with self.assertRaises(TrailerUnderflow):
            TrailerTrimmer().finalize()

    def test_capacity_must_exceed_trailer(self):
        with self.assertRaises(ValueError):
            TrailerTrimmer(10, capacity=10)

    def test_default_capacity(self):
        self.assertEqual(TrailerTrimmer().capacity, 64 * 1024)
        self.assertEqual(TrailerTrimmer().n, 10)


if __name__ == "__main__":
    unittest.main()
