import os
import tempfile
import unittest
from ahcodec.codecs import (
    CompressedData,
    CompressedDataFile,
    CompressionStats,
    AdaptiveHuffmanCodec,
    AdaptiveHuffmanCodecFile,
    HEADER_SIZE,
)
from ahcodec.coders import pack_bits_to_bytes
from ahcodec.models import TreeSettings
from ahcodec.preprocessors import TextPreprocessor
from ahcodec.logger import Logger

AB_BITS = "01000001" + "0" + "01000010"


class TestCompressedData(unittest.TestCase):
    def setUp(self):
        self.compressed = CompressedData(
            preprocessor_code=3,
            version=1,
            symbol_width=8,
            tree_settings=TreeSettings(exchanges_enabled=False, max_propagation_depth=7, node_count_ceiling=40),
            bit_count=len(AB_BITS),
            data=pack_bits_to_bytes(AB_BITS),
            original_file_name='test_file.txt'
        )

    def test_bits(self):
        self.assertEqual(self.compressed.bits, AB_BITS)

    def test_serialization_deserialization(self):
        serialized = CompressedData.serialize(self.compressed)
        self.assertTrue(serialized.startswith(b"AHC"))
        deserialized = CompressedData.deserialize(serialized)
        self.assertEqual(self.compressed.preprocessor_code, deserialized.preprocessor_code)
        self.assertEqual(self.compressed.version, deserialized.version)
        self.assertEqual(self.compressed.symbol_width, deserialized.symbol_width)
        self.assertEqual(self.compressed.tree_settings, deserialized.tree_settings)
        self.assertEqual(self.compressed.bit_count, deserialized.bit_count)
        self.assertEqual(self.compressed.data, deserialized.data)
        self.assertEqual(self.compressed.original_file_name, deserialized.original_file_name)

    def test_no_file_name_and_no_ceiling(self):
        compressed = CompressedData(3, 1, 8, TreeSettings(), 0, b"")
        deserialized = CompressedData.deserialize(CompressedData.serialize(compressed))
        self.assertIsNone(deserialized.original_file_name)
        self.assertIsNone(deserialized.tree_settings.node_count_ceiling)
        self.assertEqual(deserialized.bits, "")

    def test_bad_signature(self):
        serialized = CompressedData.serialize(self.compressed)
        with self.assertRaises(ValueError):
            CompressedData.deserialize(b"XYZ" + serialized[3:])

    def test_truncated(self):
        serialized = CompressedData.serialize(self.compressed)
        for length in (0, HEADER_SIZE - 1, HEADER_SIZE + 2, HEADER_SIZE + 5, len(serialized) - 20, len(serialized) - 5):
            with self.assertRaises(ValueError):
                CompressedData.deserialize(serialized[:length])

    def test_invalid_fields(self):
        with self.assertRaises(ValueError):
            CompressedData(3, 2, 8, TreeSettings(), 0, b"")
        with self.assertRaises(ValueError):
            CompressedData(9, 1, 8, TreeSettings(), 0, b"")
        with self.assertRaises(ValueError):
            CompressedData(3, 1, 8, TreeSettings(), 9, b"\x00")
        with self.assertRaises(ValueError):
            CompressedData(3, 1, 8, TreeSettings(), 8, "x")

    def test_file_write_read(self):
        with tempfile.NamedTemporaryFile(delete=False) as temp_file:
            temp_file_name = temp_file.name
        try:
            CompressedDataFile.write_to_file(self.compressed, temp_file_name)
            read_data = CompressedDataFile.read_from_file(temp_file_name)
            self.assertEqual(self.compressed.data, read_data.data)
            self.assertEqual(self.compressed.bit_count, read_data.bit_count)
            self.assertEqual(self.compressed.original_file_name, read_data.original_file_name)
        finally:
            os.remove(temp_file_name)

    def test_read_missing_file(self):
        with self.assertRaises(ValueError):
            CompressedDataFile.read_from_file("/nonexistent/file.ahc")


class TestCompressionStats(unittest.TestCase):
    def test_ratio(self):
        stats = CompressionStats(88, 22)
        self.assertAlmostEqual(stats.ratio, 75.0)
        self.assertEqual(stats.saved_bits, 66)
        self.assertIn("75.00%", str(stats))

    def test_expansion(self):
        stats = CompressionStats(16, 17)
        self.assertAlmostEqual(stats.ratio, -6.25)
        self.assertEqual(stats.saved_bits, -1)

    def test_empty(self):
        self.assertEqual(CompressionStats(0, 0).ratio, 0.0)


class TestAdaptiveHuffmanCodec(unittest.TestCase):
    def setUp(self):
        self.codec = AdaptiveHuffmanCodec()
        self.logger = Logger()
        self.logger.display_progress = False

    def test_compress_known_stream(self):
        compressed = self.codec.compress(b"AB", logger=self.logger)
        self.assertEqual(compressed.preprocessor_code, 3)
        self.assertEqual(compressed.bit_count, 17)
        self.assertEqual(compressed.bits, AB_BITS)
        self.assertEqual(len(compressed.data), 3)

    def test_round_trip(self):
        data = b"MISSISSIPPI river, mississippi delta" * 3
        compressed = self.codec.compress(data, logger=self.logger)
        self.assertEqual(self.codec.decompress(compressed, logger=self.logger), data)
        self.assertGreater(self.codec.measure(data, compressed).ratio, 0)

    def test_round_trip_serialized(self):
        data = bytes(range(256))
        compressed = self.codec.compress(data, original_file_name="all.bin")
        restored = CompressedData.deserialize(CompressedData.serialize(compressed))
        self.assertEqual(restored.original_file_name, "all.bin")
        self.assertEqual(self.codec.decompress(restored), data)

    def test_empty(self):
        compressed = self.codec.compress(b"")
        self.assertEqual(compressed.bit_count, 0)
        self.assertEqual(self.codec.decompress(compressed), b"")

    def test_text_preprocessor_and_settings(self):
        data = "Grüße, 世界! Grüße!".encode("utf-8")
        settings = TreeSettings(exchanges_enabled=False)
        compressed = self.codec.compress(data, TextPreprocessor(), settings)
        self.assertEqual(compressed.preprocessor_code, 4)
        self.assertEqual(compressed.symbol_width, 21)
        self.assertFalse(compressed.tree_settings.exchanges_enabled)
        restored = CompressedData.deserialize(CompressedData.serialize(compressed))
        self.assertEqual(self.codec.decompress(restored), data)

    def test_invalid_input(self):
        with self.assertRaises(ValueError):
            self.codec.compress("text")
        with self.assertRaises(ValueError):
            self.codec.compress(b"AB", preprocessor="bytes")
        with self.assertRaises(ValueError):
            self.codec.decompress(b"AHC")


class TestAdaptiveHuffmanCodecFile(unittest.TestCase):
    def test_compress_decompress_file(self):
        codec = AdaptiveHuffmanCodecFile()
        data = b"abracadabra " * 50
        with tempfile.TemporaryDirectory() as folder:
            input_path = os.path.join(folder, "input.txt")
            compressed_path = os.path.join(folder, "input.txt.ahc")
            output_path = os.path.join(folder, "output.txt")
            with open(input_path, "wb") as file:
                file.write(data)

            compressed = codec.compress(input_path, compressed_path)
            self.assertEqual(compressed.original_file_name, "input.txt")
            self.assertLess(os.path.getsize(compressed_path), len(data))

            codec.decompress(compressed_path, output_path)
            with open(output_path, "rb") as file:
                self.assertEqual(file.read(), data)

    def test_missing_input(self):
        with self.assertRaises(ValueError):
            AdaptiveHuffmanCodecFile().compress("/nonexistent/input", "/nonexistent/output")


if __name__ == '__main__':
    unittest.main()
