import struct
from typing import Optional

from .validators import validate_type, validate_file_exists, validate_int_range
from .coders import (
    AdaptiveHuffmanDecoder,
    AdaptiveHuffmanEncoder,
    CoderSettings,
    pack_bits_to_bytes,
    unpack_bytes_to_bits,
)
from .logger import Logger
from .models import TreeSettings
from .preprocessors import BasePreprocessor, BytePreprocessor, get_preprocessor
from .settings import FILE_SIGNATURE, VERSION

# signature, version, preprocessor code, symbol width, exchanges enabled,
# validate after mutation, max propagation depth, initial order,
# node count ceiling (0 for none), bit count
HEADER_FORMAT = ">3sHBB??IiIQ"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)


class CompressedData:
    """Represents an adaptive Huffman bit stream together with what is needed to decode it."""

    def __init__(
        self,
        preprocessor_code: int,
        version: int,
        symbol_width: int,
        tree_settings: TreeSettings,
        bit_count: int,
        data: bytes,
        original_file_name: Optional[str] = None,
    ) -> None:
        validate_type(preprocessor_code, "Preprocessor code", int)
        validate_type(version, "Version", int)
        validate_type(symbol_width, "Symbol width", int)
        validate_type(tree_settings, "Tree settings", TreeSettings)
        validate_type(bit_count, "Bit count", int)
        validate_type(data, "Data", bytes)
        if original_file_name is not None:
            validate_type(original_file_name, "Original file name", str)

        get_preprocessor(preprocessor_code, symbol_width)
        tree_settings.validated()

        if version != VERSION:
            raise ValueError("Version not supported")
        validate_int_range(bit_count, "Bit count", minimum=0)
        if len(data) != (bit_count + 7) // 8:
            raise ValueError("Data length does not match bit count")

        self.original_file_name = original_file_name
        self.preprocessor_code = preprocessor_code
        self.version = version
        self.symbol_width = symbol_width
        self.tree_settings = tree_settings
        self.bit_count = bit_count
        self.data = data

    @property
    def bits(self) -> str:
        return unpack_bytes_to_bits(self.data, self.bit_count)

    @staticmethod
    def serialize(compressed: 'CompressedData') -> bytes:
        """
        Serialize a CompressedData instance into bytes.

        The format (big-endian):
          - header (HEADER_FORMAT): signature, version, preprocessor code,
            symbol width, tree settings, bit count
          - data length (4 bytes, unsigned int)
          - data (packed bits)
          - original_file_name length (4 bytes, unsigned int; 0 if None)
          - original_file_name (UTF-8 encoded, if present)
        """
        settings = compressed.tree_settings
        file_name_bytes = (
            compressed.original_file_name.encode("utf-8") if compressed.original_file_name is not None else b""
        )

        serialized = struct.pack(
            HEADER_FORMAT,
            FILE_SIGNATURE,
            compressed.version,
            compressed.preprocessor_code,
            compressed.symbol_width,
            settings.exchanges_enabled,
            settings.validate_after_mutation,
            settings.max_propagation_depth,
            settings.initial_order,
            settings.node_count_ceiling or 0,
            compressed.bit_count,
        )
        serialized += struct.pack(">I", len(compressed.data))
        serialized += compressed.data
        serialized += struct.pack(">I", len(file_name_bytes))
        serialized += file_name_bytes

        return serialized

    @staticmethod
    def deserialize(serialized: bytes) -> 'CompressedData':
        """
        Deserialize bytes into a CompressedData instance.
        The byte structure is expected to be the same as produced by serialize().
        """
        validate_type(serialized, "Serialized data", bytes)
        if len(serialized) < HEADER_SIZE:
            raise ValueError("Serialized data is too short")
        (
            signature,
            version,
            preprocessor_code,
            symbol_width,
            exchanges_enabled,
            validate_after_mutation,
            max_propagation_depth,
            initial_order,
            node_count_ceiling,
            bit_count,
        ) = struct.unpack(HEADER_FORMAT, serialized[:HEADER_SIZE])
        if signature != FILE_SIGNATURE:
            raise ValueError("Invalid file signature")
        offset = HEADER_SIZE

        if len(serialized) < offset + 4:
            raise ValueError("Serialized data is incomplete for data length")
        data_length, = struct.unpack(">I", serialized[offset : offset + 4])
        offset += 4

        if len(serialized) < offset + data_length:
            raise ValueError("Serialized data is incomplete for data")
        data = serialized[offset : offset + data_length]
        offset += data_length

        if len(serialized) < offset + 4:
            raise ValueError("Serialized data is incomplete for file name length")
        file_name_length, = struct.unpack(">I", serialized[offset : offset + 4])
        offset += 4
        if len(serialized) < offset + file_name_length:
            raise ValueError("Serialized data is incomplete for file name")
        if file_name_length > 0:
            original_file_name = serialized[offset : offset + file_name_length].decode("utf-8")
        else:
            original_file_name = None

        tree_settings = TreeSettings(
            exchanges_enabled=exchanges_enabled,
            max_propagation_depth=max_propagation_depth,
            node_count_ceiling=node_count_ceiling or None,
            validate_after_mutation=validate_after_mutation,
            initial_order=initial_order,
        )
        return CompressedData(
            preprocessor_code, version, symbol_width, tree_settings, bit_count, data, original_file_name
        )


class CompressedDataFile:
    """Provides methods to write and read a CompressedData instance to/from a file."""

    @staticmethod
    def write_to_file(compressed: CompressedData, file_path: str) -> None:
        """
        Serialize the compressed data and write it to the given file.

        Args:
            compressed (CompressedData): The compressed data to write.
            file_path (str): The path to the output file.
        """
        serialized_data = CompressedData.serialize(compressed)
        with open(file_path, "wb") as file:
            file.write(serialized_data)

    @staticmethod
    def read_from_file(file_path: str) -> CompressedData:
        """
        Read binary data from the given file and deserialize it into a CompressedData instance.

        Args:
            file_path (str): The path to the compressed file.

        Returns:
            CompressedData: The deserialized compressed data.
        """
        validate_file_exists(file_path)
        with open(file_path, "rb") as file:
            serialized_data = file.read()
        return CompressedData.deserialize(serialized_data)


class CompressionStats:
    """Sizes of an input and its encoding, in bits."""

    def __init__(self, original_bits: int, encoded_bits: int) -> None:
        self.original_bits: int = original_bits
        self.encoded_bits: int = encoded_bits

    @property
    def saved_bits(self) -> int:
        return self.original_bits - self.encoded_bits

    @property
    def ratio(self) -> float:
        """Space saving in percent; negative when the encoding is larger."""
        if self.original_bits == 0:
            return 0.0
        return (1 - self.encoded_bits / self.original_bits) * 100

    def __str__(self) -> str:
        return (
            f"Original size (bits): {self.original_bits}, Encoded size (bits): {self.encoded_bits}, "
            f"Compression ratio: {self.ratio:.2f}%"
        )


class AdaptiveHuffmanCodec:
    def compress(
        self,
        data: bytes,
        preprocessor: Optional[BasePreprocessor] = None,
        tree_settings: Optional[TreeSettings] = None,
        original_file_name: Optional[str] = None,
        logger: Optional[Logger] = None,
    ) -> CompressedData:
        """
        Compress the input data.

        Args:
            data (bytes): The data to compress.
            preprocessor (Optional[BasePreprocessor]): Symbol conversion; bytes if None.
            tree_settings (Optional[TreeSettings]): Tree policy knobs; defaults if None.
            original_file_name (Optional[str]): Name stored alongside the data.
            logger: Logger instance for logging.

        Returns:
            CompressedData: The resulting compressed data.
        """
        validate_type(data, "Data", bytes)
        if preprocessor is None:
            preprocessor = BytePreprocessor(logger)
        if not isinstance(preprocessor, BasePreprocessor):
            raise ValueError("Preprocessor must be an instance of BasePreprocessor")

        settings = CoderSettings(preprocessor.symbol_width, tree_settings)
        symbols = preprocessor.convert_to_symbols(data)
        bits = AdaptiveHuffmanEncoder(settings, logger).encode_symbols(symbols)
        return CompressedData(
            preprocessor.code,
            VERSION,
            settings.symbol_width,
            settings.tree_settings,
            len(bits),
            pack_bits_to_bytes(bits),
            original_file_name,
        )

    def decompress(self, compressed: CompressedData, logger: Optional[Logger] = None) -> bytes:
        """
        Decompress the encoded data.

        Args:
            compressed (CompressedData): The compressed data.
            logger: Logger instance for logging.

        Returns:
            bytes: The decompressed data.
        """
        if not isinstance(compressed, CompressedData):
            raise ValueError("Input must be a CompressedData instance")
        if compressed.version != VERSION:
            raise ValueError("Version not supported")

        preprocessor = get_preprocessor(compressed.preprocessor_code, compressed.symbol_width, logger)
        settings = CoderSettings(compressed.symbol_width, compressed.tree_settings)
        symbols = AdaptiveHuffmanDecoder(settings, logger).decode_symbols(compressed.bits)
        return preprocessor.convert_from_symbols(symbols)

    @staticmethod
    def measure(data: bytes, compressed: CompressedData) -> CompressionStats:
        """Compare the raw size of data (8 bits per byte) with its encoded bit count."""
        validate_type(data, "Data", bytes)
        return CompressionStats(len(data) * 8, compressed.bit_count)


class AdaptiveHuffmanCodecFile(AdaptiveHuffmanCodec):
    def compress(
        self,
        input_path: str,
        output_path: str,
        preprocessor: Optional[BasePreprocessor] = None,
        tree_settings: Optional[TreeSettings] = None,
        logger: Optional[Logger] = None,
    ) -> CompressedData:
        """
        Compress the input file and write the compressed data to an output file.

        Args:
            input_path (str): Path to the input file.
            output_path (str): Path to the output file.
            preprocessor (Optional[BasePreprocessor]): Symbol conversion; bytes if None.
            tree_settings (Optional[TreeSettings]): Tree policy knobs; defaults if None.
            logger: Logger instance for logging.

        Returns:
            CompressedData: What was written.
        """
        validate_type(input_path, "Input path", str)
        validate_type(output_path, "Output path", str)
        validate_file_exists(input_path)

        with open(input_path, "rb") as file:
            data = file.read()

        file_name = input_path.replace("\\", "/").split("/")[-1]
        compressed = super().compress(data, preprocessor, tree_settings, file_name, logger)
        CompressedDataFile.write_to_file(compressed, output_path)
        return compressed

    def decompress(
        self,
        compressed_file_path: str,
        output_file_path: str,
        logger: Optional[Logger] = None,
    ) -> None:
        """
        Decompress the input file and write the decompressed data to an output file.

        Args:
            compressed_file_path (str): Path to the compressed file.
            output_file_path (str): Path to the output file.
            logger: Logger instance for logging.
        """
        validate_type(compressed_file_path, "Compressed file path", str)
        validate_type(output_file_path, "Output file path", str)

        compressed = CompressedDataFile.read_from_file(compressed_file_path)
        data = super().decompress(compressed, logger)
        with open(output_file_path, "wb") as file:
            file.write(data)
