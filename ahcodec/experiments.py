#experiments.py
import os
import time
from typing import List, NamedTuple, Optional

from .codecs import AdaptiveHuffmanCodecFile, CompressionStats
from .coders import AdaptiveHuffmanDecoder, AdaptiveHuffmanEncoder, CoderSettings
from .logger import Logger
from .models import TreeSettings
from .preprocessors import BasePreprocessor
from .validators import validate_type

DEMO_TEXTS = ["ABABABC", "AAAAAAAA", "ABCDEFGH", "MISSISSIPPI", "Hello World"]

# inputs that historically drove the tree into long exchange chains
STRESS_TEXTS = ["KMKKAMAMKW", "ABCBADCABCABCBAD"]


class TextExperimentResult(NamedTuple):
    text: str
    encoded: str
    decoded: str
    stats: CompressionStats
    encode_seconds: float
    decode_seconds: float

    @property
    def verified(self) -> bool:
        return self.text == self.decoded

    def __str__(self) -> str:
        status = "OK" if self.verified else "MISMATCH"
        return (
            f"{self.text!r}: {self.stats.original_bits} -> {self.stats.encoded_bits} bits "
            f"({self.stats.ratio:.2f}%) [{status}]"
        )


def run_text_experiment(
    text: str,
    tree_settings: Optional[TreeSettings] = None,
    symbol_width: int = 8,
    logger: Optional[Logger] = None,
) -> TextExperimentResult:
    """
    Encode a text with one session and decode it with an independent one.

    Args:
        text (str): Input whose code points fit in symbol_width bits.
        tree_settings (Optional[TreeSettings]): Shared by both sessions.
        symbol_width (int): Raw bits per new symbol, also the per-symbol size of the original.
        logger (Optional[Logger]): Logger instance for logging.

    Returns:
        TextExperimentResult: Bits, sizes, timings and the decoded text.
    """
    validate_type(text, "Text", str)
    settings = CoderSettings(symbol_width, tree_settings)

    start = time.time()
    encoded = AdaptiveHuffmanEncoder(settings, logger).encode(text)
    encode_seconds = time.time() - start

    start = time.time()
    decoded = AdaptiveHuffmanDecoder(settings, logger).decode(encoded)
    decode_seconds = time.time() - start

    stats = CompressionStats(len(text) * symbol_width, len(encoded))
    return TextExperimentResult(text, encoded, decoded, stats, encode_seconds, decode_seconds)


def run_text_experiments(
    texts: List[str],
    tree_settings: Optional[TreeSettings] = None,
    logger: Optional[Logger] = None,
) -> List[TextExperimentResult]:
    return [run_text_experiment(text, tree_settings, logger=logger) for text in texts]


class AdaptiveHuffmanFileExperiment:
    def __init__(
        self,
        name: str,
        input_file_path: str,
        experiment_root_folder_path: str,
        preprocessor: Optional[BasePreprocessor] = None,
        tree_settings: Optional[TreeSettings] = None,
    ):
        self.name = name

        #validate that input file exists and can be read
        if not os.path.exists(input_file_path):
            raise FileNotFoundError(f"File {input_file_path} not found.")
        if not os.access(input_file_path, os.R_OK):
            raise PermissionError(f"File {input_file_path} is not readable.")

        self.input_file_path = input_file_path

        #attempt to create experiment folder
        self.experiment_folder_path = os.path.join(experiment_root_folder_path, name)
        if not os.path.exists(self.experiment_folder_path):
            os.makedirs(self.experiment_folder_path)

        input_file_name = os.path.basename(input_file_path)
        self.compressed_file_path = os.path.join(self.experiment_folder_path, f"{input_file_name}.ahc")
        self.decompressed_file_path = os.path.join(self.experiment_folder_path, f"{input_file_name}_decompressed")

        self.logger = Logger()
        self.logger.display_progress = False
        self.codec = AdaptiveHuffmanCodecFile()
        self.preprocessor = preprocessor
        self.tree_settings = tree_settings

    def run(self) -> bool:
        self.input_file_size = os.path.getsize(self.input_file_path)

        self.compression_start_time = time.time()
        compressed = self.codec.compress(
            self.input_file_path, self.compressed_file_path, self.preprocessor, self.tree_settings, self.logger
        )
        self.compression_end_time = time.time()

        self.decompression_start_time = time.time()
        self.codec.decompress(self.compressed_file_path, self.decompressed_file_path, self.logger)
        self.decompression_end_time = time.time()

        self.compressed_file_size = os.path.getsize(self.compressed_file_path)
        self.decompressed_file_size = os.path.getsize(self.decompressed_file_path)
        self.stats = CompressionStats(self.input_file_size * 8, compressed.bit_count)

        if self.compressed_file_size:
            self.compression_ratio = self.input_file_size / self.compressed_file_size
        else:
            self.compression_ratio = 0.0

        with open(self.input_file_path, "rb") as original, open(self.decompressed_file_path, "rb") as restored:
            self.verified = original.read() == restored.read()
        return self.verified
