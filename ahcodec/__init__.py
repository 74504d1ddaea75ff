"""
ahcodec: A Python library for lossless adaptive Huffman (FGK) compression and decompression.
"""

from .tree import AdaptiveHuffmanTree

from .tree_validator import (
    validate_structure,
    validate_sibling_property,
    validate_order_listing,
    validate_tree,
    format_tree,
)

from .codecs import (
    CompressedData,
    CompressedDataFile,
    CompressionStats,
    AdaptiveHuffmanCodec,
    AdaptiveHuffmanCodecFile,
)

from .coders import (
    CoderSettings,
    AdaptiveHuffmanCoderBase,
    AdaptiveHuffmanEncoder,
    AdaptiveHuffmanDecoder,
    normalize_bits,
    symbol_to_bits,
    pack_bits_to_bytes,
    unpack_bytes_to_bits,
)

from .models import (
    Node,
    SymbolWeight,
    TreeSettings,
    UpdateStatus,
    ValidationReport,
    DecodeFramingError,
    StructuralCorruptionError,
)

from .preprocessors import (
    BasePreprocessor,
    BytePreprocessor,
    TextPreprocessor,
    get_preprocessor,
)

from .experiments import (
    TextExperimentResult,
    AdaptiveHuffmanFileExperiment,
    run_text_experiment,
    run_text_experiments,
)

from .settings import VERSION

from .logger import (
    Logger,
    Log,
    LogLevel,
    CodingLog,
    DuplicateSymbolInsertLog,
    UnknownSymbolLog,
    CycleRiskLog,
    UpdateDepthExceededLog,
    StructuralCorruptionLog,
    TreeRebuildLog,
    TruncatedCodeLog,
    PreprocessingProgressStep,
    CodingProgressStep,
)

# Validators
from .validators import *

__all__ = [

    "AdaptiveHuffmanTree",

    "validate_structure",
    "validate_sibling_property",
    "validate_order_listing",
    "validate_tree",
    "format_tree",

    "CompressedData",
    "CompressedDataFile",
    "CompressionStats",
    "AdaptiveHuffmanCodec",
    "AdaptiveHuffmanCodecFile",

    "CoderSettings",
    "AdaptiveHuffmanCoderBase",
    "AdaptiveHuffmanEncoder",
    "AdaptiveHuffmanDecoder",
    "normalize_bits",
    "symbol_to_bits",
    "pack_bits_to_bytes",
    "unpack_bytes_to_bits",

    "Node",
    "SymbolWeight",
    "TreeSettings",
    "UpdateStatus",
    "ValidationReport",
    "DecodeFramingError",
    "StructuralCorruptionError",

    "BasePreprocessor",
    "BytePreprocessor",
    "TextPreprocessor",
    "get_preprocessor",

    "TextExperimentResult",
    "AdaptiveHuffmanFileExperiment",
    "run_text_experiment",
    "run_text_experiments",

    "VERSION",

    "Logger",
    "Log",
    "LogLevel",
    "CodingLog",
    "DuplicateSymbolInsertLog",
    "UnknownSymbolLog",
    "CycleRiskLog",
    "UpdateDepthExceededLog",
    "StructuralCorruptionLog",
    "TreeRebuildLog",
    "TruncatedCodeLog",
    "PreprocessingProgressStep",
    "CodingProgressStep",
]
