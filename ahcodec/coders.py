"""
coders.py

Encoder and decoder sessions driving a private adaptive tree, plus the bit
helpers they share.

"""


import numpy as np
from typing import Iterable, List, Optional, Union

from .logger import Logger, CodingLog, CodingProgressStep, TruncatedCodeLog
from .models import DecodeFramingError, TreeSettings
from .settings import DEFAULT_SYMBOL_WIDTH, MAX_SYMBOL_WIDTH
from .tree import AdaptiveHuffmanTree
from .validators import validate_type, validate_int_range


class CoderSettings:
    """
    Settings shared by an encoder and its matching decoder.
    """

    def __init__(self, symbol_width: int = DEFAULT_SYMBOL_WIDTH, tree_settings: Optional[TreeSettings] = None) -> None:
        validate_int_range(symbol_width, "symbol_width", 1, MAX_SYMBOL_WIDTH)
        if tree_settings is None:
            tree_settings = TreeSettings()
        validate_type(tree_settings, "tree_settings", TreeSettings)
        self.symbol_width: int = symbol_width
        self.tree_settings: TreeSettings = tree_settings.validated()


def normalize_bits(bits: Union[str, Iterable[int]]) -> str:
    """
    Turn a bit sequence into a string of '0' and '1'.

    Args:
        bits (Union[str, Iterable[int]]): A '0'/'1' string or an iterable of 0/1 integers.

    Returns:
        str: The bits as a string.

    Raises:
        ValueError: If anything other than 0 or 1 is found.
    """
    if bits is None:
        raise ValueError("Bits cannot be None")
    if isinstance(bits, str):
        if bits.strip("01"):
            raise ValueError("Bits must contain only '0' and '1'")
        return bits
    result = []
    for bit in bits:
        if isinstance(bit, str) or bit not in (0, 1):
            raise ValueError("Bit must be 0 or 1")
        result.append("1" if bit else "0")
    return "".join(result)


def symbol_to_bits(symbol: int, width: int) -> str:
    """
    Fixed-width raw encoding of a symbol, most significant bit first.

    Raises:
        ValueError: If the symbol is not an int that fits in width bits.
    """
    if isinstance(symbol, bool) or not isinstance(symbol, (int, np.integer)):
        raise ValueError("Symbol must be of type int")
    if not 0 <= symbol < (1 << width):
        raise ValueError(f"Symbol {symbol} does not fit in {width} bits")
    return format(int(symbol), f"0{width}b")


def text_to_symbols(text: Union[str, bytes, Iterable[int]]) -> List[int]:
    if text is None:
        raise ValueError("Text cannot be None")
    if isinstance(text, str):
        return [ord(char) for char in text]
    # bytes iterate as ints already
    return list(text)


def pack_bits_to_bytes(bits: Union[str, Iterable[int]]) -> bytes:
    """
    Pack bits into bytes, MSB first, zero padding the last byte.

    Args:
        bits (Union[str, Iterable[int]]): The bits to pack.

    Returns:
        bytes: Packed bytes.
    """
    bits = normalize_bits(bits)
    array = np.frombuffer(bits.encode("ascii"), dtype=np.uint8) - ord("0")
    return np.packbits(array).tobytes()


def unpack_bytes_to_bits(data: bytes, bit_count: Optional[int] = None) -> str:
    """
    Unpack bytes into a '0'/'1' string (MSB first).

    Args:
        data (bytes): The byte stream.
        bit_count (Optional[int]): Number of leading bits to keep; all of them if None.

    Returns:
        str: The bits.
    """
    if data is None:
        raise ValueError("Data cannot be None")
    bits = np.unpackbits(np.frombuffer(data, dtype=np.uint8))
    if bit_count is not None:
        validate_int_range(bit_count, "bit_count", 0, len(bits))
        bits = bits[:bit_count]
    return (bits + ord("0")).astype(np.uint8).tobytes().decode("ascii")


class AdaptiveHuffmanCoderBase:
    """
    State shared by encoder and decoder sessions: settings, logger and one private tree.
    """

    def __init__(self, settings: Optional[CoderSettings] = None, logger: Optional[Logger] = None) -> None:
        if settings is None:
            settings = CoderSettings()
        validate_type(settings, "settings", CoderSettings)
        self.settings: CoderSettings = settings
        self.logger: Optional[Logger] = logger
        self.tree: AdaptiveHuffmanTree = AdaptiveHuffmanTree(settings.tree_settings, logger)

    def reset(self) -> None:
        """Start a new session with a fresh tree."""
        self.tree = AdaptiveHuffmanTree(self.settings.tree_settings, self.logger)


class AdaptiveHuffmanEncoder(AdaptiveHuffmanCoderBase):
    """
    Turns symbols into bits. Successive calls continue the same stream.
    """

    def encode(self, text: Union[str, bytes, Iterable[int]]) -> str:
        """
        Encode text, bytes or integer symbols.

        Args:
            text (Union[str, bytes, Iterable[int]]): Characters are coded by code point, bytes by value.

        Returns:
            str: The encoded bits.
        """
        return self.encode_symbols(text_to_symbols(text))

    def encode_symbols(self, symbols: Iterable[int]) -> str:
        """
        Encode integer symbols.

        A known symbol emits its current code; a new one emits the placeholder
        code followed by its raw fixed-width bits. Codes are taken before the
        tree is updated for that symbol.

        Args:
            symbols (Iterable[int]): Symbols in [0, 2**symbol_width).

        Returns:
            str: The encoded bits.

        Raises:
            ValueError: If a symbol does not fit the configured width.
        """
        symbols = list(symbols)
        width = self.settings.symbol_width
        pieces = []
        for symbol in symbols:
            raw = symbol_to_bits(symbol, width)
            symbol = int(symbol)
            if self.tree.contains(symbol):
                code = self.tree.code_of(symbol)
                self.tree.bump(symbol)
            else:
                code = self.tree.placeholder_code() + raw
                self.tree.insert(symbol)
            pieces.append(code)
            if self.logger is not None:
                self.logger.log(CodingLog(width, len(code)))
                self.logger.log(CodingProgressStep("Encoding symbols", len(symbols)))
        return "".join(pieces)


class AdaptiveHuffmanDecoder(AdaptiveHuffmanCoderBase):
    """
    Turns bits back into symbols, replaying the encoder's tree updates.

    A code split across two calls is kept and completed by the next call.
    The raw bits of a new symbol must arrive in the same call as its
    placeholder code.
    """

    def __init__(self, settings: Optional[CoderSettings] = None, logger: Optional[Logger] = None) -> None:
        super().__init__(settings, logger)
        self.pending_bits: str = ""

    def reset(self) -> None:
        super().reset()
        self.pending_bits = ""

    def decode(self, bits: Union[str, Iterable[int]]) -> str:
        """
        Decode bits into text, one character per symbol.

        Args:
            bits (Union[str, Iterable[int]]): The encoded bits.

        Returns:
            str: The decoded text.
        """
        return "".join(chr(symbol) for symbol in self.decode_symbols(bits))

    def decode_symbols(self, bits: Union[str, Iterable[int]]) -> List[int]:
        """
        Decode bits into integer symbols.

        Args:
            bits (Union[str, Iterable[int]]): The encoded bits.

        Returns:
            List[int]: The decoded symbols.

        Bits left over inside an unfinished code are stored in pending_bits
        and logged as a TruncatedCodeLog.

        Raises:
            DecodeFramingError: If a placeholder code is followed by fewer raw bits than the symbol width.
        """
        bits = self.pending_bits + normalize_bits(bits)
        self.pending_bits = ""
        width = self.settings.symbol_width
        total = len(bits)
        tree = self.tree
        symbols: List[int] = []
        position = 0
        while position < total:
            start = position
            node = tree.root
            while not node.is_leaf():
                if position >= total:
                    self.pending_bits = bits[start:]
                    if self.logger is not None:
                        self.logger.log(TruncatedCodeLog(len(self.pending_bits)))
                    return symbols
                node = tree.node(node.right if bits[position] == "1" else node.left)
                position += 1

            if node.is_placeholder():
                if position + width > total:
                    raise DecodeFramingError(
                        f"Expected {width} raw symbol bits at position {position}, found {total - position}"
                    )
                symbol = int(bits[position:position + width], 2)
                position += width
                tree.insert(symbol)
            else:
                symbol = node.symbol
                tree.bump(symbol)
            symbols.append(symbol)
            if self.logger is not None:
                self.logger.log(CodingProgressStep("Decoding symbols"))
        return symbols
