import abc
from typing import List, Optional

from .logger import Logger, PreprocessingProgressStep
from .settings import DEFAULT_SYMBOL_WIDTH, DEFAULT_TEXT_SYMBOL_WIDTH, MAX_SYMBOL_WIDTH
from .validators import validate_type, validate_int_range


class BasePreprocessor(abc.ABC):
    @property
    @abc.abstractmethod
    def code(self) -> int:
        """Return the unique identification code for the preprocessor."""
        pass

    @property
    @abc.abstractmethod
    def symbol_width(self) -> int:
        """Return the number of raw bits written for a symbol seen for the first time."""
        pass

    @abc.abstractmethod
    def convert_to_symbols(self, data: bytes) -> List[int]:
        """
        Convert raw data (bytes) to a list of integer symbols.

        Args:
            data (bytes): The input data as bytes.

        Returns:
            List[int]: The symbols, each fitting in symbol_width bits.
        """
        pass

    @abc.abstractmethod
    def convert_from_symbols(self, symbols: List[int]) -> bytes:
        """
        Convert a list of symbols back to data in bytes.

        Args:
            symbols (List[int]): The list of symbols.

        Returns:
            bytes: The reconstructed data.
        """
        pass


class BytePreprocessor(BasePreprocessor):
    """
    Byte Preprocessor: Each byte of data is a symbol.
    """
    def __init__(self, logger: Optional[Logger] = None, symbol_width: int = DEFAULT_SYMBOL_WIDTH) -> None:
        validate_int_range(symbol_width, "symbol_width", 8, MAX_SYMBOL_WIDTH)
        self.logger: Optional[Logger] = logger
        self._symbol_width: int = symbol_width

    @property
    def symbol_width(self) -> int:
        return self._symbol_width

    @property
    def code(self) -> int:
        return 3

    def convert_to_symbols(self, data: bytes) -> List[int]:
        if not isinstance(data, bytes):
            raise ValueError("Data should be in form of bytes")
        if self.logger is not None:
            for _ in data:
                self.logger.log(PreprocessingProgressStep("Converting data to symbols", len(data)))
        return list(data)

    def convert_from_symbols(self, symbols: List[int]) -> bytes:
        try:
            return bytes(symbols)
        except (TypeError, ValueError) as e:
            raise ValueError("Symbols must be integers in range 0-255: " + str(e))


class TextPreprocessor(BasePreprocessor):
    """
    Text Preprocessor: UTF-8 data is decoded and each code point is a symbol.
    """
    def __init__(self, logger: Optional[Logger] = None, symbol_width: int = DEFAULT_TEXT_SYMBOL_WIDTH) -> None:
        validate_int_range(symbol_width, "symbol_width", 1, MAX_SYMBOL_WIDTH)
        self.logger: Optional[Logger] = logger
        self._symbol_width: int = symbol_width

    @property
    def symbol_width(self) -> int:
        return self._symbol_width

    @property
    def code(self) -> int:
        return 4

    def convert_to_symbols(self, data: bytes) -> List[int]:
        if not isinstance(data, bytes):
            raise ValueError("Data should be in form of bytes")
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            raise ValueError("Data should be valid UTF-8 text")

        limit = 1 << self._symbol_width
        symbols: List[int] = []
        for char in text:
            code_point = ord(char)
            if code_point >= limit:
                raise ValueError(f"Character {char!r} does not fit in {self._symbol_width} bits")
            symbols.append(code_point)
            if self.logger is not None:
                self.logger.log(PreprocessingProgressStep("Converting text to symbols", len(text)))
        return symbols

    def convert_from_symbols(self, symbols: List[int]) -> bytes:
        try:
            return "".join(chr(symbol) for symbol in symbols).encode("utf-8")
        except (TypeError, ValueError, UnicodeEncodeError) as e:
            raise ValueError("Symbols must be valid Unicode code points: " + str(e))


def get_preprocessor(code: int, symbol_width: Optional[int] = None, logger: Optional[Logger] = None) -> BasePreprocessor:
    """
    Retrieve a preprocessor instance based on the given code.

    Args:
        code (int): The preprocessor code.
        symbol_width (Optional[int]): Raw symbol width; the preprocessor default if None.
        logger (Optional[Logger]): Logger instance for logging.

    Returns:
        BasePreprocessor: An instance of a preprocessor.

    Raises:
        ValueError: If the preprocessor code is not supported.
    """
    validate_type(code, "Preprocessor code", int)
    if code == 3:
        preprocessor_class = BytePreprocessor
    elif code == 4:
        preprocessor_class = TextPreprocessor
    else:
        raise ValueError("Preprocessor code not supported")
    if symbol_width is None:
        return preprocessor_class(logger)
    return preprocessor_class(logger, symbol_width)
