"""
models.py

The shared objects used in the ahcodec.

"""


from typing import Hashable, NamedTuple, Optional, Tuple

from .settings import DEFAULT_INITIAL_ORDER, DEFAULT_MAX_PROPAGATION_DEPTH
from .validators import validate_type, validate_int_range


class Node:
    """
    A vertex of the adaptive Huffman tree.

    Links are indices into the node table of the owning tree, so a node is a
    passive record: only the tree changes its fields.
    """
    __slots__ = ("index", "symbol", "weight", "order", "parent", "left", "right")

    def __init__(
        self,
        index: int,
        symbol: Optional[Hashable],
        weight: int,
        order: int,
        parent: Optional[int] = None,
    ) -> None:
        self.index: int = index
        self.symbol: Optional[Hashable] = symbol
        self.weight: int = weight
        self.order: int = order
        self.parent: Optional[int] = parent
        self.left: Optional[int] = None
        self.right: Optional[int] = None

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def is_placeholder(self) -> bool:
        """The weight-0 leaf standing for every symbol not seen yet."""
        return self.is_leaf() and self.weight == 0

    def __str__(self) -> str:
        if self.is_placeholder():
            label = "NYT"
        elif self.is_leaf():
            label = repr(self.symbol)
        else:
            label = "*"
        return f"[{label}, weight={self.weight}, order={self.order}]"

    def __repr__(self) -> str:
        return f"Node(index={self.index}, symbol={self.symbol!r}, weight={self.weight}, order={self.order})"


class SymbolWeight:
    """
    Represents a symbol together with its current weight in a tree.
    """
    def __init__(self, symbol: Hashable, weight: int) -> None:
        self.symbol: Hashable = symbol
        self.weight: int = weight

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SymbolWeight):
            return self.symbol == other.symbol and self.weight == other.weight
        return False

    def __hash__(self) -> int:
        return hash((self.symbol, self.weight))

    def __str__(self) -> str:
        return f"[{self.symbol}, {self.weight}]"

    def __repr__(self) -> str:
        return f"[{self.symbol}, {self.weight}]"


class TreeSettings(NamedTuple):
    """
    Immutable policy knobs of an adaptive tree.

    Both coding sides must use equal settings, since every knob changes how
    the tree evolves.
    """
    exchanges_enabled: bool = True
    max_propagation_depth: int = DEFAULT_MAX_PROPAGATION_DEPTH
    node_count_ceiling: Optional[int] = None
    validate_after_mutation: bool = True
    initial_order: int = DEFAULT_INITIAL_ORDER

    def validated(self) -> "TreeSettings":
        """
        Check every field and return self.

        Raises:
            ValueError: If a field has the wrong type or is out of range.
        """
        validate_type(self.exchanges_enabled, "exchanges_enabled", bool)
        validate_type(self.validate_after_mutation, "validate_after_mutation", bool)
        validate_int_range(self.max_propagation_depth, "max_propagation_depth", minimum=1)
        if self.node_count_ceiling is not None:
            validate_int_range(self.node_count_ceiling, "node_count_ceiling", minimum=1)
        validate_int_range(self.initial_order, "initial_order")
        return self


class UpdateStatus:
    """Outcome of a tree mutation. Only rejected or partial updates differ from OK."""
    OK = "ok"
    DUPLICATE_SYMBOL_INSERT = "duplicate_symbol_insert"
    UNKNOWN_SYMBOL = "unknown_symbol"
    CYCLE_RISK = "cycle_risk"
    UPDATE_DEPTH_EXCEEDED = "update_depth_exceeded"
    REBUILT = "rebuilt"


class ValidationReport(NamedTuple):
    valid: bool
    issues: Tuple[str, ...]
    node_count: int

    @staticmethod
    def from_issues(issues, node_count: int) -> "ValidationReport":
        issues = tuple(issues)
        return ValidationReport(len(issues) == 0, issues, node_count)

    def merge(self, other: "ValidationReport") -> "ValidationReport":
        return ValidationReport.from_issues(self.issues + other.issues, max(self.node_count, other.node_count))

    def __str__(self) -> str:
        if self.valid:
            return f"valid ({self.node_count} nodes)"
        return f"invalid ({self.node_count} nodes): " + "; ".join(self.issues)


class DecodeFramingError(ValueError):
    """Raised when fewer raw symbol bits follow a placeholder code than the configured width."""


class StructuralCorruptionError(ValueError):
    """Raised when a rebuild could not produce a valid tree."""

    def __init__(self, report: ValidationReport) -> None:
        self.report = report
        super().__init__(f"Tree could not be rebuilt into a valid state: {report}")
