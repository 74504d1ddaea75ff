"""
tree.py

The adaptive Huffman (FGK) tree: a binary prefix code that rebalances itself
after every symbol, so encoder and decoder can evolve identical trees from
the bit stream alone.

"""


from typing import Dict, Hashable, List, Optional, Tuple

from .logger import (
    Logger,
    Log,
    LogLevel,
    CycleRiskLog,
    DuplicateSymbolInsertLog,
    StructuralCorruptionLog,
    TreeRebuildLog,
    UnknownSymbolLog,
    UpdateDepthExceededLog,
)
from .models import (
    Node,
    SymbolWeight,
    StructuralCorruptionError,
    TreeSettings,
    UpdateStatus,
    ValidationReport,
)
from .tree_validator import validate_structure
from .validators import validate_type


class AdaptiveHuffmanTree:
    """
    Owns the node table, the symbol to leaf index and the path cache.

    Nodes are addressed by their index in a single table; the only ways to
    change the tree are insert, bump, exchange and rebuild.
    """

    def __init__(self, settings: Optional[TreeSettings] = None, logger: Optional[Logger] = None) -> None:
        if settings is None:
            settings = TreeSettings()
        validate_type(settings, "settings", TreeSettings)
        self.settings: TreeSettings = settings.validated()
        self.logger: Optional[Logger] = logger
        self._rebuilding: bool = False
        self._reset()

    def _reset(self) -> None:
        self._nodes: List[Node] = [Node(0, None, 0, self.settings.initial_order)]
        self._root: int = 0
        self._placeholder: int = 0
        self._leaves: Dict[Hashable, int] = {}
        self._path_cache: Dict[int, str] = {}

    def _log(self, log: Log) -> None:
        if self.logger is not None:
            self.logger.log(log)

    # Read-only queries

    @property
    def root_index(self) -> int:
        return self._root

    @property
    def root(self) -> Node:
        return self._nodes[self._root]

    @property
    def placeholder_index(self) -> int:
        return self._placeholder

    @property
    def placeholder(self) -> Node:
        return self._nodes[self._placeholder]

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    def node(self, index: int) -> Node:
        if not 0 <= index < len(self._nodes):
            raise ValueError(f"Node index out of range: {index}")
        return self._nodes[index]

    def nodes(self) -> Tuple[Node, ...]:
        return tuple(self._nodes)

    def contains(self, symbol: Hashable) -> bool:
        return symbol in self._leaves

    def leaf_of(self, symbol: Hashable) -> Optional[Node]:
        index = self._leaves.get(symbol)
        if index is None:
            return None
        return self._nodes[index]

    def weight_of(self, symbol: Hashable) -> int:
        leaf = self.leaf_of(symbol)
        return 0 if leaf is None else leaf.weight

    def symbols(self) -> List[Hashable]:
        """Known symbols in the order they were first inserted."""
        return list(self._leaves)

    def snapshot(self) -> List[SymbolWeight]:
        return [SymbolWeight(symbol, self._nodes[index].weight) for symbol, index in self._leaves.items()]

    def code_of(self, symbol: Hashable) -> str:
        """
        Get the current code of a known symbol.

        Args:
            symbol (Hashable): A symbol already in the tree.

        Returns:
            str: Root-to-leaf path, '0' for left and '1' for right.

        Raises:
            KeyError: If the symbol has not been inserted.
        """
        return self.path_to_node(self._leaves[symbol])

    def placeholder_code(self) -> str:
        return self.path_to_node(self._placeholder)

    def path_to_node(self, index: int) -> str:
        cached = self._path_cache.get(index)
        if cached is not None:
            return cached

        bits = []
        current = self.node(index)
        while current.parent is not None:
            if len(bits) >= len(self._nodes):
                raise StructuralCorruptionError(self.validate())
            parent = self._nodes[current.parent]
            bits.append("0" if parent.left == current.index else "1")
            current = parent
        path = "".join(reversed(bits))
        self._path_cache[index] = path
        return path

    def depth(self) -> int:
        """Length of the longest code, the placeholder's included."""
        indices = list(self._leaves.values()) + [self._placeholder]
        return max(len(self.path_to_node(index)) for index in indices)

    # Mutations

    def insert(self, symbol: Hashable) -> str:
        """
        Add a symbol seen for the first time.

        The placeholder leaf turns into an internal node whose right child is
        the new leaf (weight 1) and whose left child is the new placeholder.

        Args:
            symbol (Hashable): The new symbol. None is reserved for unlabeled nodes.

        Returns:
            str: An UpdateStatus value.
        """
        if symbol is None:
            raise ValueError("Symbol cannot be None")
        if symbol in self._leaves:
            self._log(DuplicateSymbolInsertLog(symbol))
            return UpdateStatus.DUPLICATE_SYMBOL_INSERT

        internal = self._nodes[self._placeholder]
        leaf = Node(len(self._nodes), symbol, 1, internal.order - 1, parent=internal.index)
        self._nodes.append(leaf)
        placeholder = Node(len(self._nodes), None, 0, internal.order - 2, parent=internal.index)
        self._nodes.append(placeholder)

        internal.left = placeholder.index
        internal.right = leaf.index
        internal.weight = 1
        self._placeholder = placeholder.index
        self._leaves[symbol] = leaf.index
        self._path_cache.clear()

        status = self._propagate(internal.parent)
        return self._check_after_mutation(status)

    def bump(self, symbol: Hashable) -> str:
        """
        Count one more occurrence of a known symbol.

        Args:
            symbol (Hashable): A symbol already in the tree.

        Returns:
            str: An UpdateStatus value.
        """
        index = self._leaves.get(symbol)
        if index is None:
            self._log(UnknownSymbolLog(symbol))
            return UpdateStatus.UNKNOWN_SYMBOL
        status = self._propagate(index)
        return self._check_after_mutation(status)

    def exchange(self, first: int, second: int) -> str:
        """
        Swap the tree positions of two nodes.

        Each node keeps its own subtree; the parents' child links, the two
        parent links and the two order values are swapped. Weights stay put.

        Args:
            first (int): Index of one node.
            second (int): Index of the other node.

        Returns:
            str: UpdateStatus.OK, or UpdateStatus.CYCLE_RISK when the nodes are
            the same or one is an ancestor of the other.
        """
        a = self.node(first)
        b = self.node(second)
        if (
            first == second
            or a.parent is None
            or b.parent is None
            or self._is_ancestor(first, second)
            or self._is_ancestor(second, first)
        ):
            self._log(CycleRiskLog(a.order, b.order))
            return UpdateStatus.CYCLE_RISK

        a_parent, b_parent = a.parent, b.parent
        if a_parent == b_parent:
            parent = self._nodes[a_parent]
            parent.left, parent.right = parent.right, parent.left
        else:
            self._replace_child(a_parent, first, second)
            self._replace_child(b_parent, second, first)
            a.parent, b.parent = b_parent, a_parent
        a.order, b.order = b.order, a.order
        self._path_cache.clear()
        return UpdateStatus.OK

    def validate(self) -> ValidationReport:
        return validate_structure(self)

    def rebuild(self) -> str:
        """
        Regenerate the tree from its (symbol, weight) snapshot.

        Symbols are replayed in first-seen order, so two trees in the same
        state rebuild identically.

        Returns:
            str: UpdateStatus.REBUILT.

        Raises:
            StructuralCorruptionError: If the replayed tree is still invalid.
        """
        snapshot = self.snapshot()
        self._reset()
        self._rebuilding = True
        try:
            for entry in snapshot:
                self.insert(entry.symbol)
                for _ in range(entry.weight - 1):
                    self.bump(entry.symbol)
        finally:
            self._rebuilding = False

        report = self.validate()
        if not report.valid:
            self._log(Log("Tree_rebuild_log", LogLevel.ERROR, f"Rebuild failed: {report}"))
            raise StructuralCorruptionError(report)
        self._log(TreeRebuildLog(len(snapshot), len(self._nodes)))
        return UpdateStatus.REBUILT

    # Weight propagation

    def _propagate(self, index: Optional[int]) -> str:
        """Walk from a node to the root, exchanging each node with its block leader before incrementing it."""
        limit = None if self._rebuilding else self.settings.max_propagation_depth
        status = UpdateStatus.OK
        processed = 0
        while index is not None:
            if limit is not None and processed >= limit:
                self._log(UpdateDepthExceededLog(limit))
                return UpdateStatus.UPDATE_DEPTH_EXCEEDED
            node = self._nodes[index]
            if self._exchanges_allowed():
                candidate = self._exchange_candidate(node)
                if candidate is not None and self.exchange(candidate.index, node.index) == UpdateStatus.CYCLE_RISK:
                    status = UpdateStatus.CYCLE_RISK
            node.weight += 1
            index = node.parent
            processed += 1
        return status

    def _exchanges_allowed(self) -> bool:
        if not self.settings.exchanges_enabled:
            return False
        ceiling = self.settings.node_count_ceiling
        return ceiling is None or len(self._nodes) <= ceiling

    def _exchange_candidate(self, node: Node) -> Optional[Node]:
        """Highest-ordered node of the same weight, never the node's parent, children or the root."""
        if node.parent is None:
            return None
        excluded = {node.index, node.parent, node.left, node.right, self._root}
        best = None
        for candidate in self._nodes:
            if candidate.weight != node.weight or candidate.order <= node.order:
                continue
            if candidate.index in excluded:
                continue
            if best is None or candidate.order > best.order:
                best = candidate
        return best

    def _replace_child(self, parent_index: int, old: int, new: int) -> None:
        parent = self._nodes[parent_index]
        if parent.left == old:
            parent.left = new
        else:
            parent.right = new

    def _is_ancestor(self, ancestor: int, index: int) -> bool:
        current = self._nodes[index].parent
        steps = 0
        while current is not None and steps <= len(self._nodes):
            if current == ancestor:
                return True
            current = self._nodes[current].parent
            steps += 1
        return False

    def _check_after_mutation(self, status: str) -> str:
        if not self.settings.validate_after_mutation or self._rebuilding:
            return status
        report = self.validate()
        if report.valid:
            return status
        self._log(StructuralCorruptionLog(report.issues))
        self.rebuild()
        return UpdateStatus.REBUILT if status == UpdateStatus.OK else status
