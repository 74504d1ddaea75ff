"""
tree_validator.py

Diagnostic passes over an adaptive Huffman tree. Every function here only
reads the tree through its query surface and never changes it.
"""


from typing import TYPE_CHECKING, List

from .models import ValidationReport

if TYPE_CHECKING:
    from .tree import AdaptiveHuffmanTree


def validate_structure(tree: "AdaptiveHuffmanTree") -> ValidationReport:
    """
    Check the link structure and weight bookkeeping of a tree.

    Args:
        tree (AdaptiveHuffmanTree): The tree to inspect.

    Returns:
        ValidationReport: One issue string per violated invariant.
    """
    nodes = tree.nodes()
    count = len(nodes)
    issues: List[str] = []

    root_index = tree.root_index
    if not 0 <= root_index < count:
        return ValidationReport.from_issues([f"root index {root_index} is outside the node table"], count)
    if nodes[root_index].parent is not None:
        issues.append(f"root node {root_index} has parent {nodes[root_index].parent}")

    visited = set()
    stack = [root_index]
    while stack:
        index = stack.pop()
        if index in visited:
            issues.append(f"cycle: node {index} is reached twice")
            continue
        visited.add(index)
        node = nodes[index]
        if node.index != index:
            issues.append(f"node stored at {index} reports index {node.index}")
        if node.weight < 0:
            issues.append(f"node {index} has negative weight {node.weight}")

        if (node.left is None) != (node.right is None):
            issues.append(f"node {index} has exactly one child")
        children_ok = True
        for child in (node.left, node.right):
            if child is None:
                continue
            if not 0 <= child < count:
                issues.append(f"node {index} links to missing child {child}")
                children_ok = False
                continue
            if nodes[child].parent != index:
                issues.append(f"child {child} of node {index} points back to {nodes[child].parent}")
            stack.append(child)

        if node.is_leaf():
            if node.weight > 0 and node.symbol is None:
                issues.append(f"leaf {index} has weight {node.weight} but no symbol")
        elif children_ok and node.left is not None and node.right is not None:
            expected = nodes[node.left].weight + nodes[node.right].weight
            if node.weight != expected:
                issues.append(f"internal node {index} has weight {node.weight}, children sum to {expected}")

    if len(visited) != count:
        issues.append(f"{count - len(visited)} nodes are unreachable from the root")

    placeholders = [node.index for node in nodes if node.is_placeholder()]
    if len(placeholders) != 1:
        issues.append(f"expected one placeholder leaf, found {len(placeholders)}")
    elif placeholders[0] != tree.placeholder_index:
        issues.append(f"placeholder is node {placeholders[0]}, tree tracks {tree.placeholder_index}")

    for symbol in tree.symbols():
        leaf = tree.leaf_of(symbol)
        if leaf is None or not leaf.is_leaf() or leaf.symbol != symbol:
            issues.append(f"symbol {symbol!r} is not indexed to a leaf carrying it")

    orders = [node.order for node in nodes]
    if len(set(orders)) != len(orders):
        issues.append("order values are not unique")

    return ValidationReport.from_issues(issues, count)


def validate_sibling_property(tree: "AdaptiveHuffmanTree") -> ValidationReport:
    """Check that every left child weighs no more than its right sibling."""
    nodes = tree.nodes()
    issues = []
    for node in nodes:
        if node.left is None or node.right is None:
            continue
        left = nodes[node.left]
        right = nodes[node.right]
        if left.weight > right.weight:
            issues.append(
                f"sibling weight order violated under node {node.index} "
                f"(left={left.weight}, right={right.weight})"
            )
    return ValidationReport.from_issues(issues, len(nodes))


def validate_order_listing(tree: "AdaptiveHuffmanTree") -> ValidationReport:
    """Check that listing the nodes by increasing order gives non-decreasing weights."""
    nodes = sorted(tree.nodes(), key=lambda node: node.order)
    issues = []
    for lower, higher in zip(nodes, nodes[1:]):
        if lower.weight > higher.weight:
            issues.append(
                f"node {lower.index} (order {lower.order}, weight {lower.weight}) outweighs "
                f"node {higher.index} (order {higher.order}, weight {higher.weight})"
            )
    return ValidationReport.from_issues(issues, len(nodes))


def validate_tree(tree: "AdaptiveHuffmanTree") -> ValidationReport:
    """Run the structural, sibling and order listing checks together."""
    report = validate_structure(tree)
    if not report.valid:
        # the weight checks assume sane links
        return report
    return report.merge(validate_sibling_property(tree)).merge(validate_order_listing(tree))


def format_tree(tree: "AdaptiveHuffmanTree") -> str:
    """
    Render the tree as indented text, one node per line.

    Args:
        tree (AdaptiveHuffmanTree): The tree to render.

    Returns:
        str: Lines of the form ``NYT (weight=0, order=510)``.
    """
    nodes = tree.nodes()
    lines = []
    visited = set()
    stack = [(tree.root_index, 0)]
    while stack:
        index, depth = stack.pop()
        if index in visited or not 0 <= index < len(nodes):
            continue
        visited.add(index)
        node = nodes[index]
        if node.is_placeholder():
            label = "NYT"
        elif node.is_leaf():
            label = repr(node.symbol)
        else:
            label = "*"
        lines.append(f"{'  ' * depth}{label} (weight={node.weight}, order={node.order})")
        if node.right is not None:
            stack.append((node.right, depth + 1))
        if node.left is not None:
            stack.append((node.left, depth + 1))
    return "\n".join(lines)
