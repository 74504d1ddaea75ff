import unittest
from ahcodec.models import (
    Node,
    SymbolWeight,
    TreeSettings,
    UpdateStatus,
    ValidationReport,
    DecodeFramingError,
    StructuralCorruptionError,
)

class TestNode(unittest.TestCase):
    def test_new_node_is_leaf(self):
        node = Node(0, None, 0, 512)
        self.assertTrue(node.is_leaf())
        self.assertTrue(node.is_placeholder())
        self.assertIsNone(node.parent)

    def test_symbol_leaf_is_not_placeholder(self):
        node = Node(1, 65, 1, 511, parent=0)
        self.assertTrue(node.is_leaf())
        self.assertFalse(node.is_placeholder())
        self.assertEqual(node.parent, 0)

    def test_internal_node(self):
        node = Node(0, None, 1, 512)
        node.left = 2
        node.right = 1
        self.assertFalse(node.is_leaf())
        self.assertFalse(node.is_placeholder())

    def test_str_and_repr(self):
        self.assertEqual(str(Node(0, None, 0, 510)), "[NYT, weight=0, order=510]")
        self.assertEqual(str(Node(1, 65, 3, 511)), "[65, weight=3, order=511]")
        self.assertIn("symbol=65", repr(Node(1, 65, 3, 511)))

class TestSymbolWeight(unittest.TestCase):
    def test_equality_and_hash(self):
        a = SymbolWeight(65, 2)
        b = SymbolWeight(65, 2)
        c = SymbolWeight(65, 3)
        self.assertEqual(a, b)
        self.assertNotEqual(a, c)
        self.assertEqual(hash(a), hash(b))

    def test_str_and_repr(self):
        sw = SymbolWeight(66, 10)
        self.assertEqual(str(sw), "[66, 10]")
        self.assertEqual(repr(sw), "[66, 10]")

    def test_non_integer_symbols(self):
        word = SymbolWeight("cat", 1)
        pair = SymbolWeight(("cat", 2), 1)
        self.assertEqual(word, SymbolWeight("cat", 1))
        self.assertEqual(len({word, pair, SymbolWeight("cat", 1)}), 2)
        self.assertEqual(Node(3, "cat", 1, 500).symbol, "cat")

class TestTreeSettings(unittest.TestCase):
    def test_defaults(self):
        settings = TreeSettings()
        self.assertTrue(settings.exchanges_enabled)
        self.assertEqual(settings.max_propagation_depth, 100)
        self.assertIsNone(settings.node_count_ceiling)
        self.assertTrue(settings.validate_after_mutation)
        self.assertEqual(settings.initial_order, 512)
        self.assertIs(settings.validated(), settings)

    def test_immutable(self):
        settings = TreeSettings()
        with self.assertRaises(AttributeError):
            settings.exchanges_enabled = False

    def test_invalid_values(self):
        with self.assertRaises(ValueError):
            TreeSettings(max_propagation_depth=0).validated()
        with self.assertRaises(ValueError):
            TreeSettings(node_count_ceiling=0).validated()
        with self.assertRaises(ValueError):
            TreeSettings(exchanges_enabled=1).validated()
        with self.assertRaises(ValueError):
            TreeSettings(max_propagation_depth=True).validated()

class TestValidationReport(unittest.TestCase):
    def test_from_issues(self):
        self.assertTrue(ValidationReport.from_issues([], 1).valid)
        report = ValidationReport.from_issues(["broken"], 3)
        self.assertFalse(report.valid)
        self.assertEqual(report.issues, ("broken",))
        self.assertIn("broken", str(report))

    def test_merge(self):
        merged = ValidationReport.from_issues([], 5).merge(ValidationReport.from_issues(["x"], 5))
        self.assertFalse(merged.valid)
        self.assertEqual(merged.node_count, 5)

class TestErrors(unittest.TestCase):
    def test_errors_are_value_errors(self):
        self.assertTrue(issubclass(DecodeFramingError, ValueError))
        report = ValidationReport.from_issues(["cycle"], 3)
        error = StructuralCorruptionError(report)
        self.assertIsInstance(error, ValueError)
        self.assertIs(error.report, report)
        self.assertIn("cycle", str(error))

    def test_status_values_are_distinct(self):
        values = {
            UpdateStatus.OK,
            UpdateStatus.DUPLICATE_SYMBOL_INSERT,
            UpdateStatus.UNKNOWN_SYMBOL,
            UpdateStatus.CYCLE_RISK,
            UpdateStatus.UPDATE_DEPTH_EXCEEDED,
            UpdateStatus.REBUILT,
        }
        self.assertEqual(len(values), 6)

if __name__ == '__main__':
    unittest.main()
