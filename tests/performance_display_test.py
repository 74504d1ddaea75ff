import io
import os
import sys
import tempfile
import unittest

import matplotlib
matplotlib.use("Agg")

from ahcodec.coders import AdaptiveHuffmanEncoder
from ahcodec.logger import Logger, CodingLog, Log, LogLevel
from ahcodec.performance_display import PerformanceDisplay


class TestPerformanceDisplay(unittest.TestCase):
    def setUp(self):
        self.logger = Logger()
        self.logger.display_progress = False
        AdaptiveHuffmanEncoder(logger=self.logger).encode("AAB")
        self.logger.log(Log("Other", LogLevel.INFO, "ignored"))

    def test_values_from_coding_logs(self):
        display = PerformanceDisplay(self.logger.logs)
        self.assertEqual(display.code_lengths(), [8, 1, 9])
        self.assertEqual(display.saved_bits(), [0, 7, -1])

    def test_plots_saved(self):
        display = PerformanceDisplay(self.logger.logs)
        with tempfile.TemporaryDirectory() as folder:
            lengths_path = os.path.join(folder, "lengths.png")
            saved_path = os.path.join(folder, "saved.png")
            self.assertTrue(display.plot_code_length(save_path=lengths_path))
            self.assertTrue(display.plot_saved_bits(save_path=saved_path))
            self.assertTrue(os.path.exists(lengths_path))
            self.assertTrue(os.path.exists(saved_path))

    def test_no_data(self):
        saved_stdout = sys.stdout
        sys.stdout = io.StringIO()
        try:
            self.assertFalse(PerformanceDisplay([]).plot_code_length())
            printed_output = sys.stdout.getvalue()
        finally:
            sys.stdout = saved_stdout
        self.assertIn("No data available", printed_output)

    def test_moving_average(self):
        display = PerformanceDisplay([CodingLog(8, 1)], moving_avg_window=4)
        self.assertEqual(len(display._moving_average([1.0, 2.0, 3.0])), 3)
        with self.assertRaises(ValueError):
            PerformanceDisplay([], moving_avg_window=0)._moving_average([1.0])


if __name__ == '__main__':
    unittest.main()
