"""
logger.py

Logging module for ahcodec.


"""


from datetime import datetime
from typing import Any, Iterable, Optional, Union

class LogLevel:
    INFO = 0
    WARNING = 1
    ERROR = 2
    PROGRESS = 3


class Log:
    def __init__(self, type_name: str, level: int, message: str) -> None:
        self.level = level
        self.type_name = type_name
        self.message = message
        self.date = datetime.now()

    def __str__(self) -> str:
        return f"{self.date} - {self.type_name} - {self.level} - {self.message}"

    def __repr__(self) -> str:
        return self.__str__()


class CodingLog(Log):
    def __init__(self, symbol_size: int, encoded_size: int) -> None:
        self.symbol_size = symbol_size
        self.encoded_size = encoded_size
        super().__init__("Coding_log", LogLevel.INFO, f"Symbol size: {symbol_size}, Encoded size: {encoded_size}")


class DuplicateSymbolInsertLog(Log):
    def __init__(self, symbol: Any) -> None:
        self.symbol = symbol
        super().__init__("Duplicate_symbol_insert_log", LogLevel.WARNING, f"Symbol already in tree, insert ignored: {symbol!r}")


class UnknownSymbolLog(Log):
    def __init__(self, symbol: Any) -> None:
        self.symbol = symbol
        super().__init__("Unknown_symbol_log", LogLevel.WARNING, f"Symbol not in tree, bump ignored: {symbol!r}")


class CycleRiskLog(Log):
    def __init__(self, first_order: int, second_order: int) -> None:
        self.first_order = first_order
        self.second_order = second_order
        super().__init__("Cycle_risk_log", LogLevel.WARNING, f"Skipped exchange between orders {first_order} and {second_order}")


class UpdateDepthExceededLog(Log):
    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__("Update_depth_exceeded_log", LogLevel.WARNING, f"Propagation stopped after {max_depth} nodes")


class StructuralCorruptionLog(Log):
    def __init__(self, issues: Iterable[str]) -> None:
        self.issues = tuple(issues)
        super().__init__("Structural_corruption_log", LogLevel.WARNING, "Tree invalid, rebuilding: " + "; ".join(self.issues))


class TreeRebuildLog(Log):
    def __init__(self, symbol_count: int, node_count: int) -> None:
        self.symbol_count = symbol_count
        self.node_count = node_count
        super().__init__("Tree_rebuild_log", LogLevel.INFO, f"Rebuilt tree from {symbol_count} symbols ({node_count} nodes)")


class TruncatedCodeLog(Log):
    def __init__(self, dangling_bits: int) -> None:
        self.dangling_bits = dangling_bits
        super().__init__("Truncated_code_log", LogLevel.WARNING, f"Bits ended inside a code, {dangling_bits} trailing bits kept for the next call")


class PreprocessingProgressStep(Log):
    def __init__(self, message: str, total_steps: Optional[int] = None) -> None:
        self.base_message = message
        self.total_steps = total_steps
        super().__init__("Preprocessing_progress_step", LogLevel.PROGRESS, message)


class CodingProgressStep(Log):
    def __init__(self, message: str, total_steps: Optional[int] = None) -> None:
        self.base_message = message
        self.total_steps = total_steps
        super().__init__("Coding_progress_step", LogLevel.PROGRESS, message)


class Logger:
    def __init__(self) -> None:
        self.preproc_progress_count = 0
        self.coding_progress_count = 0

        self.logs = []

        self.record_info = True
        self.record_warning = True
        self.record_error = True
        self.record_progress = False

        self.display_info = False
        self.display_warning = True
        self.display_error = True
        self.display_progress = True

        self.preprocessor_step_interval_count = 10000
        self.coding_step_interval_count = 100

    def log(self, log: Union[Log, str]) -> None:
        if not (isinstance(log, Log) or isinstance(log, str)):
            raise ValueError("Log must be an instance of Log class or a string")
        if isinstance(log, str):
            log = Log("General", LogLevel.INFO, log)

        if log.level == LogLevel.INFO:
            if self.record_info:
                self.logs.append(log)
            if self.display_info:
                print(log)
        elif log.level == LogLevel.WARNING:
            if self.record_warning:
                self.logs.append(log)
            if self.display_warning:
                print(log)
        elif log.level == LogLevel.ERROR:
            if self.record_error:
                self.logs.append(log)
            if self.display_error:
                print(log)
        elif log.level == LogLevel.PROGRESS:
            if isinstance(log, PreprocessingProgressStep):
                self.preproc_progress_count += 1
                count = self.preproc_progress_count
                interval = self.preprocessor_step_interval_count
            elif isinstance(log, CodingProgressStep):
                self.coding_progress_count += 1
                count = self.coding_progress_count
                interval = self.coding_step_interval_count
            else:
                return
            if log.total_steps is not None:
                log.message = f"{log.base_message} ({count}/{log.total_steps})"
            else:
                log.message = f"{log.base_message} ({count})"
            if self.record_progress:
                self.logs.append(log)
            if self.display_progress and (count % interval == 0):
                print(log)

    def logs_of_type(self, log_type: type) -> list:
        return [log for log in self.logs if isinstance(log, log_type)]

    def save(self, file_path: str) -> None:
        with open(file_path, 'w') as file:
            for log in self.logs:
                file.write(str(log) + "\n")
