"""Injectable logger for action execution."""

from utils.log_utils import log


class ActionLogger:
    def __init__(self, system: str = "ACTIONS") -> None:
        self.system = system

    def info(self, message: str) -> None:
        log(self.system, message, "INFO")

    def error(self, message: str) -> None:
        log(self.system, message, "ERROR")
