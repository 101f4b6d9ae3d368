from .change_log_recorder import ChangeLogRecorder

__all__ = ["ChangeLogRecorder"]
