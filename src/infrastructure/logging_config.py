"""日志配置

根 logger 的级别和格式来自配置（settings.log_level / settings.log_format）：
- text: "时间 - logger - 级别 - 消息"
- json: 每行一个 JSON 对象，便于日志平台采集
"""

import json
import logging
import sys

_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_HANDLER_NAME = "dynamic-node-parameters"


class JsonFormatter(logging.Formatter):
    """JSON 日志格式"""

    def format(self, record: logging.LogRecord) -> str:
        log_dict = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_dict["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_dict, ensure_ascii=False, default=str)


def configure_logging(level: str = "INFO", log_format: str = "text") -> None:
    """配置根 logger

    只替换本函数之前安装的处理器，其他处理器（如 pytest caplog）保持不变。
    """
    if log_format == "json":
        formatter: logging.Formatter = JsonFormatter(datefmt=_DATE_FORMAT)
    else:
        formatter = logging.Formatter(_TEXT_FORMAT, datefmt=_DATE_FORMAT)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.set_name(_HANDLER_NAME)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper())
