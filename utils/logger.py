# DEPENDENCIES
import sys
import time
import json
import logging
import traceback
from typing import Any
from typing import Dict
from pathlib import Path
from typing import Optional
from functools import wraps
from datetime import datetime



class ContraScopeLogger:
    """
    Structured logging for ContraScope
    Features:
    - JSON payloads on every record
    - Separate files for errors and timings
    - Console output for warnings and above
    """
    APP_NAME                             = "contrascope"

    _loggers : Dict[str, logging.Logger] = dict()
    _log_dir : Optional[Path]            = None
    _level   : int                       = logging.INFO


    @classmethod
    def setup(cls, log_dir: str = "logs", app_name: str = APP_NAME, level: str = "INFO"):
        """
        Setup logging system

        Arguments:
        ----------
            log_dir  { str } : Directory for log files

            app_name { str } : Prefix of logger names and log file names

            level    { str } : Level name for the main logger
        """
        cls._log_dir = Path(log_dir)
        cls._log_dir.mkdir(parents = True, exist_ok = True)
        level_value  = logging.getLevelName(level.upper())
        cls._level   = level_value if isinstance(level_value, int) else logging.INFO

        cls._create_logger(name     = app_name,
                           log_file = cls._log_dir / f"{app_name}.log",
                           level    = cls._level,
                          )

        cls._create_logger(name     = f"{app_name}.error",
                           log_file = cls._log_dir / f"{app_name}_error.log",
                           level    = logging.ERROR,
                          )

        cls._create_logger(name     = f"{app_name}.performance",
                           log_file = cls._log_dir / f"{app_name}_performance.log",
                           level    = logging.INFO,
                          )


    @classmethod
    def _create_logger(cls, name: str, log_file: Path, level: int) -> logging.Logger:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = False

        # Re-running setup must not stack handlers
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

        formatter       = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s', datefmt = '%Y-%m-%d %H:%M:%S')

        file_handler    = logging.FileHandler(log_file, encoding = "utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(formatter)

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        cls._loggers[name] = logger

        return logger


    @classmethod
    def is_configured(cls) -> bool:
        return bool(cls._loggers)


    @classmethod
    def get_logger(cls, name: str = APP_NAME) -> logging.Logger:
        """
        Get logger by name, initializing the default layout on first use
        """
        if not cls.is_configured():
            cls.setup()

        return cls._loggers.get(name, logging.getLogger(name))


    @classmethod
    def log_structured(cls, level: int, message: str, **kwargs):
        """
        Log a message with extra fields as one JSON document
        """
        logger   = cls.get_logger()

        log_data = {"timestamp" : datetime.now().isoformat(),
                    "message"   : message,
                    **kwargs
                   }

        logger.log(level, json.dumps(log_data, ensure_ascii = False, default = str))


    @classmethod
    def log_error(cls, error: Exception, context: Dict[str, Any] = None):
        """
        Log error with traceback and context to the error logger

        Arguments:
        ----------
            error   { Exception } : Exception object

            context { dict }      : Additional context dictionary
        """
        cls.get_logger()
        error_logger = cls._loggers.get(f"{cls.APP_NAME}.error") or cls.get_logger()

        error_data   = {"timestamp"     : datetime.now().isoformat(),
                        "error_type"    : type(error).__name__,
                        "error_message" : str(error),
                        "traceback"     : "".join(traceback.format_exception(type(error), error, error.__traceback__)),
                        "context"       : context or {},
                       }

        error_logger.error(json.dumps(error_data, ensure_ascii = False, default = str))


    @classmethod
    def log_performance(cls, operation: str, duration: float, **metrics):
        """
        Log a timing record to the performance logger
        """
        cls.get_logger()
        perf_logger = cls._loggers.get(f"{cls.APP_NAME}.performance") or cls.get_logger()

        perf_data   = {"timestamp"        : datetime.now().isoformat(),
                       "operation"        : operation,
                       "duration_seconds" : round(duration, 4),
                       **metrics
                      }

        perf_logger.info(json.dumps(perf_data, default = str))


    @staticmethod
    def log_execution_time(operation_name: str = None):
        """
        Decorator to log execution time of functions
        """
        def decorator(func):
            @wraps(func)
            def wrapper(*args, **kwargs):
                op_name    = operation_name or func.__name__
                start_time = time.perf_counter()

                try:
                    result = func(*args, **kwargs)

                except Exception as e:
                    ContraScopeLogger.log_performance(operation = op_name,
                                                      duration  = time.perf_counter() - start_time,
                                                      status    = "error",
                                                      error     = str(e),
                                                     )
                    ContraScopeLogger.log_error(e, context = {"operation" : op_name})
                    raise

                ContraScopeLogger.log_performance(operation = op_name,
                                                  duration  = time.perf_counter() - start_time,
                                                  status    = "success",
                                                 )
                return result

            return wrapper

        return decorator



# Convenience functions
def log_info(message: str, **kwargs):
    ContraScopeLogger.log_structured(logging.INFO, message, **kwargs)


def log_warning(message: str, **kwargs):
    ContraScopeLogger.log_structured(logging.WARNING, message, **kwargs)


def log_error(error: Exception, context: Dict[str, Any] = None):
    ContraScopeLogger.log_error(error, context)


def log_debug(message: str, **kwargs):
    ContraScopeLogger.log_structured(logging.DEBUG, message, **kwargs)
