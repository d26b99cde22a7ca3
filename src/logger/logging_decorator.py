"""
Centralized Logging Utilities and Decorators

One place to configure file/console logging for the sync service, plus a
decorator that records entry, exit, duration and failures of the operations
it wraps.

Usage:
    from src.logger import setup_logging, log_function

    logger = setup_logging(
        logger_name="sync_entries",
        log_file="logs/sync_entries.log",
        verbose=True,
    )

    @log_function(logger_name="sync_entries", log_execution_time=True)
    def fetch_entries():
        ...
"""

import functools
import logging
import os
import time
from pathlib import Path
from typing import Optional, Callable, Any


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    logger_name: str,
    log_file: str = "logs/app.log",
    verbose: bool = False,
    level: int = logging.INFO,
) -> logging.Logger:
    """
    Set up a named logger with a file handler and an optional console handler.

    Calling it twice for the same name returns the already configured logger,
    except that a later ``verbose=True`` call still attaches the console handler.

    Args:
        logger_name: Name for the logger (e.g., "sync_entries")
        log_file: Path to log file (default: "logs/app.log"). The LOG_DIR
            environment variable, when set, replaces the directory part.
        verbose: If True, also log DEBUG and above to the console
        level: Base logging level (default: logging.INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    has_console = any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in logger.handlers
    )
    if logger.handlers and (has_console or not verbose):
        return logger

    logger.setLevel(logging.DEBUG if verbose else level)

    if not logger.handlers:
        log_path = Path(log_file)
        log_dir = os.getenv("LOG_DIR")
        if log_dir:
            log_path = Path(log_dir) / log_path.name
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    if verbose:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(console_handler)

    return logger


def log_function(
    logger_name: Optional[str] = None,
    level: int = logging.INFO,
    log_args: bool = False,
    log_result: bool = False,
    log_execution_time: bool = True,
) -> Callable:
    """
    Decorator logging function entry, exit, execution time and exceptions.

    Exceptions are logged with their traceback and re-raised unchanged.

    Args:
        logger_name: Logger to use (defaults to the decorated function's module)
        level: Log level for entry/exit messages (default: logging.INFO)
        log_args: If True, include call arguments in the entry message
        log_result: If True, include the return value in the exit message
        log_execution_time: If True, include the duration in the exit message

    Example:
        @log_function(logger_name="database", log_result=True)
        def check_database_connection() -> bool:
            ...
    """

    def decorator(func: Callable) -> Callable:
        name = logger_name or func.__module__

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            logger = logging.getLogger(name)
            if not logger.handlers:
                logger = setup_logging(name, level=level)

            func_name = func.__qualname__
            log_msg = f"Calling {func_name}"
            if log_args and (args or kwargs):
                args_repr = [repr(a) for a in args]
                kwargs_repr = [f"{k}={v!r}" for k, v in kwargs.items()]
                log_msg += f" with args: {', '.join(args_repr + kwargs_repr)}"
            logger.log(level, log_msg)

            start_time = time.time()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                execution_time = time.time() - start_time
                logger.error(
                    f"Exception in {func_name} after {execution_time:.2f}s: {type(e).__name__}: {e}",
                    exc_info=True,
                )
                raise

            completion_msg = f"Completed {func_name}"
            if log_execution_time:
                completion_msg += f" in {time.time() - start_time:.2f}s"
            if log_result:
                completion_msg += f" with result: {result!r}"
            logger.log(level, completion_msg)

            return result

        return wrapper

    return decorator
