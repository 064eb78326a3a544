"""
PVO Logging Utilities

This module provides logging helpers for the PVO evaluator. It handles
initialization of the package logger, structured logging of vector operations
(compositions, evaluations) and timing of pipeline steps.

Everything is logged below the `pvo` logger, so module loggers created with
`logging.getLogger(__name__)` share its handlers and level.
"""

import os
import json
import logging
import time
from datetime import datetime
from functools import wraps
from typing import Dict, Any, Optional, Callable
import numpy as np

PACKAGE_LOGGER = "pvo"

logger = logging.getLogger(__name__)

# Custom JSON encoder to handle NumPy arrays and scalars
class PvoJSONEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, np.ndarray):
            if obj.dtype == bool and obj.ndim == 1:
                return "".join("t" if value else "f" for value in obj)
            return obj.tolist()
        if isinstance(obj, np.generic):
            return obj.item()
        if isinstance(obj, datetime):
            return obj.isoformat()
        return super().default(obj)

def initialize_logger(log_level: str = "warning", log_path: Optional[str] = None) -> logging.Logger:
    """
    Initialize the logging system.

    Args:
        log_level (str): Minimum log level to record. Options include:
                         "debug", "info", "warning", "error".
        log_path (str, optional): Directory where a dated log file should be
                                  written. Console logging only when None.

    Returns:
        logging.Logger: Configured package logger.
    """
    level_map = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR
    }
    level = level_map.get(log_level.lower(), logging.WARNING)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)

    # Clear existing handlers
    if package_logger.handlers:
        package_logger.handlers.clear()

    # Console handler writes to stderr so it never mixes with REPL output
    console_handler = logging.StreamHandler()
    console_formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s',
                                          datefmt='%H:%M:%S')
    console_handler.setFormatter(console_formatter)
    package_logger.addHandler(console_handler)

    if log_path:
        os.makedirs(log_path, exist_ok=True)
        log_file = os.path.join(log_path, f"pvo_{datetime.now().strftime('%Y%m%d')}.log")
        file_handler = logging.FileHandler(log_file)
        file_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                                           datefmt='%Y-%m-%d %H:%M:%S')
        file_handler.setFormatter(file_formatter)
        package_logger.addHandler(file_handler)

    package_logger.info("Logging system initialized with level: %s", logging.getLevelName(level))

    return package_logger

def log_vector_operation(
    operation_type: str,
    inputs: Dict[str, Any],
    outputs: Dict[str, Any],
    metadata: Optional[Dict[str, Any]] = None
) -> None:
    """
    Log a vector operation as a JSON entry at DEBUG level.

    Args:
        operation_type (str): Type of vector operation (e.g., "compose", "resolve").
        inputs (Dict[str, Any]): Input vectors and parameters.
        outputs (Dict[str, Any]): Output vectors and results.
        metadata (Dict[str, Any], optional): Additional information such as arities.

    Returns:
        None
    """
    operation_logger = logging.getLogger(f"{PACKAGE_LOGGER}.operations")
    if not operation_logger.isEnabledFor(logging.DEBUG):
        return

    log_entry = {
        "timestamp": datetime.now().isoformat(),
        "operation_type": operation_type,
        "inputs": inputs,
        "outputs": outputs,
        "metadata": metadata or {}
    }
    operation_logger.debug(json.dumps(log_entry, cls=PvoJSONEncoder))

def timer(operation_name: str) -> Callable:
    """
    Function decorator to time and log the execution of functions.

    Args:
        operation_name (str): Name of the operation to log.

    Returns:
        Callable: Decorator function that times and logs the execution.
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            result = func(*args, **kwargs)
            execution_time = time.perf_counter() - start_time
            logger.debug("Performance - %s - Time: %.6fs - Function: %s",
                         operation_name, execution_time, func.__name__)
            return result
        return wrapper
    return decorator
