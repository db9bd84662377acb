"""
Logging utilities for the YC Companies Scraper
"""

import functools
import logging
import sys
from pathlib import Path
from typing import Optional
import time

def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    log_format: Optional[str] = None
) -> logging.Logger:
    """
    Setup logging configuration for the scraper.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (optional)
        log_format: Log message format (optional)

    Returns:
        Configured logger instance
    """

    if log_format is None:
        log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=log_format,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(log_format))
        logging.getLogger().addHandler(file_handler)

    # urllib3 connection chatter drowns the run at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info("=== YC Companies Scraper Logging Setup ===")

    return logger

def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the specified name.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return logging.getLogger(name)

def log_execution_time(func):
    """
    Decorator to log function execution time.

    Args:
        func: Function to decorate

    Returns:
        Decorated function
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger(func.__module__)
        start_time = time.time()

        try:
            result = func(*args, **kwargs)
            execution_time = time.time() - start_time
            logger.info(f"{func.__name__} completed in {execution_time:.2f} seconds")
            return result
        except Exception as e:
            execution_time = time.time() - start_time
            logger.error(f"{func.__name__} failed after {execution_time:.2f} seconds: {e}")
            raise

    return wrapper

def log_extraction_stats(
    total_companies: int,
    total_jobs: int,
    execution_time: float,
    logger: Optional[logging.Logger] = None
):
    """
    Log extraction run statistics.

    Args:
        total_companies: Number of companies written
        total_jobs: Number of jobs across those companies
        execution_time: Execution time in seconds
        logger: Logger instance (optional)
    """
    if logger is None:
        logger = get_logger(__name__)

    logger.info("=== EXTRACTION STATISTICS ===")
    logger.info(f"Total companies extracted: {total_companies}")
    logger.info(f"Total jobs found: {total_jobs}")
    logger.info(f"Execution time: {execution_time:.2f} seconds")
    logger.info("=" * 30)
