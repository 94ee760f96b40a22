"""
Logging for multicall_helper.

All records go through one loguru logger bound to ``library='multicall_helper'``
and carry a ``module`` extra ('Multicall', 'Signer', ...). Importing the
package installs no sinks; applications opt in with
``configure_multicall_logging`` or ``enable_debug_logging``.
"""
import sys
from pathlib import Path

from loguru import logger

from multicall_helper.utils.models.settings_model import LoggingConfig


FORMAT = '{time:MMMM D, YYYY > HH:mm:ss!UTC} | {level} | {extra[module]} | {message}'

_multicall_logger = logger.bind(library='multicall_helper')

# id of the shared stdout sink behind debug_mode, None while disabled
_debug_handler_id = None


def _is_multicall_record(record):
    return record['extra'].get('library') == 'multicall_helper'


def create_level_filter(level: str):
    """
    Build a loguru filter that only lets this library's records of exactly one level through.

    Args:
        level (str): Level name, e.g. 'DEBUG'.

    Returns:
        Callable: A filter usable as the ``filter`` argument of ``logger.add``.
    """
    def level_filter(record):
        return record['level'].name == level and _is_multicall_record(record)
    return level_filter


def get_logger(module_name: str = 'Multicall'):
    """Returns the library logger bound to ``module_name``."""
    return _multicall_logger.bind(module=module_name)


def configure_multicall_logging(config: LoggingConfig):
    """
    Adds per-level file sinks and, optionally, console sinks for batch and signer logs.

    File sinks write ``<level>.log`` under ``config.log_dir`` (relative paths
    are resolved against the working directory) with the configured
    rotation, retention and compression.

    Args:
        config (LoggingConfig): The logging configuration to apply.
    """
    if config.log_dir is not None:
        log_dir = Path(config.log_dir)
        if not log_dir.is_absolute():
            log_dir = Path.cwd() / log_dir

        log_dir.mkdir(parents=True, exist_ok=True, mode=0o755)

        for level, enabled in config.file_levels.items():
            if not enabled:
                continue
            _multicall_logger.add(
                str((log_dir / f'{level.lower()}.log').absolute()),
                level=level,
                format=config.format,
                filter=create_level_filter(level),
                rotation=config.rotation,
                retention=config.retention,
                compression=config.compression,
                backtrace=True,
                diagnose=True,
            )

    if config.enable_console_logging:
        for level, output_stream in config.console_levels.items():
            _multicall_logger.add(
                sys.stdout if output_stream == 'stdout' else sys.stderr,
                level=level,
                format=config.format,
                filter=create_level_filter(level),
                colorize=True,
            )


def disable_multicall_file_logging():
    """
    Removes the file sinks added by ``configure_multicall_logging``.
    """
    handlers_to_remove = []
    for handler_id, handler in _multicall_logger._core.handlers.items():
        # only loguru's FileSink has a _file attribute
        if hasattr(handler._sink, '_file'):
            handlers_to_remove.append(handler_id)

    for handler_id in handlers_to_remove:
        try:
            _multicall_logger.remove(handler_id)
        except ValueError:
            pass  # already removed


def enable_debug_logging() -> int:
    """
    Sends this library's DEBUG and TRACE records (payload sizes, methods,
    transport failures) to stdout.

    Repeated calls reuse the same sink.

    Returns:
        int: The loguru handler id of the sink.
    """
    global _debug_handler_id
    if _debug_handler_id is None:
        _debug_handler_id = _multicall_logger.add(
            sys.stdout,
            level='TRACE',
            format=FORMAT,
            filter=lambda record: record['level'].name in ('DEBUG', 'TRACE') and _is_multicall_record(record),
            colorize=True,
        )
    return _debug_handler_id


def disable_debug_logging():
    global _debug_handler_id
    if _debug_handler_id is None:
        return
    try:
        _multicall_logger.remove(_debug_handler_id)
    except ValueError:
        pass  # removed through logger.remove()
    _debug_handler_id = None


default_logger = get_logger('Multicall')
