# drmtoday_callback/base/utils/logger.py
"""
Centralized logging module for the DRMtoday callback.
Provides environment-aware logging for both Kodi and standalone modes.
"""

import sys
import logging

from .environment import get_environment_manager, parse_bool

_env_manager_instance = get_environment_manager()


class BaseLogger:
    """Base logger interface that all logger implementations must follow"""

    def __init__(self, logger_name: str, logger_version: str):
        self.logger_name = logger_name
        self.logger_version = logger_version
        self.prefix = f"[{logger_name} v{logger_version}]"

    def debug(self, message: str) -> None:
        """Log debug message"""
        raise NotImplementedError

    def info(self, message: str) -> None:
        """Log info message"""
        raise NotImplementedError

    def warning(self, message: str) -> None:
        """Log warning message"""
        raise NotImplementedError

    def error(self, message: str, exc_info: bool = False) -> None:
        """Log error message"""
        raise NotImplementedError

    def critical(self, message: str) -> None:
        """Log critical message"""
        raise NotImplementedError

    def set_debug(self, enabled: bool) -> None:
        """Toggle debug output; Kodi filters by its own log level"""

    # Specialized methods
    def log_license_event(self, request_id: str, event: str, details: str = "") -> None:
        """Log a key request event tagged with its logRequestId"""
        log_message = f"LICENSE [{request_id}] {event}"
        if details:
            log_message += f" - {details}"
        self.info(log_message)

    def log_provision_event(self, event: str, details: str = "") -> None:
        """Log provisioning event"""
        log_message = f"PROVISION {event}"
        if details:
            log_message += f" - {details}"
        self.debug(log_message)


def create_logger() -> BaseLogger:
    """Create appropriate logger instance based on environment"""

    app_name = _env_manager_instance.get_config('addon_name', 'DRMtoday Callback')
    app_version = _env_manager_instance.get_config('addon_version', '1.0.0')

    if _env_manager_instance.is_kodi():
        try:
            import xbmc

            class XBMCLogger(BaseLogger):
                """Centralized logging using XBMC's logging system."""

                def debug(self, message: str) -> None:
                    xbmc.log(f"{self.prefix} {message}", xbmc.LOGDEBUG)

                def info(self, message: str) -> None:
                    xbmc.log(f"{self.prefix} {message}", xbmc.LOGINFO)

                def warning(self, message: str) -> None:
                    xbmc.log(f"{self.prefix} {message}", xbmc.LOGWARNING)

                def error(self, message: str, exc_info: bool = False) -> None:
                    xbmc.log(f"{self.prefix} {message}", xbmc.LOGERROR)

                def critical(self, message: str) -> None:
                    xbmc.log(f"{self.prefix} {message}", xbmc.LOGFATAL)

            return XBMCLogger(str(app_name), str(app_version))

        except ImportError as xbmc_import_error:
            print(f"Failed to import xbmc: {xbmc_import_error}", file=sys.stderr)
            # Fall through to standard logger

    class StandardLogger(BaseLogger):
        """Standard Python logging for non-Kodi environments."""

        def __init__(self, logger_name: str, logger_version: str):
            super().__init__(logger_name, logger_version)

            self._logger = logging.getLogger(logger_name)

            # Only add handlers if none exist
            if not self._logger.handlers:
                console_handler = logging.StreamHandler(sys.stdout)
                formatter = logging.Formatter(
                    f'%(asctime)s {self.prefix} %(levelname)s: %(message)s',
                    datefmt='%Y-%m-%d %H:%M:%S'
                )
                console_handler.setFormatter(formatter)
                self._logger.addHandler(console_handler)

                log_dir = _env_manager_instance.get_config('profile_path')
                if log_dir:
                    import os
                    log_file = os.path.join(str(log_dir), 'drmtoday-callback.log')
                    try:
                        file_handler = logging.FileHandler(log_file, encoding='utf-8')
                        file_handler.setFormatter(formatter)
                        self._logger.addHandler(file_handler)
                    except (OSError, PermissionError) as file_handler_error:
                        print(f"Failed to create file handler: {file_handler_error}", file=sys.stderr)

                self.set_debug(parse_bool(_env_manager_instance.get_config('debug_mode'), False))

        def set_debug(self, enabled: bool) -> None:
            self._logger.setLevel(logging.DEBUG if enabled else logging.INFO)

        def debug(self, message: str) -> None:
            self._logger.debug(message)

        def info(self, message: str) -> None:
            self._logger.info(message)

        def warning(self, message: str) -> None:
            self._logger.warning(message)

        def error(self, message: str, exc_info: bool = False) -> None:
            if exc_info:
                self._logger.error(message, exc_info=True)
            else:
                self._logger.error(message)

        def critical(self, message: str) -> None:
            self._logger.critical(message)

    return StandardLogger(str(app_name), str(app_version))


# Global logger instance
logger: BaseLogger = create_logger()

__all__ = ['BaseLogger', 'logger']
