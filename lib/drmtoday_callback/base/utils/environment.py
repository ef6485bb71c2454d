# drmtoday_callback/base/utils/environment.py
"""
Central environment detection and configuration access.
Resolves Kodi vs. standalone mode and exposes the callback settings.
"""

import os
import sys
import json
from typing import Dict, Any, Optional, Union
from pathlib import Path

# Settings read from the environment in standalone mode (config key -> env var)
ENV_VARIABLES = {
    'drmtoday_environment': 'DRMTODAY_ENVIRONMENT',
    'merchant': 'DRMTODAY_MERCHANT',
    'user_id': 'DRMTODAY_USER_ID',
    'session_id': 'DRMTODAY_SESSION_ID',
    'auth_token': 'DRMTODAY_AUTH_TOKEN',
    'asset_id': 'DRMTODAY_ASSET_ID',
    'proxy_url': 'DRMTODAY_PROXY_URL',
}

# Settings read from the Kodi addon settings
KODI_SETTINGS = (
    'drmtoday_environment',
    'merchant',
    'user_id',
    'session_id',
    'auth_token',
    'asset_id',
    'proxy_url',
)

DEFAULT_SERVER_PORT = 7778
DEFAULT_HTTP_TIMEOUT = 30


def parse_bool(value: Any, default: bool = False) -> bool:
    """Interpret a setting that may arrive as bool, number or string ("true", "false", "1", ...)"""
    if value is None or value == '':
        return default
    if isinstance(value, str):
        return value.strip().lower() not in ('false', '0', 'no', 'off')
    return bool(value)


class EnvironmentManager:
    """
    Central manager for environment detection and configuration values.
    """

    _instance: Optional['EnvironmentManager'] = None

    def __new__(cls) -> 'EnvironmentManager':
        if cls._instance is None:
            cls._instance = super(EnvironmentManager, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self) -> None:
        if self._initialized:
            return

        self._initialized = True

        # Check for Kodi availability
        try:
            import xbmcaddon
            import xbmcvfs
            self._is_kodi = True
        except ImportError:
            self._is_kodi = False

        self._addon: Any = None
        self._config: Dict[str, Any] = {}

        if self._is_kodi:
            self._init_kodi()
        else:
            self._init_standalone()

        self._load_config()

    def _init_kodi(self) -> None:
        """Initialize Kodi-specific configuration"""
        try:
            import xbmcaddon as kodi_xbmcaddon
            import xbmcvfs as kodi_xbmcvfs

            self._addon = kodi_xbmcaddon.Addon()

            self._config['environment'] = 'kodi'
            self._config['addon_id'] = self._addon.getAddonInfo('id')
            self._config['addon_name'] = self._addon.getAddonInfo('name')
            self._config['addon_version'] = self._addon.getAddonInfo('version')

            profile_info = self._addon.getAddonInfo('profile')
            self._config['profile_path'] = str(kodi_xbmcvfs.translatePath(profile_info))

            for key in KODI_SETTINGS:
                value = self._addon.getSetting(key)
                self._config[key] = str(value) if value else None

            server_port = self._addon.getSetting('server_port')
            try:
                self._config['server_port'] = int(str(server_port)) if server_port else DEFAULT_SERVER_PORT
            except ValueError:
                self._config['server_port'] = DEFAULT_SERVER_PORT

        except Exception as init_error:  # noqa: B902
            self._log_init_error("Kodi initialization failed", init_error)
            self._is_kodi = False
            self._init_standalone()

    @staticmethod
    def _log_init_error(message: str, error: Exception) -> None:
        """Log initialization errors (static method)"""
        # We can't use logger here yet, so print to stderr
        print(f"{message}: {error}", file=sys.stderr)

    def _init_standalone(self) -> None:
        """Initialize standalone mode configuration"""
        self._config['environment'] = 'standalone'
        self._config['addon_id'] = 'drmtoday-callback-standalone'
        self._config['addon_name'] = 'DRMtoday Callback'
        self._config['addon_version'] = '1.0.0'

        config_home = os.environ.get('XDG_CONFIG_HOME') or os.path.join(str(Path.home()), '.config')
        self._config['config_dir'] = os.path.join(config_home, 'drmtoday-callback')
        self._config['profile_path'] = self._config['config_dir']

        for key, env_var in ENV_VARIABLES.items():
            self._config[key] = os.environ.get(env_var) or None

        try:
            self._config['server_port'] = int(os.environ.get('SERVER_PORT', str(DEFAULT_SERVER_PORT)))
        except ValueError as port_error:
            print(f"Invalid server port, using default: {port_error}", file=sys.stderr)
            self._config['server_port'] = DEFAULT_SERVER_PORT

        try:
            self._config['http_timeout'] = int(os.environ.get('DRMTODAY_HTTP_TIMEOUT', str(DEFAULT_HTTP_TIMEOUT)))
        except ValueError as timeout_error:
            print(f"Invalid HTTP timeout, using default: {timeout_error}", file=sys.stderr)
            self._config['http_timeout'] = DEFAULT_HTTP_TIMEOUT

        self._config['verify_ssl'] = parse_bool(os.environ.get('DRMTODAY_VERIFY_SSL'), True)
        self._config['debug_mode'] = parse_bool(os.environ.get('DRMTODAY_DEBUG'), False)

        try:
            os.makedirs(self._config['config_dir'], exist_ok=True)
        except OSError as dir_error:
            print(f"Failed to create config directory: {dir_error}", file=sys.stderr)
            import tempfile
            self._config['config_dir'] = tempfile.mkdtemp(prefix='drmtoday-callback-')
            self._config['profile_path'] = self._config['config_dir']

    def _load_config(self) -> None:
        """Load additional configuration from config.json in the profile directory"""
        config_file = os.path.join(self._config['profile_path'], 'config.json')
        if os.path.exists(config_file):
            try:
                with open(config_file, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                    for key, value in file_config.items():
                        if isinstance(value, (str, int, float, bool, type(None))):
                            self._config[key] = value
            except json.JSONDecodeError as json_error:
                print(f"Invalid JSON in config file: {json_error}", file=sys.stderr)
            except OSError as io_error:
                print(f"Failed to read config file: {io_error}", file=sys.stderr)

    def is_kodi(self) -> bool:
        """Check if running in Kodi environment"""
        return self._is_kodi

    def get_environment(self) -> str:
        """Get current environment name"""
        return str(self._config.get('environment', 'unknown'))

    def get_config(self, key: str, default: Any = None) -> Any:
        """Get configuration value"""
        value = self._config.get(key)
        return default if value is None else value

    def set_config(self, key: str, value: Union[str, int, float, bool, None]) -> None:
        """Set configuration value (in memory only)"""
        self._config[key] = value


# Global singleton instance
_env_manager: Optional[EnvironmentManager] = None


def get_environment_manager() -> EnvironmentManager:
    """Get the global environment manager instance"""
    global _env_manager
    if _env_manager is None:
        _env_manager = EnvironmentManager()
    return _env_manager


def is_kodi_environment() -> bool:
    """Check if we're running in Kodi environment (convenience function)"""
    return get_environment_manager().is_kodi()
