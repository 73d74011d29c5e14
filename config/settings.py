import os
import yaml
from typing import Dict, Any, Optional

SNMP_VERSIONS = ('1', '2c', '3')


class Settings:
    """Configuration management for the SNMP port viewer."""

    def __init__(self, config_file: Optional[str] = None):
        self.config_file = config_file or os.getenv('PV_CONFIG_FILE', 'config/config.yaml')
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file and environment variables."""
        config = {}

        # Load from YAML file if exists
        if os.path.exists(self.config_file):
            with open(self.config_file, 'r') as f:
                config = yaml.safe_load(f) or {}

        agent = config.get('agent', {}) or {}
        monitor = config.get('monitor', {}) or {}
        logging_config = config.get('logging', {}) or {}

        # Override with environment variables
        config.update({
            'agent': self._load_agent_config(agent),
            'monitor': {
                'interval': int(os.getenv('PV_INTERVAL', monitor.get('interval', 1))),
                'history_size': int(os.getenv('PV_HISTORY_SIZE', monitor.get('history_size', 120))),
                'page_size': int(os.getenv('PV_PAGE_SIZE', monitor.get('page_size', 10))),
                'max_consecutive_errors': int(os.getenv('PV_MAX_ERRORS', monitor.get('max_consecutive_errors', 3))),
            },
            'logging': {
                'level': os.getenv('LOG_LEVEL', logging_config.get('level', 'INFO')),
                'file': os.getenv('LOG_FILE', logging_config.get('file', 'logs/port_viewer.log')),
                'max_bytes': int(os.getenv('LOG_MAX_BYTES', logging_config.get('max_bytes', 10485760))),
                'backup_count': int(os.getenv('LOG_BACKUP_COUNT', logging_config.get('backup_count', 5))),
            },
        })

        return config

    def _load_agent_config(self, agent: Dict[str, Any]) -> Dict[str, Any]:
        """Load SNMP agent settings, environment variables taking precedence."""
        version = str(os.getenv('SNMP_VERSION', agent.get('version', '2c'))).lower()
        # YAML reads a bare `version: 2` as an int
        if version == '2':
            version = '2c'

        return {
            'host': os.getenv('SNMP_HOST', agent.get('host')),
            'port': int(os.getenv('SNMP_PORT', agent.get('port', 161))),
            'community': os.getenv('SNMP_COMMUNITY', agent.get('community')),
            'version': version,
            'timeout': float(os.getenv('SNMP_TIMEOUT', agent.get('timeout', 2))),
            'retries': int(os.getenv('SNMP_RETRIES', agent.get('retries', 1))),
            'username': os.getenv('SNMP_USER', agent.get('username')),
        }

    def reload(self, config_file: Optional[str] = None) -> None:
        """Re-read configuration, optionally from a different file."""
        if config_file:
            self.config_file = config_file
        self.config = self._load_config()

    def get_agent(self) -> Dict[str, Any]:
        """Get the SNMP agent configuration."""
        return self.config.get('agent', {})

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation."""
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

# Global settings instance
settings = Settings()
