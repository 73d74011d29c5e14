"""Pytest tests for Settings loading and environment overrides."""

import pytest
import os
import tempfile

from config.settings import Settings

SNMP_ENV = (
    'SNMP_HOST', 'SNMP_PORT', 'SNMP_COMMUNITY', 'SNMP_VERSION', 'SNMP_TIMEOUT',
    'SNMP_RETRIES', 'SNMP_USER', 'PV_INTERVAL', 'PV_HISTORY_SIZE', 'PV_PAGE_SIZE',
    'PV_MAX_ERRORS', 'LOG_LEVEL', 'LOG_FILE',
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of these tests."""
    for name in SNMP_ENV:
        monkeypatch.delenv(name, raising=False)


def write_config(text):
    f = tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False)
    f.write(text)
    f.close()
    return f.name


class TestSettingsDefaults:
    """Test cases for defaults without a config file."""

    @pytest.mark.unit
    def test_defaults(self):
        settings = Settings(config_file='does/not/exist.yaml')
        agent = settings.get_agent()

        assert agent['host'] is None
        assert agent['port'] == 161
        assert agent['version'] == '2c'
        assert agent['timeout'] == 2.0
        assert agent['retries'] == 1
        assert settings.get('monitor.interval') == 1
        assert settings.get('monitor.history_size') == 120
        assert settings.get('monitor.page_size') == 10
        assert settings.get('monitor.max_consecutive_errors') == 3
        assert settings.get('logging.file') == 'logs/port_viewer.log'

    @pytest.mark.unit
    def test_get_missing_key(self):
        settings = Settings(config_file='does/not/exist.yaml')
        assert settings.get('monitor.nope') is None
        assert settings.get('agent.port.deeper', 'fallback') == 'fallback'


class TestSettingsFile:
    """Test cases for YAML configuration."""

    @pytest.mark.unit
    def test_yaml_values(self):
        path = write_config("""
agent:
  host: "switch01.example.net"
  port: 1161
  community: "monitor"
  version: 1
monitor:
  interval: 5
  history_size: 60
""")
        try:
            settings = Settings(config_file=path)
            agent = settings.get_agent()

            assert agent['host'] == 'switch01.example.net'
            assert agent['port'] == 1161
            assert agent['community'] == 'monitor'
            assert agent['version'] == '1'
            assert settings.get('monitor.interval') == 5
            assert settings.get('monitor.history_size') == 60
            assert settings.get('monitor.page_size') == 10
        finally:
            os.unlink(path)

    @pytest.mark.unit
    def test_bare_version_two_is_2c(self):
        path = write_config("agent:\n  version: 2\n")
        try:
            assert Settings(config_file=path).get('agent.version') == '2c'
        finally:
            os.unlink(path)

    @pytest.mark.unit
    def test_empty_file(self):
        path = write_config("")
        try:
            assert Settings(config_file=path).get('agent.port') == 161
        finally:
            os.unlink(path)

    @pytest.mark.unit
    def test_reload(self):
        first = write_config("monitor:\n  interval: 2\n")
        second = write_config("monitor:\n  interval: 10\n")
        try:
            settings = Settings(config_file=first)
            assert settings.get('monitor.interval') == 2

            settings.reload(second)
            assert settings.config_file == second
            assert settings.get('monitor.interval') == 10
        finally:
            os.unlink(first)
            os.unlink(second)


class TestSettingsEnvironment:
    """Test cases for environment variable overrides."""

    @pytest.mark.unit
    def test_env_overrides_file(self, monkeypatch):
        path = write_config("agent:\n  host: from-file\n  port: 1161\n")
        monkeypatch.setenv('SNMP_HOST', 'from-env')
        monkeypatch.setenv('SNMP_PORT', '10161')
        monkeypatch.setenv('SNMP_VERSION', '3')
        monkeypatch.setenv('SNMP_USER', 'observer')
        try:
            agent = Settings(config_file=path).get_agent()

            assert agent['host'] == 'from-env'
            assert agent['port'] == 10161
            assert agent['version'] == '3'
            assert agent['username'] == 'observer'
        finally:
            os.unlink(path)

    @pytest.mark.unit
    def test_monitor_env(self, monkeypatch):
        monkeypatch.setenv('PV_INTERVAL', '3')
        monkeypatch.setenv('PV_MAX_ERRORS', '5')
        monkeypatch.setenv('SNMP_TIMEOUT', '0.5')

        settings = Settings(config_file='does/not/exist.yaml')

        assert settings.get('monitor.interval') == 3
        assert settings.get('monitor.max_consecutive_errors') == 5
        assert settings.get('agent.timeout') == 0.5

    @pytest.mark.unit
    def test_config_file_from_env(self, monkeypatch):
        path = write_config("agent:\n  community: envfile\n")
        monkeypatch.setenv('PV_CONFIG_FILE', path)
        try:
            assert Settings().get('agent.community') == 'envfile'
        finally:
            os.unlink(path)
