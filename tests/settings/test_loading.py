import pytest

from rackctl._cogs.configs.configuration import ClientSettings
from rackctl._cogs.configs.loading import ConfigError, load_credentials, load_settings, read_config


def test_read_config(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text('username: jdoe\napi_key: secret\ncaching:\n  enabled: true\n')
    config = read_config(path)
    assert config == {'username': 'jdoe', 'api_key': 'secret', 'caching': {'enabled': True}}


def test_read_empty_config(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text('')
    assert read_config(path) == {}


def test_read_non_mapping_config(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text('- a\n- b\n')
    with pytest.raises(ConfigError, match=r"must be a mapping"):
        read_config(path)


def test_settings_defaults_from_empty_config():
    settings = load_settings({})
    assert settings == ClientSettings()


def test_settings_are_applied():
    settings = load_settings({
        'username': 'ignored',
        'caching': {'enabled': True, 'ttl': 30},
        'networking': {'request_timeout': 10},
        'authentication': {'user_agent': 'me/1.0'},
    })
    assert settings.caching.enabled is True
    assert settings.caching.ttl == 30
    assert settings.networking.request_timeout == 10
    assert settings.networking.connect_timeout is None
    assert settings.authentication.user_agent == 'me/1.0'


def test_settings_are_applied_to_existing_settings():
    original = ClientSettings()
    settings = load_settings({'caching': {'ttl': 5}}, original)
    assert settings is original
    assert settings.caching.ttl == 5


def test_unknown_group():
    with pytest.raises(ConfigError, match=r"Unknown settings group: 'cachng'"):
        load_settings({'cachng': {}})


def test_unknown_setting():
    with pytest.raises(ConfigError, match=r"Unknown setting: caching.tll"):
        load_settings({'caching': {'tll': 5}})


def test_non_mapping_group():
    with pytest.raises(ConfigError, match=r"must be a mapping"):
        load_settings({'caching': True})


def test_credentials_absent():
    assert load_credentials({}) is None


@pytest.mark.parametrize('config', [
    {'username': 'jdoe'},
    {'api_key': 'secret'},
    {'username': '', 'api_key': 'secret'},
])
def test_credentials_incomplete(config):
    assert load_credentials(config) is None


def test_credentials_from_config():
    info = load_credentials({'username': 'jdoe', 'api_key': 'secret', 'auth_url': 'https://auth/'})
    assert info.username == 'jdoe'
    assert info.api_key == 'secret'
    assert info.auth_url == 'https://auth/'


def test_credentials_overridden():
    info = load_credentials({'username': 'jdoe', 'api_key': 'secret'},
                            username='other', api_key=None, auth_url=None)
    assert info.username == 'other'
    assert info.api_key == 'secret'
    assert info.auth_url is None


def test_credentials_from_overrides_only():
    info = load_credentials({}, username='jdoe', api_key='secret')
    assert info.username == 'jdoe'
    assert info.api_key == 'secret'
