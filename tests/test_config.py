import pytest

from roadmap_planner.core import config
from roadmap_planner.core.config import (
    DEFAULT_CATALOG_PATH,
    DevelopmentSettings,
    Environment,
    ProductionSettings,
    TestingSettings,
    get_settings,
    validate_configuration,
)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.mark.parametrize(
    "value, expected",
    [
        ("testing", TestingSettings),
        ("production", ProductionSettings),
        ("development", DevelopmentSettings),
        ("DEVELOPMENT", DevelopmentSettings),
    ],
)
def test_environment_selects_settings_class(monkeypatch, value, expected):
    monkeypatch.setenv("ENVIRONMENT", value)

    assert type(get_settings()) is expected


def test_api_key_from_environment(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "testing")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")

    settings = get_settings()

    assert settings.environment == Environment.TESTING
    assert settings.has_credentials


def test_blank_api_key_is_not_a_credential():
    assert not TestingSettings(openai_api_key="   ").has_credentials


def test_defaults():
    settings = TestingSettings(openai_api_key=None)

    assert settings.catalog_path == DEFAULT_CATALOG_PATH
    assert "software_engineer" in settings.occupations
    assert settings.relevance_threshold == 0.5


def test_packaged_catalog_exists():
    assert DEFAULT_CATALOG_PATH.exists()


def test_validate_configuration_warns_about_missing_key(settings, catalog_file):
    warnings = validate_configuration(settings)

    assert any("OPENAI_API_KEY" in w for w in warnings)


def test_validate_configuration_warns_about_missing_catalog(tmp_path):
    settings = TestingSettings(openai_api_key="sk", catalog_path=tmp_path / "nope.json")

    assert validate_configuration(settings) == [
        f"Catalog file not found: {tmp_path / 'nope.json'}"
    ]


def test_validate_configuration_rejects_empty_occupations(settings):
    settings = settings.model_copy(update={"occupations": []})

    with pytest.raises(ValueError):
        validate_configuration(settings)


def test_module_exposes_default_occupations():
    assert len(config.DEFAULT_OCCUPATIONS) == 8


def test_testing_settings_is_not_collected_as_a_test_class():
    assert TestingSettings.__test__ is False
    assert "__test__" not in TestingSettings.model_fields
