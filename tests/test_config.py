from core.config import DEFAULT_BASE_URL, Settings, load_settings


def test_defaults_with_empty_environment():
    assert load_settings({}) == Settings()


def test_values_are_read_and_normalized():
    settings = load_settings({
        "FDA_API_KEY": "  abc123 ",
        "OPENFDA_BASE_URL": "http://localhost:9000/",
        "OPENFDA_TIMEOUT": "5",
        "OPENFDA_MAX_RETRIES": "0",
        "OPENFDA_BACKOFF": "0.25",
        "LOG_LEVEL": "debug",
        "AGENT_MODEL": "openai/gpt-4o-mini",
    })
    assert settings.api_key == "abc123"
    assert settings.base_url == "http://localhost:9000"
    assert settings.timeout_s == 5.0
    assert settings.max_retries == 1
    assert settings.backoff_s == 0.25
    assert settings.log_level == "DEBUG"
    assert settings.agent_model == "openai/gpt-4o-mini"


def test_bad_numbers_fall_back_to_defaults():
    settings = load_settings({"OPENFDA_TIMEOUT": "soon", "OPENFDA_MAX_RETRIES": "many"})
    assert settings.timeout_s == 30.0
    assert settings.max_retries == 3


def test_blank_key_means_no_key():
    settings = load_settings({"FDA_API_KEY": "   "})
    assert settings.api_key is None
    assert settings.base_url == DEFAULT_BASE_URL
