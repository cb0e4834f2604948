from core.config import load_settings


def test_reads_required_variables():
    settings = load_settings({"N8N_API_URL": "http://localhost:5678", "N8N_API_KEY": "k"})
    assert settings.missing == []
    assert settings.base_url == "http://localhost:5678/api/v1"
    assert settings.log_level == "INFO"


def test_missing_variables_are_reported_not_raised():
    settings = load_settings({"N8N_LOG_LEVEL": "debug"})
    assert settings.missing == ["N8N_API_URL", "N8N_API_KEY"]
    assert settings.log_level == "DEBUG"
