import pytest

from nfa2regex.config import Settings


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings == Settings()
        assert settings.log_level == "INFO"
        assert settings.max_test_length == 6
        assert not settings.implicit_concat

    def test_overrides(self):
        settings = Settings.from_env({
            "NFA2REGEX_LOG_LEVEL": "debug",
            "NFA2REGEX_DEFAULT_SAMPLE": "2",
            "NFA2REGEX_MAX_TEST_LENGTH": "4",
            "NFA2REGEX_IMPLICIT_CONCAT": "yes",
            "NFA2REGEX_GRAPH_RANKDIR": " TB ",
        })
        assert settings.log_level == "DEBUG"
        assert settings.default_sample == 2
        assert settings.max_test_length == 4
        assert settings.implicit_concat is True
        assert settings.graph_rankdir == "TB"

    def test_false_flag(self):
        assert Settings.from_env({"NFA2REGEX_IMPLICIT_CONCAT": "0"}).implicit_concat is False

    def test_unrelated_variables_ignored(self):
        assert Settings.from_env({"LOG_LEVEL": "DEBUG"}).log_level == "INFO"

    def test_bad_integer(self):
        with pytest.raises(ValueError, match="NFA2REGEX_MAX_TEST_LENGTH must be an integer"):
            Settings.from_env({"NFA2REGEX_MAX_TEST_LENGTH": "many"})

    def test_negative_length(self):
        with pytest.raises(ValueError, match="must not be negative"):
            Settings.from_env({"NFA2REGEX_MAX_TEST_LENGTH": "-1"})
