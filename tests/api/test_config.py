"""
Unit tests for API configuration.
"""

import pytest
from pydantic import ValidationError

from api.config import APIConfig


class TestAPIConfig:
    """Test cases for APIConfig."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET", raising=False)

        config = APIConfig(_env_file=None)

        assert config.port == 8080
        assert config.jwt_secret is None
        assert config.jwt_algorithm == "HS256"
        assert config.token_expire_hours == 1
        assert config.seed_sample_data is True
        assert config.book_detail_applies_body is True

    def test_secret_from_environment(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET", "from-env")
        monkeypatch.setenv("PORT", "9090")

        config = APIConfig(_env_file=None)

        assert config.jwt_secret == "from-env"
        assert config.port == 9090

    def test_secret_from_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("JWT_SECRET", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("JWT_SECRET=from-file\nUNRELATED=1\n")

        config = APIConfig(_env_file=env_file)

        assert config.jwt_secret == "from-file"

    def test_empty_secret_is_kept(self):
        config = APIConfig(_env_file=None, jwt_secret="")

        assert config.jwt_secret == ""

    def test_algorithm_normalised(self):
        assert APIConfig(_env_file=None, jwt_algorithm="hs512").jwt_algorithm == "HS512"

    @pytest.mark.parametrize("algorithm", ["RS256", "none", "ES256"])
    def test_non_hmac_algorithm_rejected(self, algorithm):
        with pytest.raises(ValidationError):
            APIConfig(_env_file=None, jwt_algorithm=algorithm)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError) as exc_info:
            APIConfig(_env_file=None, log_level="LOUD")

        assert "log_level must be one of" in str(exc_info.value)

    def test_log_format_normalised(self):
        assert APIConfig(_env_file=None, log_format="JSON").log_format == "json"

    def test_expiry_must_be_positive(self):
        with pytest.raises(ValidationError):
            APIConfig(_env_file=None, token_expire_hours=0)
