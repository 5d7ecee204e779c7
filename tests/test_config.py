"""
Unit tests for settings and source configuration.

Environment variables are set with monkeypatch so nothing leaks between tests.
"""

import os

import pytest
from pydantic import ValidationError

from offerfinder.config import load_settings, load_sources
from offerfinder.models.schemas import MatchSettings


class TestLoadSettings:
    """Test the load_settings function."""

    def test_defaults(self, monkeypatch):
        """Test defaults match the tuned values."""
        monkeypatch.delenv("OFFERFINDER_MAX_SUGGESTIONS", raising=False)
        s = load_settings()
        assert s.whole_similarity_threshold == 0.6
        assert s.word_similarity_threshold == 0.7
        assert s.select_similarity_threshold == 0.7
        assert s.max_suggestions == 50

    def test_env_overrides(self, monkeypatch):
        """Test OFFERFINDER_* variables override fields."""
        monkeypatch.setenv("OFFERFINDER_MAX_SUGGESTIONS", "20")
        monkeypatch.setenv("OFFERFINDER_FUZZY_BOOST", "2.5")
        s = load_settings()
        assert s.max_suggestions == 20
        assert s.fuzzy_boost == 2.5

    def test_blank_override_ignored(self, monkeypatch):
        """Test an empty variable keeps the default."""
        monkeypatch.setenv("OFFERFINDER_KEEP_THRESHOLD", "")
        assert load_settings().keep_threshold == 0.3

    def test_unrelated_vars_ignored(self, monkeypatch):
        """Test other OFFERFINDER_* variables don't break the settings."""
        monkeypatch.setenv("OFFERFINDER_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("OFFERFINDER_DATA_DIR", "/tmp/sheets")
        assert load_settings().max_suggestions == 50

    def test_bad_value(self, monkeypatch):
        """Test invalid overrides fail loudly."""
        monkeypatch.setenv("OFFERFINDER_MAX_SUGGESTIONS", "0")
        with pytest.raises(ValidationError):
            load_settings()

    def test_explicit_values_win(self, monkeypatch):
        """Test constructor arguments beat the environment."""
        monkeypatch.setenv("OFFERFINDER_MAX_SUGGESTIONS", "20")
        assert MatchSettings(max_suggestions=5).max_suggestions == 5


class TestLoadSources:
    """Test the load_sources function."""

    def test_default_order_and_roles(self):
        """Test the priority order and roles of the default sources."""
        sources = load_sources("data")
        assert [s.name for s in sources] == [
            "All Cards", "Permanent", "Blinkit", "Swiggy Instamart", "Zepto", "BigBasket",
        ]
        assert sources[0].role == "catalog"
        assert sources[1].role == "permanent"
        assert sources[2].location == os.path.join("data", "blinkit.csv")
        assert sources[2].heading == "Offers On Blinkit"

    def test_url_base(self):
        """Test a URL data dir is joined with '/'."""
        sources = load_sources("https://example.com/sheets/")
        assert sources[0].location == "https://example.com/sheets/allCards.csv"

    def test_data_dir_from_env(self, monkeypatch):
        """Test OFFERFINDER_DATA_DIR roots the sources when no dir is passed."""
        monkeypatch.setenv("OFFERFINDER_DATA_DIR", "https://cdn.example.com/offers")
        sources = load_sources()
        assert sources[2].location == "https://cdn.example.com/offers/blinkit.csv"

    def test_data_dir_default(self, monkeypatch):
        """Test the data dir defaults to ./data."""
        monkeypatch.delenv("OFFERFINDER_DATA_DIR", raising=False)
        assert load_sources()[0].location == os.path.join("data", "allCards.csv")
