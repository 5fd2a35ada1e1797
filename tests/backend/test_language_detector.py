"""Tests for language detection and the simulated translator."""

import pytest

from services.errors import ContentValidationError
from services.language_detector import (
    SUPPORTED_LANGUAGES, detect_language, language_scores, simulate_translation
)


class TestDetectLanguage:
    """Test suite for detect_language."""

    def test_defaults_to_english(self):
        assert detect_language("") == "en"
        assert detect_language("123 456") == "en"

    def test_tie_keeps_earlier_language(self):
        """'the' scores 1 for en, it and pt; en is scored first."""
        scores = language_scores("the")

        assert scores["en"] == scores["it"] == scores["pt"] == 1
        assert detect_language("the") == "en"

    def test_russian(self):
        assert detect_language("в и не на") == "ru"

    def test_japanese(self):
        assert detect_language("これはペンです") == "ja"


class TestSimulateTranslation:
    """Test suite for the translation stub."""

    def test_notice(self):
        result = simulate_translation("Hola mundo", "Saludo", "fr", "es")

        assert result["sourceLanguage"] == "es"
        assert result["targetLanguage"] == "fr"
        assert result["translatedContent"].startswith("[TRANSLATED TO FRENCH]")
        assert "from Spanish to French" in result["translatedContent"]
        assert 'Original title: "Saludo"' in result["translatedContent"]
        assert "Word count: 2 words" in result["translatedContent"]

    def test_detects_source_when_missing(self):
        result = simulate_translation("в и не на", "Текст", "en")

        assert result["sourceLanguage"] == "ru"

    def test_unsupported_target(self):
        with pytest.raises(ContentValidationError):
            simulate_translation("text", "title", "xx")

    def test_twenty_supported_languages(self):
        assert len(SUPPORTED_LANGUAGES) == 20
