"""Tests for fuzzy filtering."""

from extension_settings.tui.fuzzy import fuzzy_filter, fuzzy_match


def _label(text):
    return text


class TestFuzzyMatch:
    def test_subsequence_required(self):
        assert fuzzy_match("tmt", "Timeout") is not None
        assert fuzzy_match("xyz", "Timeout") is None

    def test_case_insensitive(self):
        assert fuzzy_match("THE", "theme") is not None

    def test_every_token_must_match(self):
        assert fuzzy_match("deb mo", "Debug Mode") is not None
        assert fuzzy_match("deb x", "Debug Mode") is None

    def test_ignores_styling(self):
        assert fuzzy_match("theme", "\x1b[1mTheme\x1b[0m") is not None


class TestFuzzyFilter:
    def test_empty_query_keeps_order(self):
        items = ["Timeout", "Debug Mode", "Theme"]
        assert fuzzy_filter(items, "", _label) == items
        assert fuzzy_filter(items, "   ", _label) == items

    def test_excludes_non_matches(self):
        items = ["Timeout", "Debug Mode", "Theme"]
        assert fuzzy_filter(items, "the", _label) == ["Theme"]

    def test_prefix_match_ranks_first(self):
        items = ["Maximum tokens", "Token limit"]
        assert fuzzy_filter(items, "tok", _label)[0] == "Token limit"

    def test_contiguous_match_beats_scattered(self):
        items = ["Tab Handling Enabled", "Theme"]
        assert fuzzy_filter(items, "the", _label) == ["Theme", "Tab Handling Enabled"]

    def test_uses_get_text(self):
        items = [{"label": "Alpha"}, {"label": "Beta"}]
        assert fuzzy_filter(items, "bet", lambda item: item["label"]) == [{"label": "Beta"}]
