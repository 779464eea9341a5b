import pytest

from searchbar.localization import (
    LocalizationError, Localizer, placeholder_text, strip_filter_words
)

STRINGS = {
    "SEARCH": {
        "PLACEHOLDER": "Search everything",
        "PLACEHOLDER_FILTER": "Search ",
        "PLACEHOLDER_INITIALIZING": "Initializing...",
        "NO_OPTIONS": "Nothing found",
        "CATEGORIES": {
            "ALL_LAYER": "All Layers",
            "PIXEL": "Pixel Layers",
            "LIBRARY": "Libraries",
        },
    }
}

RAW_NAMES = {"lib1": "Brand Assets"}


@pytest.fixture
def localizer():
    return Localizer(STRINGS)


class TestLocalizer:
    def test_localize_dotted_key(self, localizer):
        assert localizer.localize("SEARCH.CATEGORIES.PIXEL") == "Pixel Layers"

    def test_missing_key_raises(self, localizer):
        with pytest.raises(LocalizationError):
            localizer.localize("SEARCH.CATEGORIES.lib1")

    def test_non_string_node_raises(self, localizer):
        with pytest.raises(LocalizationError):
            localizer.localize("SEARCH.CATEGORIES")

    def test_text_falls_back_to_builtin_then_key(self):
        localizer = Localizer({"SEARCH": {}})
        assert localizer.text("SEARCH.NO_OPTIONS") == "No options match your search"
        assert localizer.text("SEARCH.UNKNOWN") == "SEARCH.UNKNOWN"

    def test_category_label_fallback_chain(self, localizer):
        assert localizer.category_label("PIXEL", RAW_NAMES) == "Pixel Layers"
        assert localizer.category_label("lib1", RAW_NAMES) == "Brand Assets"
        assert localizer.category_label("lib2", RAW_NAMES) == "lib2"
        assert localizer.category_label("lib2") == "lib2"

    def test_from_missing_file_uses_defaults(self, tmp_path):
        localizer = Localizer.from_file(tmp_path / "missing.yml")
        assert localizer.localize("SEARCH.NO_OPTIONS") == "No options match your search"

    def test_from_file(self, tmp_path):
        strings_file = tmp_path / "strings.yml"
        strings_file.write_text("SEARCH:\n  NO_OPTIONS: Rien\n", encoding="utf-8")
        assert Localizer.from_file(strings_file).localize("SEARCH.NO_OPTIONS") == "Rien"


class TestStripFilterWords:
    def test_typed_filter_name_is_cleared(self, localizer):
        assert strip_filter_words("pixel", ["ALL_LAYER", "PIXEL"], localizer) == ""

    def test_partial_filter_name_is_cleared(self, localizer):
        assert strip_filter_words("back pix", ["ALL_LAYER", "PIXEL"], localizer) == ""

    def test_unrelated_input_is_kept(self, localizer):
        assert strip_filter_words("  red  car ", ["ALL_LAYER", "PIXEL"], localizer) == "red car"

    def test_raw_name_labels_are_used(self, localizer):
        assert strip_filter_words("brand", ["LIBRARY", "lib1"], localizer, RAW_NAMES) == ""

    def test_no_filters_leaves_input(self, localizer):
        assert strip_filter_words("pixel ", [], localizer) == "pixel "

    def test_empty_input(self, localizer):
        assert strip_filter_words("", ["PIXEL"], localizer) == ""


class TestPlaceholderText:
    def test_filtered(self, localizer):
        assert placeholder_text(["ALL_LAYER", "PIXEL"], True, localizer) == "Search Pixel Layers"

    def test_filtered_with_raw_name(self, localizer):
        assert placeholder_text(["LIBRARY", "lib1"], True, localizer, RAW_NAMES) == "Search Brand Assets"

    def test_initializing(self, localizer):
        assert placeholder_text([], False, localizer) == "Initializing..."

    def test_ready(self, localizer):
        assert placeholder_text([], True, localizer) == "Search everything"
