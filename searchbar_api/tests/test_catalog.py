from pathlib import Path

import pytest

from searchbar.catalog import CatalogError, CatalogSnapshot, build_catalog, load_catalog
from searchbar.models import CandidateItem, ItemKind

SAMPLE_CATALOG = Path(__file__).parent.parent / "catalog.yml"


class TestBuildCatalog:
    def test_keeps_group_and_item_order(self):
        catalog = build_catalog({
            "B": [CandidateItem(id="b1"), CandidateItem(id="b2")],
            "A": [CandidateItem(id="a1")],
        })
        assert list(catalog) == ["B", "A"]
        assert [item.id for item in catalog["B"]] == ["b1", "b2"]

    def test_duplicate_id_across_groups_rejected(self):
        with pytest.raises(CatalogError, match="dup"):
            build_catalog({
                "A": [CandidateItem(id="dup")],
                "B": [CandidateItem(id="dup")],
            })


class TestLoadCatalog:
    def test_sample_catalog(self):
        snapshot = load_catalog(SAMPLE_CATALOG)

        assert list(snapshot.catalog)[-1] == "FILTER"
        assert "FILTER-ALL_LAYER-PIXEL" in snapshot.filter_ids()
        assert "MENU_COMMAND-export-layer" not in snapshot.filter_ids()
        assert snapshot.icon_for("PIXEL") == "layer-search-pixel"
        assert snapshot.icon_for(None) is None
        assert snapshot.filter_names == {"lib1": "Brand Assets"}
        assert snapshot.policy.descriptor_for("lib1").execute == "search_stock"
        assert "Menu Commands" in snapshot.headers

        pixel = next(item for item in snapshot.catalog["FILTER"] if item.id == "FILTER-ALL_LAYER-PIXEL")
        assert pixel.kind == ItemKind.FILTER
        assert pixel.category == ("ALL_LAYER", "PIXEL")
        assert pixel.requires_active_document

    def test_missing_file_gives_empty_snapshot(self, tmp_path):
        snapshot = load_catalog(tmp_path / "missing.yml")
        assert isinstance(snapshot, CatalogSnapshot)
        assert snapshot.catalog == {}

    def test_empty_file_gives_empty_snapshot(self, tmp_path):
        catalog_file = tmp_path / "catalog.yml"
        catalog_file.write_text("", encoding="utf-8")
        assert load_catalog(catalog_file).catalog == {}

    def test_malformed_items_are_skipped(self, tmp_path):
        catalog_file = tmp_path / "catalog.yml"
        catalog_file.write_text(
            "groups:\n"
            "  G:\n"
            "    - {id: good, title: Good}\n"
            "    - {title: No Id}\n"
            "    - just a string\n"
            "    - {id: bad-kind, kind: nonsense}\n",
            encoding="utf-8",
        )
        snapshot = load_catalog(catalog_file)
        assert [item.id for item in snapshot.catalog["G"]] == ["good"]

    def test_non_mapping_rejected(self, tmp_path):
        catalog_file = tmp_path / "catalog.yml"
        catalog_file.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(CatalogError):
            load_catalog(catalog_file)

    def test_duplicate_ids_rejected(self, tmp_path):
        catalog_file = tmp_path / "catalog.yml"
        catalog_file.write_text(
            "groups:\n"
            "  A:\n"
            "    - {id: same}\n"
            "  B:\n"
            "    - {id: same}\n",
            encoding="utf-8",
        )
        with pytest.raises(CatalogError):
            load_catalog(catalog_file)

    def test_bad_no_results_entry_rejected(self, tmp_path):
        catalog_file = tmp_path / "catalog.yml"
        catalog_file.write_text(
            "groups: {}\n"
            "no_results:\n"
            "  lib1: {labels: oops}\n",
            encoding="utf-8",
        )
        with pytest.raises(CatalogError):
            load_catalog(catalog_file)

    @pytest.mark.parametrize("content, section", [
        ("groups: [a, b]\n", "groups"),
        ("icons: [x]\n", "icons"),
        ("filter_names: [x]\n", "filter_names"),
        ("no_results: [x]\n", "no_results"),
    ])
    def test_section_must_be_mapping(self, tmp_path, content, section):
        catalog_file = tmp_path / "catalog.yml"
        catalog_file.write_text(content, encoding="utf-8")
        with pytest.raises(CatalogError, match=section):
            load_catalog(catalog_file)
