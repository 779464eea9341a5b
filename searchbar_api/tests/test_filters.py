from searchbar.filters import FilterStack, decompose_filter_id


class TestDecomposeFilterId:
    def test_drops_type_prefix(self):
        assert decompose_filter_id("FILTER-ALL_LAYER-PIXEL") == ("ALL_LAYER", "PIXEL")

    def test_single_token(self):
        assert decompose_filter_id("FILTER-RECENT_DOC") == ("RECENT_DOC",)

    def test_prefix_only(self):
        assert decompose_filter_id("FILTER") == ()

    def test_empty_id(self):
        assert decompose_filter_id("") == ()


class TestFilterStack:
    def test_starts_empty(self):
        stack = FilterStack()
        assert not stack.active
        assert stack.last is None
        assert len(stack) == 0

    def test_push_appends_in_order(self):
        stack = FilterStack().push(["layers"]).push(["pixel"])
        assert stack.tokens == ("layers", "pixel")
        assert stack.last == "pixel"
        assert "layers" in stack

    def test_push_skips_duplicates(self):
        stack = FilterStack().push(["layers", "pixel"]).push(["layers", "pixel", "locked"])
        assert list(stack) == ["layers", "pixel", "locked"]

    def test_push_returns_new_stack(self):
        original = FilterStack(("layers",))
        pushed = original.push(["pixel"])
        assert original.tokens == ("layers",)
        assert pushed.tokens == ("layers", "pixel")

    def test_reset_and_pop_clear_every_level(self):
        stack = FilterStack(("layers", "pixel"))
        assert stack.reset() == FilterStack()
        assert stack.pop() == FilterStack()
        assert stack.tokens == ("layers", "pixel")
