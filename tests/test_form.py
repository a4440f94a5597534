"""
Tests for the multi-entry form state.
"""

import pytest

from thpt_ranking.core.models import CatalogOption
from thpt_ranking.form import EntryForm, FormError, validate_submission


@pytest.fixture
def form():
    years = [CatalogOption.from_value(y) for y in (2024, 2023)]
    combinations = [CatalogOption.from_value(c) for c in ("A00", "D01")]
    return EntryForm(years, combinations)


class TestEntryForm:
    def test_starts_with_one_default_row(self, form):
        assert len(form.entries) == 1
        first = form.entries[0]
        assert (first.year, first.combination, first.score) == (2024, "A00", None)
        assert form.can_add
        assert not form.can_remove

    def test_add_uses_next_year_until_exhausted(self, form):
        added = form.add_entry()
        assert (added.year, added.combination) == (2023, "A00")
        assert form.max_entries == 2
        assert not form.can_add

        with pytest.raises(FormError):
            form.add_entry()

    def test_remove_last_row_refused(self, form):
        with pytest.raises(FormError):
            form.remove_entry(0)

        form.add_entry()
        removed = form.remove_entry(0)
        assert removed.year == 2024
        assert [e.year for e in form.entries] == [2023]

    def test_score_keystrokes(self, form):
        assert form.set_score(0, "7") == "7"
        assert form.set_score(0, "7,") == "7."
        assert form.set_score(0, "7,5") == 7.5
        assert form.score_text(0) == "7.5"
        assert form.set_score(0, "7,5x") == 7.5
        assert form.set_score(0, "") is None
        assert form.score_text(0) == ""

    def test_selectors(self, form):
        form.set_year(0, "2023")
        form.set_combination(0, "D01")
        assert (form.entries[0].year, form.entries[0].combination) == (2023, "D01")

    def test_payload_validates(self, form):
        form.set_score(0, "8,25")
        entries = validate_submission(form.to_payload())
        assert entries[0].score == 8.25

    def test_empty_catalogs_rejected(self):
        with pytest.raises(FormError):
            EntryForm([], [CatalogOption.from_value("A00")])
