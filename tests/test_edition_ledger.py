"""Tests for the edition ledger."""

import pytest

from atelier.services.edition_ledger import (
    EditionDescriptor,
    EditionResizeError,
    InvalidEditionIdentifierError,
    enumerate_editions,
    is_fully_sold,
    orphaned_sales,
    resize,
    set_sale_state,
    validate_resize,
)


def edition(numeric=3, aps=1, sold=None):
    return EditionDescriptor(is_edition=True, numeric_size=numeric, ap_size=aps, sold_editions=sold or [])


class TestEnumerateEditions:
    """Tests for enumerate_editions."""

    def test_numbered_then_artist_proofs(self):
        assert enumerate_editions(edition(3, 1)) == ["1/3", "2/3", "3/3", "AP 1/1"]

    def test_unique_work_has_no_editions(self):
        assert enumerate_editions(EditionDescriptor(is_edition=False, numeric_size=5, ap_size=2)) == []

    def test_artist_proofs_only(self):
        assert enumerate_editions(edition(0, 2)) == ["AP 1/2", "AP 2/2"]

    def test_zero_sizes(self):
        assert enumerate_editions(edition(0, 0)) == []

    @pytest.mark.parametrize("numeric", range(7))
    @pytest.mark.parametrize("aps", range(5))
    def test_one_identifier_per_edition(self, numeric, aps):
        editions = enumerate_editions(edition(numeric, aps))

        assert len(editions) == numeric + aps
        assert len(set(editions)) == len(editions)
        assert sum(1 for e in editions if e.startswith("AP ")) == aps

    def test_negative_size_rejected(self):
        with pytest.raises(ValueError):
            EditionDescriptor(is_edition=True, numeric_size=-1)


class TestSetSaleState:
    """Tests for set_sale_state."""

    def test_marks_sold(self):
        updated = set_sale_state(edition(), "2/3", True)
        assert updated.sold_editions == ["2/3"]

    def test_does_not_mutate_input(self):
        original = edition(sold=["1/3"])
        set_sale_state(original, "2/3", True)
        assert original.sold_editions == ["1/3"]

    def test_sold_kept_in_enumeration_order(self):
        descriptor = edition()
        for identifier in ["AP 1/1", "3/3", "1/3"]:
            descriptor = set_sale_state(descriptor, identifier, True)
        assert descriptor.sold_editions == ["1/3", "3/3", "AP 1/1"]

    def test_idempotent_sell(self):
        once = set_sale_state(edition(), "1/3", True)
        twice = set_sale_state(once, "1/3", True)
        assert twice.sold_editions == once.sold_editions == ["1/3"]

    def test_unsell(self):
        updated = set_sale_state(edition(sold=["1/3", "2/3"]), "1/3", False)
        assert updated.sold_editions == ["2/3"]

    def test_unsell_unsold_is_noop(self):
        updated = set_sale_state(edition(sold=["2/3"]), "1/3", False)
        assert updated.sold_editions == ["2/3"]

    def test_unknown_identifier(self):
        with pytest.raises(InvalidEditionIdentifierError):
            set_sale_state(edition(), "4/3", True)

    def test_unique_work_has_nothing_to_sell(self):
        with pytest.raises(InvalidEditionIdentifierError):
            set_sale_state(EditionDescriptor(), "1/1", True)

    def test_orphans_preserved(self):
        descriptor = edition(2, 0, sold=["3/3"])
        updated = set_sale_state(descriptor, "1/2", True)
        assert updated.sold_editions == ["1/2", "3/3"]


class TestOrphanedSales:
    """Tests for orphaned_sales."""

    def test_reports_identifiers_outside_enumeration(self):
        assert orphaned_sales(edition(2, 0, sold=["1/2", "3/3"])) == ["3/3"]

    def test_none_when_consistent(self):
        assert orphaned_sales(edition(sold=["1/3"])) == []


class TestIsFullySold:
    """Tests for is_fully_sold."""

    def test_fully_sold(self):
        assert is_fully_sold(edition(sold=["1/3", "2/3", "3/3", "AP 1/1"]))

    def test_artist_proof_unsold(self):
        assert not is_fully_sold(edition(sold=["1/3", "2/3", "3/3"]))

    def test_empty_enumeration_never_sold(self):
        assert not is_fully_sold(edition(0, 0))
        assert not is_fully_sold(EditionDescriptor())


class TestResize:
    """Tests for resize validation."""

    def test_changing_artist_proofs_keeps_numbered_sales(self):
        updated = resize(edition(sold=["3/3"]), True, None, 2)
        assert updated.ap_size == 2
        assert updated.sold_editions == ["3/3"]

    def test_numeric_size_fixed_once_numbered_edition_sold(self):
        with pytest.raises(EditionResizeError) as exc_info:
            resize(edition(sold=["3/3"]), True, 5, None)
        assert exc_info.value.orphaned == ["3/3"]

    def test_shrinking_below_sold_rejected(self):
        with pytest.raises(EditionResizeError) as exc_info:
            resize(edition(sold=["2/3"]), True, 1, None)
        assert "2/3" in exc_info.value.orphaned

    def test_resizing_unsold_edition_allowed(self):
        updated = resize(edition(), True, 2, 0)
        assert enumerate_editions(updated) == ["1/2", "2/2"]

    def test_removing_sold_artist_proofs_rejected(self):
        with pytest.raises(EditionResizeError):
            resize(edition(sold=["AP 1/1"]), True, None, 0)

    def test_convert_to_unique_clears_sizes(self):
        updated = resize(edition(), False, None, None)
        assert updated == EditionDescriptor()

    def test_convert_to_unique_after_sale_rejected(self):
        with pytest.raises(EditionResizeError):
            resize(edition(sold=["1/3"]), False, None, None)

    def test_validate_resize_without_sales(self):
        validate_resize(edition(), edition(1, 0))
