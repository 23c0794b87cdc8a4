"""Tests for catalogue membership resolution."""

import pytest

from atelier.services.catalogue_membership import (
    ForeignCatalogueError,
    SystemCatalogueToggleError,
    check_system_selection,
    diff_membership,
    resolve_membership,
)

SYSTEM = "sys-1"


class TestResolveMembership:
    """Tests for resolve_membership."""

    def test_available_adds_system(self):
        assert resolve_membership("available", {"c1"}, SYSTEM) == {"c1", SYSTEM}

    def test_sold_adds_system(self):
        assert resolve_membership("sold", set(), SYSTEM) == {SYSTEM}

    @pytest.mark.parametrize("status", ["draft", "pending", "on_hold"])
    def test_other_statuses_remove_system(self, status):
        assert resolve_membership(status, {"c1", SYSTEM}, SYSTEM) == {"c1"}

    def test_no_system_catalogue(self):
        assert resolve_membership("available", {"c1"}, None) == {"c1"}

    def test_foreign_catalogue_rejected(self):
        with pytest.raises(ForeignCatalogueError) as exc_info:
            resolve_membership("available", {"c1", "theirs"}, SYSTEM, owned_catalogue_ids={"c1", SYSTEM})
        assert exc_info.value.catalogue_ids == ["theirs"]

    def test_owned_selection_accepted(self):
        result = resolve_membership("draft", {"c1"}, SYSTEM, owned_catalogue_ids=["c1", SYSTEM])
        assert result == {"c1"}


class TestCheckSystemSelection:
    """Tests for check_system_selection."""

    def test_including_system_when_status_qualifies(self):
        check_system_selection("available", [SYSTEM, "c1"], SYSTEM)

    def test_omitting_system_is_fine(self):
        check_system_selection("draft", ["c1"], SYSTEM)

    def test_including_system_for_on_hold_rejected(self):
        with pytest.raises(SystemCatalogueToggleError):
            check_system_selection("on_hold", [SYSTEM], SYSTEM)


class TestDiffMembership:
    """Tests for diff_membership."""

    def test_unchanged_is_empty(self):
        diff = diff_membership({"c1", SYSTEM}, {SYSTEM, "c1"})
        assert diff.is_empty

    def test_adds_and_removes(self):
        diff = diff_membership({"c1", SYSTEM}, {"c1", "c2"})
        assert diff.to_add == {"c2"}
        assert diff.to_remove == {SYSTEM}
