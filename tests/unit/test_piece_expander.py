"""Unit tests for piece expansion and material grouping."""

from __future__ import annotations

import logging

import pytest

from cutplan.domain.services import expand_pieces, group_by_material
from cutplan.domain.services.piece_expander import SAFE_MINIMUM
from cutplan.domain.value_objects import PieceInstance, PieceRequirement


def _row(piece_id: str = "A", material_id: str = "MDF18", **kwargs) -> PieceRequirement:
    values = {"width_mm": 300, "height_mm": 200, "quantity": 1}
    values.update(kwargs)
    return PieceRequirement(piece_id=piece_id, material_id=material_id, **values)


# =============================================================================
# expand_pieces
# =============================================================================


class TestExpandPieces:
    """Tests for expand_pieces."""

    def test_one_instance_per_unit(self) -> None:
        """A quantity of 3 yields three identical instances."""
        instances = expand_pieces([_row(quantity=3)])

        assert len(instances) == 3
        assert all(i.id == "A" for i in instances)
        assert all((i.width, i.height) == (300, 200) for i in instances)

    def test_preserves_row_order(self) -> None:
        """Instances follow row order, units of one row stay adjacent."""
        instances = expand_pieces([_row("A", quantity=2), _row("B"), _row("C", quantity=2)])

        assert [i.id for i in instances] == ["A", "A", "B", "C", "C"]

    def test_numeric_strings_are_parsed(self) -> None:
        """CSV text values are accepted."""
        instances = expand_pieces([_row(width_mm="560", height_mm=" 720 ", quantity="2")])

        assert len(instances) == 2
        assert (instances[0].width, instances[0].height) == (560, 720)

    @pytest.mark.parametrize(
        "quantity", ["", "abc", 0, -2, None, "inf", "1e999", "nan", float("inf")]
    )
    def test_malformed_quantity_falls_back_to_one(self, quantity) -> None:
        """Unusable quantities produce exactly one instance."""
        instances = expand_pieces([_row(quantity=quantity)])

        assert len(instances) == SAFE_MINIMUM == 1

    def test_malformed_quantity_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        """The fallback is reported, not silent."""
        with caplog.at_level(logging.WARNING):
            expand_pieces([_row("BAD", quantity="many")])

        assert "invalid quantity" in caplog.text
        assert "BAD" in caplog.text

    @pytest.mark.parametrize(
        "width", ["", "x", 0, -10, "inf", "-inf", "1e999", float("inf"), float("nan")]
    )
    def test_malformed_dimension_falls_back_to_minimum(self, width) -> None:
        """An unusable dimension becomes 1 mm; the other is kept."""
        instances = expand_pieces([_row(width_mm=width, height_mm=200)])

        assert len(instances) == 1
        assert instances[0].width == SAFE_MINIMUM
        assert instances[0].height == 200

    def test_malformed_dimension_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            expand_pieces([_row("BAD", height_mm="")])

        assert "invalid dimensions" in caplog.text

    def test_rotation_requires_piece_and_material(self) -> None:
        """can_rotate is the piece flag AND the material policy."""
        rows = [
            _row("A", "MDF18", rotatable=True),
            _row("B", "OAK19", rotatable=True),
            _row("C", "MDF18", rotatable=False),
        ]
        instances = expand_pieces(rows, {"MDF18": True, "OAK19": False})

        assert [i.can_rotate for i in instances] == [True, False, False]

    def test_missing_material_policy_allows_rotation(self) -> None:
        instances = expand_pieces([_row(material_id="PLY", rotatable=True)], {"MDF18": False})

        assert instances[0].can_rotate is True

    def test_banding_and_note_carried(self) -> None:
        instances = expand_pieces([_row(banding="L2", note="front")])

        assert instances[0].banding == "L2"
        assert instances[0].note == "front"

    def test_empty_banding_defaults_to_dash(self) -> None:
        instances = expand_pieces([_row(banding="")])

        assert instances[0].banding == "-"

    def test_empty_input(self) -> None:
        assert expand_pieces([]) == []


# =============================================================================
# group_by_material
# =============================================================================


class TestGroupByMaterial:
    """Tests for group_by_material."""

    def _instance(self, piece_id: str, material_id: str) -> PieceInstance:
        return PieceInstance(id=piece_id, material_id=material_id, width=100, height=100)

    def test_groups_keep_first_seen_order(self) -> None:
        """Materials appear in the order they are first seen."""
        instances = [
            self._instance("A", "OAK19"),
            self._instance("B", "MDF18"),
            self._instance("C", "OAK19"),
        ]

        groups = group_by_material(instances)

        assert list(groups) == ["OAK19", "MDF18"]

    def test_instance_order_within_group(self) -> None:
        instances = [
            self._instance("A", "OAK19"),
            self._instance("B", "MDF18"),
            self._instance("C", "OAK19"),
        ]

        groups = group_by_material(instances)

        assert [i.id for i in groups["OAK19"]] == ["A", "C"]
        assert [i.id for i in groups["MDF18"]] == ["B"]

    def test_no_instance_lost(self) -> None:
        instances = [self._instance(str(n), f"M{n % 3}") for n in range(10)]

        groups = group_by_material(instances)

        assert sum(len(g) for g in groups.values()) == 10

    def test_empty_input(self) -> None:
        assert group_by_material([]) == {}
