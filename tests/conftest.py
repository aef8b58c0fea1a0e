"""Pytest configuration and shared fixtures for cutting optimizer tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from cutplan.domain.value_objects import (
    CuttingSettings,
    PieceRequirement,
    SheetSize,
)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: end-to-end tests touching the filesystem")
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture
def default_settings() -> CuttingSettings:
    """1220x2440 sheets, 4 mm kerf, 100x100 minimum offcut."""
    return CuttingSettings(
        default_sheet=SheetSize(1220, 2440),
        kerf=4.0,
        min_offcut=(100, 100),
    )


@pytest.fixture
def sixteen_small_panels() -> list[PieceRequirement]:
    """Sixteen rotatable 300x200 panels of one material."""
    return [
        PieceRequirement(
            piece_id="P1",
            material_id="MDF18",
            width_mm=300,
            height_mm=200,
            quantity=16,
            rotatable=True,
        )
    ]


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """A valid cutting configuration file."""
    path = tmp_path / "config.json"
    path.write_text(
        '{\n'
        '  "default_sheet_mm": [1220, 2440],\n'
        '  "saw_kerf_mm": 4,\n'
        '  "min_offcut_mm": [100, 100],\n'
        '  "materials": {\n'
        '    "MDF18": {"rotate": true, "grain": "none"},\n'
        '    "OAK19": {"rotate": false, "grain": "length"}\n'
        '  }\n'
        '}\n',
        encoding="utf-8",
    )
    return path


@pytest.fixture
def pieces_csv(tmp_path: Path) -> Path:
    """A small two-material piece list."""
    path = tmp_path / "pieces.csv"
    path.write_text(
        "piece_id,material_id,w_mm,h_mm,qty,rotate,banding,notes\n"
        "SIDE,MDF18,560,720,2,true,L1,\"left, right\"\n"
        "SHELF,MDF18,520,300,3,true,-,\n"
        "DOOR,OAK19,396,716,2,false,L4,grain vertical\n",
        encoding="utf-8",
    )
    return path
