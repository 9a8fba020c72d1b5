"""Pytest fixtures for idf-tools tests."""

import pytest
from pathlib import Path

# Board file modelled on the published IDF 3.0 sample board
SAMPLE_BOARD = """\
# Sample board
.HEADER
BOARD_FILE 3.0 "Sample File Generator" 10/22/96.16:41:37 1
sample_board THOU
.END_HEADER
.BOARD_OUTLINE MCAD
62.0
0 5030.5 -120.0 0.0
0 5187.5 -120.0 0.0
0 5187.5 2130.0 0.0
0 5030.5 -120.0 0.0
.END_BOARD_OUTLINE
.DRILLED_HOLES
30.0 1800.0 100.0 PTH J1 PIN ECAD
20.0 2000.0 1600.0 PTH BOARD VIA ECAD
.END_DRILLED_HOLES
.NOTES
3500.0 3300.0 75.0 2500.0 "This component rotated 14 degrees"
.END_NOTES
.PLACEMENT
cs13_a pn-cap C1
4000.0 1000.0 100.0 0.0 TOP PLACED
cc1_a pn-cc1 C2
3000.0 3500.0 0.0 14.0 TOP PLACED
tp_pad pn-tp TP3
1500.0 1200.0 0.0 90.0 BOTTOM MCAD
fiducial fid NOREFDES
100.0 100.0 0.0 0.0 TOP ECAD
.END_PLACEMENT
"""

SAMPLE_PANEL = """\
.HEADER
PANEL_FILE 3.0 "Sample File Generator" 10/22/96.16:39:37 1
sample_panel MM
.END_HEADER
.PANEL_OUTLINE MCAD
1.5
0 0.0 0.0 0.0
0 300.0 0.0 0.0
.END_PANEL_OUTLINE
.PLACEMENT
sample_board pn-board BOARD
10.0 10.0 0.0 0.0 TOP MCAD
.END_PLACEMENT
"""

SAMPLE_LIBRARY = """\
.HEADER
LIBRARY_FILE 3.0 "Sample File Generator" 10/22/96.16:20:19 1
.END_HEADER
.ELECTRICAL
cs13_a pn-cap MM 5.0
0 -5.0 2.0 0.0
.END_ELECTRICAL
.ELECTRICAL
cc1_a pn-cc1 THOU 150.0
PROP CAPACITANCE 100.0
0 -40.0 56.0 0.0
0 40.0 56.0 0.0
.END_ELECTRICAL
.MECHANICAL
heatsink hs-1 MM 10.0
0 0.0 0.0 0.0
.END_MECHANICAL
"""


@pytest.fixture
def sample_board() -> str:
    return SAMPLE_BOARD


@pytest.fixture
def sample_panel() -> str:
    return SAMPLE_PANEL


@pytest.fixture
def sample_library() -> str:
    return SAMPLE_LIBRARY


@pytest.fixture
def board_file(tmp_path: Path) -> Path:
    """Write the sample board to a temporary .emn file."""
    path = tmp_path / "sample.emn"
    path.write_text(SAMPLE_BOARD, encoding="utf-8")
    return path


@pytest.fixture
def library_file(tmp_path: Path) -> Path:
    """Write the sample library to a temporary .emp file."""
    path = tmp_path / "sample.emp"
    path.write_text(SAMPLE_LIBRARY, encoding="utf-8")
    return path


def board_with_placement(placement_lines: str) -> str:
    """Build a minimal board whose PLACEMENT section holds ``placement_lines``."""
    return (
        ".HEADER\n"
        "BOARD_FILE 3.0 gen 2024/01/01 1\n"
        "demo MM\n"
        ".END_HEADER\n"
        ".PLACEMENT\n"
        f"{placement_lines}"
        ".END_PLACEMENT\n"
    )


@pytest.fixture
def make_board():
    """Factory for minimal boards with custom PLACEMENT content."""
    return board_with_placement
