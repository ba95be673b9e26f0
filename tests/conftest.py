"""Shared fixtures for combiparse tests."""

from pathlib import Path

import pytest


@pytest.fixture
def perft_fixture() -> str:
    """Three Chess960 perft records with leading comments."""
    return """
# https://www.chessprogramming.org/Chess960_Perft_Results
# https://github.com/AndyGrant/Ethereal/blob/master/src/perft/fischer.epd

id 0
epd bqnb1rkr/pp3ppp/3ppn2/2p5/5P2/P2P4/NPP1P1PP/BQ1BNRKR w HFhf - 2 9
perft 1 21
perft 2 528
perft 3 12189
perft 4 326672
perft 5 8146062
perft 6 227689589

id 1
epd 2nnrbkr/p1qppppp/8/1ppb4/6PP/3PP3/PPP2P2/BQNNRBKR w HEhe - 1 9
perft 1 21
perft 2 807
perft 3 18002
perft 4 667366
perft 5 16253601
perft 6 590751109

id 2
epd b1q1rrkb/pppppppp/3nn3/8/P7/1PPP4/4PPPP/BQNNRKRB w GE - 1 9
perft 1 20
perft 2 479
perft 3 10471
perft 4 273318
perft 5 6417013
perft 6 177654692
"""


@pytest.fixture
def perft_file(tmp_path: Path, perft_fixture: str) -> Path:
    """The three-record fixture written to a temporary file."""
    path = tmp_path / "fischer.epd"
    path.write_text(perft_fixture, encoding="utf-8")
    return path
