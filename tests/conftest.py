import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from poet.core import Dictionary


FRUIT_LINES = [
    # These words rhyme.
    "bayous B AY1 UW0 Z",
    "fondues F AA1 N D UW0 Z",
    "virtues V ER1 CH UW0 Z",
    # These do too, but not with the first ones.
    "diagram D AY1 AH0 G R AE2 M",
    "polygram P AA1 L IY2 G R AE2 M",
    "program P R OW1 G R AE2 M",
    "programme P R OW1 G R AE2 M",
    "telegram T EH1 L AH0 G R AE2 M",
    # Unrelated padding.
    "apple AE1 P AH0 L",
    "apple's AE1 P AH0 L Z",
    "apples AE1 P AH0 L Z",
    "applesauce AE1 P AH0 L S AO2 S",
    "avocado AE2 V AH0 K AA1 D OW0",
    "avocados AE2 V AH0 K AA1 D OW0 Z",
    "cranberry K R AE1 N B EH2 R IY0",
    "guava G W AA1 V AH0",
    "guavas G W AA1 V AH0 Z",
    "mango M AE1 NG G OW0",
    "mangoes M AE1 NG G OW0 Z",
    "mangold M AE1 N G OW2 L D",
]

POEM_LINES = [
    "a AH0",
    "a(2) EY1",
    "again AH0 G EH1 N",
    "again(2) AH0 G EY1 N",
    "an AE1 N",
    "an(2) AH0 N",
    "and AH0 N D",
    "and(2) AE1 N D",
    "bed B EH1 D",
    "bird B ER1 D",
    "car K AA1 R",
    "day D EY1",
    "fire F AY1 ER0",
    "fire(2) F AY1 R",
    "fly F L AY1",
    "free F R IY1",
    "frog F R AA1 G",
    "in IH0 N",
    "into IH0 N T UW1",
    "into(2) IH1 N T UW0",
    "jumps JH AH1 M P S",
    "light L AY1 T",
    "long L AO1 NG",
    "moon M UW1 N",
    "night N AY1 T",
    "old OW1 L D",
    "pain P EY1 N",
    "pond P AA1 N D",
    "rain R EY1 N",
    "read R IY1 D",
    "read(2) R EH1 D",
    "red R EH1 D",
    "run R AH1 N",
    "silence S AY1 L AH0 N S",
    "silent S AY1 L AH0 N T",
    "sing S IH1 NG",
    "soon S UW1 N",
    "splash S P L AE1 SH",
    "sun S AH1 N",
    "the DH AH0",
    "the(2) DH AH1",
    "the(3) DH IY0",
    "tree T R IY1",
    "way W EY1",
    "whole HH OW1 L",
    "will W IH1 L",
]

HAIKU = """An old silent pond
A frog jumps into the pond
Splash! Silence again.
"""

SONNET_ENDINGS = [
    "day", "night", "way", "light",
    "tree", "rain", "free", "pain",
    "sun", "moon", "run", "soon",
    "bed", "red",
]


def sonnet_text(endings=None):
    """Fourteen ten-syllable lines rhyming ABAB CDCD EFEF GG."""

    words = endings or SONNET_ENDINGS
    return "\n".join(f"The bird will sing and fly the whole long {word}," for word in words) + "\n"


@pytest.fixture
def fruit_dictionary():
    dictionary = Dictionary()
    dictionary.insert_all_raw(FRUIT_LINES)
    return dictionary


@pytest.fixture
def poem_dictionary():
    dictionary = Dictionary()
    dictionary.insert_all_raw(POEM_LINES)
    return dictionary


@pytest.fixture
def lexicon_file(tmp_path):
    path = tmp_path / "cmudict.dict"
    path.write_text("\n".join(FRUIT_LINES + POEM_LINES) + "\n", encoding="utf-8")
    return path
