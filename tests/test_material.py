from unittest.mock import patch

from lorebirth.material import Substance, random_substances


def test_single_pick():
    with patch("random.randint", side_effect=[3]):
        assert random_substances() == {Substance.WOOD}


def test_extra_face_and_reroll_on_duplicate():
    with patch("random.randint", side_effect=[10, 1, 1, 2]):
        assert random_substances() == {Substance.GRANITE, Substance.MARBLE}


def test_always_non_empty_and_bounded():
    for _ in range(200):
        result = random_substances()
        assert 1 <= len(result) <= len(Substance)
        assert result <= set(Substance)