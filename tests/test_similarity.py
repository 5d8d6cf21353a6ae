import pytest

from idscan.utils.similarity import levenshtein, similarity


def test_levenshtein_classic_pair():
    assert levenshtein("kitten", "sitting") == 3


def test_levenshtein_empty_strings():
    assert levenshtein("", "abc") == 3
    assert levenshtein("abc", "") == 3
    assert levenshtein("", "") == 0


def test_similarity_is_case_insensitive():
    assert similarity("Velusamy", "VELUSAMY") == 1.0


def test_similarity_of_empty_strings_is_one():
    assert similarity("", "") == 1.0


def test_similarity_single_substitution():
    assert similarity("Velusamy", "Velusany") == pytest.approx(0.875)


def test_similarity_completely_different():
    assert similarity("abc", "xyz") == 0.0


def test_similarity_matches_normalized_distance():
    # one substitution over five letters
    assert similarity("Tamii", "Tamil") == pytest.approx(0.8)
    assert similarity("Chennai", "Chennal") == pytest.approx(1 - levenshtein("chennai", "chennal") / 7)
