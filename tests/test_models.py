import dataclasses

import pytest

from idscan.exceptions import ConfigurationError
from idscan.models import (
    BatchStats,
    CardType,
    CSV_HEADERS,
    DocumentInput,
    ERROR_SENTINEL,
    ExtractionResult,
    NAME_NOT_FOUND,
    ResultSet,
    is_sentinel,
    number_not_found,
)


def test_card_type_accepts_legacy_spelling():
    assert CardType.from_value("AADHAR") is CardType.AADHAAR
    assert CardType.from_value("pan") is CardType.PAN
    assert CardType.PAN.document_type == "pan"


def test_card_type_rejects_unknown():
    with pytest.raises(ConfigurationError):
        CardType.from_value("PASSPORT")


def test_result_fills_sentinels():
    result = ExtractionResult(file_name="a.jpg", card_type="PAN")
    assert result.number == "PAN Number not found"
    assert result.name == NAME_NOT_FOUND
    assert not result.has_number


def test_pan_result_has_no_address_or_mobile():
    result = ExtractionResult(card_type=CardType.PAN, address="Somewhere", mobile="9876543210")
    assert result.address is None
    assert result.mobile is None


def test_result_is_immutable():
    result = ExtractionResult(number="1234 5678 9012", name="Ravi Kumar")
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.name = "Other"

    updated = result.with_updates(name="Other")
    assert result.name == "Ravi Kumar"
    assert updated.name == "Other"


def test_failed_result():
    result = ExtractionResult.failed("a.jpg", CardType.AADHAAR, "engine crashed")
    assert result.number == ERROR_SENTINEL
    assert result.name == ERROR_SENTINEL
    assert result.is_failed
    assert result.error == "engine crashed"


@pytest.mark.parametrize("value, expected", [
    (None, True),
    ("", True),
    ("  ", True),
    (NAME_NOT_FOUND, True),
    (ERROR_SENTINEL, True),
    (number_not_found(CardType.AADHAAR), True),
    ("Ravi Kumar", False),
    ("1234 5678 9012", False),
])
def test_is_sentinel(value, expected):
    assert is_sentinel(value) is expected


def test_csv_row_matches_headers():
    aadhaar = ExtractionResult("a.jpg", CardType.AADHAAR, "1234 5678 9012", "Ravi Kumar", mobile="9876543210")
    pan = ExtractionResult("p.jpg", CardType.PAN, "ABCDE1234F", "Rahul Sharma", dob="01/02/1990")

    assert len(aadhaar.to_csv_row()) == len(CSV_HEADERS)
    assert aadhaar.to_csv_row() == ["a.jpg", "AADHAAR", "1234 5678 9012", "Ravi Kumar", "", "", "9876543210", ""]
    assert pan.to_csv_row() == ["p.jpg", "PAN", "ABCDE1234F", "Rahul Sharma", "01/02/1990", "", "", "ABCDE1234F"]


def test_history_record():
    result = ExtractionResult("p.jpg", CardType.PAN, "ABCDE1234F", "Rahul Sharma")
    record = result.to_history_record("2024-01-01T10:00:00")
    assert record == {
        "documentType": "pan",
        "fileName": "p.jpg",
        "name": "Rahul Sharma",
        "number": "ABCDE1234F",
        "timestamp": "2024-01-01T10:00:00",
    }


def test_to_dict_uses_plain_card_type():
    assert ExtractionResult(card_type="AADHAR").to_dict()["card_type"] == "AADHAAR"


def test_document_input_normalizes():
    document = DocumentInput(" card.jpg ", "aadhar", text="Ravi")
    assert document.file_name == "card.jpg"
    assert document.card_type is CardType.AADHAAR
    assert document.has_text


def test_batch_stats_status_text():
    stats = BatchStats()
    stats.start(4)
    stats.completed = 2
    stats.failed = 1
    stats.skipped = 1
    stats.timed_out = True
    assert stats.processed == 4
    assert stats.status_text == "Processed 4/4 document(s), 1 failed, 1 skipped (timed out)"
    assert stats.to_dict()["processed"] == 4


def test_duplicate_aadhaar_number_replaces_earlier_record():
    results = ResultSet()
    first = ExtractionResult("a.jpg", CardType.AADHAAR, "1234 5678 9012", "Ravl Kumar")
    second = ExtractionResult("b.jpg", CardType.AADHAAR, "1234 5678 9012", "Ravi Kumar")

    assert results.add(first) is False
    assert results.add(second) is True
    assert len(results) == 1
    assert results[0].name == "Ravi Kumar"


def test_replacement_keeps_position():
    results = ResultSet()
    results.add(ExtractionResult("a.jpg", CardType.AADHAAR, "1111 2222 3333", "A"))
    results.add(ExtractionResult("b.jpg", CardType.AADHAAR, "4444 5555 6666", "B"))
    results.add(ExtractionResult("c.jpg", CardType.AADHAAR, "1111 2222 3333", "C"))
    assert [r.file_name for r in results] == ["c.jpg", "b.jpg"]


def test_missing_numbers_are_not_deduplicated():
    results = ResultSet()
    results.add(ExtractionResult("a.jpg", CardType.AADHAAR))
    results.add(ExtractionResult("b.jpg", CardType.AADHAAR))
    assert len(results) == 2


def test_pan_results_are_appended():
    results = ResultSet()
    results.add(ExtractionResult("a.jpg", CardType.PAN, "ABCDE1234F"))
    results.add(ExtractionResult("b.jpg", CardType.PAN, "ABCDE1234F"))
    assert len(results) == 2


def test_remove_and_filter():
    results = ResultSet()
    results.add(ExtractionResult("a.jpg", CardType.AADHAAR, "1111 2222 3333"))
    results.add(ExtractionResult("p.jpg", CardType.PAN, "ABCDE1234F"))

    assert [r.file_name for r in results.filter("PAN")] == ["p.jpg"]
    removed = results.remove(0)
    assert removed.file_name == "a.jpg"
    assert [r.file_name for r in results.results] == ["p.jpg"]
