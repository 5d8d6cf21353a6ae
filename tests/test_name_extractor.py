from idscan.extraction import NameExtractor, Rule, clean_name, uppercase_ratio
from idscan.models import CardType, NAME_NOT_FOUND


def test_line_before_relationship_is_title_cased():
    extractor = NameExtractor()
    text = "JOHN KUMAR\nS/O RAM KUMAR\n1234 5678 9012"
    assert extractor.extract(text, CardType.AADHAAR) == "John Kumar"


def test_reports_winning_rule():
    extractor = NameExtractor()
    found = extractor.match("JOHN KUMAR\nS/O RAM KUMAR", CardType.AADHAAR)
    assert found.value == "John Kumar"
    assert found.rule == "aadhaar/line-before-relationship"


def test_name_on_relationship_line():
    extractor = NameExtractor()
    text = "Ravi Kumar S/O Murugan\n1234 5678 9012"
    assert extractor.extract(text, "AADHAAR") == "Ravi Kumar"


def test_honorific_is_dropped():
    extractor = NameExtractor()
    assert extractor.extract("Mr. Ravi Kumar\nS/O Murugan", "AADHAR") == "Ravi Kumar"


def test_header_lines_are_not_names():
    extractor = NameExtractor()
    assert extractor.extract("Government of India\nS/O Murugan", CardType.AADHAAR) == NAME_NOT_FOUND


def test_uppercase_banner_skipped_without_anchor():
    extractor = NameExtractor()
    assert extractor.extract("UIDAI ENROLMENT\nRavi Kumar", CardType.AADHAAR) == "Ravi Kumar"


def test_empty_text_has_no_name():
    extractor = NameExtractor()
    assert extractor.extract("", CardType.AADHAAR) == NAME_NOT_FOUND
    assert extractor.extract("   \n", CardType.PAN) == NAME_NOT_FOUND


def test_pan_name_below_label():
    extractor = NameExtractor()
    text = "INCOME TAX DEPARTMENT\nGOVT. OF INDIA\nName\nRAHUL SHARMA\nFather's Name\nSURESH SHARMA"
    assert extractor.extract(text, CardType.PAN) == "Rahul Sharma"


def test_pan_inline_name_label():
    extractor = NameExtractor()
    text = "INCOME TAX DEPARTMENT\nName: Priya Sharma\nABCDE1234F"
    assert extractor.extract(text, CardType.PAN) == "Priya Sharma"


def test_clean_name():
    assert clean_name("  Smt. LAKSHMI devi S/O Raman") == "Lakshmi Devi"
    assert clean_name("R. Kumar") == "R. Kumar"
    assert clean_name("Ravi@ Kumar1") == "Ravi Kumar"


def test_uppercase_ratio():
    assert uppercase_ratio("ABC") == 1.0
    assert uppercase_ratio("Ravi") == 0.25
    assert uppercase_ratio("123") == 0.0


def test_relationship_line_prefix_rule():
    found = NameExtractor().match("Ravi Kumar S/O Murugan\n1234 5678 9012", CardType.AADHAAR)
    assert found.value == "Ravi Kumar"
    assert found.rule == "aadhaar/relationship-line-prefix"


def test_leading_lines_rule():
    found = NameExtractor().match("Ravi Kumar\nDOB: 15/08/1990\n1234 5678 9012", CardType.AADHAAR)
    assert found.value == "Ravi Kumar"
    assert found.rule == "aadhaar/leading-lines"


def test_name_before_later_relationship_on_same_line():
    # the first relationship line carries no name, so the anchored rules miss
    found = NameExtractor().match("C/O\nK. Ravi Kumar S/O Murugan", CardType.AADHAAR)
    assert found.value == "K. Ravi Kumar"
    assert found.rule == "aadhaar/name-before-relationship"


def test_name_before_later_relationship_on_next_line():
    text = "C/O\nVenkatasubramanian Ramakrishnan\nS/O Murugan"
    found = NameExtractor().match(text, CardType.AADHAAR)
    assert found.value == "Venkatasubramanian Ramakrishnan"
    assert found.rule == "aadhaar/name-before-relationship"


def test_capitalized_bigram_rule():
    text = "Government of India\nRavi Kumar, DOB 15/08/1990\n1234 5678 9012"
    found = NameExtractor().match(text, CardType.AADHAAR)
    assert found.value == "Ravi Kumar"
    assert found.rule == "aadhaar/capitalized-bigram"


def test_short_alpha_line_rule():
    text = "1234 5678 9012\nDOB: 15/08/1990\nMALE\nVID: 9999\n#####\nravi kumar"
    found = NameExtractor().match(text, CardType.AADHAAR)
    assert found.value == "Ravi Kumar"
    assert found.rule == "aadhaar/short-alpha-line"


def test_more_than_five_words_is_rejected():
    whole_text = NameExtractor(aadhaar_rules=[Rule("whole-text", lambda text: [text], strict=False)])
    assert whole_text.match("Ravi Kumar Raja Muthu Selvam Pandian", CardType.AADHAAR) is None
    assert whole_text.extract("Ravi Kumar Raja Muthu Selvam", CardType.AADHAAR) == "Ravi Kumar Raja Muthu Selvam"

    found = NameExtractor().match("Ravi Kumar Raja Muthu Selvam Pandian\nS/O Murugan", CardType.AADHAAR)
    assert found.rule == "aadhaar/capitalized-bigram"
    assert found.value == "Ravi Kumar Raja"


def test_pan_capitalized_phrase_rule():
    text = "INCOME TAX DEPARTMENT\nGOVT. OF INDIA\nRahul Sharma\nABCDE1234F"
    found = NameExtractor().match(text, CardType.PAN)
    assert found.value == "Rahul Sharma"
    assert found.rule == "pan/capitalized-phrase"


def test_pan_name_before_relationship_rule():
    text = "INCOME TAX DEPARTMENT\nRAHUL S/O SURESH\nABCDE1234F"
    found = NameExtractor().match(text, CardType.PAN)
    assert found.value == "Rahul"
    assert found.rule == "pan/name-before-relationship"
