import json

from idscan.cli import build_parser, main

from conftest import AADHAAR_TEXT, PAN_TEXT, make_text_pdf


def test_parser_collects_files():
    args = build_parser().parse_args(["--aadhaar", "a.jpg", "b.jpg", "--pan", "p.jpg", "--csv", "out"])
    assert args.aadhaar == ["a.jpg", "b.jpg"]
    assert args.pan == ["p.jpg"]
    assert args.csv == "out"
    assert args.text is False


def test_text_mode_writes_csv_and_history(tmp_path):
    aadhaar = tmp_path / "aadhaar.txt"
    aadhaar.write_text(AADHAAR_TEXT, encoding="utf-8")
    pan = tmp_path / "pan.txt"
    pan.write_text(PAN_TEXT, encoding="utf-8")
    history = tmp_path / "history.json"

    exit_code = main([
        "--text",
        "--aadhaar", str(aadhaar),
        "--pan", str(pan),
        "--csv", str(tmp_path),
        "--history", str(history),
    ])

    assert exit_code == 0
    content = (tmp_path / "all_extracted_data.csv").read_text(encoding="utf-8")
    assert "1234 5678 9012" in content
    assert "ABCDE1234F" in content
    assert len(json.loads(history.read_text(encoding="utf-8"))) == 2


def test_no_documents(tmp_path):
    assert main([]) == 2


def test_missing_input_file(tmp_path):
    assert main(["--text", "--aadhaar", str(tmp_path / "missing.txt")]) == 2


def test_pdf_cards_are_read_without_ocr(tmp_path):
    card = tmp_path / "e-aadhaar.pdf"
    card.write_bytes(make_text_pdf(["Ravi Kumar", "S/O Murugan", "1234 5678 9012"]))

    exit_code = main(["--aadhaar", str(card), "--csv", str(tmp_path)])

    assert exit_code == 0
    content = (tmp_path / "all_extracted_data.csv").read_text(encoding="utf-8")
    assert '"e-aadhaar.pdf","AADHAAR","1234 5678 9012"' in content
