import time

import pytest

from idscan.exceptions import EngineInitializationError
from idscan.models import CardType, DocumentInput, ResultSet
from idscan.processors import (
    BatchProcessor,
    CallableEngine,
    DualPassReconciler,
    ProcessingContext,
    process_documents,
)

from conftest import AADHAAR_TEXT, PAN_TEXT


def text_document(name, text, card_type=CardType.AADHAAR):
    return DocumentInput(name, card_type, text=text)


def test_processes_every_document(config):
    documents = [
        text_document("a.txt", AADHAAR_TEXT),
        text_document("p.txt", PAN_TEXT, CardType.PAN),
    ]

    context = process_documents(documents, config=config)

    assert len(context.results) == 2
    assert context.stats.completed == 2
    assert context.stats.status == "completed"
    assert {r.card_type for r in context.results} == {CardType.AADHAAR, CardType.PAN}


def test_rescan_of_same_card_replaces_record(config):
    documents = [
        text_document("first.txt", "JOHN KUMAR\nS/O RAM KUMAR\n1234 5678 9012"),
        text_document("second.txt", "JOHN KUMAR\nS/O RAM KUMAR\n1234 5678 9012"),
    ]

    context = process_documents(documents, config=config)

    assert len(context.results) == 1
    assert context.stats.replaced == 1
    assert context.stats.completed == 2


def test_results_merge_into_existing_set(config):
    results = ResultSet()
    process_documents([text_document("a.txt", AADHAAR_TEXT)], config=config, results=results)
    process_documents([text_document("b.txt", AADHAAR_TEXT)], config=config, results=results)

    assert len(results) == 1
    assert results[0].file_name == "b.txt"


def test_undecodable_image_is_skipped_with_notification(config, card_png):
    documents = [
        DocumentInput("bad.jpg", CardType.AADHAAR, image_bytes=b"garbage"),
        DocumentInput("good.png", CardType.AADHAAR, image_bytes=card_png),
    ]
    engine_factory = lambda: CallableEngine(lambda data: "1234 5678 9012")

    context = process_documents(documents, config=config, engine_factory=engine_factory)

    assert context.stats.skipped == 1
    assert context.stats.completed == 1
    assert [r.file_name for r in context.results] == ["good.png"]
    assert any("bad.jpg" in note for note in context.stats.notifications)


def test_recognition_failure_is_recorded_not_dropped(config, card_png):
    def crash(data):
        raise RuntimeError("engine crashed")

    context = process_documents(
        [DocumentInput("front.png", CardType.AADHAAR, image_bytes=card_png)],
        config=config,
        engine_factory=lambda: CallableEngine(crash),
    )

    assert context.stats.failed == 1
    assert len(context.results) == 1
    assert context.results[0].number == "Error"
    assert "Processed 1/1 document(s), 1 failed" == context.stats.status_text


def test_engine_initialization_failure_stops_batch(config, card_png):
    def no_engine():
        raise EngineInitializationError("no OCR engine")

    with pytest.raises(EngineInitializationError):
        process_documents(
            [DocumentInput("front.png", CardType.AADHAAR, image_bytes=card_png)],
            config=config,
            engine_factory=no_engine,
        )


def test_callback_sees_every_document(config):
    seen = []
    documents = [text_document(f"{i}.txt", AADHAAR_TEXT) for i in range(4)]

    process_documents(
        documents,
        config=config,
        on_document_complete=lambda doc, result, stats: seen.append(doc.file_name),
    )

    assert sorted(seen) == ["0.txt", "1.txt", "2.txt", "3.txt"]


def test_empty_batch(config):
    context = process_documents([], config=config)
    assert context.stats.status == "completed"
    assert len(context.results) == 0


def test_invalid_worker_count_fails_validation(config):
    config.batch.max_workers = 0
    context = ProcessingContext(config=config, documents=[text_document("a.txt", AADHAAR_TEXT)])
    assert BatchProcessor(context).run() is False


@pytest.mark.slow
def test_batch_timeout_keeps_finished_results(config, card_png):
    config.batch.timeout_sec = 0.5
    config.batch.max_workers = 2

    def recognize(data):
        time.sleep(2.0)
        return "1234 5678 9012"

    documents = [
        text_document("fast.txt", AADHAAR_TEXT),
        DocumentInput("slow.png", CardType.AADHAAR, image_bytes=card_png),
    ]
    context = ProcessingContext(config=config, documents=documents)
    reconciler = DualPassReconciler(lambda: CallableEngine(recognize), config=config)
    processor = BatchProcessor(context, reconciler)

    assert processor.run() is False

    stats = context.stats
    assert stats.timed_out
    assert stats.status == "timed_out"
    assert processor.timeout_error.items_processed == 1
    assert processor.timeout_error.items_total == 2
    assert [r.file_name for r in context.results] == ["fast.txt"]
