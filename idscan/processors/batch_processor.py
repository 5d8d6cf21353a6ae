"""
Batch processor.

Runs the dual-pass pipeline over many documents with a bounded worker
pool and a wall-clock watchdog. Results are merged into the shared
ResultSet on the calling thread only, in completion order.
"""

from __future__ import annotations

from concurrent import futures
from typing import Callable, Iterable, Optional

from ..config import Config, get_config
from ..exceptions import BatchTimeoutError, IdScanError, ImageDecodeError
from ..logger import log_progress
from ..models import BatchStats, DocumentInput, ExtractionResult, ResultSet
from .base import BaseProcessor, ProcessingContext
from .dual_pass import DualPassReconciler
from .ocr_engine import EngineFactory

DocumentCallback = Callable[[DocumentInput, Optional[ExtractionResult], BatchStats], None]


class BatchProcessor(BaseProcessor):
    """
    Extract every document in the context.

    Per-document outcomes:
    - extracted: merged into the result set (Aadhaar re-scans replace)
    - recognition failed: recorded with error sentinels
    - undecodable image: skipped with a notification
    - engine unavailable: the whole batch stops (error propagates)
    """

    name = "BatchProcessor"

    def __init__(
        self,
        context: ProcessingContext,
        reconciler: Optional[DualPassReconciler] = None,
        on_document_complete: Optional[DocumentCallback] = None,
    ):
        super().__init__(context)
        self.reconciler = reconciler or DualPassReconciler(config=self.config)
        self.on_document_complete = on_document_complete
        self.timeout_error: Optional[BatchTimeoutError] = None

    def validate(self) -> bool:
        if self.config.batch.max_workers < 1:
            self.log_error(f"Invalid worker count: {self.config.batch.max_workers}")
            return False
        return True

    def process(self) -> bool:
        documents = self.context.documents
        stats = self.context.stats
        stats.start(len(documents))

        if not documents:
            stats.finish("completed", self._timer.elapsed)
            return True

        batch = self.config.batch
        workers = min(batch.max_workers, len(documents))
        self.log_info(f"Processing {len(documents)} document(s)", workers=workers)

        executor = futures.ThreadPoolExecutor(max_workers=workers, thread_name_prefix="idscan")
        pending = {executor.submit(self.reconciler.run, doc): doc for doc in documents}
        wait_for_workers = True

        try:
            for future in futures.as_completed(pending, timeout=batch.timeout_sec):
                self._collect(pending[future], future)
        except futures.TimeoutError:
            wait_for_workers = False
            self.timeout_error = BatchTimeoutError(batch.timeout_sec, stats.processed, stats.total_documents)
            stats.timed_out = True
            stats.error_message = self.timeout_error.message
            stats.notify(self.timeout_error.message)
            stats.finish("timed_out", self._timer.elapsed)
            raise self.timeout_error
        except BaseException:
            wait_for_workers = False
            stats.finish("failed", self._timer.elapsed)
            raise
        finally:
            executor.shutdown(wait=wait_for_workers, cancel_futures=True)

        stats.finish("completed", self._timer.elapsed)
        self.log_info(stats.status_text)
        return True

    def _collect(self, document: DocumentInput, future: futures.Future) -> None:
        stats = self.context.stats
        result: Optional[ExtractionResult] = None

        try:
            result = future.result()
        except ImageDecodeError as e:
            stats.skipped += 1
            stats.notify(f"Skipped {document.file_name}: {e.message}")
            self.log_warning(f"Skipped {document.file_name}", reason=e.message)
        except IdScanError as e:
            if not e.recoverable:
                raise
            result = ExtractionResult.failed(
                document.file_name, document.card_type, e.message, document.source_reference
            )
        except Exception as e:
            self.log_error(f"Unexpected failure on {document.file_name}", error=e)
            result = ExtractionResult.failed(
                document.file_name, document.card_type, str(e), document.source_reference
            )

        if result is not None:
            if result.is_failed:
                stats.failed += 1
                stats.notify(f"Extraction failed for {document.file_name}: {result.error}")
            else:
                stats.completed += 1
                self.log_debug(f"Extracted {document.file_name}", number=result.number, name=result.name)
            if self.context.results.add(result):
                stats.replaced += 1
                self.log_info(f"Replaced earlier record for {document.file_name}")

        log_progress(self.logger, stats.processed, stats.total_documents, "document")
        if self.on_document_complete:
            self.on_document_complete(document, result, stats)


def process_documents(
    documents: Iterable[DocumentInput],
    config: Optional[Config] = None,
    engine_factory: Optional[EngineFactory] = None,
    results: Optional[ResultSet] = None,
    on_document_complete: Optional[DocumentCallback] = None,
) -> ProcessingContext:
    """
    Convenience wrapper: build a context, run one batch, return the context.

    A timed-out batch returns normally with `stats.timed_out` set; results
    merged before the timeout are kept.
    """
    config = config or get_config()
    context = ProcessingContext(
        config=config,
        documents=list(documents),
        results=results if results is not None else ResultSet(),
    )
    reconciler = DualPassReconciler(engine_factory=engine_factory, config=config)
    BatchProcessor(context, reconciler, on_document_complete).run()
    return context
