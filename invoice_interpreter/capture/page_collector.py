"""
Page Text Collector Module.

Boundary with the OCR collaborator for multi-page captures. Each page is
recognized independently on a worker thread; the capture text is only
assembled once every page has finished (fan-in/join barrier), in page
order regardless of completion order.

Usage:
    from invoice_interpreter.capture import PageTextCollector

    collector = PageTextCollector(my_ocr_function, max_workers=4)
    text = collector.collect(scanned_pages)
"""

import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

from invoice_interpreter.config import get_config
from invoice_interpreter.utils.exceptions import OCRProcessingError
from invoice_interpreter.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)

PAGE_SEPARATOR = "\n"


@dataclass(frozen=True)
class PageRecognition:
    """
    Outcome of recognizing one page.

    Attributes:
        index: Zero-based page index within the capture
        text: Recognized text ("" when recognition failed)
        processing_time_ms: Wall time spent in the recognizer
        error: Error message when recognition failed
    """
    index: int
    text: str = ""
    processing_time_ms: int = 0
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


class PageTextCollector:
    """
    Runs page-level OCR concurrently and joins the results.

    Attributes:
        recognizer: Callable turning one page into text
        max_workers: Maximum concurrent recognitions

    Example:
        >>> collector = PageTextCollector(lambda page: page.upper())
        >>> collector.collect(["bónus", "samtals 6200"])
        'BÓNUS\\nSAMTALS 6200'
    """

    def __init__(
        self,
        recognizer: Callable[[Any], str],
        max_workers: Optional[int] = None
    ) -> None:
        self.recognizer = recognizer
        self.max_workers = max_workers or get_config("capture.max_workers", 4)

    def recognize_all(self, pages: Sequence[Any]) -> List[PageRecognition]:
        """
        Recognize every page and wait for all of them.

        Args:
            pages: Page objects accepted by the recognizer.

        Returns:
            One PageRecognition per page, in page order.
        """
        if not pages:
            return []

        results: List[Optional[PageRecognition]] = [None] * len(pages)

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {
                executor.submit(self._recognize_page, index, page): index
                for index, page in enumerate(pages)
            }
            for future in as_completed(futures):
                page_result = future.result()
                results[page_result.index] = page_result

        return results

    def collect(self, pages: Sequence[Any]) -> str:
        """
        Recognize all pages and return the concatenated capture text.

        Args:
            pages: Page objects accepted by the recognizer.

        Returns:
            Page texts joined with newlines, in page order.

        Raises:
            OCRProcessingError: If any page failed; raised only after every
                page has settled.
        """
        results = self.recognize_all(pages)

        failed = [result for result in results if not result.success]
        if failed:
            raise OCRProcessingError(
                [result.index for result in failed],
                "; ".join(result.error for result in failed)
            )

        logger.debug(f"Collected text from {len(results)} page(s)")
        return PAGE_SEPARATOR.join(result.text for result in results)

    def _recognize_page(self, index: int, page: Any) -> PageRecognition:
        start_time = time.time()
        try:
            text = self.recognizer(page) or ""
        except Exception as e:
            logger.error(f"OCR failed for page {index + 1}: {e}")
            return PageRecognition(
                index=index,
                processing_time_ms=int((time.time() - start_time) * 1000),
                error=str(e) or type(e).__name__
            )

        return PageRecognition(
            index=index,
            text=text,
            processing_time_ms=int((time.time() - start_time) * 1000)
        )
