import pytest

from screening.pdf.exceptions import PdfPageError
from screening.pdf.pages import count_pages, render_pages_png, split_into_chunks


class TestCountPages:
    def test_counts_pages(self, multi_page_pdf_bytes: bytes) -> None:
        assert count_pages(multi_page_pdf_bytes) == 2

    def test_raises_on_invalid_bytes(self) -> None:
        with pytest.raises(PdfPageError):
            count_pages(b"not a pdf")


class TestSplitIntoChunks:
    def test_small_document_is_one_chunk(self, multi_page_pdf_bytes: bytes) -> None:
        chunks = split_into_chunks(multi_page_pdf_bytes, max_pages=30)
        assert len(chunks) == 1
        assert chunks[0].pdf_bytes == multi_page_pdf_bytes
        assert (chunks[0].first_page, chunks[0].last_page) == (1, 2)

    def test_splits_into_consecutive_ranges(self, multi_page_pdf_bytes: bytes) -> None:
        chunks = split_into_chunks(multi_page_pdf_bytes, max_pages=1)
        assert [(c.first_page, c.last_page) for c in chunks] == [(1, 1), (2, 2)]
        assert all(count_pages(c.pdf_bytes) == 1 for c in chunks)

    def test_rejects_non_positive_page_limit(self, sample_pdf_bytes: bytes) -> None:
        with pytest.raises(ValueError):
            split_into_chunks(sample_pdf_bytes, max_pages=0)

    def test_raises_on_invalid_bytes(self) -> None:
        with pytest.raises(PdfPageError):
            split_into_chunks(b"not a pdf", max_pages=5)


class TestRenderPagesPng:
    def test_renders_one_png_per_page(self, multi_page_pdf_bytes: bytes) -> None:
        images = render_pages_png(multi_page_pdf_bytes, dpi=50)
        assert len(images) == 2
        assert all(image.startswith(b"\x89PNG") for image in images)

    def test_raises_on_invalid_bytes(self) -> None:
        with pytest.raises(PdfPageError):
            render_pages_png(b"not a pdf")
