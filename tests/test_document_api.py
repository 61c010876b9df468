"""Tests for the PagedDocument high-level API."""

from unittest.mock import Mock

import pytest

from pagequill import PagedDocument, PaginationSettings
from pagequill.engine import CharacterBudgetOracle, TextMetricsOracle
from pagequill.exceptions import LayoutError
from pagequill.models.blocks import Heading, ManualBreak, TextRun


@pytest.fixture
def make_document(fake_timers):
    documents = []

    def factory(content=None, limit=10, **kwargs):
        kwargs.setdefault("oracle", CharacterBudgetOracle(limit))
        kwargs.setdefault("timer_factory", fake_timers)
        document = PagedDocument(content, **kwargs)
        documents.append(document)
        return document

    yield factory
    for document in documents:
        document.close()


class TestPagedDocument:
    """Test suite for PagedDocument."""

    def test_new_document_has_one_empty_page(self, make_document):
        doc = make_document()

        assert doc.page_count == 1
        assert doc.pages[0].is_empty
        assert doc.headings == ()

    def test_initial_content_is_laid_out_immediately(self, make_document, fake_timers):
        doc = make_document("<h1>Intro</h1><hr><p>Body</p>")

        assert doc.page_count == 2
        assert [(h.text, h.page_index) for h in doc.headings] == [("Intro", 1)]
        assert fake_timers.timers == []

    def test_set_content_is_debounced(self, make_document, fake_timers):
        doc = make_document([TextRun("abc")])

        for length in range(11, 31):
            doc.set_content([TextRun("x" * length)])

        # Nothing re-flowed yet: readers still see the previous result.
        assert doc.page_count == 1
        fake_timers.fire_all()

        assert doc.page_count == 3
        assert doc.scheduler.run_count == 2
        assert "".join(page.text for page in doc.pages) == "x" * 30

    def test_insert_page_break_reflows_immediately(self, make_document, fake_timers):
        doc = make_document([Heading(1, "A"), TextRun("B")], limit=100)

        result = doc.insert_page_break(1)

        assert result.page_count == 2
        assert doc.page_count == 2
        assert isinstance(doc.blocks[1], ManualBreak)
        assert [page.text for page in doc.pages] == ["A", "B"]

    def test_insert_page_break_at_end_by_default(self, make_document):
        doc = make_document([TextRun("a")], limit=100)

        doc.insert_page_break()

        assert isinstance(doc.blocks[-1], ManualBreak)
        assert doc.page_count == 2

    def test_page_break_supersedes_pending_edit(self, make_document, fake_timers):
        doc = make_document([TextRun("a")], limit=100)

        doc.set_content([TextRun("typed"), TextRun("more")])
        doc.insert_page_break(1)
        fake_timers.fire_all()

        assert [page.text for page in doc.pages] == ["typed", "more"]
        assert not doc.scheduler.pending

    def test_set_style_reflows_immediately(self, make_document):
        doc = make_document("<p>" + "word " * 400 + "</p>", oracle=TextMetricsOracle())
        pages_before = doc.page_count

        doc.set_style(font_size=96)

        assert doc.style.font_size == 96
        assert doc.page_count >= pages_before

    def test_shrinking_document_clamps_current_page(self, make_document):
        doc = make_document([TextRun("x" * 50)])
        doc.navigator.go_to(5)

        doc.set_content([TextRun("x" * 15)])
        doc.flush()

        assert doc.page_count == 2
        assert doc.navigator.current_page == 1

    def test_clamp_policy_last(self, make_document):
        doc = make_document([TextRun("x" * 50)], settings=PaginationSettings(clamp_policy="last"))
        doc.navigator.go_to(5)

        doc.set_content([TextRun("x" * 15)])
        doc.flush()

        assert doc.navigator.current_page == 2

    def test_search(self, make_document):
        doc = make_document("<p>alpha</p><hr><p>beta</p><hr><p>gamma</p>", limit=100)

        assert doc.search("BETA") == [2]
        assert doc.search("delta") == []

    def test_go_to_heading(self, make_document):
        doc = make_document("<h1>One</h1><hr><h2>Two</h2>", limit=100)

        assert doc.go_to_heading(doc.headings[1]) == 2

    def test_character_count(self, make_document):
        doc = make_document("<h1>Hi</h1><p>there</p>")

        assert doc.character_count == 7

    def test_on_update_receives_published_results(self, make_document):
        on_update = Mock()
        doc = make_document([TextRun("a")], on_update=on_update)

        doc.rebuild()

        assert on_update.call_count == 2
        on_update.assert_called_with(doc.result)

    def test_strict_validation_passes_for_engine_output(self, make_document):
        settings = PaginationSettings(strict_validation=True)

        doc = make_document("<h1>T</h1>" + "text " * 20, limit=7, settings=settings)

        assert doc.page_count > 1

    def test_strict_validation_reports_broken_results(self, make_document, monkeypatch):
        settings = PaginationSettings(strict_validation=True)
        doc = make_document([TextRun("a")], settings=settings)
        monkeypatch.setattr(doc.engine, "_run", lambda blocks, style: doc.result.__class__(pages=()))

        with pytest.raises(LayoutError):
            doc.rebuild()

    def test_to_html(self, make_document, temp_dir):
        doc = make_document("<h1>Intro</h1>", title="Quarterly")

        html = doc.to_html()
        path = doc.to_html(temp_dir / "doc.html")

        assert '<div class="page-header">Quarterly</div>' in html
        assert path.read_text(encoding="utf-8") == html

    def test_context_manager_cancels_pending_rebuild(self, fake_timers):
        with PagedDocument(oracle=CharacterBudgetOracle(5), timer_factory=fake_timers) as doc:
            doc.set_content([TextRun("abc")])

        assert fake_timers.last.cancelled
        assert not doc.scheduler.pending
