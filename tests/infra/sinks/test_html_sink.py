from datetime import UTC, datetime

from folio.core.config import SiteSettings
from folio.core.types import CoverImage, Document, DocumentStatus, Heading, RenderedDocument
from folio.infra.sinks.html import MANIFEST_NAME, HtmlSiteSink, sort_newest_first


def _rendered(title, published_on=None, **kwargs):
    document = Document(
        title=title,
        body="Body",
        status=DocumentStatus.PUBLISHED,
        published_on=published_on,
        **kwargs,
    )
    return RenderedDocument(document=document, html="<p>Body</p>", summary="Body summary")


def test_sort_newest_first_puts_undated_last():
    old = _rendered("Old", datetime(2023, 1, 1, tzinfo=UTC))
    new = _rendered("New", datetime(2024, 1, 1, tzinfo=UTC))
    undated_b = _rendered("b undated")
    undated_a = _rendered("A undated")

    ordered = sort_newest_first([undated_b, old, undated_a, new])

    assert [item.document.title for item in ordered] == ["New", "Old", "A undated", "b undated"]


def test_publish_writes_pages_and_index(tmp_path):
    output_dir = tmp_path / "site"
    sink = HtmlSiteSink(output_dir, SiteSettings(title="My <Notes>"))
    item = _rendered(
        "Pointers & References",
        datetime(2024, 3, 2, 9, tzinfo=UTC),
        description="All about pointers",
        cover_image=CoverImage(url="/img/p.png", alt="Boxes"),
        tags=["go"],
    )
    item.headings = [
        Heading(level=2, text="One", anchor="one"),
        Heading(level=2, text="Two", anchor="two"),
    ]

    written = sink.publish([item])

    page = output_dir / "pointers-references.html"
    assert written == [page, output_dir / "index.html"]

    html = page.read_text(encoding="utf-8")
    assert "<title>Pointers &amp; References | My &lt;Notes&gt;</title>" in html
    assert '<meta name="description" content="All about pointers">' in html
    assert '<time datetime="2024-03-02T09:00:00+00:00">March 02, 2024</time>' in html
    assert '<img src="/img/p.png" alt="Boxes">' in html
    assert '<a href="#two">Two</a>' in html
    assert "<p>Body</p>" in html
    assert "<li>go</li>" in html

    index = (output_dir / "index.html").read_text(encoding="utf-8")
    assert '<a href="pointers-references.html">Pointers &amp; References</a>' in index
    assert "All about pointers" in index


def test_description_falls_back_to_summary(tmp_path):
    sink = HtmlSiteSink(tmp_path, SiteSettings())
    sink.publish([_rendered("No description")])

    assert "Body summary" in (tmp_path / "index.html").read_text(encoding="utf-8")


def test_publish_removes_pages_from_previous_build(tmp_path):
    sink = HtmlSiteSink(tmp_path, SiteSettings())
    sink.publish([_rendered("Removed post")])
    stale = tmp_path / "removed-post.html"
    assert stale.exists()

    sink.publish([])

    assert not stale.exists()
    assert (tmp_path / MANIFEST_NAME).read_text(encoding="utf-8") == "index.html\n"
    assert "No articles yet." in (tmp_path / "index.html").read_text(encoding="utf-8")


def test_publish_leaves_foreign_html_alone(tmp_path):
    own = tmp_path / "about.html"
    own.write_text("<p>hand written</p>", encoding="utf-8")
    keep = tmp_path / "style.css"
    keep.write_text("body {}", encoding="utf-8")
    (tmp_path / MANIFEST_NAME).write_text("../outside.html\nstyle.css\n", encoding="utf-8")
    outside = tmp_path.parent / "outside.html"
    outside.write_text("x", encoding="utf-8")

    sink = HtmlSiteSink(tmp_path, SiteSettings())
    sink.publish([_rendered("First")])
    sink.publish([_rendered("Second")])

    assert own.read_text(encoding="utf-8") == "<p>hand written</p>"
    assert keep.exists()
    assert outside.exists()
    assert not (tmp_path / "first.html").exists()
    assert (tmp_path / "second.html").exists()
