import pytest

from folio.core.exceptions import ContentNotFoundError
from folio.core.types import BuildIssue
from folio.infra.store import DocumentStore


def test_paths_are_sorted_and_skip_hidden(content_dir, write_doc, draft_post):
    write_doc("b.md", draft_post)
    write_doc("a.md", draft_post)
    write_doc("nested/c.md", draft_post)
    write_doc(".drafts/hidden.md", draft_post)
    write_doc("notes.txt", "not markdown")

    store = DocumentStore(content_dir)

    assert [path.relative_to(content_dir).as_posix() for path in store.paths()] == [
        "a.md",
        "b.md",
        "nested/c.md",
    ]


def test_missing_root_raises(tmp_path):
    with pytest.raises(ContentNotFoundError):
        DocumentStore(tmp_path / "nope").paths()


def test_load_all_reports_bad_documents_and_keeps_going(content_dir, write_doc, published_post, draft_post):
    write_doc("good.md", published_post)
    write_doc("draft.md", draft_post)
    bad = write_doc("bad.md", "---\ntitle: Bad\nstatus: archived\n---\nBody\n")
    unclosed = write_doc("unclosed.md", "---\ntitle: Open\n\nBody\n")

    result = DocumentStore(content_dir).load_all()

    assert sorted(doc.title for doc in result.documents) == ["Pointers in Go", "Typer for small CLIs"]
    assert {(issue.source_path, issue.kind) for issue in result.issues} == {
        (bad, "InvalidStatusError"),
        (unclosed, "MalformedFrontMatterError"),
    }


def test_try_load_reports_undecodable_file(content_dir):
    path = content_dir / "latin1.md"
    path.write_bytes("---\ntitle: Café\n---\nBody\n".encode("latin-1"))

    result = DocumentStore(content_dir).try_load(path)

    assert isinstance(result, BuildIssue)
    assert result.kind == "UnicodeDecodeError"
    assert result.source_path == path


@pytest.mark.parametrize("published_on", ["2024-02-30", "0001-01-01T00:00:00+01:00"])
def test_load_all_reports_impossible_dates(content_dir, write_doc, published_post, published_on):
    write_doc("good.md", published_post)
    bad = write_doc("leap.md", f"---\ntitle: Leap\npublishedOn: {published_on}\n---\nBody\n")

    result = DocumentStore(content_dir).load_all()

    assert [doc.title for doc in result.documents] == ["Pointers in Go"]
    assert [(issue.source_path, issue.kind) for issue in result.issues] == [(bad, "UnparsableTimestampError")]
