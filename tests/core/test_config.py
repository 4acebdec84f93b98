from pathlib import Path

import pytest

from folio.core.config import ConfigLoader, FolioConfig
from folio.core.exceptions import ConfigError


def test_defaults_without_file(tmp_path):
    config = ConfigLoader(tmp_path).load()

    assert config.paths.site_root == tmp_path
    assert config.paths.abs_content_dir == tmp_path / "content"
    assert config.paths.abs_output_dir == tmp_path / "site"
    assert config.build.include_drafts is False
    assert config.build.workers == 1
    assert config.render.allow_html is True
    assert config.site.title == "Articles"


def test_file_values_are_loaded(tmp_path):
    (tmp_path / "folio.yml").write_text(
        "paths:\n  content_dir: articles\n  output_dir: /srv/www\n"
        "build:\n  workers: 4\nsite:\n  title: Notes\n",
        encoding="utf-8",
    )

    config = FolioConfig.load(tmp_path)

    assert config.paths.abs_content_dir == tmp_path / "articles"
    assert config.paths.abs_output_dir == Path("/srv/www")
    assert config.build.workers == 4
    assert config.site.title == "Notes"


def test_environment_overrides_file(tmp_path, monkeypatch):
    (tmp_path / "folio.yml").write_text("build:\n  workers: 4\n  include_drafts: false\n", encoding="utf-8")
    monkeypatch.setenv("FOLIO_BUILD__WORKERS", "8")
    monkeypatch.setenv("FOLIO_SITE__TITLE", "From env")

    config = ConfigLoader(tmp_path).load()

    assert config.build.workers == 8
    assert config.build.include_drafts is False
    assert config.site.title == "From env"


def test_site_root_in_file_is_ignored(tmp_path):
    (tmp_path / "folio.yml").write_text("paths:\n  site_root: /elsewhere\n", encoding="utf-8")
    assert ConfigLoader(tmp_path).load().paths.site_root == tmp_path


@pytest.mark.parametrize(
    "content",
    [
        "build: [unclosed\n",
        "- just\n- a list\n",
        "build: 3\n",
        "build:\n  workers: 0\n",
    ],
)
def test_invalid_files_raise_config_error(tmp_path, content):
    (tmp_path / "folio.yml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        ConfigLoader(tmp_path).load()
