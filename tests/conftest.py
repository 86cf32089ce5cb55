"""Shared test fixtures for serieslink."""

import pytest
import yaml


def write_md(directory, filename, body="Body text.", **front_matter):
    """Write a markdown file with YAML front matter and return its path."""
    directory.mkdir(parents=True, exist_ok=True)
    fm_str = yaml.dump(front_matter, default_flow_style=False, allow_unicode=True, sort_keys=False)
    path = directory / filename
    path.write_text(f"---\n{fm_str}---\n\n{body}\n", encoding="utf-8")
    return path


@pytest.fixture
def draft_dir(tmp_path):
    """Provide an empty drafts directory."""
    path = tmp_path / "pre-publish"
    path.mkdir()
    return path


@pytest.fixture
def published_dir(tmp_path):
    """Provide an empty published directory."""
    path = tmp_path / "public"
    path.mkdir()
    return path


@pytest.fixture
def make_draft(draft_dir):
    """Factory fixture for draft documents."""
    def _create(filename, title, series=None, body="Draft body.", **extra):
        fm = {"title": title}
        if series is not None:
            fm["series"] = series
        fm.update(extra)
        return write_md(draft_dir, filename, body=body, **fm)

    return _create


@pytest.fixture
def make_published(published_dir):
    """Factory fixture for published documents."""
    def _create(filename, title, id=None, body="Published body.", **extra):
        fm = {"title": title, "id": id}
        fm.update(extra)
        return write_md(published_dir, filename, body=body, **fm)

    return _create


@pytest.fixture
def series_pair(make_draft, make_published):
    """Two drafts in series S with matching published articles (A -> 111, B -> 222)."""
    make_draft("01-a.md", "A", series="S")
    make_draft("02-b.md", "B", series="S")
    p1 = make_published("a.md", "A", id="111", body="Intro of A.")
    p2 = make_published("b.md", "B", id="222", body="Intro of B.")
    return {"p1": p1, "p2": p2}
