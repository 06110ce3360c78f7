"""Shared test fixtures for blogidx package."""

from datetime import date

import pytest
import yaml

from blogidx.content.entry import ContentEntry, RawEntry


SYCL_FRONT_MATTER = {
    "title": "SYCL-OpenGL Interoperability",
    "description": "Sharing buffers and images between SYCL kernels and OpenGL.",
    "pubDate": "Jan 13 2025",
    "heroImage": "../../assets/images/sycl-x-opengl.webp",
    "category": "Programming",
    "tags": ["sycl", "cuda", "opencl", "opengl"],
}


@pytest.fixture
def sycl_front_matter():
    """Front matter of the SYCL-OpenGL article."""
    return dict(SYCL_FRONT_MATTER)


@pytest.fixture
def make_raw():
    """Factory for RawEntry objects with valid defaults."""
    def _make(slug: str = "post", **overrides) -> RawEntry:
        fm = {
            "title": f"Title of {slug}",
            "description": f"About {slug}",
            "pubDate": "2025-01-01",
            "category": "Programming",
        }
        fm.update(overrides)
        fm = {k: v for k, v in fm.items() if v is not ...}
        return RawEntry(slug=slug, front_matter=fm, body=f"Body of {slug}")

    return _make


@pytest.fixture
def make_entry():
    """Factory for validated ContentEntry objects."""
    def _make(
        slug: str,
        published: date = date(2025, 1, 1),
        category: str = "Programming",
        tags: tuple[str, ...] = (),
        **kwargs,
    ) -> ContentEntry:
        return ContentEntry(
            slug=slug,
            title=kwargs.pop("title", f"Title of {slug}"),
            description=kwargs.pop("description", f"About {slug}"),
            publish_date=published,
            category=category,
            tags=frozenset(tags),
            **kwargs,
        )

    return _make


@pytest.fixture
def mock_site_root(tmp_path, monkeypatch):
    """Create a mock site structure with .blogidx/ directory."""
    (tmp_path / ".blogidx").mkdir()
    (tmp_path / "src" / "content" / "blog").mkdir(parents=True)

    # Mock get_site_root to return our tmp_path
    from blogidx.core import config
    config.get_site_root.cache_clear()
    monkeypatch.setattr(config, "get_site_root", lambda: tmp_path)

    return tmp_path


@pytest.fixture
def content_dir(mock_site_root):
    return mock_site_root / "src" / "content" / "blog"


@pytest.fixture
def create_content_file(content_dir):
    """Factory fixture for creating .mdx content files with front matter."""
    def _create(
        slug: str = "test-post",
        front_matter: dict | None = None,
        body: str = "Test content.\n",
        bundle: bool = False,
        suffix: str = ".mdx",
    ):
        fm = {
            "title": "Test Post",
            "description": "A test post",
            "pubDate": "Jan 01 2025",
            "category": "Programming",
        }
        if front_matter:
            fm.update(front_matter)

        fm_str = yaml.dump(fm, default_flow_style=False, sort_keys=False)
        text = f"---\n{fm_str}---\n{body}"

        if bundle:
            path = content_dir / slug / f"index{suffix}"
        else:
            path = content_dir / f"{slug}{suffix}"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _create
