import pytest

import config
import database

GOOD_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Acme Widgets - Handmade widgets for every workshop</title>
  <meta name="description" content="Acme Widgets builds handmade widgets for workshops, studios and makers. Browse our catalogue, compare models and order online today.">
  <link rel="canonical" href="https://example.com/">
  <meta property="og:title" content="Acme Widgets">
  <meta property="og:description" content="Handmade widgets for every workshop.">
  <meta property="og:image" content="https://example.com/cover.png">
  <meta property="og:url" content="https://example.com/">
  <meta name="twitter:card" content="summary_large_image">
  <meta name="twitter:title" content="Acme Widgets">
  <meta name="twitter:description" content="Handmade widgets for every workshop.">
</head>
<body>
  <h1>Welcome Home Page Title</h1>
  <h2>Our catalogue</h2>
  <h3>Bestsellers</h3>
  <h2>About us</h2>
  <img src="/a.png" alt="Brass widget">
  <img src="/b.png" alt="Steel widget">
  <a href="/catalogue">Catalogue</a>
  <a href="https://partner.example.org/">Partner</a>
  <script src="/app.js"></script>
</body>
</html>
"""

BARE_PAGE = "<html><body><p>Hello</p></body></html>"


@pytest.fixture
def good_page() -> str:
    return GOOD_PAGE


@pytest.fixture
def bare_page() -> str:
    return BARE_PAGE


@pytest.fixture
def temp_db(tmp_path, monkeypatch):
    """Point the backend at a fresh SQLite file."""
    monkeypatch.setattr(config, "DB_PATH", tmp_path / "seo_audit_test.db")
    database.init_db()
    return config.DB_PATH
