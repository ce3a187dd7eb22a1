from __future__ import annotations

import pytest

ARTICLE_HTML = """<!DOCTYPE html>
<html>
<head>
  <title>Yahoo hack disclosure</title>
  <meta property="og:title" content="SEC probes Yahoo breach disclosure">
  <meta name="og:title" content="name-matched title">
  <meta property="og:type" content="article">
  <meta property="og:url" content="https://example.com/2017/01/22/yahoo">
  <meta property="og:site_name" content="Example News">
  <meta property="og:description" content="Regulators want to know when Yahoo knew.">
  <meta property="og:locale" content="en_US">
  <meta property="og:image" content="https://cdn.example.com/a.jpg">
  <meta property="og:image:width" content="1200">
  <meta property="og:image:height" content="630">
  <meta property="og:image" content="https://cdn.example.com/b.jpg">
  <meta property="og:image:width" content="800">
  <meta property="og:image:height" content="400">
  <meta property="og:image" content="https://cdn.example.com/c.jpg">
  <meta property="og:image:width" content="640">
  <meta property="og:image:height" content="320">
  <meta name="twitter:card" content="summary_large_image">
  <meta name="twitter:site" content="@example">
  <meta name="twitter:image:src" content="https://cdn.example.com/tw.jpg">
  <meta name="twitter:player" content="https://example.com/player">
  <meta name="twitter:width" content="480">
  <meta name="twitter:app:id:iphone" content="1234">
</head>
<body>
  <nav>Home | World | Tech</nav>
  <script>window.tracking = true;</script>
  <article>
    <h1>SEC probes Yahoo breach disclosure</h1>
    <p>The investigation focuses on whether Yahoo should have disclosed sooner.</p>
    <p>Shareholders have also filed suits.</p>
  </article>
  <footer>Copyright Example News</footer>
</body>
</html>
"""


@pytest.fixture
def article_html() -> str:
    return ARTICLE_HTML
