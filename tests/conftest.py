"""Shared fixtures for og-check tests."""

import pytest


@pytest.fixture
def complete_tags():
    """Tags for a page that passes every rule."""
    return {
        "title": "Example Page",
        "description": "An example page.",
        "canonical": "https://example.com/page",
        "og:title": "Example Page",
        "og:description": "An example page for social previews.",
        "og:image": "https://example.com/og.png",
        "og:image:width": "1200",
        "og:image:height": "630",
        "og:image:alt": "Example preview image",
        "og:url": "https://example.com/page",
        "og:type": "website",
        "twitter:card": "summary_large_image",
    }


@pytest.fixture
def complete_html():
    """HTML whose extracted tags pass every rule."""
    return """
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <meta charset="UTF-8">
        <title>Example Page</title>
        <meta name="description" content="An example page.">
        <link rel="canonical" href="https://example.com/page">
        <link rel="icon" href="/favicon.ico">
        <meta property="og:title" content="Example Page">
        <meta property="og:description" content="An example page for social previews.">
        <meta property="og:image" content="https://example.com/og.png">
        <meta property="og:image:width" content="1200">
        <meta property="og:image:height" content="630">
        <meta property="og:image:alt" content="Example preview image">
        <meta property="og:url" content="https://example.com/page">
        <meta property="og:type" content="website">
        <meta name="twitter:card" content="summary_large_image">
    </head>
    <body><h1>Welcome</h1></body>
    </html>
    """
