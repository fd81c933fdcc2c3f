from sitemap_crawler.links import Link, parse_links


def test_single_simple_link():
    html = '<html><body><a href="/page1">Link 1</a></body></html>'

    assert parse_links(html) == [Link(href="/page1", text="Link 1")]


def test_multiple_links():
    html = """
        <html>
          <body>
            <a href="/page1">Link 1</a>
            <div><a href="https://example.com/page2">Link 2</a></div>
          </body>
        </html>"""

    assert parse_links(html) == [
        Link(href="/page1", text="Link 1"),
        Link(href="https://example.com/page2", text="Link 2"),
    ]


def test_nested_tags_and_whitespace():
    html = """
        <a href="/nested">
          Click <b>here</b>
          <span> for \tmore
          </span> info!
        </a>"""

    assert parse_links(html) == [Link(href="/nested", text="Click here for more info!")]


def test_no_links():
    assert parse_links("<html><body><p>Just text.</p><div></div></body></html>") == []


def test_link_without_href():
    assert parse_links("<a>No Href Here</a>") == [Link(href="", text="No Href Here")]


def test_link_with_empty_href():
    assert parse_links('<a href="">Empty Href</a>') == [Link(href="", text="Empty Href")]


def test_commented_out_links_ignored():
    html = """
        <a href="/real">Real Link</a>
        <!-- <a href="/commented">Commented Link</a> -->"""

    assert parse_links(html) == [Link(href="/real", text="Real Link")]


def test_empty_document():
    assert parse_links("") == []
    assert parse_links(b"") == []


def test_bytes_input_and_entities():
    html = b'<a href="/entity">Ben &amp; Jerry</a><a href="#section">Section</a>'

    assert parse_links(html) == [
        Link(href="/entity", text="Ben & Jerry"),
        Link(href="#section", text="Section"),
    ]
