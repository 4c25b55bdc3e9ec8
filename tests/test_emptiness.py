"""
tests/test_emptiness.py
"""
from __future__ import annotations

import pytest

from folio.content.emptiness import is_image_empty, is_text_empty, strip_tags


@pytest.mark.parametrize(
    "html",
    [
        None,
        "",
        "   \n\t",
        "<br>",
        "<div><br></div>",
        "<p><br></p>",
        "<p></p>",
        "  <p><br></p>  ",
        "<p>   </p>",
        "<div><span> </span><br/></div>",
    ],
)
def test_text_is_empty(html):
    assert is_text_empty(html) is True


@pytest.mark.parametrize(
    "html",
    [
        "<p>Sveiki</p>",
        "plain words",
        "<div><br></div>x",
        "<p>&nbsp;</p>",
    ],
)
def test_text_with_visible_characters_is_not_empty(html):
    assert is_text_empty(html) is False


def test_strip_tags_keeps_text_between_tags():
    assert strip_tags("<p>a <b>bold</b> move</p>") == "a bold move"


@pytest.mark.parametrize(
    "src",
    [
        None,
        "",
        "   ",
        "data:image/png;base64,iVBORw0KGgo=",
        "DATA:image/jpeg;base64,AAAA",
        "blob:http://localhost/3c1f",
    ],
)
def test_image_without_durable_reference_is_empty(src):
    assert is_image_empty(src) is True


@pytest.mark.parametrize("src", ["/uploads/cover.jpg", "https://cdn.example.com/a.png"])
def test_image_with_stored_path_is_not_empty(src):
    assert is_image_empty(src) is False
