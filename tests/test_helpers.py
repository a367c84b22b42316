"""Unit tests for pure helpers used by the services."""

import re

import pytest

from devfolio.services.auth import split_full_name
from devfolio.services.blog_service import compute_read_time, random_slug, slugify
from devfolio.services.likes import toggle_like
from devfolio.services.query import Page, distinct_json_values, split_csv


@pytest.mark.parametrize(
    "title,expected",
    [
        ("Hello World", "hello-world"),
        ("  Ten Tips: For C++ & Rust!  ", "ten-tips-for-c-rust"),
        ("Multiple   spaces\there", "multiple-spaces-here"),
        ("!!!", ""),
    ],
)
def test_slugify(title, expected):
    assert slugify(title) == expected


def test_random_slug_shape():
    slug = random_slug()
    assert re.fullmatch(r"post-[a-z0-9]{8}", slug)
    assert slugify(slug) == slug


@pytest.mark.parametrize(
    "words,minutes",
    [(1, 1), (200, 1), (201, 2), (1000, 5)],
)
def test_compute_read_time(words, minutes):
    assert compute_read_time(" ".join(["word"] * words)) == minutes


@pytest.mark.parametrize(
    "name,expected",
    [
        ("Jane Doe", ("Jane", "Doe")),
        ("Jane", ("Jane", "User")),
        ("  Mary   Ann  Smith ", ("Mary", "Ann Smith")),
    ],
)
def test_split_full_name(name, expected):
    assert split_full_name(name) == expected


def test_toggle_like_adds_and_removes():
    likes, is_liked = toggle_like([1, 2], 3)
    assert (likes, is_liked) == ([1, 2, 3], True)

    likes, is_liked = toggle_like(likes, 3)
    assert (likes, is_liked) == ([1, 2], False)


def test_toggle_like_returns_new_list():
    original = [5]
    likes, _ = toggle_like(original, 6)
    assert likes is not original
    assert original == [5]
    assert toggle_like(None, 1) == ([1], True)


@pytest.mark.parametrize("total,limit,pages", [(0, 10, 0), (5, 2, 3), (10, 10, 1), (11, 10, 2)])
def test_page_count(total, limit, pages):
    assert Page(items=[], total=total, page=1, limit=limit).pages == pages


def test_split_csv():
    assert split_csv(None) == []
    assert split_csv("python, , web ,") == ["python", "web"]


def test_distinct_json_values():
    rows = [(["b", "a"],), (None,), (["a", "c"],)]
    assert distinct_json_values(rows) == ["a", "b", "c"]
