import re

from wordcrawl.domain.ignore_filter import IgnoreFilter


def test_empty_filter_matches_nothing():
    assert not IgnoreFilter().matches("https://example.com")


def test_pattern_must_match_the_whole_value():
    f = IgnoreFilter([r"https://example\.com/private"])
    assert f.matches("https://example.com/private")
    assert not f.matches("https://example.com/private/page")
    assert not f.matches("xhttps://example.com/private")


def test_any_pattern_matching_is_enough():
    f = IgnoreFilter([r".*\.pdf", r"https://ads\..*"])
    assert f.matches("https://example.com/file.pdf")
    assert f.matches("https://ads.example.com/banner")
    assert not f.matches("https://example.com/index.html")


def test_accepts_precompiled_patterns():
    f = IgnoreFilter([re.compile(r"^.{1,3}$")])
    assert f.matches("the")
    assert not f.matches("word")
    assert len(f) == 1
