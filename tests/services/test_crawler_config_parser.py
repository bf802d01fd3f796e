from datetime import timedelta

import pytest

from wordcrawl.exceptions import CrawlConfigError
from wordcrawl.services.crawler_config_parser import CrawlerConfigParser


def test_parse_full_config():
    parser = CrawlerConfigParser()
    cfg = parser.parse(
        {
            "start_pages": ["https://example.com/", "https://example.org/"],
            "ignored_urls": [r"https://example\.com/private/.*"],
            "ignored_words": [r"^.{1,3}$"],
            "parallelism": 4,
            "implementation_override": "Sequential",
            "max_depth": 3,
            "timeout_seconds": 2.5,
            "popular_word_count": 7,
            "result_path": "out/result.json",
            "profile_output_path": "out/profile.txt",
        }
    )
    assert cfg.start_pages == ["https://example.com/", "https://example.org/"]
    assert cfg.ignored_urls.matches("https://example.com/private/x")
    assert cfg.ignored_words.matches("the")
    assert cfg.parallelism == 4
    assert cfg.implementation_override == "sequential"
    assert cfg.max_depth == 3
    assert cfg.timeout == timedelta(seconds=2.5)
    assert cfg.popular_word_count == 7
    assert cfg.result_path == "out/result.json"
    assert cfg.profile_output_path == "out/profile.txt"


def test_parse_defaults():
    cfg = CrawlerConfigParser().parse({})
    assert cfg.start_pages == []
    assert len(cfg.ignored_urls) == 0
    assert cfg.max_depth == 0
    assert cfg.timeout == timedelta(seconds=1)
    assert cfg.result_path is None
    assert cfg.profile_output_path is None


def test_single_start_page_string_is_accepted():
    cfg = CrawlerConfigParser().parse({"start_pages": "https://example.com/"})
    assert cfg.start_pages == ["https://example.com/"]


@pytest.mark.parametrize(
    "data, field",
    [
        ({"max_depth": -1}, "max_depth"),
        ({"max_depth": "deep"}, "max_depth"),
        ({"parallelism": True}, "parallelism"),
        ({"timeout_seconds": "soon"}, "timeout_seconds"),
        ({"ignored_urls": ["("]}, "ignored_urls"),
        ({"implementation_override": "gpu"}, "implementation_override"),
    ],
)
def test_invalid_values_raise_config_error(data, field):
    with pytest.raises(CrawlConfigError) as exc:
        CrawlerConfigParser().parse(data)
    assert exc.value.field == field


def test_non_mapping_rejected():
    with pytest.raises(CrawlConfigError):
        CrawlerConfigParser().parse(["not", "a", "mapping"])


def test_load_reads_yaml_file(tmp_path):
    path = tmp_path / "crawl.yml"
    path.write_text("start_pages:\n  - https://example.com/\nmax_depth: 2\n", encoding="utf-8")
    cfg = CrawlerConfigParser().load(str(path))
    assert cfg.start_pages == ["https://example.com/"]
    assert cfg.max_depth == 2


def test_load_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert CrawlerConfigParser().load(str(path)).start_pages == []


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(CrawlConfigError):
        CrawlerConfigParser().load(str(tmp_path / "nope.yml"))


def test_load_invalid_yaml_raises(tmp_path):
    path = tmp_path / "bad.yml"
    path.write_text("start_pages: [unclosed\n", encoding="utf-8")
    with pytest.raises(CrawlConfigError):
        CrawlerConfigParser().load(str(path))
