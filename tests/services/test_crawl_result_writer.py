import io
import json

import pytest

from wordcrawl.domain.crawl_result import CrawlResult
from wordcrawl.services.crawl_result_writer import CrawlResultWriter


def test_write_produces_expected_json_and_keeps_stream_open():
    result = CrawlResult(word_counts={"data": 3, "crawl": 2}, urls_visited=4)
    out = io.StringIO()

    CrawlResultWriter(result).write(out)

    assert not out.closed
    assert json.loads(out.getvalue()) == {"wordCounts": {"data": 3, "crawl": 2}, "urlsVisited": 4}


def test_write_preserves_popularity_order():
    result = CrawlResult(word_counts={"zeta": 9, "alpha": 1}, urls_visited=1)
    out = io.StringIO()
    CrawlResultWriter(result).write(out)
    assert list(json.loads(out.getvalue())["wordCounts"]) == ["zeta", "alpha"]


def test_write_path_appends(tmp_path):
    target = tmp_path / "nested" / "result.json"
    CrawlResultWriter(CrawlResult({"a": 1}, 1)).write_path(str(target))
    CrawlResultWriter(CrawlResult({"b": 2}, 2)).write_path(str(target))

    lines = target.read_text().splitlines()
    assert [json.loads(line)["urlsVisited"] for line in lines] == [1, 2]


def test_result_is_required():
    with pytest.raises(ValueError):
        CrawlResultWriter(None)
