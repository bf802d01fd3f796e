from datetime import timedelta
from unittest.mock import MagicMock

from wordcrawl.domain.ignore_filter import IgnoreFilter
from wordcrawl.services.crawl_policy import CrawlPolicy
from wordcrawl.utils.clock import FakeClock


def _policy(patterns=()):
    clock = FakeClock()
    return CrawlPolicy(clock, IgnoreFilter(patterns)), clock


def test_should_skip_due_to_deadline_at_or_after_deadline():
    policy, clock = _policy()
    deadline = clock.now() + timedelta(seconds=1)
    assert not policy.should_skip_due_to_deadline("http://example.com", deadline)
    clock.advance(1)
    assert policy.should_skip_due_to_deadline("http://example.com", deadline)
    clock.advance(1)
    assert policy.should_skip_due_to_deadline("http://example.com", deadline)


def test_should_skip_due_to_depth_only_when_no_hops_remain():
    policy, _ = _policy()
    assert policy.should_skip_due_to_depth("http://example.com", 0)
    assert not policy.should_skip_due_to_depth("http://example.com", 1)


def test_should_skip_due_to_ignore_uses_full_match():
    policy, _ = _policy([r"http://example\.com/private/.*"])
    assert policy.should_skip_due_to_ignore("http://example.com/private/a")
    assert not policy.should_skip_due_to_ignore("http://example.com/public")


def test_should_skip_checks_deadline_before_ignore_patterns():
    ignored = MagicMock()
    clock = FakeClock()
    policy = CrawlPolicy(clock, ignored)
    assert policy.should_skip("http://example.com", 3, clock.now())
    ignored.matches.assert_not_called()


def test_should_skip_checks_depth_before_ignore_patterns():
    ignored = MagicMock()
    clock = FakeClock()
    policy = CrawlPolicy(clock, ignored)
    assert policy.should_skip("http://example.com", 0, clock.now() + timedelta(seconds=5))
    ignored.matches.assert_not_called()


def test_should_skip_false_when_everything_allows():
    policy, clock = _policy()
    deadline = clock.now() + timedelta(seconds=10)
    assert not policy.should_skip("http://example.com", 2, deadline)
