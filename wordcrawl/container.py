"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from wordcrawl import config as env
from wordcrawl.domain.crawl_config import CrawlerConfig
from wordcrawl.services.crawler_factory import CrawlerFactory
from wordcrawl.services.http_service import HttpService
from wordcrawl.services.page_parser import PageParserFactory
from wordcrawl.services.profiler import Profiler, ProfilingState
from wordcrawl.utils.clock import SystemClock


# Environment variables used by the container (read via `wordcrawl.config` helpers).
#
# USER_AGENT (str, default: "wordcrawl/0.1")
#   User-Agent header for outbound HTTP requests.
#
# HTTP_TIMEOUT (int seconds, default: 10)
#   Timeout for a single page request. Independent of the crawl deadline.
#
# WORDCRAWL_LOG_LEVEL (str, default: "INFO")
#   Root log level used by run.py.
ENV = {
    "USER_AGENT": env.get_str_env("USER_AGENT", "wordcrawl/0.1"),
    "HTTP_TIMEOUT": env.get_int_env("HTTP_TIMEOUT", 10),
    "WORDCRAWL_LOG_LEVEL": env.get_str_env("WORDCRAWL_LOG_LEVEL", "INFO").strip().upper(),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for wordcrawl.

    `crawler_config` has no default; supply it per run with
    `container.crawler_config.override(providers.Object(cfg))`.
    """

    config = providers.Configuration(default=ENV)

    crawler_config = providers.Dependency(instance_of=CrawlerConfig)

    clock = providers.Singleton(SystemClock)

    profiling_state = providers.Singleton(ProfilingState)

    profiler = providers.Singleton(
        Profiler,
        clock=clock,
        state=profiling_state,
    )

    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.get),
        timeout=config.HTTP_TIMEOUT.as_(int),
    )

    page_parser_factory = providers.Factory(
        PageParserFactory,
        http_service=http_service,
        profiler=profiler,
        ignored_words=crawler_config.provided.ignored_words,
    )

    crawler_factory = providers.Factory(
        CrawlerFactory,
        clock=clock,
        parser_factory=page_parser_factory,
    )

    crawler = crawler_factory.provided.get.call(crawler_config)

    profiled_crawler = profiler.provided.wrap.call(crawler)
