import argparse
import logging
import sys
from typing import Optional

from dependency_injector import providers

from wordcrawl.container import Container
from wordcrawl.exceptions import CrawlConfigError
from wordcrawl.services.crawl_result_writer import CrawlResultWriter
from wordcrawl.services.crawler_config_parser import CrawlerConfigParser

logger = logging.getLogger("wordcrawl")


def _parse_args(argv):
    parser = argparse.ArgumentParser(
        description="Crawl a set of start pages and report the most popular words.",
    )
    parser.add_argument("config", help="Path to a YAML crawl config")
    return parser.parse_args(argv)


def main(argv=None, container: Optional[Container] = None) -> int:
    args = _parse_args(argv)
    container = container or Container()

    logging.basicConfig(
        level=getattr(logging, container.config.WORDCRAWL_LOG_LEVEL() or "INFO", logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        crawler_config = CrawlerConfigParser().load(args.config)
        container.crawler_config.override(providers.Object(crawler_config))
        crawler = container.profiled_crawler()
    except CrawlConfigError as e:
        logger.error("%s", e)
        return 2

    logger.info("Crawling %s start pages with %r", len(crawler_config.start_pages), crawler_config)
    result = crawler.crawl(crawler_config.start_pages)

    writer = CrawlResultWriter(result)
    if crawler_config.result_path:
        writer.write_path(crawler_config.result_path)
    else:
        writer.write(sys.stdout)

    profiler = container.profiler()
    if crawler_config.profile_output_path:
        profiler.write_data(crawler_config.profile_output_path)
    else:
        profiler.write_data_to(sys.stdout)

    return 0


if __name__ == '__main__':
    sys.exit(main())
