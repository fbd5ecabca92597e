# === FILE: crawn/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска краулера crawn через командную строку.

Обходит сайт в ширину начиная с URL, переходит только по ссылкам того же
домена и пишет по одной JSON-строке на каждую посещённую страницу.

Опции:
  -o, --output PATH        NDJSON-файл для результатов (обязательно, *.ndjson)
  -l, --log-file PATH      Дополнительный файл для логов
  -m, --max-depth INT      Максимальная глубина обхода (default: 4)
  -v, --verbose            Логировать каждый запрос (INFO)
  --include-text           Добавить видимый текст страницы в запись
  --include-content        Добавить исходный HTML в запись
  -c, --config PATH        YAML/JSON-конфиг со значениями по умолчанию
  --concurrency INT        Число параллельных воркеров
  --rate-interval SEC      Минимальный интервал между запросами
  --timeout SEC            Таймаут одного запроса
  --crawl-timeout SEC      Таймаут всего обхода
  --version                Показать версию crawn

Пример:
  crawn -o output.ndjson -m 2 -v https://example.com
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from crawn import __version__
from crawn.config import load_config
from crawn.engine import start_crawl
from crawn.errors import FatalCrawlError, format_error_chain
from crawn.logger import init_logging, logger

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


def report_fatal(exc: BaseException) -> None:
    logger.critical("%s", format_error_chain(exc))
    sys.exit(1)


def setup_logging(verbose: bool, log_file) -> None:
    try:
        init_logging(verbose=verbose, log_file=log_file)
    except OSError as e:
        init_logging(verbose=verbose)
        report_fatal(e)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', message='crawn, version %(version)s')
@click.argument('url')
@click.option(
    '--output', '-o', 'output',
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help='NDJSON-файл для результатов.'
)
@click.option(
    '--log-file', '-l', 'log_file',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Файл для логов (только консоль, если не указан)'
)
@click.option(
    '--max-depth', '-m', 'max_depth',
    type=click.IntRange(min=0),
    default=None,
    help='Максимальная глубина обхода  [default: 4]'
)
@click.option('--verbose', '-v', is_flag=True, help='Логировать каждый отправленный запрос')
@click.option('--include-text', is_flag=True, help='Добавить видимый текст страницы')
@click.option('--include-content', is_flag=True, help='Добавить исходный HTML страницы')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='YAML/JSON-файл с настройками по умолчанию.'
)
@click.option('--concurrency', type=click.IntRange(min=1, max=64), default=None, help='Число воркеров')
@click.option('--rate-interval', 'rate_interval', type=float, default=None, help='Интервал между запросами (секунд)')
@click.option('--timeout', type=float, default=None, help='Таймаут одного запроса (секунд)')
@click.option('--crawl-timeout', 'crawl_timeout', type=float, default=None, help='Таймаут всего обхода (секунд)')
def cli(url, output, log_file, max_depth, verbose, include_text, include_content,
        config_path, concurrency, rate_interval, timeout, crawl_timeout):
    """Crawl a website breadth-first from URL and write one NDJSON record per page."""
    setup_logging(verbose, log_file)

    overrides = dict(
        seed_url=url,
        output=output,
        log_file=log_file,
        max_depth=max_depth,
        concurrency=concurrency,
        rate_interval=rate_interval,
        timeout=timeout,
        # flags only override the config file when they are set
        verbose=verbose or None,
        include_text=include_text or None,
        include_content=include_content or None,
    )
    try:
        cfg = load_config(config_path, **overrides)
    except (ValidationError, ValueError, TypeError, OSError) as e:
        report_fatal(e)

    if (cfg.verbose, cfg.log_file) != (verbose, log_file):
        setup_logging(cfg.verbose, cfg.log_file)

    try:
        stats = asyncio.run(start_crawl(cfg, crawl_timeout=crawl_timeout))
    except (FatalCrawlError, OSError) as e:
        report_fatal(e)

    if not stats.pages_written:
        logger.warning("No pages crawled from %s (%d errors)", cfg.seed, stats.error_count)
        click.echo(f'Crawled no pages from {cfg.seed}, {cfg.output} is empty ({stats.summary()})')
        return
    click.echo(f'Crawled {stats.pages_written} pages into {cfg.output} ({stats.summary()})')


if __name__ == "__main__":
    cli()
