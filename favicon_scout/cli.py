# === FILE: favicon_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа FaviconScout для командной строки (диагностика для операторов).

Команды:
  resolve URL   Найти иконку (кэш → провайдеры → иконка по умолчанию)
  refresh URL   Сбросить кэш домена и найти иконку заново
  clear URL     Удалить запись домена из кэша
  show URL      Показать запись кэша в JSON
  scan URL      Найти все иконки сайта и вывести/сохранить отчёт
  config        Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --log-format FORMAT Формат логирования

Команда scan опции:
  --json PATH         Сохранить JSON-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с Jinja2-шаблонами (по умолчанию шаблон пакета)
  --pretty            Преформатировать JSON-вывод (отступ 2)
  --scan-timeout SEC  Таймаут всего сканирования (секунд)

Пример:
  favicon-scout --log-level WARNING scan github.com --html reports/github.html
"""
import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional

import click

from favicon_scout import __version__
from favicon_scout.aggregator import aggregate_results
from favicon_scout.cache import CacheRecord
from favicon_scout.config import FaviconConfig, load_config
from favicon_scout.engine import FaviconService
from favicon_scout.logger import init_logging
from favicon_scout.parser import IconCandidate
from favicon_scout.report.html_report import render_html
from favicon_scout.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


async def run_resolve(cfg: FaviconConfig, url: str, refresh: bool = False) -> str:
    async with FaviconService(cfg) as service:
        if refresh:
            return await service.refresh_favicon(url)
        return await service.resolve_favicon(url)


async def run_clear(cfg: FaviconConfig, url: str) -> bool:
    async with FaviconService(cfg) as service:
        return await service.clear_favicon(url)


async def run_show(cfg: FaviconConfig, url: str) -> Optional[CacheRecord]:
    async with FaviconService(cfg) as service:
        return await service.cached_record(url)


async def run_scan(cfg: FaviconConfig, url: str) -> List[IconCandidate]:
    async with FaviconService(cfg) as service:
        return await service.scan_site(url)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='FaviconScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд FaviconScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('resolve', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.pass_context
def resolve(ctx, url):
    """Найти иконку для URL (с учётом кэша)."""
    click.echo(asyncio.run(run_resolve(ctx.obj['config'], url)))


@cli.command('refresh', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.pass_context
def refresh(ctx, url):
    """Сбросить кэш и найти иконку заново."""
    click.echo(asyncio.run(run_resolve(ctx.obj['config'], url, refresh=True)))


@cli.command('clear', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.pass_context
def clear(ctx, url):
    """Удалить запись домена из кэша."""
    if not asyncio.run(run_clear(ctx.obj['config'], url)):
        print_error(f'Не удалось очистить кэш для {url}')
    click.echo(f'Cache cleared for {url}')


@cli.command('show', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.pass_context
def show(ctx, url):
    """Показать запись кэша для домена URL."""
    record = asyncio.run(run_show(ctx.obj['config'], url))
    if record is None:
        click.echo(f'No cached favicon for {url}')
        return
    click.echo(json.dumps(record.as_dict(), ensure_ascii=False, indent=2))


@cli.command('scan', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблонами'
)
@click.option(
    '--pretty', is_flag=True,
    help='Преформатировать JSON-вывод (отступ 2)'
)
@click.option(
    '--scan-timeout', 'scan_timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Таймаут всего сканирования (секунд)'
)
@click.pass_context
def scan(ctx, url, json_output, html_output, template_dir, pretty, scan_timeout):
    """Найти все иконки сайта и сгенерировать отчёты."""
    cfg = ctx.obj['config']
    try:
        if scan_timeout is not None:
            icons = asyncio.run(
                asyncio.wait_for(run_scan(cfg, url), timeout=scan_timeout)
            )
        else:
            icons = asyncio.run(run_scan(cfg, url))
    except asyncio.TimeoutError:
        print_error(f'Сканирование не завершено за {scan_timeout} секунд')

    report = aggregate_results(url, icons)

    # Если не сохраняем в файл — печатаем в stdout
    if not json_output and not html_output:
        indent = 2 if pretty else None
        click.echo(json.dumps(report.icons, ensure_ascii=False, indent=indent))
        return

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
