# === FILE: site_keeper/cli.py ===
#!/usr/bin/env python3
"""
Точка входа SiteKeeper для командной строки.

Команды:
  build     Собрать сайты по описанию и записать манифест проверки
  verify    Проверить опубликованные эндпоинты по манифесту
  config    Показать проверенное описание сайтов

Общие опции:
  --debug             Отладочное логирование + вывод страниц в stdout при сборке
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)

Команда build опции:
  --config PATH       Описание сайтов (JSON/YAML)
  --content DIR       Каталог статического контента
  --templates DIR     Каталог шаблонов
  --sites DIR         Корень для сгенерированных сайтов
  --monitor PATH      Куда записать манифест проверки

Команда verify опции:
  --monitor PATH      Манифест проверки
  --parallel INT      Число параллельных проверок
  --timeout SEC       Таймаут на один запрос
  --json PATH         Сохранить результаты в JSON-файл

Код выхода: 0: всё прошло, 1: есть проваленные проверки или фатальная ошибка.

Пример:
  site-keeper build --config bin/sites.json --monitor ../www-src/mon.json
  site-keeper verify --monitor ../www-src/mon.json --parallel 32
"""
import sys
from pathlib import Path

import click

from site_keeper import __version__
from site_keeper.config import BuildSettings, VerifySettings, load_site_definition
from site_keeper.engine import build_site, verify_site
from site_keeper.logger import init_logging
from site_keeper.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteKeeper, version %(version)s')
@click.option('--debug', is_flag=True, help='Отладочное логирование (перекрывает --log-level)')
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
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.pass_context
def cli(ctx, debug, log_level, log_file):
    """Группа команд SiteKeeper CLI."""
    init_logging(
        level='DEBUG' if debug else log_level,
        log_file=str(log_file) if log_file else None,
    )
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug


@cli.command('build', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--config', '-c', 'config_path',
    default='bin/sites.json', show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Файл описания сайтов (JSON или YAML)'
)
@click.option(
    '--content', 'content_dir',
    default='../www-src/content', show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help='Каталог статического контента'
)
@click.option(
    '--templates', '-t', 'templates_dir',
    default='../www-src/templates', show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help='Каталог шаблонов'
)
@click.option(
    '--sites', '-s', 'sites_dir',
    default='../www', show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help='Корень для сгенерированных сайтов'
)
@click.option(
    '--monitor', '-m', 'monitor_path',
    default='../www-src/mon.json', show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Куда записать манифест проверки'
)
@click.option(
    '--scheme',
    default='https', show_default=True,
    type=click.Choice(['https', 'http']),
    help='Схема URL в манифесте'
)
@click.pass_context
def build(ctx, config_path, content_dir, templates_dir, sites_dir, monitor_path, scheme):
    """Собрать сайты и записать манифест проверки."""
    settings = BuildSettings(
        config=config_path,
        content=content_dir,
        templates=templates_dir,
        sites=sites_dir,
        monitor=monitor_path,
        scheme=scheme,
        debug=ctx.obj['debug'],
    )
    try:
        manifest = build_site(settings)
    except Exception as e:
        print_error(f'Ошибка сборки: {e}')
    click.echo(f'Monitor file: {monitor_path} ({len(manifest)} endpoints)', err=True)


@cli.command('verify', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--monitor', '-m', 'monitor_path',
    default='monitor.json', show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Манифест проверки'
)
@click.option(
    '--parallel', '-p', 'parallel',
    default=16, show_default=True,
    type=click.IntRange(min=1),
    help='Число параллельных проверок'
)
@click.option(
    '--timeout', 'timeout',
    default=0.75, show_default=True,
    type=click.FloatRange(min=0, min_open=True),
    help='Таймаут на один запрос (секунд)'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить результаты в JSON-файл'
)
@click.pass_context
def verify(ctx, monitor_path, parallel, timeout, json_output):
    """Проверить эндпоинты из манифеста и вывести отчёт."""
    settings = VerifySettings(
        monitor=monitor_path,
        parallel=parallel,
        timeout=timeout,
        debug=ctx.obj['debug'],
    )
    try:
        report = verify_site(settings)
    except Exception as e:
        print_error(f'Ошибка при проверке: {e}')

    click.echo(report.render(), nl=False)

    if json_output:
        try:
            saved_json = render_json(report, json_output)
            click.echo(f'JSON report: {saved_json}', err=True)
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    ctx.exit(report.exit_code)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--config', '-c', 'config_path',
    default='bin/sites.json', show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Файл описания сайтов (JSON или YAML)'
)
def show_config(config_path):
    """Показать проверенное описание сайтов в JSON."""
    try:
        definition = load_site_definition(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    click.echo(definition.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
