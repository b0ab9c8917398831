# === FILE: discover/cli.py ===
#!/usr/bin/env python3
"""
Точка входа discover: перебор путей на веб-сервере по словарю.

Основные опции:
  -u URL          Целевой базовый URL (обязательно)
  -w PATH         Файл словаря (обязательно)
  -c INT          Число параллельных воркеров (default: число CPU)
  -t SEC          Таймаут одного запроса (default: 5)
  -h HOST         Подмена заголовка Host
  -ck/-cv         Имя/значение произвольного заголовка
  -e EXT          Расширение файла (без точки)
  -s CODES        Коды успеха через запятую ("common" = типовой набор)
  -f CODES        Коды неудачи через запятую (важнее -s)
  -a UA           User-Agent
  -cookies PATH   Файл со значением заголовка Cookie
  -p PREFIX       Префикс перед каждым словом
  -k              Не проверять TLS-сертификаты

Дополнительно:
  --config PATH   YAML/JSON со значениями по умолчанию для любых опций
  --json          Выводить JSON-строки вместо текста
  --no-size       Не выводить размер ответа
  --version, -v   Показать версию

Пример:
  discover -u https://example.com -w words.txt -e php -f 404 -c 20
"""
import asyncio
import os
import sys
from pathlib import Path

import click

from discover import __version__
from discover.config import load_config
from discover.errors import ConfigError, SourceUnavailable
from discover.logger import DEFAULT_FORMAT, configure
from discover.bruteforce import DEFAULT_GRACE
from discover.report import JsonLinesSink, TextSink
from discover.scanner import run_scan

# -h is the Host header
CONTEXT_SETTINGS = dict(help_option_names=["--help"])

EXIT_INTERRUPTED = 130
EXIT_BROKEN_PIPE = 141


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _silence_stdout():
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError, AttributeError):
        # stdout has no file descriptor (captured by a test runner)
        pass
    finally:
        os.close(devnull)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='discover, version %(version)s')
@click.option('-u', 'target', default=None, help='Target URL.')
@click.option(
    '-w', 'wordlist',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Word list.'
)
@click.option(
    '-c', 'concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Number of concurrent requests [default: CPU count].'
)
@click.option(
    '-t', 'timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Timeout in seconds [default: 5].'
)
@click.option('-h', 'host', default=None, help='Host header.')
@click.option('-ck', 'header_key', default=None, help='Add a custom header to all requests (key).')
@click.option('-cv', 'header_value', default=None, help='Add a custom header to all requests (value).')
@click.option('-e', 'extension', default=None, help='File extension to add (without dot prefix).')
@click.option('-s', 'success_codes', default=None, help='Status codes indicating success, separated by commas.')
@click.option('-f', 'failure_codes', default=None, help='Status codes indicating failure, separated by commas.')
@click.option('-a', 'user_agent', default=None, help='User-Agent to use.')
@click.option(
    '-cookies', 'cookies_file',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='File containing cookies.'
)
@click.option('-p', 'prefix', default=None, help='Prefix to add to word/directory.')
@click.option('-k', 'insecure', is_flag=True, help='Ignore HTTPS errors.')
@click.option(
    '--config', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='YAML or JSON file with default option values.'
)
@click.option('--json', 'json_output', is_flag=True, help='Print one JSON object per match.')
@click.option('--no-size', 'no_size', is_flag=True, help='Do not print the response size.')
@click.option(
    '--grace', 'grace',
    type=click.FloatRange(min=0),
    default=DEFAULT_GRACE,
    show_default=True,
    help='Seconds to let in-flight probes finish after an interrupt.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False),
    help='Logging level.'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stderr only if omitted).'
)
@click.option('--log-format', 'log_format', default=DEFAULT_FORMAT, help='Log format string.')
def cli(target, wordlist, concurrency, timeout, host, header_key, header_value, extension,
        success_codes, failure_codes, user_agent, cookies_file, prefix, insecure, config_path,
        json_output, no_size, grace, log_level, log_file, log_format):
    """Discover files and directories on a web server by brute force."""
    configure(level=log_level, log_file=log_file, log_format=log_format)

    if config_path is None:
        if not target:
            raise click.UsageError('You must specify a target URL with the -u parameter.')
        if not wordlist:
            raise click.UsageError('You must specify a word list with the -w parameter.')

    try:
        cfg = load_config(
            config_path,
            target=target,
            wordlist=wordlist,
            concurrency=concurrency,
            timeout=timeout,
            host=host,
            header_key=header_key,
            header_value=header_value,
            extension=extension,
            success_codes=success_codes,
            failure_codes=failure_codes,
            user_agent=user_agent,
            cookies_file=cookies_file,
            prefix=prefix,
            insecure=True if insecure else None,
            show_size=False if no_size else None,
        )
    except ConfigError as e:
        print_error(f'Configuration error: {e}')

    sink = JsonLinesSink() if json_output else TextSink(show_size=cfg.show_size)

    click.echo(f'Discovering assets on {cfg.target}', err=True)
    try:
        stats = asyncio.run(run_scan(cfg, sink, grace=grace))
    except SourceUnavailable as e:
        print_error(str(e))
    except KeyboardInterrupt:
        click.secho('Interrupted', fg='yellow', err=True)
        sys.exit(EXIT_INTERRUPTED)
    except BrokenPipeError:
        # stdout reader went away (| head); the interpreter would fail again
        # flushing stdout at exit
        _silence_stdout()
        sys.exit(EXIT_BROKEN_PIPE)

    click.echo(
        f'{stats.words} words, {stats.matched} matched, {stats.failed} failed',
        err=True,
    )
    if stats.cancelled:
        click.secho('Scan stopped before the word list was exhausted', fg='yellow', err=True)
        sys.exit(EXIT_INTERRUPTED)


if __name__ == "__main__":
    cli()
