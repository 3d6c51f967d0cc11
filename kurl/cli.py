#!/usr/bin/env python3
"""
kurl - a small curl-like HTTP client

Usage:
  kurl [-X METHOD] [-d DATA | --data-raw DATA] [-H 'Name: Value'] [-b COOKIE]
       [-L] [-k] [-I] [--resolve host:port:address] [--connect-timeout SEC]
       [-o FILE] [-v...] [--trace] URL

Examples:
  kurl example.com
  kurl -L -o page.html http://example.com/
  kurl -d 'a=1&b=2' -H 'X-Trace: 1' https://httpbin.org/post
  kurl -vvv --resolve example.com:443:93.184.216.34 https://example.com/
"""
from __future__ import annotations

import argparse
import sys
from contextlib import nullcontext
from typing import BinaryIO, List, Optional, TextIO

from kurl import __version__
from kurl.application.executor.redirect_engine import RedirectEngine
from kurl.application.output_router import OutputRouter
from kurl.application.ports.http_transport import HttpTransportPort
from kurl.application.ports.logger import LoggerPort
from kurl.application.ports.requests_transport import RequestsTransport
from kurl.application.services.error_explainer import explain
from kurl.application.services.request_plan import RequestPlan
from kurl.domain.config import RequestConfig, parse_resolve_list
from kurl.domain.exceptions import ConfigurationError
from kurl.domain.headers import build_header_set
from kurl.infrastructure.config.env_defaults import EnvDefaults
from kurl.infrastructure.logging.log_setup import level_for_verbosity, setup_console_logging
from kurl.infrastructure.logging.loguru_logger import LoguruLogger
from kurl.infrastructure.url.url_resolver import UrlResolver

PROG = "kurl"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2

TRACE_VERBOSITY = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, description="A small curl-like HTTP client.")
    parser.add_argument("url", help="the URL to request (http:// is assumed when no scheme is given)")
    parser.add_argument("-X", "--request", dest="method", default="GET", help="HTTP method (default: GET)")
    parser.add_argument("-d", "--data", help="form-encoded request body (implies POST)")
    parser.add_argument("--data-raw", dest="data_raw", help="raw request body, Content-Type left untouched")
    parser.add_argument("-H", "--header", dest="headers", action="append", default=[], help="extra header 'Name: Value' (repeatable)")
    parser.add_argument("-b", "--cookie", help="cookie string sent as the Cookie header")
    parser.add_argument("-A", "--user-agent", dest="user_agent", help="User-Agent header value")
    parser.add_argument("-L", "--location", dest="follow_redirects", action="store_true", help="follow redirects")
    parser.add_argument("-k", "--insecure", action="store_true", help="skip TLS certificate verification")
    parser.add_argument("-I", "--head", dest="head_only", action="store_true", help="fetch headers only (HEAD)")
    # header blocks are always printed; accepted so curl command lines keep working
    parser.add_argument("-i", "--include", action="store_true", help="no effect, status line and headers are always printed")
    parser.add_argument("--resolve", action="append", default=[], metavar="HOST:PORT:ADDRESS", help="connect to ADDRESS for HOST:PORT (repeatable)")
    parser.add_argument("--connect-timeout", dest="connect_timeout", type=float, metavar="SECONDS", help="connect phase timeout")
    parser.add_argument("-o", "--output", help="write the body to FILE instead of stdout")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="increase verbosity (-vvv enables trace output)")
    parser.add_argument("--trace", action="store_true", help="print wire-level request/response metadata to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def config_from_args(args: argparse.Namespace, defaults: EnvDefaults) -> RequestConfig:
    return RequestConfig(
        url=args.url,
        method=args.method,
        data=args.data,
        data_raw=args.data_raw,
        headers=list(args.headers),
        cookie=args.cookie,
        follow_redirects=args.follow_redirects,
        insecure=args.insecure or defaults.insecure,
        head_only=args.head_only,
        trace=args.trace or args.verbose >= TRACE_VERBOSITY,
        connect_timeout=args.connect_timeout if args.connect_timeout is not None else defaults.connect_timeout,
        resolve=parse_resolve_list(args.resolve),
        output=args.output,
        verbose=args.verbose,
        user_agent=args.user_agent or defaults.user_agent,
    )


def run(
    config: RequestConfig,
    out: BinaryIO,
    diag: TextIO,
    logger: LoggerPort,
    transport: Optional[HttpTransportPort] = None,
) -> int:
    urls = UrlResolver()
    headers = build_header_set(config.headers, config.cookie)
    plan = RequestPlan.from_config(config, headers, urls.normalize(config.url), logger=logger)

    transport = transport or RequestsTransport(
        connect_timeout=config.connect_timeout,
        insecure=config.insecure,
        resolve=config.resolve,
        user_agent=config.user_agent,
    )
    try:
        body_file = open(config.output, "wb") if config.output else nullcontext()
        with body_file as sink:
            router = OutputRouter(
                out,
                diag,
                trace=config.trace,
                head_only=config.head_only,
                body_file=sink,
            )
            engine = RedirectEngine(
                transport,
                router,
                logger,
                follow_redirects=config.follow_redirects,
                head_only=config.head_only,
                url_resolver=urls,
            )
            outcome = engine.run(plan)
    finally:
        transport.close()

    if outcome.ok:
        return EXIT_OK

    diag.write(f"{PROG}: {explain(outcome.diagnostic)}\n")
    diag.flush()
    return EXIT_FAILURE


def main(
    argv: Optional[List[str]] = None,
    out: Optional[BinaryIO] = None,
    diag: Optional[TextIO] = None,
    transport: Optional[HttpTransportPort] = None,
) -> int:
    out = out or sys.stdout.buffer
    diag = diag or sys.stderr

    args = build_parser().parse_args(argv)
    setup_console_logging(level=level_for_verbosity(args.verbose), sink=diag)
    logger = LoguruLogger()

    try:
        config = config_from_args(args, EnvDefaults.from_env())
        return run(config, out, diag, logger, transport=transport)
    except ConfigurationError as e:
        diag.write(f"{PROG}: {e}\n")
        return EXIT_CONFIG
    except OSError as e:
        diag.write(f"{PROG}: {e}\n")
        return EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
