"""
Command line interface for the redirector.

    redirector init example.me
    redirector add https://example.com/some/long/path promo
    redirector ls
    redirector push
"""

import argparse
import logging
import sys
from typing import List, Optional

from redirector_app import __version__
from redirector_app.config import Settings, get_settings
from redirector_app.dependencies import get_handle, get_mapping_service
from redirector_app.exceptions import CodeExistsError, RedirectorError
from redirector_app.logging_config import configure_logging

logger = logging.getLogger(__name__)


def cmd_init(args: argparse.Namespace, settings: Settings) -> int:
    service = get_mapping_service(args.domain, settings)
    path = service.handle.database_path
    if service.init():
        print(f'Created new database "{path}"')
    else:
        print(f'Database "{path}" already exists')
    return 0


def cmd_ls(args: argparse.Namespace, settings: Settings) -> int:
    service = get_mapping_service(settings=settings)
    for entry in service.list(args.glob):
        print(f"{entry.code:<12} {entry.url}")
    return 0


def cmd_add(args: argparse.Namespace, settings: Settings) -> int:
    service = get_mapping_service(settings=settings)
    code = service.add(args.url, args.code)
    if not args.code:
        print(f'Added mapping with code "{code}"')
    return 0


def cmd_update(args: argparse.Namespace, settings: Settings) -> int:
    service = get_mapping_service(settings=settings)
    service.update(args.url, args.code)
    return 0


def cmd_rm(args: argparse.Namespace, settings: Settings) -> int:
    service = get_mapping_service(settings=settings)
    service.remove(args.code)
    return 0


def cmd_push(args: argparse.Namespace, settings: Settings) -> int:
    service = get_mapping_service(settings=settings)
    service.push()
    return 0


def cmd_root(args: argparse.Namespace, settings: Settings) -> int:
    print(get_handle(settings=settings).root)
    return 0


def cmd_config(args: argparse.Namespace, settings: Settings) -> int:
    print(get_handle(settings=settings).config_path)
    return 0


def cmd_db(args: argparse.Namespace, settings: Settings) -> int:
    print(get_handle(settings=settings).database_path)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="redirector",
        description="Maintain a personal url shortener database."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: REDIRECTOR_LOG_LEVEL or WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    p = subparsers.add_parser("init", help="Initialise new database for domain.")
    p.add_argument("domain", help="Domain to be used for new database.")
    p.set_defaults(func=cmd_init)

    p = subparsers.add_parser("ls", help="List current mappings in the database.")
    p.add_argument("glob", nargs="?", default="", help="Code glob of mappings to list.")
    p.set_defaults(func=cmd_ls)

    p = subparsers.add_parser("add", help="Add a new mapping to the database.")
    p.add_argument("url", help="Url to redirect to.")
    p.add_argument("code", nargs="?", default="", help="Code to be used for mapping.")
    p.set_defaults(func=cmd_add)

    p = subparsers.add_parser("update", help="Update the url for an existing mapping.")
    p.add_argument("url", help="Url to redirect to.")
    p.add_argument("code", help="Code to be updated.")
    p.set_defaults(func=cmd_update)

    p = subparsers.add_parser("rm", help="Remove a mapping from the database.")
    p.add_argument("code", help="Code of mapping to remove from the database.")
    p.set_defaults(func=cmd_rm)

    p = subparsers.add_parser("push", help="Push mappings to the configured backend.")
    p.set_defaults(func=cmd_push)

    p = subparsers.add_parser("root", help="Print the location of the root directory.")
    p.set_defaults(func=cmd_root)

    p = subparsers.add_parser("config", help="Print the location of the config file.")
    p.set_defaults(func=cmd_config)

    p = subparsers.add_parser("db", help="Print the location of the database file.")
    p.set_defaults(func=cmd_db)

    return parser


def main(argv: Optional[List[str]] = None, settings: Optional[Settings] = None) -> int:
    """Parse arguments, run one command and return the process exit status."""
    args = build_parser().parse_args(argv)
    settings = settings or get_settings()
    configure_logging(args.log_level or settings.log_level)

    try:
        return args.func(args, settings)
    except CodeExistsError as e:
        print(f'Error: code "{e.code}" already exists in database', file=sys.stderr)
    except RedirectorError as e:
        print(f"Error: {e}", file=sys.stderr)
    except OSError as e:
        logger.debug("Filesystem error", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
