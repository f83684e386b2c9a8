# official_account/main.py

"""
Command Line Entry Point

Purpose:
Exposes the permanent material operations on the command line, mainly for
manual checks against a real Official Account.

Workflow:
1. Parse command-line arguments & set the log level.
2. Build a MaterialClient from settings (.env / config.ini).
3. Run the requested material command and print the JSON result
   (binary media fetched with `get` is written to --output instead).
4. Close the client session and exit with 0 on success, 1 on failure.

Execution:
python -m official_account.main <command> [args] [--log-level LEVEL]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from official_account.utils.logger import log, set_log_level
from official_account.core import settings
from official_account.core.exceptions import OfficialAccountError
from official_account.api.wechat.material import MaterialClient

MATERIAL_TYPES = ['image', 'video', 'voice', 'news']

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage WeChat Official Account permanent materials.")
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Set the logging level (default: [Logging] Level from config.ini, else INFO).'
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    for command in ('upload-image', 'upload-thumb', 'upload-voice', 'upload-article-image'):
        sub = subparsers.add_parser(command, help=f"{command.replace('-', ' ').capitalize()} from a local file.")
        sub.add_argument('path', help='Local file to upload.')

    video = subparsers.add_parser('upload-video', help='Upload a video with title and introduction.')
    video.add_argument('path', help='Local video file.')
    video.add_argument('--title', required=True)
    video.add_argument('--introduction', default='')

    get = subparsers.add_parser('get', help='Fetch a material by media id.')
    get.add_argument('media_id')
    get.add_argument('--output', help='Where to write binary media content.')

    delete = subparsers.add_parser('delete', help='Delete a material by media id.')
    delete.add_argument('media_id')

    lists = subparsers.add_parser('list', help='List materials of one type.')
    lists.add_argument('type', choices=MATERIAL_TYPES)
    lists.add_argument('--offset', type=int, default=0)
    lists.add_argument('--count', type=int, default=20)

    subparsers.add_parser('stats', help='Show material counts per type.')
    return parser

def run_command(client: MaterialClient, args: argparse.Namespace) -> Any:
    """Dispatches the parsed command to the client and returns its result."""
    command = args.command
    if command == 'upload-image':
        return client.upload_image(args.path)
    if command == 'upload-thumb':
        return client.upload_thumb(args.path)
    if command == 'upload-voice':
        return client.upload_voice(args.path)
    if command == 'upload-article-image':
        return client.upload_article_image(args.path)
    if command == 'upload-video':
        return client.upload_video(args.path, args.title, args.introduction)
    if command == 'get':
        return client.get(args.media_id)
    if command == 'delete':
        return client.delete(args.media_id)
    if command == 'list':
        return client.lists(args.type, offset=args.offset, count=args.count)
    if command == 'stats':
        return client.stats()
    raise ValueError(f"Unknown command: {command}")

def emit_result(result: Any, output: Optional[str] = None) -> None:
    """Prints JSON results; bytes go to `output` when given."""
    if isinstance(result, bytes):
        if not output:
            raise OfficialAccountError("Material is binary; pass --output to save it.")
        Path(output).write_bytes(result)
        log.info(f"Wrote {len(result)} bytes to {output}")
        return
    print(json.dumps(result, ensure_ascii=False, indent=2))

def main(argv: Optional[List[str]] = None):
    """Main execution function: parses arguments, runs one command, exits."""
    args = build_parser().parse_args(argv)
    if args.log_level:
        set_log_level(getattr(logging, args.log_level, logging.INFO))
    else:
        set_log_level(settings.LOG_LEVEL)

    client: Optional[MaterialClient] = None
    exit_code = 1
    try:
        client = MaterialClient()
        result = run_command(client, args)
        emit_result(result, getattr(args, 'output', None))
        exit_code = 0
    except (OfficialAccountError, ValueError) as e:
        log.error(f"Command '{args.command}' failed: {e}")
    finally:
        if client:
            client.close_session()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
