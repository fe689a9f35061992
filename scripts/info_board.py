#!/usr/bin/env python3
from __future__ import annotations

from typing import Any, Callable
import argparse
import asyncio
import logging

from firestore_model.info_board import InfoBoard, InfoBoardError, items_from_documents, render_infos
from firestore_model.settings import AppSettings, load_settings
from firestore_model.storage.firestore_store import create_async_client, create_client


LOGGER = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Add, delete, list or watch info board items.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", help="Add an info item.")
    add_parser.add_argument("text", help="Info text. Leading and trailing spaces are trimmed.")

    delete_parser = subparsers.add_parser("delete", help="Delete an info item by id.")
    delete_parser.add_argument("info_id")

    subparsers.add_parser("list", help="Print the board once, newest first.")

    watch_parser = subparsers.add_parser("watch", help="Re-print the board on every change.")
    watch_parser.add_argument(
        "--max-updates",
        type=int,
        default=None,
        help="Stop after this many snapshots. Default: run until interrupted.",
    )
    return parser.parse_args(argv)


def create_board(settings: AppSettings) -> InfoBoard:
    return InfoBoard(create_async_client(settings), collection=settings.info_collection)


async def watch_board(
    board: InfoBoard,
    listen_client: Any,
    *,
    max_updates: int | None = None,
    output: Callable[[str], None] = print,
) -> int:
    updates = 0
    async with board.snapshots(listen_client) as stream:
        async for documents in stream:
            output(render_infos(items_from_documents(documents)))
            updates += 1
            if max_updates is not None and updates >= max_updates:
                break
    return updates


async def run_command(
    args: argparse.Namespace,
    board: InfoBoard,
    *,
    listen_client_factory: Callable[[], Any] | None = None,
    output: Callable[[str], None] = print,
) -> int:
    if args.command == "add":
        try:
            info_id = await board.add_info(args.text)
        except InfoBoardError as exc:
            LOGGER.error("add rejected: %s", exc)
            return 2
        output(info_id)
        return 0
    if args.command == "delete":
        await board.delete_info(args.info_id)
        return 0
    if args.command == "list":
        output(render_infos(await board.list_infos()))
        return 0
    if args.command == "watch":
        if listen_client_factory is None:
            raise RuntimeError("watch requires a listen client factory.")
        await watch_board(board, listen_client_factory(), max_updates=args.max_updates, output=output)
        return 0
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        settings = load_settings()
        logging.basicConfig(level=settings.log_level_value, format="%(message)s")
        board = create_board(settings)
        return asyncio.run(run_command(args, board, listen_client_factory=lambda: create_client(settings)))
    except KeyboardInterrupt:
        LOGGER.info("watch stopped")
        return 0
    except Exception as exc:
        # Store failures leave the board untouched; report and exit non-zero.
        LOGGER.exception("info board %s failed: %s", args.command, exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
