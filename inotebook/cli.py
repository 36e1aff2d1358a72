"""Command-line front end for the notes client.

Typical usage:
  inotebook-notes set-token eyJhbGciOi...
  inotebook-notes add "Groceries" "milk, eggs, bread" --tag home
  inotebook-notes list
  inotebook-notes edit 6462f1... --title "Groceries (weekend)"
  inotebook-notes delete 6462f1...

The base URL comes from NOTES_API_BASE_URL unless --base-url is given.
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import Any, List, Optional

from inotebook.client.errors import NoteStoreError
from inotebook.client.note_store import NoteStore, StoreResult
from inotebook.client.storage import TOKEN_KEY, LocalStorage
from inotebook.core.config import settings
from inotebook.core.logging import setup_logging


def _print(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _notes_json(store: NoteStore) -> List[dict]:
    return [n.to_wire() for n in store.notes]


def _check(res: StoreResult) -> Any:
    try:
        return res.unwrap()
    except NoteStoreError as e:
        code = f" ({e.status_code})" if e.status_code else ""
        print(f"error: {type(e).__name__}{code}: {e.message}", file=sys.stderr)
        raise SystemExit(1)


def _cmd_list(store: NoteStore, args: argparse.Namespace) -> None:
    _check(store.fetch_all())
    _print(_notes_json(store))


def _cmd_add(store: NoteStore, args: argparse.Namespace) -> None:
    note = _check(store.add(args.title, args.description, args.tag))
    _print(note.to_wire())


def _cmd_edit(store: NoteStore, args: argparse.Namespace) -> None:
    # The API needs all three fields; fill the missing ones from the server copy
    _check(store.fetch_all())
    current = store.find(args.id)
    if current is None:
        print(f"error: note {args.id} not found", file=sys.stderr)
        raise SystemExit(1)
    _check(store.edit(
        args.id,
        args.title if args.title is not None else current.title,
        args.description if args.description is not None else current.description,
        args.tag if args.tag is not None else current.tag,
    ))
    _print(store.find(args.id).to_wire())


def _cmd_delete(store: NoteStore, args: argparse.Namespace) -> None:
    _print(_check(store.delete(args.id)))


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="inotebook-notes", description="Manage your iNotebook notes")
    ap.add_argument("--base-url", default=None, help="API base URL (default: NOTES_API_BASE_URL)")
    ap.add_argument("--storage", default=None, help="Storage file holding the auth token")
    ap.add_argument("--log-level", default="WARNING")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("set-token", help="Store the auth token")
    p.add_argument("token")
    sub.add_parser("clear-token", help="Forget the stored auth token")

    sub.add_parser("list", help="List all notes").set_defaults(func=_cmd_list)

    p = sub.add_parser("add", help="Create a note")
    p.add_argument("title")
    p.add_argument("description")
    p.add_argument("--tag", default="General")
    p.set_defaults(func=_cmd_add)

    p = sub.add_parser("edit", help="Edit a note")
    p.add_argument("id")
    p.add_argument("--title")
    p.add_argument("--description")
    p.add_argument("--tag")
    p.set_defaults(func=_cmd_edit)

    p = sub.add_parser("delete", help="Delete a note")
    p.add_argument("id")
    p.set_defaults(func=_cmd_delete)
    return ap


def main(argv: Optional[List[str]] = None, store: Optional[NoteStore] = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging(args.log_level)
    storage = LocalStorage(args.storage)

    if args.command == "set-token":
        storage.set_item(TOKEN_KEY, args.token)
        print(f"token saved to {storage.path}")
        return 0
    if args.command == "clear-token":
        storage.remove_item(TOKEN_KEY)
        print("token removed")
        return 0

    store = store or NoteStore(
        base_url=args.base_url or settings.notes_api_url,
        token_provider=storage.token_provider(),
    )
    args.func(store, args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
