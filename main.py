#!/usr/bin/env python3
"""Image Sorter - sort a folder of images into sub-folders from the terminal."""

import logging
import os
import sys

from errors import SorterError
from sorter_model import SorterModel

HELP = """\
  1-9        move into destination N
  d          delete (undoable until purge)
  s          skip
  z / y      undo / redo
  a PATH     add a destination folder
  c          clear destinations
  f PATH     load destinations from the sub-folders of PATH
  p          purge deletes that can no longer be undone
  q          quit"""


def _print_status(model: SorterModel):
    current = model.current_image()
    print()
    for i, folder in enumerate(model.destinations.folders, start=1):
        print(f"  [{i}] {folder.name}")
    if current is None:
        print(f"No more images in {model.current_directory()}.")
    else:
        print(f"{current.name}  ({model.remaining_count()} left)")


def _handle(model: SorterModel, line: str) -> bool:
    """Run one command. Returns False when the user wants to quit."""
    cmd, _, arg = line.strip().partition(" ")
    if cmd == "q":
        return False
    if cmd.isdigit():
        folders = model.destinations.folders
        index = int(cmd) - 1
        destination = folders[index] if 0 <= index < len(folders) else None
        model.move_current(destination)
        model.advance()
    elif cmd == "d":
        model.delete_current()
        model.advance()
    elif cmd == "s":
        model.skip_current()
        model.advance()
    elif cmd == "z":
        print(f"Undid {model.undo()}")
    elif cmd == "y":
        print(f"Redid {model.redo()}")
    elif cmd == "a":
        model.add_folder(arg)
    elif cmd == "c":
        model.clear_destinations()
    elif cmd == "f":
        model.load_destinations(arg)
    elif cmd == "p":
        print(f"Purged {model.purge_holding_area()} file(s).")
    else:
        print(HELP)
    return True


def main():
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    if len(sys.argv) > 1:
        folders = sys.argv[1:]
    else:
        folder = input("Folder with images: ").strip()
        if not folder:
            print("No folder selected. Exiting.")
            sys.exit(0)
        folders = [folder]

    folders = [os.path.abspath(os.path.expanduser(f)) for f in folders]
    model = SorterModel()
    try:
        result = model.load(folders)
    except SorterError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Opening Image Sorter for: {', '.join(folders)}")
    print(f"{len(result.files)} images, {len(result.folders)} folders")
    for error in result.errors:
        print(f"  skipped {error}")

    try:
        while True:
            _print_status(model)
            try:
                line = input("> ")
            except EOFError:
                break
            try:
                if not _handle(model, line):
                    break
            except SorterError as e:
                print(f"Error: {e}")
    finally:
        model.close()


if __name__ == "__main__":
    main()
