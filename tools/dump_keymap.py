#!/usr/bin/env python3
"""
Tilegen - Keymap Dumper

Writes the default key bindings as JSON, as a starting point for remapping.
"""

import sys

from editor.data.keymap import Keymap, save_keymap


def main():
    if len(sys.argv) != 2:
        print("Usage: dump_keymap.py <output.json>")
        sys.exit(1)

    output_path = sys.argv[1]
    save_keymap(Keymap.default(), output_path)
    print(f"Saved: {output_path}")


if __name__ == "__main__":
    main()
