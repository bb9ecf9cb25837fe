#!/usr/bin/env python3
"""
cairn dict - command line dictionary lookup
Definitions, typo correction and reconciled etymology for a single word
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional, Sequence

from cairn.config import SettingsManager
from cairn.console import setup_windows_console, supports_color
from cairn.dictionary_lookup import lookup_word
from cairn.exceptions import DictionaryLookupError
from cairn.formatter import render_outcome
from cairn.history import WordHistory

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='cairn-dict',
        description='Look up a word: definitions, typo correction and etymology',
    )
    parser.add_argument('word', nargs='?', help='Word to look up')
    parser.add_argument('--max-distance', type=int, default=None, metavar='N',
                        help='Maximum edit distance for "did you mean" suggestions')
    parser.add_argument('--no-suggest', action='store_true',
                        help='Do not suggest a correction when the word is not found')
    parser.add_argument('--no-color', action='store_true',
                        help='Disable ANSI colors even on a terminal')
    parser.add_argument('-c', '--config', default=None, metavar='PATH',
                        help='Path to a JSON config file (default: ~/.cairn_dict.json)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable debug logging')
    parser.add_argument('--show-config', action='store_true',
                        help='Print the effective settings and where they came from, then exit')
    args = parser.parse_args(argv)
    if not args.word and not args.show_config:
        parser.error('the following arguments are required: word')
    return args


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point"""
    args = parse_args(argv)
    setup_windows_console()

    manager = SettingsManager(args.config)
    try:
        settings = manager.get_settings()
    except (TypeError, ValueError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1

    if args.max_distance is not None:
        if args.max_distance < 1:
            print("Error: --max-distance must be a positive integer", file=sys.stderr)
            return 1
        settings.max_edit_distance = args.max_distance

    if args.show_config:
        print(json.dumps(manager.get_config_info(), indent=2))
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level.upper(), logging.WARNING),
        format=settings.log_format,
    )

    history = WordHistory(settings.history_db)
    previous = history.load_recent_words(settings.recent_words)

    def announce(suggestion: str):
        print(f"Word not found. Did you mean: {suggestion}?\n", flush=True)

    try:
        outcome = asyncio.run(lookup_word(
            args.word,
            allow_suggest=not args.no_suggest,
            settings=settings,
            on_suggestion=announce,
        ))
    except DictionaryLookupError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for entry in outcome.entries:
        diagnostic = outcome.etymology_for(entry).diagnostic
        if diagnostic:
            print(f"  ({diagnostic})", file=sys.stderr)

    use_color = not args.no_color and supports_color(sys.stdout)
    sys.stdout.write(render_outcome(outcome, previous, use_color, settings.etymonline_base))

    for entry in outcome.entries:
        history.save_word(entry.headword)

    return 0


if __name__ == "__main__":
    sys.exit(main())
