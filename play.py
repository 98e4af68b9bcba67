from __future__ import annotations
import argparse
import logging
import sys
from typing import Optional

from sweeper.errors import ConfigError
from sweeper.game import (
    Action, ChangeSettings, Chord, Display, Flag, Game, Probe, Quit, Reset,
)
from sweeper.generator import RandomBoardGenerator
from sweeper.rules import GameState
from sweeper.settings import Settings

GLYPHS = {
    Display.HIDDEN: '.',
    Display.FLAG: 'F',
    Display.MINE: 'X',
    Display.FALSE_FLAG: '?',
    Display.TRIPPED_MINE: '!',
}

HELP = 'commands: o X Y (open), f X Y (flag), c X Y (chord), r (reset), s PRESET | s W H M (settings), q (quit)'


def render_ascii(game: Game) -> str:
    rows = []
    for row in game.board():
        rows.append(' '.join(str(c.count) if c.kind is Display.OPEN else GLYPHS[c.kind] for c in row))
    rows.append(f'{game.state.value} | mines left: {game.mines_remaining} | time: {game.elapsed_secs()}s')
    return '\n'.join(rows)


def parse_command(text: str) -> Optional[Action]:
    parts = text.split()
    if not parts:
        return None
    cmd, args = parts[0].lower(), parts[1:]
    if cmd == 'q':
        return Quit()
    if cmd == 'r':
        return Reset()
    if cmd == 's':
        if len(args) == 1:
            return ChangeSettings(Settings.from_name(args[0]))
        if len(args) == 3:
            w, h, m = (int(a) for a in args)
            return ChangeSettings(Settings.custom(w, h, m))
        return None
    if cmd in ('o', 'f', 'c') and len(args) == 2:
        x, y = int(args[0]), int(args[1])
        if cmd == 'o':
            return Probe(x, y)
        if cmd == 'f':
            return Flag(x, y)
        return Chord(x, y)
    return None


def settings_from_args(args) -> Settings:
    if args.width is not None or args.height is not None or args.mines is not None:
        base = Settings.from_name(args.difficulty)
        return Settings.custom(
            args.width if args.width is not None else base.width,
            args.height if args.height is not None else base.height,
            args.mines if args.mines is not None else base.mines,
        )
    return Settings.from_name(args.difficulty)


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--difficulty', type=str, default='easy', choices=['easy', 'medium', 'hard'])
    parser.add_argument('--width', type=int, default=None)
    parser.add_argument('--height', type=int, default=None)
    parser.add_argument('--mines', type=int, default=None)
    parser.add_argument('--seed', type=int, default=-1, help='RNG seed; <0 uses OS entropy (random every run)')
    parser.add_argument('--log-level', type=str, default='WARNING')
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format='%(levelname)s %(name)s: %(message)s')
    try:
        settings = settings_from_args(args)
    except ConfigError as e:
        parser.error(str(e))
    generator = RandomBoardGenerator(seed=(None if args.seed < 0 else args.seed))
    game = Game(settings, generator=generator)

    print(HELP)
    print(render_ascii(game))
    for line in sys.stdin:
        try:
            action = parse_command(line)
        except ValueError as e:
            print(f'[play] {e}')
            continue
        if action is None:
            print('[play] Please enter a valid command.')
            continue
        if isinstance(action, Quit):
            break
        outcome = game.action(action)
        if not outcome.ok:
            print(f'[play] {outcome.reason}')
        print(render_ascii(game))
        if game.state.is_over:
            print('WIN' if game.state is GameState.WON else 'LOSE')


if __name__ == '__main__':
    main()
