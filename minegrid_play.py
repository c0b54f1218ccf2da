
from __future__ import annotations
import argparse
import random
import time
from retrodesk.minegrid import MineGrid, DIFFICULTY_PRESETS
from retrodesk.agents.rule_agent import pick_move, apply_move
from retrodesk.stats import SessionStats

HELP = 'Commands: r ROW COL (reveal), f ROW COL (flag), h (hint), n (new round), q (quit)'


def auto_step(board: MineGrid, rng: random.Random) -> None:
    move = pick_move(board)
    if move is None:
        # No certain move: guess a hidden cell
        move = ('reveal', rng.choice(list(board.hidden_cells())))
    apply_move(board, move)


def status_line(board: MineGrid) -> str:
    return f'[play] {board.status} | mines left: {board.mines_left:03d} | revealed: {board.revealed_count}'


def run_auto(board: MineGrid, games: int, delay: float, seed: int | None) -> SessionStats:
    rng = random.Random(seed)
    stats = SessionStats()
    for _ in range(games):
        board.reset()
        while not board.game_over:
            auto_step(board, rng)
            if delay > 0:
                print(board.render_ascii())
                print()
                time.sleep(delay)
        stats.record(board.win)
        print(f"[play] {'WIN' if board.win else 'LOSE'} | {stats.summary()}")
    return stats


def handle_command(board: MineGrid, line: str) -> bool:
    """Apply one terminal command. Returns False when the user quits."""
    parts = line.split()
    if not parts:
        return True
    cmd = parts[0].lower()
    if cmd == 'q':
        return False
    if cmd == 'n':
        board.reset()
    elif cmd == 'h':
        move = pick_move(board)
        if move is None:
            print('[play] No certain move')
        else:
            kind, (r, c) = move
            print(f'[play] Hint: {kind} {r} {c}')
    elif cmd in ('r', 'f') and len(parts) == 3:
        try:
            r, c = int(parts[1]), int(parts[2])
        except ValueError:
            print(HELP)
            return True
        if cmd == 'r':
            board.reveal(r, c)
        else:
            board.toggle_flag(r, c)
    else:
        print(HELP)
    return True


def run_interactive(board: MineGrid) -> None:
    print(HELP)
    while True:
        print(board.render_ascii())
        print(status_line(board))
        if board.game_over:
            print('[play] WIN' if board.win else '[play] LOSE')
        try:
            line = input('> ')
        except EOFError:
            break
        if not handle_command(board, line):
            break


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument('--preset', type=str, default='', choices=['', *DIFFICULTY_PRESETS])
    parser.add_argument('--rows', type=int, default=9)
    parser.add_argument('--cols', type=int, default=9)
    parser.add_argument('--mines', type=int, default=10)
    parser.add_argument('--seed', type=int, default=-1, help='RNG seed; <0 uses OS entropy (random every run)')
    parser.add_argument('--auto', action='store_true', help='Let the rule agent play')
    parser.add_argument('--games', type=int, default=1)
    parser.add_argument('--delay', type=float, default=0.0)
    args = parser.parse_args()

    seed = None if args.seed < 0 else args.seed
    if args.preset:
        args.rows, args.cols, args.mines = DIFFICULTY_PRESETS[args.preset]
    try:
        board = MineGrid(args.rows, args.cols, args.mines, seed=seed)
    except ValueError as e:
        parser.error(str(e))
    print(f'[play] {args.rows}x{args.cols} board with {args.mines} mines')

    if args.auto:
        run_auto(board, args.games, args.delay, seed)
    else:
        run_interactive(board)

if __name__ == '__main__':
    main()
