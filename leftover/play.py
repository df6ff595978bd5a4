"""
Manual play mode in the terminal.

Commands:
  place <slot> <x> <y>   place hand shape <slot> with its top-left at column x, row y
  rotate <slot>          rotate hand shape <slot> clockwise
  undo                   revert the last placement
  new                    start a new game
  quit                   save and exit

The game is saved after every change and resumed on the next start.
"""

from __future__ import annotations

import random
from typing import Any, Callable

from leftover.game.session import Session
from leftover.renderer import render_session
from leftover.storage import SaveStore

FEEDBACK_MESSAGES: dict[str, str] = {
    "place": "Placed.",
    "perfect": "Clean clear!",
    "junk": "Cleared, but leftovers turned to junk.",
}

HELP_TEXT = "Commands: place <slot> <x> <y> | rotate <slot> | undo | new | quit"


def create_session(config: dict[str, Any]) -> Session:
    seed = config.get("seed")
    return Session(
        board_size=config.get("board_size", 6),
        hand_size=config.get("hand_size", 3),
        history_limit=config.get("history_limit", 20),
        rng=random.Random(seed),
    )


def _slot_shape_id(session: Session, slot_text: str) -> str:
    slot = int(slot_text)
    if not 0 <= slot < len(session.hand):
        raise ValueError(f"No shape in slot {slot}")
    return session.hand[slot].id


def handle_command(session: Session, store: SaveStore | None, line: str) -> str | None:
    """Apply one command to the session.

    Args:
        session: Game to act on.
        store: Save store to write after changes, or None to skip saving.
        line: Raw command text.

    Returns:
        Message to show the player, or None when the player quits.
    """
    parts = line.split()
    if not parts:
        return HELP_TEXT
    command, args = parts[0].lower(), parts[1:]

    if command in ("quit", "exit", "q"):
        return None

    try:
        if command == "place" and len(args) == 3:
            shape_id = _slot_shape_id(session, args[0])
            result = session.place(shape_id, int(args[1]), int(args[2]))
            if result is None:
                return "Game over." if session.game_over else "That shape does not fit there."
            message = f"{FEEDBACK_MESSAGES[result.feedback]} +{result.points}"
        elif command == "rotate" and len(args) == 1:
            session.rotate(_slot_shape_id(session, args[0]))
            message = "Rotated."
        elif command == "undo":
            message = "Undone." if session.undo() else "Nothing to undo."
        elif command == "new":
            session.reset()
            if store is not None:
                store.clear_session()
            message = "New game."
        else:
            return HELP_TEXT
    except ValueError as e:
        return str(e)

    if store is not None:
        store.save_session(session)
    return message


def play_manual(
    config: dict[str, Any],
    input_fn: Callable[[str], str] = input,
) -> None:
    """Run the game in manual (human) play mode.

    Args:
        config: Config dict loaded from game.yaml.
        input_fn: Source of command lines (defaults to stdin).
    """
    session = create_session(config)
    store = SaveStore(config.get("save_path", "saves/leftover.json"))
    if not store.load_session(session):
        print("Starting a new game.")
        print(HELP_TEXT)

    while True:
        print()
        print(render_session(session))
        try:
            line = input_fn("> ")
        except EOFError:
            break
        message = handle_command(session, store, line)
        if message is None:
            break
        print(message)

    store.save_session(session)
    print(f"Saved. Final score: {session.score}  Best: {session.high_score}")
