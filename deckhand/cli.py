"""
Deckhand CLI - Command-line interface for the engine.

Usage:
    deckhand validate-presets      Validate the preset deck catalog
    deckhand show                  Print the persisted session
    deckhand reset                 Reset the persisted session
    deckhand serve                 Run the HTTP API
"""

import argparse
import logging
import sys

from .config import DECKHAND_LOG_LEVEL, DECKHAND_STATE_FILE, DECKHAND_STORAGE_KEY


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Deckhand - Card Hand Rules Engine",
        prog="deckhand",
    )
    parser.add_argument("--state-file", default=DECKHAND_STATE_FILE, help="Session storage file")
    parser.add_argument("--log-level", default=DECKHAND_LOG_LEVEL, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("validate-presets", help="Validate the preset deck catalog")
    subparsers.add_parser("show", help="Print the persisted session")
    subparsers.add_parser("reset", help="Reset the persisted session")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    if args.command == "validate-presets":
        return cmd_validate_presets(args)
    elif args.command == "show":
        return cmd_show(args)
    elif args.command == "reset":
        return cmd_reset(args)
    elif args.command == "serve":
        return cmd_serve(args)
    else:
        parser.print_help()
        return 1


def _open_session(args):
    from .persistence import FileStore, PersistenceGateway
    from .session import DeckSession

    gateway = PersistenceGateway(FileStore(args.state_file), key=DECKHAND_STORAGE_KEY)
    return DeckSession.open(gateway)


def cmd_validate_presets(args):
    """Validate every preset deck; non-zero exit if any is invalid."""
    from .deck_schema import PRESET_DECKS, validate_catalog

    results = validate_catalog()
    invalid = 0
    for index, preset in enumerate(PRESET_DECKS, start=1):
        result = results[preset.id]
        marker = "ok" if result.valid else "INVALID"
        print(f"[{index}/{len(PRESET_DECKS)}] {marker}: {preset.name} ({preset.id})")
        for error in result.errors:
            print(f"    - {error}")
        if not result.valid:
            invalid += 1

    print(f"\n{len(PRESET_DECKS) - invalid} valid, {invalid} invalid")
    return 1 if invalid else 0


def _print_state(state):
    print(f"Turn {state.turn_number} ({state.phase.value})")
    print(f"Hand size {state.hand_size}, discard count {state.discard_count}")
    print(f"Draw pile: {len(state.draw_pile)}  Discard pile: {len(state.discard_pile)}")
    print("Hand:")
    for card in state.hand_cards:
        position = state.position_of(card.instance_id)
        suffix = f"  #{position}" if position else ""
        print(f"  {card.card}{suffix}")
    if state.warning:
        print(f"Warning: {state.warning}")
    if state.error:
        print(f"Error: {state.error}")


def cmd_show(args):
    _print_state(_open_session(args).state)
    return 0


def cmd_reset(args):
    from .engine_core import Action

    session = _open_session(args)
    session.dispatch(Action.reset())
    _print_state(session.state)
    return 0


def cmd_serve(args):
    """Run the API with uvicorn."""
    import uvicorn
    from .api import DeckService, create_app

    app = create_app(DeckService(session=_open_session(args)))
    uvicorn.run(app, host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
