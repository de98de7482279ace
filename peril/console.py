"""Prompts, help texts and other console output shared by client and server."""

from __future__ import annotations

import random
import sys

from peril.gamestate import GameError

MALICIOUS_LOGS = (
    "Never interrupt your enemy when he is making a mistake.",
    "The hardest thing of all for a soldier is to retreat.",
    "A soldier will fight long and hard for a bit of colored ribbon.",
    "It is well that war is so terrible, otherwise we should grow too fond of it.",
    "The art of war is simple enough. Find out where your enemy is. "
    "Get at him as soon as you can. Strike him as hard as you can, and keep moving on.",
    "All warfare is based on deception.",
)

_CLIENT_HELP = """Possible commands:
* move <location> <unitID> <unitID> <unitID>...
    example:
    move asia 1
* spawn <location> <rank>
    example:
    spawn europe infantry
* status
* spam <n>
    example:
    spam 5
* quit
* help
"""

_SERVER_HELP = "Possible commands:\n* pause\n* resume\n* quit\n* help\n"


def _emit(text: str) -> str:
    sys.stdout.write(text)
    return text


def print_client_help() -> str:
    """Print the commands a client understands and return the text printed."""
    return _emit(_CLIENT_HELP)


def print_server_help() -> str:
    """Print the commands the server understands and return the text printed."""
    return _emit(_SERVER_HELP)


def get_input() -> list[str]:
    """Prompt for a line on standard input and split it into words; [] at end of input."""
    print("> ", end="", flush=True)
    return sys.stdin.readline().split()


def client_welcome() -> str:
    """Greet the player, ask for a username and return it."""
    print("Welcome to the Peril client!\nPlease enter your username:")
    words = get_input()
    if not words:
        raise GameError("you must enter a username. goodbye")
    print(f"Welcome, {words[0]}!")
    print_client_help()
    return words[0]


def get_malicious_log() -> str:
    """Pick one of the quotes used to flood the game logs."""
    return random.choice(MALICIOUS_LOGS)


def print_quit() -> str:
    """Print the farewell shown when a player quits and return it."""
    return _emit("I hate this game! (╯°□°)╯︵ ┻━┻\n")