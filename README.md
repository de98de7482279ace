# peril

Building blocks for Peril, a multiplayer turn-based war game whose players
and server talk to each other through an AMQP broker such as RabbitMQ.

## Modules

- `peril.routing` – exchange names (`EXCHANGE_PERIL_DIRECT`,
  `EXCHANGE_PERIL_TOPIC`), routing keys and prefixes (`PAUSE_KEY`,
  `ARMY_MOVES_PREFIX`, `WAR_RECOGNITIONS_PREFIX`, `GAME_LOG_SLUG`) and the
  `PlayingState` and `GameLog` messages, each with `to_dict()` and
  `from_dict()`. `GameLog.current_time` travels as an RFC 3339 timestamp.
- `peril.gamedata` – units (`Unit`, `UnitRank`), players (`Player`), moves
  (`ArmyMove`) and declarations of war (`RecognitionOfWar`), all with
  `to_dict()` / `from_dict()`, plus the valid ranks and locations
  (`all_ranks()`, `all_locations()`). The locations are americas, europe,
  africa, asia, australia and antarctica.
- `peril.gamestate` – `GameState`, a thread-safe record of one player's army
  that carries out the `spawn`, `move` and `status` commands
  (`command_spawn`, `command_move`, `command_status`) and reacts to pauses,
  moves and wars announced by others (`handle_pause`, `handle_move`,
  `handle_war`). Also `overlapping_location()`, `units_to_power_level()`,
  `MoveOutcome`, `WarOutcome` and `GameError`.
- `peril.logs` – `format_log_line()` and `write_log()`, which waits a
  simulated disk delay (one second by default) and then appends the line to
  a log file (`game.log` in the working directory by default).
- `peril.console` – prompts, help texts and input reading for a terminal
  client or server: `client_welcome()`, `get_input()`,
  `print_client_help()`, `print_server_help()`, `print_quit()` and
  `get_malicious_log()`.
- `peril.pubsub` – `encode_json()`, `publish_json()`, `declare_and_bind()`
  and `subscribe_json()`, with `AckType` and `SimpleQueueType`.

## Playing with the game state

```python
from peril.gamestate import GameState, MoveOutcome

alice = GameState("alice")
alice.command_spawn(["spawn", "europe", "infantry"])   # unit 1
alice.command_spawn(["spawn", "europe", "artillery"])  # unit 2

move = alice.command_move(["move", "asia", "1"])
alice.command_status()

bob = GameState("bob")
assert bob.handle_move(move) is MoveOutcome.SAFE  # bob has no units in asia
```

`command_spawn` returns the new `Unit`; ids are the number of units the
player holds plus one. `command_move` returns the `ArmyMove` to publish.
Invalid commands raise `GameError` with a message meant for the player, for
example when the location or rank is unknown, when a unit id is not a whole
number or does not exist, or when the game is paused.

`handle_war` returns a tuple of the `WarOutcome`, the winner's and the
loser's username. Power is counted per unit in the contested location:
artillery 10, cavalry 5, infantry 1. The side with more power wins; the
loser's units there are removed, and on a draw this player's units there are
removed.

## Talking to the broker

```python
import pika

from peril import routing
from peril.pubsub import AckType, SimpleQueueType, publish_json, subscribe_json

connection = pika.BlockingConnection(pika.ConnectionParameters("localhost"))
channel = connection.channel()

publish_json(
    channel,
    routing.EXCHANGE_PERIL_DIRECT,
    routing.PAUSE_KEY,
    routing.PlayingState(is_paused=True),
)
```

`publish_json` sends compact JSON with content type `application/json`;
objects with a `to_dict()` method are encoded through it.

`subscribe_json` opens a channel on the connection, declares and binds the
queue (durable, or transient: exclusive and auto-deleted), and consumes it on
a background daemon thread, which it returns. Every message body is decoded
as JSON (an invalid body becomes an empty dict), passed through the given
decoder such as `routing.PlayingState.from_dict`, and then acked, requeued
or discarded according to the `AckType` the handler returns.

## What this package does not do

It provides no client or server program and installs no command: there is
no game loop that reads commands, publishes moves or subscribes to the
exchanges. It also does not declare the exchanges themselves; they must
already exist on the broker.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.