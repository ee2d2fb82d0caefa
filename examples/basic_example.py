"""
Basic usage example for state_pattern.

This example demonstrates:
- Declaring states and an initial state
- Handlers forwarded to the current state
- enter/exit hooks around transitions
- Walking back through previous states
"""

from state_pattern import State, Stateful, UnresolvedHandlerError


class Stopped(State):
    def enter(self):
        print(f"   [{self.stateful.name}] stopped")

    def play(self):
        self.transition_to(Playing)
        return "playing"

    def pause(self):
        return "nothing to pause"

    def stop(self):
        return "already stopped"


class Playing(State):
    def enter(self):
        print(f"   [{self.stateful.name}] playing {self.stateful.track}")

    def exit(self):
        print(f"   [{self.stateful.name}] leaving playback")

    def play(self):
        return "already playing"

    def pause(self):
        self.transition_to(Paused)
        return "paused"

    def stop(self):
        self.transition_to(Stopped)
        return "stopped"


class Paused(State):
    def play(self):
        self.transition_to(Playing)
        return "resumed"

    def stop(self):
        self.transition_to(Stopped)
        return "stopped"


class Player(Stateful, initial_state=Stopped):
    """Media player whose buttons depend on its state."""

    def __init__(self, name: str, track: str):
        self.name = name
        self.track = track


def example_1_forwarding():
    """Example 1: Handlers forwarded to the current state."""
    print("\n" + "=" * 60)
    print("Example 1: Forwarded Handlers")
    print("=" * 60)

    player = Player("living room", "Blue in Green")
    print(f"\n   Forwarded handlers: {sorted(Player.state_machine.handler_names)}")

    for button in ("pause", "play", "play", "pause", "play", "stop"):
        result = getattr(player, button)()
        print(f"   {button}() -> {result!r}, now {player.current_state!r}")


def example_2_history():
    """Example 2: Previous states."""
    print("\n" + "=" * 60)
    print("Example 2: State History")
    print("=" * 60)

    player = Player("kitchen", "So What")
    player.play()
    player.pause()
    player.play()

    state = player.current_state
    history = []
    while state is not None:
        history.append(type(state).__name__)
        state = state.previous_state

    print(f"\n   Newest first: {' <- '.join(history)}")


def example_3_missing_handler():
    """Example 3: A state that lacks a handler."""
    print("\n" + "=" * 60)
    print("Example 3: Missing Handlers")
    print("=" * 60)

    player = Player("garage", "Freddie Freeloader")
    player.play()
    player.pause()

    try:
        player.pause()
    except UnresolvedHandlerError as e:
        print(f"\n   {e}")


def main():
    """Run all examples."""
    print("\n" + "#" * 60)
    print("# state_pattern - Basic Examples")
    print("#" * 60)

    example_1_forwarding()
    example_2_history()
    example_3_missing_handler()

    print("\n" + "=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)


if __name__ == "__main__":
    main()
