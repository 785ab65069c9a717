"""Simulate a game between bots, printing every move."""

from unogame.engine import DrawCommand, new_game


def main():
    game = new_game(4, [], seed=42)
    print(f"First card: {game.discard_top}")

    turns = 0
    while not game.is_over and turns < 10000:
        command = game.go_bot()
        turns += 1
        player = game.previous_player
        if isinstance(command, DrawCommand):
            print(f"> {player.id} drew a card ({player.hand_size} in hand)")
        else:
            print(f"> {player.id} played {game.discard_top} ({player.hand_size} in hand)")

    print(f"Game finished! Winner: {game.winner.id if game.winner else None}")
    print(f"Turns: {turns}")


if __name__ == "__main__":
    main()
