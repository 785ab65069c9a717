"""Move application, turn order and end-of-game tests on hand-built states."""

import random

import pytest
from unogame.engine import (
    DECK_SIZE,
    BotPlayer,
    Color,
    DrawCommand,
    Game,
    GameAlreadyOverError,
    HumanPlayer,
    MissingWildColorError,
    MoveResult,
    NotABotError,
    NumericCard,
    OutOfHandBoundsError,
    PlayCommand,
    PlayedCard,
    SpecialCard,
    SpecialSymbol,
    WildCard,
    WildSymbol,
)

RED_3 = NumericCard(Color.RED, 3)
RED_5 = NumericCard(Color.RED, 5)
BLUE_5 = NumericCard(Color.BLUE, 5)
BLUE_9 = NumericCard(Color.BLUE, 9)
GREEN_1 = NumericCard(Color.GREEN, 1)
RED_SKIP = SpecialCard(Color.RED, SpecialSymbol.SKIP)
RED_REVERSE = SpecialCard(Color.RED, SpecialSymbol.REVERSE)
RED_DRAW_TWO = SpecialCard(Color.RED, SpecialSymbol.DRAW_TWO)
WILD = WildCard(WildSymbol.CHANGE_COLOR)
WILD_FOUR = WildCard(WildSymbol.DRAW_FOUR)


def _filler(n: int) -> list:
    return [NumericCard(Color.YELLOW, i % 10) for i in range(n)]


def make_game(hands, top=RED_3, draw=None, turn=0, direction=1, discard_below=(), bots=()):
    players = [
        BotPlayer(f"p{i}", hand, rng=random.Random(0)) if i in bots else HumanPlayer(f"p{i}", hand)
        for i, hand in enumerate(hands)
    ]
    draw = _filler(20) if draw is None else draw
    return Game.from_state(
        players,
        draw,
        [*discard_below, top],
        turn=turn,
        direction=direction,
        rng=random.Random(0),
    )


def _sizes(game) -> list:
    return [p.hand_size for p in game.players]


def test_play_numeric_by_color() -> None:
    game = make_game([[RED_5, BLUE_9], [GREEN_1]])
    assert game.execute_move(PlayCommand(0)) is MoveResult.APPLIED
    assert game.discard_top.card == RED_5
    assert game.turn_index == 1
    assert game.previous_player.id == "p0"
    assert game.get_player(0).hand == (BLUE_9,)


def test_play_numeric_by_number() -> None:
    game = make_game([[NumericCard(Color.GREEN, 3), BLUE_9], [GREEN_1]])
    assert game.execute_move(PlayCommand(0)) is MoveResult.APPLIED


def test_illegal_play_is_reported_not_raised() -> None:
    game = make_game([[BLUE_9, GREEN_1], [RED_5]])
    assert game.execute_move(PlayCommand(0)) is MoveResult.ILLEGAL
    assert game.turn_index == 0
    assert game.get_player(0).hand == (BLUE_9, GREEN_1)
    assert game.discard_top.card == RED_3


def test_play_index_out_of_hand_bounds() -> None:
    game = make_game([[RED_5, BLUE_9], [GREEN_1]])
    with pytest.raises(OutOfHandBoundsError):
        game.execute_move(PlayCommand(2))
    assert game.turn_index == 0
    assert _sizes(game) == [2, 1]


def test_wild_without_color_raises() -> None:
    game = make_game([[WILD, BLUE_9], [GREEN_1]])
    with pytest.raises(MissingWildColorError):
        game.execute_move(PlayCommand(0))
    assert game.get_player(0).hand_size == 2


def test_draw_adds_card_and_passes_turn() -> None:
    draw = _filler(10)
    game = make_game([[BLUE_9], [GREEN_1]], draw=draw)
    assert game.execute_move(DrawCommand()) is MoveResult.APPLIED
    assert game.get_player(0).hand == (BLUE_9, draw[-1])
    assert game.turn_index == 1
    assert game.previous_player.id == "p0"
    assert game.draw_pile_size == 9


def test_skip_advances_two() -> None:
    game = make_game([[RED_SKIP, BLUE_9], [GREEN_1], [GREEN_1]])
    game.execute_move(PlayCommand(0))
    assert game.turn_index == 2


def test_skip_wraps_around() -> None:
    game = make_game([[GREEN_1], [GREEN_1], [RED_SKIP, BLUE_9]], turn=2)
    game.execute_move(PlayCommand(0))
    assert game.turn_index == 1


def test_reverse_with_four_players() -> None:
    hands = [[GREEN_1], [RED_REVERSE, BLUE_9], [GREEN_1], [GREEN_1]]
    game = make_game(hands, turn=1)
    game.execute_move(PlayCommand(0))
    assert game.direction == -1
    assert game.turn_index == 0


def test_reverse_with_two_players_skips_the_opponent() -> None:
    game = make_game([[RED_REVERSE, RED_5, BLUE_9], [GREEN_1]])
    game.execute_move(PlayCommand(0))
    assert game.direction == -1
    assert game.turn_index == 0
    assert game.player_in_turn.id == "p0"
    # The same player moves again, then the opponent gets the next turn
    game.execute_move(PlayCommand(0))
    assert game.turn_index == 1


def test_draw_two_with_three_players() -> None:
    game = make_game([[RED_DRAW_TWO, BLUE_9], [GREEN_1], [GREEN_1]])
    game.execute_move(PlayCommand(0))
    assert _sizes(game) == [1, 3, 1]
    assert game.turn_index == 2
    assert game.previous_player.id == "p0"


def test_draw_two_matches_by_symbol() -> None:
    top = SpecialCard(Color.BLUE, SpecialSymbol.DRAW_TWO)
    game = make_game([[RED_DRAW_TWO, BLUE_9], [GREEN_1]], top=top)
    assert game.execute_move(PlayCommand(0)) is MoveResult.APPLIED


def test_wild_change_color_sets_the_active_color() -> None:
    game = make_game([[WILD, BLUE_9], [GREEN_1, RED_5], [GREEN_1]])
    game.execute_move(PlayCommand(0, Color.GREEN))
    assert game.turn_index == 1
    assert game.discard_top.card == WILD
    assert game.discard_top.color is Color.GREEN
    assert game.is_card_valid(GREEN_1)
    assert not game.is_card_valid(RED_5)
    assert game.execute_move(PlayCommand(1)) is MoveResult.ILLEGAL
    assert game.execute_move(PlayCommand(0)) is MoveResult.APPLIED


def test_wild_draw_four_with_three_players() -> None:
    game = make_game([[WILD_FOUR, BLUE_9], [GREEN_1], [GREEN_1]])
    game.execute_move(PlayCommand(0, Color.BLUE))
    assert _sizes(game) == [1, 5, 1]
    assert game.turn_index == 2
    assert game.discard_top.color is Color.BLUE


def test_wild_draw_four_counter_clockwise() -> None:
    game = make_game([[GREEN_1], [WILD_FOUR, BLUE_9], [GREEN_1], [GREEN_1]], turn=1, direction=-1)
    game.execute_move(PlayCommand(0, Color.RED))
    assert _sizes(game) == [5, 1, 1, 1]
    assert game.turn_index == 3


def test_wild_played_from_hand_keeps_other_copies_colorless() -> None:
    game = make_game([[WILD, WILD, BLUE_9], [GREEN_1]])
    game.execute_move(PlayCommand(0, Color.YELLOW))
    assert game.get_player(0).hand[0] == WILD
    assert game.get_player(0).hand[0].color is None


def test_win_detection() -> None:
    game = make_game([[RED_5], [GREEN_1, BLUE_9]])
    assert game.execute_move(PlayCommand(0)) is MoveResult.APPLIED
    assert game.is_over
    assert game.winner.id == "p0"
    with pytest.raises(GameAlreadyOverError):
        game.execute_move(DrawCommand())
    with pytest.raises(GameAlreadyOverError):
        game.execute_move(PlayCommand(0))
    assert game.winner.id == "p0"
    assert _sizes(game) == [0, 2]


def test_winning_with_a_draw_two_still_penalises() -> None:
    game = make_game([[RED_DRAW_TWO], [GREEN_1], [GREEN_1]])
    game.execute_move(PlayCommand(0))
    assert game.is_over
    assert game.winner.id == "p0"
    assert _sizes(game) == [0, 3, 1]


def test_no_winner_while_cards_remain() -> None:
    game = make_game([[RED_5, RED_3], [GREEN_1]])
    game.execute_move(PlayCommand(0))
    assert not game.is_over
    assert game.winner is None


def test_go_bot_rejects_humans() -> None:
    game = make_game([[RED_5], [GREEN_1]])
    with pytest.raises(NotABotError):
        game.go_bot()


def test_go_bot_plays_first_legal_card() -> None:
    game = make_game([[BLUE_9, RED_5, RED_SKIP], [GREEN_1]], bots=(0,))
    command = game.go_bot()
    assert command == PlayCommand(1)
    assert game.discard_top.card == RED_5
    assert game.previous_player.id == "p0"


def test_go_bot_draws_without_a_legal_card() -> None:
    game = make_game([[BLUE_9, GREEN_1], [GREEN_1]], bots=(0,))
    command = game.go_bot()
    assert command == DrawCommand()
    assert game.get_player(0).hand_size == 3
    assert game.turn_index == 1


def test_go_bot_picks_majority_color_for_wilds() -> None:
    hand = [BLUE_9, WILD, BLUE_5, GREEN_1]
    game = make_game([hand, [GREEN_1]], bots=(0,))
    command = game.go_bot()
    assert command == PlayCommand(1, Color.BLUE)
    assert game.discard_top.color is Color.BLUE


def test_go_bot_on_finished_game() -> None:
    game = make_game([[RED_5], [GREEN_1]], bots=(0, 1))
    game.go_bot()
    assert game.is_over
    with pytest.raises(GameAlreadyOverError):
        game.go_bot()


def test_reshuffle_before_draw() -> None:
    draw = [GREEN_1, BLUE_9, BLUE_5]
    below = [PlayedCard(c) for c in _filler(8)] + [PlayedCard(WILD, Color.RED)]
    game = make_game([[BLUE_9], [GREEN_1]], draw=draw, discard_below=below)
    total = sum(_sizes(game)) + game.draw_pile_size + game.discard_pile_size

    game.execute_move(DrawCommand())

    assert game.discard_pile_size == 1
    assert game.discard_top.card == RED_3
    # Cards left in the draw pile are drawn before the recycled ones
    assert game.get_player(0).hand[-1] == BLUE_5
    assert game.draw_pile_size == 2 + 9
    assert sum(_sizes(game)) + game.draw_pile_size + game.discard_pile_size == total


def test_reshuffle_runs_even_for_illegal_moves() -> None:
    below = [PlayedCard(c) for c in _filler(6)]
    game = make_game([[BLUE_9], [GREEN_1]], draw=_filler(2), discard_below=below)
    assert game.execute_move(PlayCommand(0)) is MoveResult.ILLEGAL
    assert game.discard_pile_size == 1
    assert game.draw_pile_size == 8


def test_draw_with_exhausted_piles_is_skipped() -> None:
    game = make_game([[BLUE_9], [GREEN_1]], draw=[])
    assert game.execute_move(DrawCommand()) is MoveResult.APPLIED
    assert game.get_player(0).hand == (BLUE_9,)
    assert game.turn_index == 1


def test_draw_four_with_short_draw_pile() -> None:
    game = make_game([[WILD_FOUR, BLUE_9], [GREEN_1]], draw=_filler(2))
    game.execute_move(PlayCommand(0, Color.RED))
    # Two cards from the draw pile, then the old discard below the wild
    assert _sizes(game) == [1, 4]
    assert game.draw_pile_size == 0
    assert game.discard_pile_size == 1
    assert game.discard_top.card == WILD_FOUR


def test_deck_top_is_none_when_draw_pile_empty() -> None:
    game = make_game([[BLUE_9], [GREEN_1]], draw=[])
    assert game.deck_top is None


def test_clone_is_independent() -> None:
    game = make_game([[RED_5, BLUE_9], [GREEN_1]])
    copy = game.clone()
    copy.execute_move(PlayCommand(0))
    assert game.turn_index == 0
    assert game.get_player(0).hand_size == 2
    assert game.discard_top.card == RED_3
    assert copy.discard_top.card == RED_5


def test_from_state_validates_arguments() -> None:
    players = [HumanPlayer("a"), HumanPlayer("b")]
    with pytest.raises(ValueError):
        Game.from_state(players, [], [])
    with pytest.raises(ValueError):
        Game.from_state(players, [], [RED_3], direction=0)
    with pytest.raises(ValueError):
        Game.from_state(players, [], [RED_3], turn=2)
    with pytest.raises(ValueError):
        Game.from_state(players, [], [RED_3], previous=9)
    with pytest.raises(ValueError):
        Game.from_state(players, [], [RED_3], previous=-1)
    with pytest.raises(ValueError):
        Game.from_state(players, [], [RED_3], winner=2)


def test_from_state_accepts_valid_previous_and_winner() -> None:
    players = [HumanPlayer("a"), HumanPlayer("b", [RED_5])]
    game = Game.from_state(players, [], [RED_3], turn=0, previous=1, winner=0)
    assert game.previous_player.id == "b"
    assert game.is_over
    assert game.winner.id == "a"


def test_full_deck_total_is_preserved_by_effects() -> None:
    from unogame.engine import create_deck

    deck = create_deck(seed=5)
    hands = [deck[0:7], deck[7:14], deck[14:21]]
    top = next(c for c in deck[21:] if c.number is not None)
    rest = list(deck[21:])
    rest.remove(top)
    game = make_game(hands, top=top, draw=rest, bots=(0, 1, 2))
    for _ in range(500):
        if game.is_over:
            break
        game.go_bot()
        assert sum(_sizes(game)) + game.draw_pile_size + game.discard_pile_size == DECK_SIZE


def _tied_wild_game(seed: int) -> Game:
    # Every color is tied, so the wild's color comes from the bot's rng
    hand = [
        WILD,
        NumericCard(Color.RED, 1),
        NumericCard(Color.BLUE, 1),
        GREEN_1,
        NumericCard(Color.YELLOW, 1),
    ]
    rng = random.Random(seed)
    players = [BotPlayer("p0", hand, rng=rng), BotPlayer("p1", hand, rng=rng)]
    return Game.from_state(players, _filler(20), [RED_3], rng=rng)


@pytest.mark.parametrize("seed", range(10))
def test_deciding_on_a_bot_copy_does_not_change_the_game(seed) -> None:
    game, twin = _tied_wild_game(seed), _tied_wild_game(seed)
    for _ in range(3):
        game.player_in_turn.decide(game)
    for _ in range(4):
        assert game.go_bot() == twin.go_bot()
    assert game.discard_top == twin.discard_top
    assert [p.hand for p in game.players] == [p.hand for p in twin.players]


@pytest.mark.parametrize("seed", range(10))
def test_playing_on_a_clone_does_not_change_the_original(seed) -> None:
    game, twin = _tied_wild_game(seed), _tied_wild_game(seed)
    copy = game.clone()
    for _ in range(4):
        copy.go_bot()
    for _ in range(4):
        assert game.go_bot() == twin.go_bot()
    assert game.discard_top == twin.discard_top


def test_clone_replays_the_same_moves() -> None:
    game = _tied_wild_game(3)
    copy = game.clone()
    assert [copy.go_bot() for _ in range(4)] == [game.go_bot() for _ in range(4)]
