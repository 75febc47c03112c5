"""Unit tests for src/db/sql_repository.py"""

from uuid import uuid4

from sqlalchemy.orm import Session

from src.db.sql_repository import GameModel, SQLGameRepository

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


def test_create_game(db_session_repo: Session) -> None:
    """Conversion from a GameModel to DBGame for a new entry to the database."""
    # Mock game data (the repository does not care whether the moves make sense)
    model = GameModel(
        starting_position="position string",
        moves_uci=["e2e4", "x5y7", "mock"],
        first_player="white",
        ai_color="black",
        status="in_progress",
    )

    repo = SQLGameRepository(db_session_repo)
    record_in_db, _ = repo.create_game(model)
    assert isinstance(record_in_db, GameModel)
    assert record_in_db == model


def test_create_game_without_automated_opponent(db_session_repo: Session) -> None:
    model = GameModel(
        starting_position=STARTING_POSITION,
        moves_uci=[],
        first_player="black",
        ai_color=None,
        status="in_progress",
    )
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(model)
    game_found = repo.get_game(game_id)
    assert game_found is not None
    assert game_found.ai_color is None
    assert game_found.moves_uci == []


def test_get_game_by_id(db_session_repo: Session) -> None:
    """Create a game, then fetch it from db."""
    model = GameModel(
        starting_position=STARTING_POSITION,
        moves_uci=["e2e4", "d7d5", "e4d5"],
        first_player="white",
        ai_color="black",
        status="in_progress",
    )

    repo = SQLGameRepository(db_session_repo)
    expected_game, game_id = repo.create_game(model)
    game_found = repo.get_game(game_id)
    assert isinstance(game_found, GameModel)
    assert game_found == expected_game


def test_each_game_gets_its_own_record(db_session_repo: Session) -> None:
    model = GameModel(STARTING_POSITION, [], "white", None, "in_progress")
    repo = SQLGameRepository(db_session_repo)
    _, first_id = repo.create_game(model)
    _, second_id = repo.create_game(model)
    assert first_id != second_id


def test_get_unknown_game(db_session_repo: Session) -> None:
    """
    Should return None if ID does not match anything in database.

    NOTE with an empty database, any id is a valid test case.
    """
    unknown_id = uuid4()
    repo = SQLGameRepository(db_session_repo)
    game_found = repo.get_game(unknown_id)
    assert game_found is None

    # Now do it with creating a game, but retrieving from the wrong ID
    model = GameModel(STARTING_POSITION, ["e2e4"], "white", "black", "in_progress")
    repo.create_game(model)
    wrong_id = uuid4()
    game_found = repo.get_game(wrong_id)
    assert game_found is None


def test_update_game(db_session_repo: Session) -> None:
    """
    Update an earlier created record.
    """
    new = GameModel(STARTING_POSITION, [], "white", "black", "in_progress")

    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(new)

    # Update data and check if recorded data matches the data after the update
    after = GameModel(STARTING_POSITION, ["e2e4", "e7e5"], "white", "black", "in_progress")
    updated_game = repo.update_game(game_id, after)
    assert updated_game is not None
    assert updated_game == after


def test_consecutive_game_updates(db_session_repo: Session) -> None:
    """Tests that we can successfully make multiple updates to the same game (the move list grows and shrinks again)."""

    new = GameModel(STARTING_POSITION, [], "white", None, "in_progress")

    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(new)

    # make some updates "loosely simulate real scenario"
    first_update = GameModel(STARTING_POSITION, ["f2f3"], "white", None, "in_progress")
    second_update = GameModel(STARTING_POSITION, ["f2f3", "e7e5", "g2g4", "d8h4"], "white", None, "checkmate")
    # undo of the last move
    third_update = GameModel(STARTING_POSITION, ["f2f3", "e7e5", "g2g4"], "white", None, "in_progress")

    repo.update_game(game_id, first_update)
    repo.update_game(game_id, second_update)
    repo.update_game(game_id, third_update)

    # now fetch it from db and assert (a little more explicit here, just for good measure)
    after_all_updates = repo.get_game(game_id)
    assert after_all_updates is not None
    assert after_all_updates == third_update


def test_stored_moves_are_copied(db_session_repo: Session) -> None:
    """Changing the list that was handed over afterwards does not change what is stored"""
    moves = ["e2e4"]
    model = GameModel(STARTING_POSITION, moves, "white", None, "in_progress")
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(model)
    moves.append("e7e5")

    game_found = repo.get_game(game_id)
    assert game_found is not None
    assert game_found.moves_uci == ["e2e4"]


def test_attempt_updating_unknown_game(db_session_repo: Session) -> None:
    """
    the update_game() method should break early and return None

    NOTE here simply attempt to update a game in an empty DB. Already confirmed with the above that this is equivalent to fetching from the wrong ID.
    """

    repo = SQLGameRepository(db_session_repo)
    unknown_id = uuid4()
    after = GameModel(STARTING_POSITION, ["e2e4"], "white", None, "in_progress")
    updated_game = repo.update_game(unknown_id, after)
    assert updated_game is None


def test_delete_game(db_session_repo: Session) -> None:
    """Record of the game should no longer exist after deletion"""
    model = GameModel(STARTING_POSITION, ["e2e4", "e7e5"], "white", "black", "in_progress")

    repo = SQLGameRepository(db_session_repo)
    created_game, game_id = repo.create_game(model)
    deleted_game = repo.delete_game(game_id)

    # the correct game should be deleted
    assert deleted_game == created_game

    # The game should no longer be available in db
    assert repo.get_game(game_id) is None


def test_attempt_deleting_unknown_game(db_session_repo: Session) -> None:
    """
    the delete_game() method should break early and return None

    NOTE here simply attempt to delete a game from an empty DB. Already confirmed with the above that this is equivalent to fetching from the wrong ID.
    """
    unknown_id = uuid4()
    repo = SQLGameRepository(db_session_repo)
    deleted_game = repo.delete_game(unknown_id)
    assert deleted_game is None
