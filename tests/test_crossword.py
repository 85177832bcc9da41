"""Tests for the Crossword engine and its clock."""

import json

import pytest

from puzzle_games.config.game_settings import CROSSWORD_CLUES, CROSSWORD_SOLUTION, CROSSWORD_STORAGE_KEY
from puzzle_games.models import BLOCKED, Direction, GameId
from puzzle_games.services import CrosswordService
from puzzle_games.services.crossword_service import format_time

OPEN_CELLS = [
    (row, col)
    for row in range(5)
    for col in range(5)
    if CROSSWORD_SOLUTION[row][col] != BLOCKED
]


def fill(crossword: CrosswordService, skip=None) -> None:
    for row, col in OPEN_CELLS:
        if (row, col) != skip:
            crossword.set_cell(row, col, CROSSWORD_SOLUTION[row][col])


class TestCellInput:

    def test_letter_is_uppercased(self, crossword) -> None:
        crossword.set_cell(0, 0, "r")
        assert crossword.state.grid[0][0] == "R"

    def test_empty_value_clears_cell(self, crossword) -> None:
        crossword.set_cell(0, 0, "R")
        crossword.set_cell(0, 0, "")
        assert crossword.state.grid[0][0] == ""

    def test_only_one_character_is_kept(self, crossword) -> None:
        crossword.set_cell(0, 1, "ex")
        assert crossword.state.grid[0][1] == "E"

    def test_letter_widening_on_uppercase_stays_one_character(self, store, registry, crossword) -> None:
        crossword.set_cell(0, 0, "ß")
        crossword.set_cell(0, 1, "e")
        assert crossword.state.grid[0][0] == "S"
        restored = CrosswordService(store, registry)
        assert restored.state.grid[0][:2] == ["S", "E"]

    def test_blocked_cell_write_is_ignored(self, crossword) -> None:
        crossword.set_cell(1, 1, "X")
        assert crossword.state.grid[1][1] == ""

    def test_out_of_grid_write_is_ignored(self, crossword) -> None:
        crossword.set_cell(7, 0, "X")
        assert all(cell == "" for row in crossword.state.grid for cell in row)


class TestCompletion:

    def test_correct_fill_completes_and_freezes_clock(self, crossword, registry, ticker) -> None:
        ticker.tick(3)
        fill(crossword)
        assert crossword.state.is_completed
        assert registry.is_complete(GameId.CROSSWORD)
        ticker.tick(5)
        assert crossword.state.time_elapsed == 3
        assert ticker.listener_count == 0

    def test_grid_is_frozen_after_completion(self, crossword) -> None:
        fill(crossword)
        crossword.set_cell(0, 0, "X")
        assert crossword.state.grid[0][0] == "R"

    def test_blocked_write_ignored_after_completion(self, crossword) -> None:
        fill(crossword)
        crossword.set_cell(1, 1, "X")
        assert crossword.state.grid[1][1] == ""

    def test_wrong_fill_stays_incomplete(self, crossword, registry) -> None:
        fill(crossword, skip=(0, 0))
        crossword.set_cell(0, 0, "Z")
        assert not crossword.state.is_completed
        assert not crossword.check_solution()
        assert not registry.is_complete(GameId.CROSSWORD)

    def test_correcting_the_last_cell_completes(self, crossword) -> None:
        fill(crossword, skip=(0, 0))
        crossword.set_cell(0, 0, "Z")
        crossword.set_cell(0, 0, "R")
        assert crossword.state.is_completed

    def test_check_solution_does_not_mutate(self, crossword) -> None:
        crossword.set_cell(0, 0, "R")
        before = crossword.state.to_dict()
        assert not crossword.check_solution()
        assert crossword.state.to_dict() == before


class TestClock:

    def test_ticks_advance_time(self, crossword, ticker) -> None:
        ticker.tick(61)
        assert crossword.state.time_elapsed == 61
        assert crossword.formatted_time() == "01:01"

    def test_tick_listeners_receive_clock(self, crossword, ticker) -> None:
        received = []
        crossword.add_tick_listener(received.append)
        ticker.tick()
        assert received == [{"timeElapsed": 1, "formatted": "00:01", "isCompleted": False}]

    @pytest.mark.parametrize("seconds, expected", [(0, "00:00"), (59, "00:59"), (600, "10:00"), (6001, "100:01")])
    def test_format_time(self, seconds, expected) -> None:
        assert format_time(seconds) == expected

    def test_completed_puzzle_does_not_resubscribe(self, store, registry, crossword, ticker) -> None:
        fill(crossword)
        restored = CrosswordService(store, registry, ticker=ticker)
        ticker.tick()
        assert restored.state.time_elapsed == crossword.state.time_elapsed
        assert ticker.listener_count == 0


class TestClues:

    def test_clue_numbers(self, crossword) -> None:
        assert crossword.clue_number_at(0, 0) == 1
        assert crossword.clue_number_at(4, 0) == 5
        assert crossword.clue_number_at(0, 2) == 2
        assert crossword.clue_number_at(2, 2) is None

    def test_clue_answers_come_from_solution(self, crossword) -> None:
        answers = {(clue.number, clue.direction): crossword.clue_answer(clue) for clue in CROSSWORD_CLUES}
        assert answers[(1, Direction.ACROSS)] == "REACT"
        assert answers[(5, Direction.ACROSS)] == "ERROR"
        assert answers[(1, Direction.DOWN)] == "ROUTE"


class TestLifecycle:

    def test_progress_is_restored(self, store, registry, crossword, ticker) -> None:
        crossword.set_cell(0, 0, "R")
        crossword.select_cell(0, 1)
        ticker.tick(2)
        restored = CrosswordService(store, registry)
        assert restored.state == crossword.state

    def test_wrong_dimensions_fall_back_to_empty_grid(self, store, registry) -> None:
        store.set(CROSSWORD_STORAGE_KEY, json.dumps({
            "grid": [["R"] * 4] * 4,
            "selectedCell": None,
            "timeElapsed": 40,
            "isCompleted": False,
        }))
        crossword = CrosswordService(store, registry)
        assert crossword.state.time_elapsed == 0
        assert len(crossword.state.grid) == 5

    def test_letter_in_blocked_cell_falls_back(self, store, registry) -> None:
        grid = [[""] * 5 for _ in range(5)]
        grid[1][1] = "X"
        store.set(CROSSWORD_STORAGE_KEY, json.dumps({
            "grid": grid, "selectedCell": None, "timeElapsed": 5, "isCompleted": False,
        }))
        assert CrosswordService(store, registry).state.grid[1][1] == ""

    def test_reset_restarts_clock(self, crossword, registry, ticker) -> None:
        fill(crossword)
        crossword.reset()
        assert not crossword.state.is_completed
        assert crossword.state.time_elapsed == 0
        assert not registry.is_complete(GameId.CROSSWORD)
        ticker.tick()
        assert crossword.state.time_elapsed == 1

    def test_select_cell_ignores_blocked(self, crossword) -> None:
        crossword.select_cell(1, 1)
        assert crossword.state.selected_cell is None
        crossword.select_cell(1, 0)
        assert crossword.state.selected_cell == (1, 0)
