"""Tests for the stores, persistence fallbacks, the completion registry and the hub."""

import json
import random
import threading

import pytest

from puzzle_games.config.game_settings import (
    COMPLETED_GAMES_KEY,
    CONNECTIONS_STORAGE_KEY,
    CROSSWORD_STORAGE_KEY,
    WORDLE_STORAGE_KEY,
)
from puzzle_games.models import (
    ConnectionsState,
    CrosswordState,
    GameId,
    Group,
    StrandsState,
    WordleState,
)
from puzzle_games.services import (
    CompletionRegistry,
    GameHub,
    JsonFileStore,
    ManualTicker,
    MemoryStore,
    MongoStore,
    PersistentGameState,
    WordleService,
)
from puzzle_games.services.exceptions import StoreConfigurationError, StoreReadError, StoreWriteError
from puzzle_games.services.storage import create_store


class FakeCollection:
    """Just enough of a pymongo collection for MongoStore."""

    def __init__(self):
        self.documents = {}

    def find_one(self, query):
        return self.documents.get(query['_id'])

    def replace_one(self, query, document, upsert=False):
        self.documents[query['_id']] = document

    def delete_one(self, query):
        self.documents.pop(query['_id'], None)


def wordle_persistence(store) -> PersistentGameState:
    return PersistentGameState(
        store, WORDLE_STORAGE_KEY, lambda: WordleState(guesses=[''] * 6),
        WordleState.from_dict, WordleState.to_dict
    )


class TestStores:

    @pytest.mark.parametrize("make_store", [
        lambda tmp_path: MemoryStore(),
        lambda tmp_path: JsonFileStore(str(tmp_path / "state.json")),
        lambda tmp_path: MongoStore(FakeCollection()),
    ])
    def test_get_set_remove(self, tmp_path, make_store) -> None:
        store = make_store(tmp_path)
        assert store.get("k") is None
        store.set("k", "v1")
        store.set("k", "v2")
        assert store.get("k") == "v2"
        store.remove("k")
        assert store.get("k") is None
        store.remove("k")

    def test_file_store_survives_reopen(self, tmp_path) -> None:
        path = str(tmp_path / "nested" / "state.json")
        JsonFileStore(path).set("k", "v")
        assert JsonFileStore(path).get("k") == "v"

    def test_corrupt_file_raises_read_error(self, tmp_path) -> None:
        path = tmp_path / "state.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(StoreReadError):
            JsonFileStore(str(path)).get("k")

    def test_corrupt_file_is_replaced_on_write(self, tmp_path) -> None:
        path = tmp_path / "state.json"
        path.write_text("[]", encoding="utf-8")
        store = JsonFileStore(str(path))
        store.set("k", "v")
        assert store.get("k") == "v"

    def test_file_store_concurrent_writers_keep_every_key(self, tmp_path) -> None:
        store = JsonFileStore(str(tmp_path / "state.json"))
        errors = []

        def writer(key: str) -> None:
            for i in range(200):
                try:
                    store.set(key, str(i))
                except StoreWriteError as e:
                    errors.append(e)

        threads = [threading.Thread(target=writer, args=(key,)) for key in ("a", "b")]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert store.get("a") == "199"
        assert store.get("b") == "199"
        assert [path.name for path in tmp_path.iterdir()] == ["state.json"]

    def test_create_store_picks_backend(self, tmp_path) -> None:
        class FileConfig:
            STORE_BACKEND = 'file'
            STORE_PATH = str(tmp_path / "s.json")

        class UnknownConfig:
            STORE_BACKEND = 'redis'

        class MongoWithoutUri:
            STORE_BACKEND = 'mongo'
            MONGO_URI = None

        assert isinstance(create_store(FileConfig), JsonFileStore)
        with pytest.raises(StoreConfigurationError):
            create_store(UnknownConfig)
        with pytest.raises(StoreConfigurationError):
            create_store(MongoWithoutUri)


class TestPersistentGameState:

    def test_missing_key_gives_default(self, store) -> None:
        assert wordle_persistence(store).load() == WordleState(guesses=[''] * 6)

    def test_malformed_json_gives_default(self, store) -> None:
        store.set(WORDLE_STORAGE_KEY, "{oops")
        assert wordle_persistence(store).load().current_row == 0

    def test_wrong_shape_gives_default(self, store) -> None:
        store.set(WORDLE_STORAGE_KEY, json.dumps({"guesses": 3}))
        assert wordle_persistence(store).load().guesses == [''] * 6

    def test_failed_validation_gives_default(self, store) -> None:
        persistence = wordle_persistence(store)
        persistence.validate = lambda state: False
        persistence.save(WordleState(guesses=['HELLO'] + [''] * 5, current_row=1))
        assert persistence.load().current_row == 0

    def test_unavailable_store_never_raises(self, broken_store) -> None:
        persistence = wordle_persistence(broken_store)
        persistence.save(WordleState(guesses=[''] * 6))
        persistence.clear()
        assert persistence.load().current_row == 0

    def test_gameplay_continues_when_writes_fail(self, broken_store) -> None:
        wordle = WordleService(broken_store, CompletionRegistry(broken_store))
        for letter in "AUGIE":
            wordle.press_key(letter)
        wordle.press_key("ENTER")
        assert wordle.state.won

    @pytest.mark.parametrize("state", [
        WordleState(guesses=['HELLO', 'AUGIE', '', '', '', ''], current_row=1, game_over=True, won=True),
        ConnectionsState(
            words=['RED', 'BLUE'], selected=['RED'],
            solved_groups=[Group(('DOG', 'CAT', 'BIRD', 'FISH'), 'PETS', 'yellow')],
            mistakes=2,
        ),
        StrandsState(
            selected_cells=[(4, 0), (4, 1)], found_words=['THEME'],
            found_word_cells=[[(0, c) for c in range(5)]], current_word='PR', is_selecting=True,
        ),
        CrosswordState(grid=[['R', '', '', '', '']] * 5, selected_cell=(0, 0), time_elapsed=75),
    ])
    def test_round_trip(self, store, state) -> None:
        persistence = PersistentGameState(store, "key", lambda: None, type(state).from_dict, type(state).to_dict)
        persistence.save(state)
        assert persistence.load() == state

    def test_persisted_shapes_use_documented_keys(self, store) -> None:
        crossword = CrosswordState(grid=[[''] * 5 for _ in range(5)], selected_cell=(2, 3))
        assert set(crossword.to_dict()) == {'grid', 'selectedCell', 'timeElapsed', 'isCompleted'}
        assert crossword.to_dict()['selectedCell'] == '2-3'
        strands = StrandsState(selected_cells=[(1, 2)])
        assert strands.to_dict()['selectedCells'] == ['1-2']


class TestCompletionRegistry:

    def test_marking_twice_keeps_one_entry(self, store, registry) -> None:
        registry.mark_complete(GameId.WORDLE)
        registry.mark_complete(GameId.WORDLE)
        assert json.loads(store.get(COMPLETED_GAMES_KEY)) == ["wordle"]

    def test_unmark_leaves_other_games(self, registry) -> None:
        registry.mark_complete(GameId.WORDLE)
        registry.mark_complete(GameId.STRANDS)
        registry.unmark(GameId.WORDLE)
        assert registry.completed() == [GameId.STRANDS]

    def test_reset_of_one_game_keeps_other_badges(self, store, registry, wordle, strands) -> None:
        for letter in "AUGIE":
            wordle.press_key(letter)
        wordle.press_key("ENTER")
        registry.mark_complete(GameId.CROSSWORD)
        strands.reset()
        assert registry.completed() == [GameId.WORDLE, GameId.CROSSWORD]

    def test_bad_stored_entries_are_dropped(self, store, registry) -> None:
        store.set(COMPLETED_GAMES_KEY, json.dumps(["wordle", "chess", "wordle", 3]))
        assert registry.completed() == [GameId.WORDLE]

    def test_unreadable_registry_is_empty(self, store, registry, broken_store) -> None:
        store.set(COMPLETED_GAMES_KEY, "not json")
        assert registry.completed() == []
        assert CompletionRegistry(broken_store).completed() == []


class TestGameHub:

    def test_reset_all_clears_every_key_and_reloads(self) -> None:
        store = MemoryStore()
        hub = GameHub(store, ticker=ManualTicker(), rng=random.Random(3))
        for letter in "AUGIE":
            hub.wordle.press_key(letter)
        hub.wordle.press_key("ENTER")
        hub.connections.toggle_word("DOG")
        hub.strands.select_cell(0, 0)
        hub.crossword.set_cell(0, 0, "R")

        hub.reset_all()

        assert store.keys() == []
        assert hub.registry.completed() == []
        assert not hub.wordle.state.won
        assert hub.connections.state.selected == []
        assert not hub.strands.state.is_selecting
        assert hub.crossword.state.grid[0][0] == ""

    def test_menu_shows_badges(self) -> None:
        hub = GameHub(MemoryStore())
        hub.registry.mark_complete(GameId.CONNECTIONS)
        menu = {entry['id']: entry['completed'] for entry in hub.menu()}
        assert menu == {'wordle': False, 'connections': True, 'strands': False, 'crossword': False}

    def test_connections_state_survives_new_hub(self) -> None:
        store = MemoryStore()
        GameHub(store).connections.toggle_word("DOG")
        assert json.loads(store.get(CONNECTIONS_STORAGE_KEY))['selected'] == ['DOG']
        assert GameHub(store).connections.state.selected == ['DOG']

    def test_tick_during_reset_does_not_restore_old_crossword(self) -> None:
        class TickingStore(MemoryStore):
            """Lets the crossword clock fire while the reset is removing its key."""

            hub = None

            def remove(self, key):
                super().remove(key)
                if key == CROSSWORD_STORAGE_KEY:
                    self.hub.crossword.tick()

        store = TickingStore()
        hub = GameHub(store, ticker=ManualTicker())
        store.hub = hub
        hub.crossword.set_cell(0, 0, "R")
        for _ in range(5):
            hub.crossword.tick()

        hub.reset_all()

        assert hub.crossword.state.grid[0][0] == ""
        assert hub.crossword.state.time_elapsed == 1
        assert json.loads(store.get(CROSSWORD_STORAGE_KEY))["grid"][0][0] == ""

    def test_clock_waits_while_hub_is_busy(self) -> None:
        ticker = ManualTicker()
        hub = GameHub(MemoryStore(), ticker=ticker)
        clock_thread = threading.Thread(target=ticker.tick)

        with hub.lock:
            clock_thread.start()
            clock_thread.join(timeout=0.2)
            assert clock_thread.is_alive()
            assert hub.crossword.state.time_elapsed == 0

        clock_thread.join()
        assert hub.crossword.state.time_elapsed == 1
