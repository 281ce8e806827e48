import pytest

from maze_explorer.grid import parse_maze
from maze_explorer.scores import ScoreStore
from maze_explorer.session import GameSession, GameStateError, GameTimer


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now


def new_session(lines=("000", "010", "00*"), clock=None):
    grid = parse_maze(list(lines)).unwrap()
    return GameSession(grid, maze_number=1, clock=clock or FakeClock())


def test_move_right_open():
    g = new_session()
    res = g.step('RIGHT')
    assert res.ok is True and res.moved is True and res.blocked is False
    assert res.pos == (0, 1)


def test_move_blocked_by_top_edge():
    g = new_session()
    res = g.step('UP')
    assert res.ok is True
    assert res.moved is False and res.blocked is True
    assert res.reason == 'out_of_bounds'
    assert res.pos == (0, 0)


def test_move_blocked_by_wall():
    g = new_session()
    g.step('D')
    res = g.step('S')
    assert res.blocked is True and res.reason == 'blocked'
    assert res.pos == (0, 1)


def test_wasd_and_prefix_actions():
    assert GameSession.parse_action('w') == 'UP'
    assert GameSession.parse_action('A') == 'LEFT'
    assert GameSession.parse_action('Action: down') == 'DOWN'
    assert GameSession.parse_action(' d ') == 'RIGHT'
    assert GameSession.parse_action('JUMP') is None
    assert GameSession.parse_action(None) is None


def test_invalid_action():
    g = new_session()
    res = g.step('JUMP')
    assert res.ok is False and res.reason == 'invalid_action'
    assert res.pos == (0, 0)


def test_win_stops_timer_and_ends_game():
    clock = FakeClock()
    g = new_session(clock=clock)
    clock.now += 3.4
    for a in ['D', 'D', 'S', 'S']:
        res = g.step(a)
    assert res.won is True and res.done is True
    assert res.elapsed == 3
    clock.now += 50
    assert g.elapsed_seconds == 3
    after = g.step('A')
    assert after.ok is False and after.reason == 'game_over'
    assert after.pos == (2, 2)


def test_record_score_once(tmp_path):
    store = ScoreStore(tmp_path / 'highscores.csv')
    clock = FakeClock()
    g = new_session(clock=clock)
    with pytest.raises(GameStateError):
        g.record_score(store, 'Early')
    clock.now += 7
    for a in ['RIGHT', 'RIGHT', 'DOWN', 'DOWN']:
        g.step(a)
    entry = g.record_score(store, 'Zoe')
    assert entry.as_tuple() == ('Zoe', 7)
    with pytest.raises(GameStateError):
        g.record_score(store, 'Zoe')
    assert [e.as_tuple() for e in store.top_n(10)] == [('Zoe', 7)]


def test_reset_restarts_position_and_timer():
    clock = FakeClock()
    g = new_session(clock=clock)
    g.step('RIGHT')
    clock.now += 5
    g.reset()
    assert g.position.as_tuple() == (0, 0)
    assert g.elapsed_seconds == 0
    assert g.done is False and g.move_count == 0


def test_stop_freezes_and_blocks_moves():
    clock = FakeClock()
    g = new_session(clock=clock)
    clock.now += 2
    assert g.stop() == 2
    clock.now += 10
    assert g.elapsed_seconds == 2
    assert g.step('RIGHT').reason == 'game_over'
    assert g.won is False


def test_start_skips_wall_at_origin():
    g = new_session(lines=("10", "0*"))
    assert g.position.as_tuple() == (0, 1)


def test_timer_counts_whole_seconds():
    clock = FakeClock(0.0)
    t = GameTimer(clock)
    assert t.elapsed_seconds == 0 and not t.running
    t.start()
    clock.now = 1.99
    assert t.elapsed_seconds == 1
    clock.now = 2.0
    assert t.stop() == 2
    t.start()
    assert t.elapsed_seconds == 0


def test_snapshot_and_ascii():
    g = new_session()
    snap = g.snapshot()
    assert snap['rows'] == ['000', '010', '00*']
    assert snap['pos'] == [0, 0]
    assert g.to_text() == 'P..\n.#.\n..F'


def test_invalid_action_reports_current_state():
    g = new_session()
    g.step('RIGHT')
    res = g.step(None)
    assert res.ok is False and res.reason == 'invalid_action'
    assert res.pos == (0, 1) and res.done is False


def test_idle_seconds_reset_by_steps():
    clock = FakeClock()
    g = new_session(clock=clock)
    clock.now += 40
    assert g.idle_seconds == 40
    g.step('JUMP')
    assert g.idle_seconds == 0
    clock.now += 5
    g.step('RIGHT')
    assert g.idle_seconds == 0
