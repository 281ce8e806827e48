from flask import Flask, render_template, request, jsonify
import os
import uuid
import threading
from datetime import datetime, timezone

from maze_explorer.grid import MazeLoadError
from maze_explorer.maze_files import NoMazeFilesFound, list_maze_numbers, load_maze_number, random_maze_number
from maze_explorer.scores import ScoreStore
from maze_explorer.session import GameSession, GameStateError

app = Flask(__name__)

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.environ.get('MAZE_EXPLORER_DATA_DIR') or os.path.join(BASE_DIR, 'data')
MAZES_DIR = os.environ.get('MAZE_EXPLORER_MAZES_DIR') or os.path.join(DATA_DIR, 'mazes')
SCORES_PATH = os.environ.get('MAZE_EXPLORER_SCORES_PATH') or os.path.join(DATA_DIR, 'highscores.csv')

app.config.update(
    MAZES_DIR=MAZES_DIR,
    SCORES_PATH=SCORES_PATH,
    TOP_SCORES=int(os.environ.get('MAZE_EXPLORER_TOP_SCORES', 10)),
    GAME_IDLE_SECONDS=int(os.environ.get('MAZE_EXPLORER_GAME_IDLE_SECONDS', 1800)),
)

TUTORIAL = {
    'title': 'Maze Explorer Tutorial',
    'goal': 'Navigate through the maze and reach the flag as fast as possible!',
    'controls': 'W: Move Up - S: Move Down - A: Move Left - D: Move Right',
}


def score_store() -> ScoreStore:
    return ScoreStore(app.config['SCORES_PATH'])


# ---------------------- Game sessions ----------------------
# In-memory store of running games, keyed by game id
GAMES = {}
GAMES_LOCK = threading.Lock()


def _get_game(gid):
    if not isinstance(gid, str):
        return None
    with GAMES_LOCK:
        return GAMES.get(gid)


def _evict_idle_games() -> int:
    limit = app.config['GAME_IDLE_SECONDS']
    with GAMES_LOCK:
        stale = [gid for gid, game in GAMES.items() if game.idle_seconds >= limit]
        for gid in stale:
            GAMES.pop(gid)
    if stale:
        app.logger.info('Evicted %d idle games', len(stale))
    return len(stale)


def _error(message, status=400):
    return jsonify({'status': 'error', 'message': message}), status


@app.route('/')
def index():
    return render_template('index.html', tutorial=TUTORIAL)


@app.get('/api/tutorial')
def api_tutorial():
    return jsonify(TUTORIAL)


@app.get('/api/mazes')
def api_list_mazes():
    return jsonify({'mazes': list_maze_numbers(app.config['MAZES_DIR'])})


@app.post('/api/game/start')
def api_game_start():
    body = request.get_json(silent=True) or {}
    mazes_dir = app.config['MAZES_DIR']
    try:
        number = body.get('maze')
        number = random_maze_number(mazes_dir) if number is None else int(number)
        grid = load_maze_number(mazes_dir, number).unwrap()
    except NoMazeFilesFound as e:
        app.logger.warning('Cannot start game: %s', e)
        return _error(str(e), 404)
    except (MazeLoadError, ValueError, TypeError) as e:
        app.logger.warning('Cannot start game on maze %r: %s', body.get('maze'), e)
        return _error(str(e))

    _evict_idle_games()
    game = GameSession(grid, maze_number=number)
    gid = str(uuid.uuid4())
    with GAMES_LOCK:
        GAMES[gid] = game
    app.logger.info('Game %s started on maze %d', gid, number)
    return jsonify({
        'game_id': gid,
        'created_at': datetime.now(timezone.utc).isoformat(),
        **game.snapshot(),
    }), 200


@app.post('/api/game/move')
def api_game_move():
    body = request.get_json(silent=True) or {}
    game = _get_game(body.get('game_id'))
    if game is None:
        return _error('invalid_game', 404)
    res = game.step(body.get('action'))
    out = {'status': 'ok' if res.ok else 'error', 'game_id': body.get('game_id'), **res.to_dict()}
    return jsonify(out), 200


@app.get('/api/game/state')
def api_game_state():
    gid = request.args.get('game_id')
    game = _get_game(gid)
    if game is None:
        return _error('invalid_game', 404)
    return jsonify({'game_id': gid, **game.snapshot()})


@app.post('/api/game/stop')
def api_game_stop():
    body = request.get_json(silent=True) or {}
    gid = body.get('game_id')
    if not isinstance(gid, str):
        return _error('invalid_game', 404)
    with GAMES_LOCK:
        game = GAMES.pop(gid, None)
    if game is None:
        return _error('invalid_game', 404)
    elapsed = game.stop()
    return jsonify({'status': 'ok', 'elapsed': elapsed})


@app.post('/api/game/score')
def api_game_score():
    body = request.get_json(silent=True) or {}
    gid = body.get('game_id')
    game = _get_game(gid)
    if game is None:
        return _error('invalid_game', 404)
    try:
        entry = game.record_score(score_store(), body.get('name'))
    except GameStateError as e:
        return _error(str(e))
    # A scored game is finished; drop it
    with GAMES_LOCK:
        GAMES.pop(gid, None)
    return jsonify({'status': 'ok', 'name': entry.name, 'seconds': entry.seconds})


@app.get('/api/scores')
def api_scores():
    try:
        n = int(request.args.get('n', app.config['TOP_SCORES']))
    except ValueError:
        return _error('invalid_n')
    top = score_store().top_n(n)
    return jsonify({'scores': [{'name': e.name, 'seconds': e.seconds} for e in top]})


if __name__ == '__main__':
    app.run(debug=True)
