from flask import Blueprint, current_app, jsonify, request

from rewards.resolver import resolve, selection_odds
from rewards.rng import KeyedRandom, default_random
from server.config import MAX_PREVIEW_TRIES
from server.config_store import ConfigError

bp = Blueprint('api_rewards', __name__, url_prefix='/api/unwrap-rewards')


def _store():
    return current_app.extensions['unwrap_rewards']


@bp.route('', methods=['GET'])
def list_tables():
    ruleset = _store().current
    return jsonify({
        'version': ruleset.version,
        'weights': {tier.value: w for tier, w in ruleset.weights.items()},
        'triggers': sorted(ruleset.table.keys()),
    })


@bp.route('/<trigger>', methods=['GET'])
def show_table(trigger):
    ruleset = _store().current
    rewards = ruleset.lookup(trigger)
    if rewards is None:
        return jsonify(error='trigger not configured'), 404
    return jsonify({
        'trigger': trigger,
        'rewards': [
            {**r.export(), 'chance': round(p, 6)}
            for r, p in selection_odds(rewards, ruleset.weights)
        ],
    })


@bp.route('/<trigger>/preview', methods=['POST'])
def preview(trigger):
    data = request.get_json(silent=True) or {}
    ruleset = _store().current
    rewards = ruleset.lookup(trigger)
    if rewards is None:
        return jsonify(error='trigger not configured'), 404
    try:
        min_tries = int(data.get('min_tries', 1))
        max_tries = int(data.get('max_tries', min_tries))
    except (TypeError, ValueError):
        return jsonify(error='min_tries and max_tries must be integers'), 400
    if min_tries < 0 or max_tries < min_tries:
        return jsonify(error='tries must satisfy 0 <= min_tries <= max_tries'), 400
    if max_tries > MAX_PREVIEW_TRIES:
        return jsonify(error=f'max_tries must be <= {MAX_PREVIEW_TRIES}'), 400
    seed = data.get('seed')
    if seed is not None:
        try:
            rng = KeyedRandom(int(seed), f'preview.{trigger}')
        except (TypeError, ValueError):
            return jsonify(error='seed must be integer'), 400
    else:
        rng = default_random
    grants = resolve(rewards, ruleset.weights, (min_tries, max_tries), rng)
    return jsonify({
        'trigger': trigger,
        'grants': [g._asdict() for g in grants],
    })


@bp.route('/reload', methods=['POST'])
def reload_config():
    store = _store()
    try:
        ruleset = store.reload()
    except ConfigError as e:
        current_app.logger.warning("reload failed code=%s: %s", e.code, e.message)
        return jsonify(error=e.message, code=e.code), 400
    return jsonify({
        'version': ruleset.version,
        'triggers': sorted(ruleset.table.keys()),
    })
