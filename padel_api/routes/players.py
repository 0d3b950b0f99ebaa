from flask import Blueprint, jsonify

from padel_api.app import db
from padel_api.auth_utils import login_required
from padel_api.errors import ValidationError
from padel_api.models import Player
from padel_api.request_utils import json_payload

players_bp = Blueprint('players', __name__)


@players_bp.route('', methods=['GET'])
@login_required
def list_players(identity):
    players = Player.query.filter_by(
        owner_user_id=identity.id,
    ).order_by(Player.display_name, Player.id).all()
    return jsonify([p.to_dict() for p in players])


@players_bp.route('', methods=['POST'])
@login_required
def create_player(identity):
    data = json_payload()

    display_name = str(data.get('display_name') or '').strip()
    if not display_name:
        raise ValidationError('display_name is required')

    email = str(data.get('email') or '').strip()
    player = Player(
        owner_user_id=identity.id,
        display_name=display_name,
        email=email or None,
    )
    db.session.add(player)
    db.session.commit()
    return jsonify(player.to_dict()), 201
