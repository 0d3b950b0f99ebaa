"""Tournament routes: creation, listings and bulk player enrollment."""
from flask import Blueprint, jsonify

from padel_api.app import db
from padel_api.auth_utils import login_required
from padel_api.request_utils import json_payload
from padel_api.services import tournaments as tournament_service

tournaments_bp = Blueprint('tournaments', __name__)


@tournaments_bp.route('', methods=['POST'])
@login_required
def create_tournament(identity):
    tournament = tournament_service.create_tournament(
        db.session, identity.id, json_payload(),
    )
    return jsonify(tournament.to_dict()), 201


@tournaments_bp.route('/mine', methods=['GET'])
@login_required
def my_tournaments(identity):
    tournaments = tournament_service.list_owned_tournaments(db.session, identity.id)
    return jsonify([t.to_summary_dict() for t in tournaments])


@tournaments_bp.route('/<int:tournament_id>', methods=['GET'])
@login_required
def get_tournament(identity, tournament_id):
    tournament = tournament_service.get_tournament(db.session, tournament_id)
    return jsonify(tournament.to_detail_dict())


@tournaments_bp.route('/<int:tournament_id>/players', methods=['POST'])
@login_required
def enroll_players(identity, tournament_id):
    enrolled = tournament_service.enroll_players(
        db.session,
        tournament_id,
        identity.id,
        json_payload().get('player_ids'),
    )
    return jsonify([row.to_dict() for row in enrolled]), 201


@tournaments_bp.route('/<int:tournament_id>/players', methods=['GET'])
@login_required
def list_tournament_players(identity, tournament_id):
    enrolled = tournament_service.list_enrolled_players(db.session, tournament_id)
    return jsonify([row.to_dict() for row in enrolled])
