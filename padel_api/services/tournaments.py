"""Tournament creation, bulk player enrollment and read projections.

Every function takes the SQLAlchemy session it works on; routes pass
``db.session``.
"""
from flask import current_app
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import contains_eager

from padel_api.db_utils import atomic, insert_ignoring_duplicates
from padel_api.errors import ValidationError, NotFoundError, AuthorizationError
from padel_api.models import Player, Tournament, TournamentPlayer
from padel_api.services.scoring_rules import create_scoring_rules, resolve_scoring_rules

DEFAULT_VISIBILITY = 'private'
DEFAULT_FORMAT = 'round_robin'
INITIAL_STATUS = 'draft'
MAX_PLAYER_ID = 2 ** 31 - 1


def _coerce_bool(raw_value, default=False):
    if raw_value is None:
        return default
    if isinstance(raw_value, bool):
        return raw_value
    if isinstance(raw_value, (int, float)):
        return raw_value == 1
    return str(raw_value).strip().lower() in {'1', 'true', 'yes', 'on'}


def _parse_player_id(raw_id):
    if isinstance(raw_id, bool):
        return None
    if isinstance(raw_id, float) and not raw_id.is_integer():
        return None
    try:
        player_id = int(raw_id)
    except (TypeError, ValueError, OverflowError):
        return None
    # Player ids are INTEGER columns; anything outside that range cannot exist.
    if not 0 < player_id <= MAX_PLAYER_ID:
        return None
    return player_id


def _parse_player_ids(raw_ids):
    if not isinstance(raw_ids, list) or not raw_ids:
        raise ValidationError('player_ids must be a non-empty list')

    player_ids = []
    for raw_id in raw_ids:
        player_id = _parse_player_id(raw_id)
        if player_id is None:
            raise ValidationError('player_ids must contain player ids')
        player_ids.append(player_id)
    return player_ids


def create_tournament(session, owner_user_id, data):
    """Create a draft tournament together with its scoring rules."""
    name = data.get('name')
    if not isinstance(name, str) or not name.strip():
        raise ValidationError('name is required')

    rules = resolve_scoring_rules(data.get('scoring_rules'))

    with atomic(session):
        scoring_rules_id = create_scoring_rules(session, rules)
        tournament = Tournament(
            owner_user_id=owner_user_id,
            name=name.strip(),
            location=data.get('location') or None,
            visibility=data.get('visibility') or DEFAULT_VISIBILITY,
            format=data.get('format') or DEFAULT_FORMAT,
            scoring_rules_id=scoring_rules_id,
            is_doubles=_coerce_bool(data.get('is_doubles'), default=True),
            status=INITIAL_STATUS,
        )
        session.add(tournament)

    current_app.logger.info(
        'Tournament %s created by user %s with scoring rules %s',
        tournament.id, owner_user_id, scoring_rules_id,
    )
    return tournament


def get_tournament(session, tournament_id):
    tournament = session.get(Tournament, tournament_id)
    if not tournament:
        raise NotFoundError('Tournament not found')
    return tournament


def list_owned_tournaments(session, owner_user_id):
    return (
        session.query(Tournament)
        .filter(Tournament.owner_user_id == owner_user_id)
        .order_by(Tournament.created_at.desc(), Tournament.id.desc())
        .all()
    )


def list_enrolled_players(session, tournament_id):
    return (
        session.query(TournamentPlayer)
        .join(Player, Player.id == TournamentPlayer.player_id)
        .options(contains_eager(TournamentPlayer.player))
        .filter(TournamentPlayer.tournament_id == tournament_id)
        .order_by(Player.display_name, TournamentPlayer.id)
        .all()
    )


def enroll_players(session, tournament_id, acting_user_id, raw_player_ids):
    """Enroll a batch of players into a tournament owned by the acting user.

    Already-enrolled players are skipped. The batch is all-or-nothing: an
    unknown player id rolls back every insert made by this call. Returns the
    tournament's full enrolled list, ordered by display name.
    """
    player_ids = _parse_player_ids(raw_player_ids)

    tournament = get_tournament(session, tournament_id)
    if tournament.owner_user_id != acting_user_id:
        current_app.logger.warning(
            'User %s tried to enroll players into tournament %s owned by %s',
            acting_user_id, tournament_id, tournament.owner_user_id,
        )
        raise AuthorizationError('Only the tournament organizer can enroll players')

    statement = insert_ignoring_duplicates(
        session, TournamentPlayer, index_elements=['tournament_id', 'player_id'],
    )
    try:
        with atomic(session):
            for player_id in player_ids:
                session.execute(statement.values(
                    tournament_id=tournament_id,
                    player_id=player_id,
                    accepted=True,
                ))
    except IntegrityError:
        raise NotFoundError('One or more players were not found')

    current_app.logger.info(
        'Enrolled %d player id(s) into tournament %s', len(player_ids), tournament_id,
    )
    return list_enrolled_players(session, tournament_id)
